"""Concurrent batch issuance of certificates."""

import asyncio
import base64
import logging
from typing import List, Optional

from ..crypto_utils import CertificateFormatConverter, IssuerCredential
from ..secret_store import SecretStore
from .cert_issuer import CertificateIssuer
from .errors import BatchValidationError, ItemProcessingError
from .models import CertificateProperties, CertificatesRequest, ItemOutcome, ItemResult

logger = logging.getLogger(__name__)


class BatchOrchestrator:
    """
    Issues every certificate of a batch concurrently and persists the artifacts.

    One asyncio task is started per requested certificate. All tasks share the
    decoded issuer (read-only) and the vault URL, and the results are returned
    in request order. By default any failed item fails the whole batch; with
    ``isolate_item_failures`` the failed item is reported as a Failure result
    in its slot instead.
    """

    def __init__(
        self,
        certificate_issuer: CertificateIssuer,
        secret_store: SecretStore,
        issuer_pfx_password: Optional[bytes] = None,
        item_timeout: Optional[float] = None,
        isolate_item_failures: bool = False,
    ):
        """
        Initialize the orchestrator.

        Args:
            certificate_issuer: Issues and exports certificates
            secret_store: Receives PFX and PEM uploads
            issuer_pfx_password: Password of the issuer PFX material
            item_timeout: Optional per-certificate timeout in seconds
            isolate_item_failures: Report failed items individually
        """
        self.certificate_issuer = certificate_issuer
        self.secret_store = secret_store
        self.issuer_pfx_password = issuer_pfx_password
        self.item_timeout = item_timeout
        self.isolate_item_failures = isolate_item_failures

    @staticmethod
    def validate(request: CertificatesRequest) -> None:
        """
        Check the batch preconditions.

        Raises:
            BatchValidationError: If the vault URL is blank or no certificates are requested
        """
        if not request.vault_base_url or not request.vault_base_url.strip():
            raise BatchValidationError("vaultBaseUrl is required")
        if not request.certificates_properties:
            raise BatchValidationError("certificatesProperties must contain at least one certificate")

    def decode_issuer(self, issuer_base64_pfx: Optional[str]) -> Optional[IssuerCredential]:
        """Decode the shared issuer, or return None when no issuer material was sent."""
        if not issuer_base64_pfx or not issuer_base64_pfx.strip():
            return None
        return CertificateFormatConverter.load_issuer(issuer_base64_pfx, self.issuer_pfx_password)

    async def process_batch(self, request: CertificatesRequest) -> List[ItemResult]:
        """
        Issue and persist every certificate in the request.

        Args:
            request: Batch request

        Returns:
            One result per requested certificate, in request order

        Raises:
            BatchValidationError: If the request fails validation
            IssuerDecodingError: If the issuer material cannot be decoded
            ItemProcessingError: If any certificate fails and failures are not isolated
        """
        self.validate(request)
        issuer = self.decode_issuer(request.issuer_base64_pfx)

        items = request.certificates_properties
        vault_base_url = request.vault_base_url
        logger.info(
            f"Processing batch of {len(items)} certificate(s) for {vault_base_url} "
            f"({'issuer: ' + issuer.certificate.subject.rfc4514_string() if issuer else 'self-signed'})"
        )

        tasks = [
            asyncio.create_task(self._run_item(item, vault_base_url, issuer))
            for item in items
        ]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        results: List[ItemResult] = []
        failures: List[ItemProcessingError] = []
        for index, (item, outcome) in enumerate(zip(items, outcomes)):
            if isinstance(outcome, BaseException):
                logger.error(
                    f"Certificate #{index} ({item.subject_name}) failed: {outcome!r}",
                    exc_info=outcome,
                )
                failures.append(ItemProcessingError(index, item.subject_name, outcome))
                results.append(ItemResult(pfx="", result=ItemOutcome.FAILURE))
            else:
                results.append(outcome)

        if failures and not self.isolate_item_failures:
            first = failures[0]
            raise first from first.cause

        logger.info(f"Batch completed: {len(items) - len(failures)}/{len(items)} succeeded")
        return results

    async def _run_item(
        self,
        item: CertificateProperties,
        vault_base_url: str,
        issuer: Optional[IssuerCredential],
    ) -> ItemResult:
        if self.item_timeout is None:
            return await self.process_item(item, vault_base_url, issuer)
        return await asyncio.wait_for(
            self.process_item(item, vault_base_url, issuer),
            timeout=self.item_timeout,
        )

    async def process_item(
        self,
        item: CertificateProperties,
        vault_base_url: str,
        issuer: Optional[IssuerCredential] = None,
    ) -> ItemResult:
        """
        Issue one certificate, export it and upload the requested artifacts.

        Failures propagate; there is no partial result.
        """
        # Key generation and signing are CPU bound
        handle = await asyncio.to_thread(
            self.certificate_issuer.issue, item.subject_name, item.valid_days, issuer
        )
        pfx = await asyncio.to_thread(self.certificate_issuer.export_pfx, handle)
        pfx_base64 = base64.b64encode(pfx).decode("ascii")

        if item.certificate_name:
            await self.secret_store.upload_pfx(vault_base_url, item.certificate_name, pfx_base64)

        if item.secret_name:
            pem = await asyncio.to_thread(self.certificate_issuer.export_pem, handle)
            await self.secret_store.upload_pem(vault_base_url, item.secret_name, pem)

        return ItemResult(pfx=pfx_base64, result=ItemOutcome.SUCCESS)
