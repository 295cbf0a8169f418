"""Certificate issuance and export."""

from typing import Optional
import logging

from ..crypto_utils import (
    X509Utils,
    CertificateFormatConverter,
    CertificateHandle,
    IssuerCredential,
)

logger = logging.getLogger(__name__)


class CertificateIssuer:
    """Issues certificates and exports them as PFX and PEM."""

    def __init__(
        self,
        key_size: int = 2048,
        pfx_password: Optional[bytes] = None,
    ):
        """
        Initialize Certificate Issuer.

        Args:
            key_size: RSA key size for issued certificates
            pfx_password: Optional password applied to exported PFX bundles
        """
        self.key_size = key_size
        self.pfx_password = pfx_password

        logger.info(f"Certificate Issuer initialized (key size: {key_size})")

    def issue(
        self,
        subject_name: str,
        valid_days: int,
        issuer: Optional[IssuerCredential] = None,
    ) -> CertificateHandle:
        """
        Issue a certificate with a new key pair.

        Args:
            subject_name: Subject distinguished name
            valid_days: Certificate validity in days
            issuer: Signing issuer; the certificate is self-signed when omitted

        Returns:
            Handle with the certificate and its private key
        """
        return X509Utils.create_certificate(
            subject_name=subject_name,
            valid_days=valid_days,
            issuer=issuer,
            key_size=self.key_size,
        )

    def export_pfx(self, handle: CertificateHandle) -> bytes:
        return CertificateFormatConverter.to_pkcs12(
            handle,
            password=self.pfx_password,
            friendly_name=handle.certificate.subject.rfc4514_string().encode(),
        )

    def export_pem(self, handle: CertificateHandle) -> str:
        return CertificateFormatConverter.to_pem(handle)
