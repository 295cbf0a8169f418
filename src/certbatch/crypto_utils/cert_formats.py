"""Certificate format conversion utilities."""

import base64
import binascii
import logging
from typing import Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.serialization import pkcs12

from ..errors import CertBatchError
from .x509_utils import CertificateHandle, IssuerCredential

logger = logging.getLogger(__name__)


class IssuerDecodingError(CertBatchError):
    """Exception raised when issuer material cannot be decoded."""
    pass


class CertificateFormatConverter:
    """Convert issued certificates to PFX and PEM, and decode issuer PFX material."""

    @staticmethod
    def to_pkcs12(
        handle: CertificateHandle,
        password: Optional[bytes] = None,
        friendly_name: Optional[bytes] = None
    ) -> bytes:
        """
        Export a certificate handle to PKCS12 format (.pfx).

        Args:
            handle: Issued certificate and its private key
            password: Optional password to encrypt the PKCS12 data
            friendly_name: Optional friendly name for the certificate

        Returns:
            PKCS12-encoded data bytes
        """
        if password:
            encryption = serialization.BestAvailableEncryption(password)
        else:
            encryption = serialization.NoEncryption()

        return pkcs12.serialize_key_and_certificates(
            name=friendly_name,
            key=handle.private_key,
            cert=handle.certificate,
            cas=list(handle.chain) or None,
            encryption_algorithm=encryption
        )

    @staticmethod
    def to_pem(handle: CertificateHandle) -> str:
        """
        Export a certificate handle to PEM text.

        The private key comes first, then the certificate, then any issuer chain.

        Args:
            handle: Issued certificate and its private key

        Returns:
            PEM text
        """
        key_pem = handle.private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption()
        )

        bundle = key_pem
        bundle += handle.certificate.public_bytes(serialization.Encoding.PEM)
        for ca_cert in handle.chain:
            bundle += ca_cert.public_bytes(serialization.Encoding.PEM)

        return bundle.decode("ascii")

    @staticmethod
    def load_issuer(issuer_base64_pfx: str, password: Optional[bytes] = None) -> IssuerCredential:
        """
        Decode base64 PFX material into an issuer credential.

        Args:
            issuer_base64_pfx: Base64-encoded PKCS12 bundle
            password: Optional password protecting the bundle

        Returns:
            Issuer credential with certificate and private key

        Raises:
            IssuerDecodingError: If the material is not valid base64 or not a
                PKCS12 bundle holding both a certificate and a private key
        """
        try:
            pfx_data = base64.b64decode("".join(issuer_base64_pfx.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise IssuerDecodingError(f"Issuer material is not valid base64: {e}") from e

        try:
            private_key, cert, additional = pkcs12.load_key_and_certificates(pfx_data, password or None)
        except ValueError as e:
            raise IssuerDecodingError(f"Issuer material is not a valid PFX bundle: {e}") from e

        if cert is None:
            raise IssuerDecodingError("Issuer PFX bundle contains no certificate")
        if private_key is None:
            raise IssuerDecodingError("Issuer PFX bundle contains no private key")

        logger.info(f"Issuer loaded: {cert.subject.rfc4514_string()}")
        return IssuerCredential(
            private_key=private_key,
            certificate=cert,
            chain=tuple(additional or ())
        )
