"""X.509 certificate generation utilities."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
import logging
import re

from cryptography import x509
from cryptography.x509.oid import NameOID, ExtendedKeyUsageOID
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import rsa, ed25519, ed448
from cryptography.hazmat.primitives.asymmetric.types import CertificateIssuerPrivateKeyTypes

logger = logging.getLogger(__name__)

# Short names accepted in subject strings on top of the RFC 4514 set
_DN_ATTRIBUTE_OVERRIDES = {
    "E": NameOID.EMAIL_ADDRESS,
    "EMAIL": NameOID.EMAIL_ADDRESS,
    "EMAILADDRESS": NameOID.EMAIL_ADDRESS,
    "S": NameOID.STATE_OR_PROVINCE_NAME,
    "SERIALNUMBER": NameOID.SERIAL_NUMBER,
}

# Whitespace around unescaped RDN separators ("CN=a, O=b")
_SEPARATOR_WHITESPACE = re.compile(r"\s*(?<!\\)([,+])\s*")


@dataclass(frozen=True)
class IssuerCredential:
    """Certificate and private key used to sign issued certificates."""

    private_key: CertificateIssuerPrivateKeyTypes
    certificate: x509.Certificate
    chain: Tuple[x509.Certificate, ...] = ()


@dataclass(frozen=True)
class CertificateHandle:
    """A freshly issued certificate together with its private key."""

    private_key: rsa.RSAPrivateKey
    certificate: x509.Certificate
    chain: Tuple[x509.Certificate, ...] = ()


class X509Utils:
    """Utility class for X.509 certificate operations."""

    @staticmethod
    def generate_private_key(key_size: int = 2048) -> rsa.RSAPrivateKey:
        """
        Generate an RSA private key.

        Args:
            key_size: Size of the RSA key in bits (default: 2048)

        Returns:
            RSA private key object
        """
        logger.debug(f"Generating {key_size}-bit RSA private key")
        return rsa.generate_private_key(public_exponent=65537, key_size=key_size)

    @staticmethod
    def parse_subject_name(subject_name: str) -> x509.Name:
        """
        Parse a distinguished name string into an x509.Name.

        A string without any ``=`` is treated as a bare common name.

        Args:
            subject_name: Distinguished name, e.g. ``CN=api.example.com,O=Example``

        Returns:
            Parsed name

        Raises:
            ValueError: If the string is empty or not a valid distinguished name
        """
        text = (subject_name or "").strip()
        if not text:
            raise ValueError("Subject name must not be empty")

        if "=" not in text:
            return x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, text)])

        text = _SEPARATOR_WHITESPACE.sub(r"\1", text)
        name = x509.Name.from_rfc4514_string(text, _DN_ATTRIBUTE_OVERRIDES)
        if len(name) == 0:
            raise ValueError(f"Subject name has no attributes: {subject_name!r}")
        return name

    @staticmethod
    def create_certificate(
        subject_name: str,
        valid_days: int,
        issuer: Optional[IssuerCredential] = None,
        key_size: int = 2048,
    ) -> CertificateHandle:
        """
        Create a certificate signed by ``issuer``, or self-signed when no issuer is given.

        Args:
            subject_name: Distinguished name string for the subject
            valid_days: Certificate validity period in days
            issuer: Optional issuer credential used for signing
            key_size: RSA key size for the new key pair

        Returns:
            Handle holding the new private key and certificate

        Raises:
            ValueError: If the subject or validity period is rejected
        """
        subject = X509Utils.parse_subject_name(subject_name)
        logger.info(f"Creating certificate for: {subject.rfc4514_string()}")

        private_key = X509Utils.generate_private_key(key_size=key_size)

        if issuer is None:
            issuer_name = subject
            signing_key = private_key
            authority_public_key = private_key.public_key()
            chain: Tuple[x509.Certificate, ...] = ()
        else:
            issuer_name = issuer.certificate.subject
            signing_key = issuer.private_key
            authority_public_key = issuer.private_key.public_key()
            chain = (issuer.certificate,) + tuple(issuer.chain)

        now = datetime.now(timezone.utc)

        cert = (
            x509.CertificateBuilder()
            .subject_name(subject)
            .issuer_name(issuer_name)
            .public_key(private_key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(now)
            .not_valid_after(now + timedelta(days=valid_days))
            .add_extension(
                x509.BasicConstraints(ca=False, path_length=None),
                critical=True,
            )
            .add_extension(
                x509.KeyUsage(
                    digital_signature=True,
                    key_encipherment=True,
                    key_cert_sign=False,
                    crl_sign=False,
                    content_commitment=False,
                    data_encipherment=False,
                    key_agreement=False,
                    encipher_only=False,
                    decipher_only=False,
                ),
                critical=True,
            )
            .add_extension(
                x509.ExtendedKeyUsage([
                    ExtendedKeyUsageOID.SERVER_AUTH,
                    ExtendedKeyUsageOID.CLIENT_AUTH,
                ]),
                critical=False,
            )
            .add_extension(
                x509.SubjectKeyIdentifier.from_public_key(private_key.public_key()),
                critical=False,
            )
            .add_extension(
                x509.AuthorityKeyIdentifier.from_issuer_public_key(authority_public_key),
                critical=False,
            )
            .sign(signing_key, X509Utils._signature_hash(signing_key))
        )

        logger.info(
            f"Certificate created: {subject.rfc4514_string()} "
            f"(serial: {cert.serial_number}, valid for {valid_days} days)"
        )
        return CertificateHandle(private_key=private_key, certificate=cert, chain=chain)

    @staticmethod
    def _signature_hash(signing_key) -> Optional[hashes.HashAlgorithm]:
        # EdDSA keys sign without a separate digest
        if isinstance(signing_key, (ed25519.Ed25519PrivateKey, ed448.Ed448PrivateKey)):
            return None
        return hashes.SHA256()
