"""Cryptographic utilities for certificate issuance."""

from .x509_utils import X509Utils, IssuerCredential, CertificateHandle
from .cert_formats import CertificateFormatConverter, IssuerDecodingError

__all__ = [
    'X509Utils',
    'IssuerCredential',
    'CertificateHandle',
    'CertificateFormatConverter',
    'IssuerDecodingError',
]
