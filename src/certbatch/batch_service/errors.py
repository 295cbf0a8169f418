"""Errors raised while processing a certificate batch."""

from typing import Optional

from ..crypto_utils.cert_formats import IssuerDecodingError
from ..errors import CertBatchError


class BatchValidationError(CertBatchError):
    """The batch request is malformed; nothing was issued or persisted."""
    pass


class ItemProcessingError(CertBatchError):
    """Issuing, exporting or persisting a single certificate failed."""

    def __init__(self, index: int, subject_name: str, cause: Optional[BaseException] = None):
        self.index = index
        self.subject_name = subject_name
        self.cause = cause
        super().__init__(f"Certificate #{index} ({subject_name!r}) failed: {cause!r}")


__all__ = [
    'CertBatchError',
    'BatchValidationError',
    'IssuerDecodingError',
    'ItemProcessingError',
]
