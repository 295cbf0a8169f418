"""Base exception shared by the certbatch packages."""


class CertBatchError(Exception):
    """Base class for batch processing errors."""
    pass
