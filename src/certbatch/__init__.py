"""Batch X.509 certificate issuance with vault persistence."""

__version__ = "1.0.0"
