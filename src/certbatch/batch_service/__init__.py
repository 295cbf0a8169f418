"""Certificate Batch Service - FastAPI application for batch certificate issuance."""

from .main import app
from .cert_issuer import CertificateIssuer
from .orchestrator import BatchOrchestrator

__all__ = ['app', 'CertificateIssuer', 'BatchOrchestrator']
