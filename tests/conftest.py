"""Pytest configuration and shared fixtures for certificate batch testing."""

import pytest

from certbatch.batch_service.orchestrator import BatchOrchestrator
from certbatch.crypto_utils import IssuerCredential

from .utils.test_helpers import (
    CertificateFactory,
    RecordingSecretStore,
    StubCertificateIssuer,
)


@pytest.fixture(scope="session")
def ca_material():
    """Self-signed CA certificate and key shared by the test session."""
    return CertificateFactory.create_ca_certificate(subject_name="Batch Test CA")


@pytest.fixture
def issuer_credential(ca_material) -> IssuerCredential:
    ca_cert, ca_key = ca_material
    return IssuerCredential(private_key=ca_key, certificate=ca_cert)


@pytest.fixture
def issuer_pfx(ca_material) -> str:
    """Base64 PFX of the test CA."""
    ca_cert, ca_key = ca_material
    return CertificateFactory.create_issuer_pfx(ca_cert, ca_key)


@pytest.fixture
def stub_issuer() -> StubCertificateIssuer:
    return StubCertificateIssuer()


@pytest.fixture
def recording_store() -> RecordingSecretStore:
    return RecordingSecretStore()


@pytest.fixture
def orchestrator(stub_issuer, recording_store) -> BatchOrchestrator:
    """Orchestrator wired to the stub issuer and recording store."""
    return BatchOrchestrator(certificate_issuer=stub_issuer, secret_store=recording_store)
