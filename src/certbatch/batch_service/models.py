"""Data models for the certificate batch service."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CertificateProperties(BaseModel):
    """One certificate to issue within a batch."""

    model_config = ConfigDict(populate_by_name=True)

    subject_name: str = Field("", alias="subjectName", description="Subject distinguished name")
    valid_days: int = Field(0, alias="validDays", description="Certificate validity in days")
    certificate_name: Optional[str] = Field(
        None, alias="certificateName", description="Vault certificate name for the PFX bundle"
    )
    secret_name: Optional[str] = Field(
        None, alias="secretName", description="Vault secret name for the PEM material"
    )


class CertificatesRequest(BaseModel):
    """Batch issuance request."""

    model_config = ConfigDict(populate_by_name=True)

    certificates_properties: Optional[List[CertificateProperties]] = Field(
        None, alias="certificatesProperties", description="Certificates to issue, in order"
    )
    issuer_base64_pfx: Optional[str] = Field(
        None, alias="issuerBase64Pfx", description="Base64 PFX of the signing issuer; empty for self-signed"
    )
    vault_base_url: Optional[str] = Field(
        None, alias="vaultBaseUrl", description="Base URL of the vault receiving the artifacts"
    )


class ItemOutcome(str, Enum):
    SUCCESS = "Success"
    FAILURE = "Failure"


class ItemResult(BaseModel):
    """Outcome for one certificate of a batch."""

    pfx: str = Field("", description="Base64-encoded PFX bundle")
    result: ItemOutcome = Field(..., description="Processing outcome")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service status")
    secret_store: str = Field(..., description="Configured secret store backend")
    timestamp: datetime = Field(..., description="Current server time")
