"""Secret store clients for persisting issued artifacts."""

from .base import SecretStore, SecretStoreError
from .keyvault import KeyVaultSecretStore
from .memory import InMemorySecretStore

__all__ = [
    'SecretStore',
    'SecretStoreError',
    'KeyVaultSecretStore',
    'InMemorySecretStore',
    'build_secret_store',
]


def build_secret_store(settings) -> SecretStore:
    """Create the secret store selected by ``settings.secret_store_backend``."""
    if settings.secret_store_backend == "memory":
        return InMemorySecretStore()

    return KeyVaultSecretStore(
        access_token=settings.keyvault_access_token.get_secret_value(),
        api_version=settings.keyvault_api_version,
        pfx_password=settings.pfx_password.get_secret_value(),
        timeout=settings.http_timeout_seconds,
    )
