"""Secret store interface."""

import abc


class SecretStoreError(Exception):
    """Exception raised when a secret store rejects or fails an upload."""
    pass


class SecretStore(abc.ABC):
    """Persists issued certificate artifacts under logical names in a vault."""

    name: str = "base"

    @abc.abstractmethod
    async def upload_pfx(self, vault_base_url: str, name: str, base64_pfx: str) -> None:
        """
        Import a base64 PFX bundle as a certificate named ``name``.

        Raises:
            SecretStoreError: If the store does not acknowledge the upload
        """

    @abc.abstractmethod
    async def upload_pem(self, vault_base_url: str, name: str, pem_text: str) -> None:
        """
        Store PEM key and certificate material as a secret named ``name``.

        Raises:
            SecretStoreError: If the store does not acknowledge the upload
        """

    async def aclose(self) -> None:
        """Release any held connections."""
