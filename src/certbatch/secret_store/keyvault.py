"""Key Vault REST client for certificate and secret uploads."""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from .base import SecretStore, SecretStoreError

logger = logging.getLogger(__name__)

PFX_CONTENT_TYPE = "application/x-pkcs12"
PEM_CONTENT_TYPE = "application/x-pem-file"


class KeyVaultSecretStore(SecretStore):
    """
    Uploads artifacts to a Key Vault over its REST API.

    PFX bundles go through the certificate import endpoint, PEM material is
    written as a plain secret. Any non-2xx answer or transport failure raises
    SecretStoreError.
    """

    name = "keyvault"

    def __init__(
        self,
        access_token: str = "",
        api_version: str = "7.4",
        pfx_password: str = "",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the Key Vault client.

        Args:
            access_token: Bearer token sent with every request (omitted when empty)
            api_version: Key Vault REST API version
            pfx_password: Password protecting uploaded PFX bundles
            timeout: Request timeout in seconds
            client: Optional preconfigured httpx client
        """
        self.access_token = access_token
        self.api_version = api_version
        self.pfx_password = pfx_password
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

        logger.info(f"Key Vault client initialized (api-version {api_version})")

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    @staticmethod
    def _url(vault_base_url: str, collection: str, name: str, action: str = "") -> str:
        url = f"{vault_base_url.rstrip('/')}/{collection}/{quote(name, safe='')}"
        if action:
            url += f"/{action}"
        return url

    async def _send(self, method: str, url: str, body: Dict[str, Any]) -> None:
        try:
            response = await self._get_client().request(
                method,
                url,
                params={"api-version": self.api_version},
                json=body,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            raise SecretStoreError(f"{method} {url} failed: {e}") from e

        if response.is_error:
            raise SecretStoreError(
                f"{method} {url} returned {response.status_code}: {response.text[:200]}"
            )

    async def upload_pfx(self, vault_base_url: str, name: str, base64_pfx: str) -> None:
        url = self._url(vault_base_url, "certificates", name, "import")
        body = {
            "value": base64_pfx,
            "pwd": self.pfx_password,
            "policy": {"secret_props": {"contentType": PFX_CONTENT_TYPE}},
        }
        await self._send("POST", url, body)
        logger.info(f"Certificate '{name}' imported into {vault_base_url}")

    async def upload_pem(self, vault_base_url: str, name: str, pem_text: str) -> None:
        url = self._url(vault_base_url, "secrets", name)
        body = {"value": pem_text, "contentType": PEM_CONTENT_TYPE}
        await self._send("PUT", url, body)
        logger.info(f"Secret '{name}' written to {vault_base_url}")

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
