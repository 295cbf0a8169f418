"""In-process secret store for local runs."""

import logging
from typing import Dict, Tuple

from .base import SecretStore

logger = logging.getLogger(__name__)

PFX_KIND = "certificates"
PEM_KIND = "secrets"


class InMemorySecretStore(SecretStore):
    """Keeps uploads in a dict keyed by (vault, kind, name); later uploads replace earlier ones."""

    name = "memory"

    def __init__(self):
        self.items: Dict[Tuple[str, str, str], str] = {}

    async def upload_pfx(self, vault_base_url: str, name: str, base64_pfx: str) -> None:
        self.items[(vault_base_url, PFX_KIND, name)] = base64_pfx
        logger.info(f"Stored certificate '{name}' in memory vault {vault_base_url}")

    async def upload_pem(self, vault_base_url: str, name: str, pem_text: str) -> None:
        self.items[(vault_base_url, PEM_KIND, name)] = pem_text
        logger.info(f"Stored secret '{name}' in memory vault {vault_base_url}")

    def get(self, vault_base_url: str, kind: str, name: str) -> str:
        return self.items[(vault_base_url, kind, name)]
