"""
Loader for the set of tags available to the current user.

Tags come from ``GET /documents/tags`` independently of the document list.
They are loaded once per authenticated session (keyed by token) and again
on an explicit ``reload()``. A failure leaves an empty tag set and never
blocks the list.
"""

import logging
from typing import Awaitable, Callable, List, Optional

from ...exceptions import DokumentovacError
from ...services.credentials import CredentialProvider
from ...services.document_service import DocumentServiceClient

logger = logging.getLogger(__name__)


class TagCatalogLoader:
    """Caches the available tags for one session."""

    def __init__(
        self,
        client: DocumentServiceClient,
        credentials: CredentialProvider,
        on_update: Optional[Callable[[List[str]], Awaitable[None]]] = None,
    ):
        self._client = client
        self._credentials = credentials
        self.on_update = on_update
        self._tags: List[str] = []
        self._loaded_for: Optional[str] = None

    @property
    def tags(self) -> List[str]:
        return list(self._tags)

    async def ensure_loaded(self) -> List[str]:
        """Load tags unless already loaded for the current token."""
        token = self._credentials.token
        if not token:
            self._tags = []
            self._loaded_for = None
            return []
        if token == self._loaded_for:
            return self.tags
        return await self.reload()

    async def reload(self) -> List[str]:
        """Fetch tags again; degrades to [] on failure."""
        token = self._credentials.token
        if not token:
            self._tags = []
            self._loaded_for = None
            return []

        try:
            tags = await self._client.list_tags(token)
        except DokumentovacError as e:
            logger.warning(f"Failed to fetch tags: {e}")
            tags = []

        self._tags = tags
        self._loaded_for = token
        logger.debug(f"Available tags: {tags}")

        if self.on_update:
            await self.on_update(self.tags)
        return self.tags
