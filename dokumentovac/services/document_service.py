"""
Client for the remote document service.

A thin async facade over the REST API. It holds no authentication state:
every call takes the bearer token explicitly, so the caller re-reads the
credential on each dispatch. Transport and HTTP failures come back as
``ServiceError``/``ServiceConnectionError`` carrying the service's
``{"message": ...}`` text when there is one.

Endpoints:
    GET    /documents?page&limit&search&tag  -> {data, total, page, limit}
    GET    /documents/tags                   -> [str]
    POST   /documents                        (multipart, with file)
    PATCH  /documents/{id}                   (multipart, no file)
    DELETE /documents/{id}
    GET    /documents/{id}/download          -> bytes
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from ..config.settings import get_api_base_url, get_timeout
from ..exceptions import ServiceConnectionError, ServiceError
from ..models.documents import DocumentPageResult, DocumentSubmission

logger = logging.getLogger(__name__)


class DocumentServiceClient:
    """Async client for the document service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Service URL, defaults to DOKUMENTOVAC_API_URL
            timeout: Per-request timeout in seconds, defaults to DOKUMENTOVAC_TIMEOUT
            transport: Custom httpx transport (tests use ``httpx.MockTransport``)
        """
        self.base_url = (base_url or get_api_base_url()).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else get_timeout(),
            transport=transport,
        )

    async def __aenter__(self) -> DocumentServiceClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def list_documents(
        self, token: str, params: Mapping[str, Any]
    ) -> DocumentPageResult:
        """Fetch one page of documents.

        Args:
            token: Bearer token
            params: Query parameters (``page``, ``limit`` and optional
                ``search``/``tag``), sent as given

        Returns:
            DocumentPageResult with the raw service records
        """
        response = await self._request("GET", "/documents", token, params=dict(params))
        return DocumentPageResult.from_payload(
            _json(response),
            page=int(params.get("page", 1)),
            limit=int(params.get("limit", 0)),
        )

    async def list_tags(self, token: str) -> list[str]:
        """Fetch every tag in use by the user's documents."""
        response = await self._request("GET", "/documents/tags", token)
        payload = _json(response)
        if not isinstance(payload, list):
            return []
        return [str(tag) for tag in payload if tag]

    async def create_document(
        self, token: str, submission: DocumentSubmission
    ) -> dict[str, Any]:
        """Create a document with its attached file."""
        if submission.file_path is not None:
            body: dict[str, Any] = {
                "data": submission.form_fields(),
                "files": {"file": submission.file_part()},
            }
        else:
            body = {"files": _multipart_fields(submission.form_fields())}
        response = await self._request("POST", "/documents", token, **body)
        created = _json(response)
        logger.info("Created document %s", created.get("id") if isinstance(created, dict) else "?")
        return created if isinstance(created, dict) else {}

    async def update_document(
        self, token: str, doc_id: int, submission: DocumentSubmission
    ) -> dict[str, Any]:
        """Update name, tag and description of a document."""
        response = await self._request(
            "PATCH",
            f"/documents/{doc_id}",
            token,
            files=_multipart_fields(submission.form_fields()),
        )
        logger.info("Updated document %s", doc_id)
        updated = _json(response)
        return updated if isinstance(updated, dict) else {}

    async def delete_document(self, token: str, doc_id: int) -> None:
        await self._request("DELETE", f"/documents/{doc_id}", token)
        logger.info("Deleted document %s", doc_id)

    async def download_document(self, token: str, doc_id: int) -> bytes:
        """Fetch the attached file as an opaque blob."""
        response = await self._request("GET", f"/documents/{doc_id}/download", token)
        return response.content

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _request(
        self, method: str, path: str, token: str, **kwargs: Any
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"}
        logger.debug("%s %s %s", method, path, kwargs.get("params") or "")
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            raise ServiceConnectionError("Request timed out", url=path) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise ServiceConnectionError(str(e) or "Connection failed", url=path) from e

        if response.is_error:
            message = _error_message(response)
            logger.warning("%s %s failed with %s: %s", method, path, response.status_code, message)
            raise ServiceError(
                f"{method} {path} failed",
                status_code=response.status_code,
                payload_message=message,
            )
        return response


def _multipart_fields(fields: Mapping[str, str]) -> dict[str, tuple[None, bytes]]:
    """Send plain fields as multipart parts (httpx only does so for files)."""
    return {name: (None, value.encode("utf-8")) for name, value in fields.items()}


def _json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.warning("Non-JSON response from %s", response.request.url)
        return None


def _error_message(response: httpx.Response) -> Optional[str]:
    """The ``message`` field of an error body, if the service sent one."""
    payload = _json(response)
    if not isinstance(payload, dict):
        return None
    message = payload.get("message")
    if isinstance(message, list):
        message = ", ".join(str(m) for m in message if m)
    if isinstance(message, str) and message.strip():
        return message.strip()
    return None
