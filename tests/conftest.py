"""Shared pytest fixtures for dokumentovac tests."""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from dokumentovac.services.credentials import CredentialProvider
from dokumentovac.services.document_service import DocumentServiceClient

BASE_URL = "http://docs.test"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep sessions, UI config and logs out of the real config dir."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("DOKUMENTOVAC_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("DOKUMENTOVAC_TOKEN", raising=False)
    monkeypatch.delenv("DOKUMENTOVAC_API_URL", raising=False)
    monkeypatch.delenv("DOKUMENTOVAC_TIMEOUT", raising=False)
    monkeypatch.delenv("DOKUMENTOVAC_LOG_LEVEL", raising=False)
    return config_dir


def make_record(doc_id: int, **overrides: Any) -> Dict[str, Any]:
    """A document as the service sends it."""
    record = {
        "id": doc_id,
        "name": f"Dokument {doc_id}",
        "tag": "faktura",
        "description": f"Popis {doc_id}",
        "filename": f"doc{doc_id}.pdf",
        "filepath": f"uploads/doc{doc_id}.pdf",
        "createdAt": "2024-01-15T10:30:00.000Z",
    }
    record.update(overrides)
    return record


def page_payload(ids: List[int], total: int, page: int = 1, limit: int = 10) -> Dict[str, Any]:
    return {
        "data": [make_record(i) for i in ids],
        "total": total,
        "page": page,
        "limit": limit,
    }


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"content-type": "application/json"},
    )


class FakeDocumentService:
    """Records requests and answers them from a handler."""

    def __init__(self, handler: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: List[httpx.Request] = []
        self.handler = handler or (lambda request: json_response(page_payload([], 0)))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def client(self) -> DocumentServiceClient:
        return DocumentServiceClient(BASE_URL, timeout=5.0, transport=httpx.MockTransport(self))


@pytest.fixture
def fake_service():
    return FakeDocumentService()


@pytest.fixture
def credentials():
    """Signed-in provider that is not persisted."""
    return CredentialProvider("secret-token", "jan@example.sk")
