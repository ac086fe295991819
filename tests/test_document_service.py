"""Tests for the document service client."""

import httpx
import pytest

from conftest import FakeDocumentService, json_response, make_record, page_payload
from dokumentovac.exceptions import ServiceConnectionError, ServiceError
from dokumentovac.models.documents import DocumentSubmission


class TestListDocuments:
    """Tests for GET /documents."""

    @pytest.mark.asyncio
    async def test_sends_params_and_bearer_token(self) -> None:
        """Query params and the Authorization header go out as given."""
        service = FakeDocumentService(lambda request: json_response(page_payload([1, 2], 2)))
        async with service.client() as client:
            result = await client.list_documents(
                "secret-token", {"page": 1, "limit": 10, "search": "invoice"}
            )

        request = service.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/documents"
        assert dict(request.url.params) == {"page": "1", "limit": "10", "search": "invoice"}
        assert request.headers["Authorization"] == "Bearer secret-token"
        assert result.total == 2
        assert [r["id"] for r in result.records] == [1, 2]

    @pytest.mark.asyncio
    async def test_tolerates_malformed_payload(self) -> None:
        """A body without data/total gives an empty page."""
        service = FakeDocumentService(lambda request: json_response({"unexpected": True}))
        async with service.client() as client:
            result = await client.list_documents("t", {"page": 3, "limit": 10})

        assert result.records == []
        assert result.total == 0
        assert result.page == 3

    @pytest.mark.asyncio
    async def test_records_without_id_are_dropped(self) -> None:
        payload = {"data": [{"name": "bez id"}, make_record(2), "x"], "total": 3}
        service = FakeDocumentService(lambda request: json_response(payload))
        async with service.client() as client:
            result = await client.list_documents("t", {"page": 1, "limit": 10})

        assert [r["id"] for r in result.records] == [2]
        assert result.total == 3

    @pytest.mark.asyncio
    async def test_error_carries_service_message(self) -> None:
        """The service's message field is kept for the user."""
        service = FakeDocumentService(
            lambda request: json_response({"message": "Neplatný token"}, status_code=401)
        )
        async with service.client() as client:
            with pytest.raises(ServiceError) as exc_info:
                await client.list_documents("t", {"page": 1, "limit": 10})

        assert exc_info.value.status_code == 401
        assert exc_info.value.user_message("fallback") == "Neplatný token"

    @pytest.mark.asyncio
    async def test_error_without_message_uses_fallback(self) -> None:
        service = FakeDocumentService(lambda request: httpx.Response(500, content=b"oops"))
        async with service.client() as client:
            with pytest.raises(ServiceError) as exc_info:
                await client.list_documents("t", {"page": 1, "limit": 10})

        assert exc_info.value.payload_message is None
        assert exc_info.value.user_message("fallback") == "fallback"

    @pytest.mark.asyncio
    async def test_list_messages_are_joined(self) -> None:
        """Validation errors sent as a list become one message."""
        service = FakeDocumentService(
            lambda request: json_response({"message": ["name required", "tag too long"]}, 400)
        )
        async with service.client() as client:
            with pytest.raises(ServiceError) as exc_info:
                await client.list_documents("t", {"page": 1, "limit": 10})

        assert exc_info.value.payload_message == "name required, tag too long"

    @pytest.mark.asyncio
    async def test_transport_failure_is_retryable(self) -> None:
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        service = FakeDocumentService(handler)
        async with service.client() as client:
            with pytest.raises(ServiceConnectionError) as exc_info:
                await client.list_documents("t", {"page": 1, "limit": 10})

        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_undecodable_body_is_a_connection_error(self) -> None:
        """A body that fails content decoding is reported, not raised raw."""
        service = FakeDocumentService(
            lambda request: httpx.Response(
                200,
                headers={"content-encoding": "gzip", "content-type": "application/json"},
                stream=httpx.ByteStream(b"definitely not gzip"),
            )
        )
        async with service.client() as client:
            with pytest.raises(ServiceConnectionError):
                await client.list_documents("t", {"page": 1, "limit": 10})


class TestTags:
    """Tests for GET /documents/tags."""

    @pytest.mark.asyncio
    async def test_returns_tag_strings(self) -> None:
        service = FakeDocumentService(lambda request: json_response(["faktura", "", "zmluva"]))
        async with service.client() as client:
            tags = await client.list_tags("t")

        assert service.requests[0].url.path == "/documents/tags"
        assert tags == ["faktura", "zmluva"]

    @pytest.mark.asyncio
    async def test_non_list_payload_gives_no_tags(self) -> None:
        service = FakeDocumentService(lambda request: json_response({"tags": ["x"]}))
        async with service.client() as client:
            assert await client.list_tags("t") == []


class TestMutations:
    """Tests for create, update, delete and download."""

    @pytest.mark.asyncio
    async def test_create_sends_multipart_with_file(self, tmp_path) -> None:
        path = tmp_path / "zmluva.pdf"
        path.write_bytes(b"%PDF-1.4 test")
        service = FakeDocumentService(lambda request: json_response({"id": 7}, 201))
        submission = DocumentSubmission("Zmluva", "zmluvy", "Nájomná zmluva", path)

        async with service.client() as client:
            created = await client.create_document("t", submission)

        request = service.requests[0]
        body = request.content
        assert request.method == "POST"
        assert request.url.path == "/documents"
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert b'name="name"' in body
        assert "Nájomná zmluva".encode() in body
        assert b'filename="zmluva.pdf"' in body
        assert b"%PDF-1.4 test" in body
        assert created == {"id": 7}

    @pytest.mark.asyncio
    async def test_update_sends_multipart_without_file(self) -> None:
        service = FakeDocumentService(lambda request: json_response({"id": 3}))
        submission = DocumentSubmission("Nový názov", "tag", "popis")

        async with service.client() as client:
            await client.update_document("t", 3, submission)

        request = service.requests[0]
        assert request.method == "PATCH"
        assert request.url.path == "/documents/3"
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert "Nový názov".encode() in request.content
        assert b"filename=" not in request.content

    @pytest.mark.asyncio
    async def test_delete(self) -> None:
        service = FakeDocumentService(lambda request: httpx.Response(204))
        async with service.client() as client:
            await client.delete_document("t", 9)

        assert service.requests[0].method == "DELETE"
        assert service.requests[0].url.path == "/documents/9"

    @pytest.mark.asyncio
    async def test_download_returns_bytes(self) -> None:
        service = FakeDocumentService(lambda request: httpx.Response(200, content=b"\x00\x01binary"))
        async with service.client() as client:
            content = await client.download_document("t", 4)

        assert service.requests[0].url.path == "/documents/4/download"
        assert content == b"\x00\x01binary"
