"""Pilot-based tests for the DocumentsView TUI widget."""

from __future__ import annotations

from typing import Any, List

import httpx
import pytest
from textual.app import App, ComposeResult
from textual.widgets import DataTable

from conftest import FakeDocumentService, json_response, page_payload
from dokumentovac.services.credentials import CredentialProvider
from dokumentovac.ui.documents_view import DocumentsView
from dokumentovac.ui.modals import ConfirmDeleteModal
from dokumentovac.ui.query_state import AddressBar, QueryStateStore


class DocumentsTestApp(App[None]):
    """Minimal app that mounts a single DocumentsView."""

    def __init__(self, service: FakeDocumentService, credentials: CredentialProvider, location: str = ""):
        super().__init__()
        self.service = service
        self.credentials = credentials
        self.initial_location = location
        self.login_requests = 0

    def compose(self) -> ComposeResult:
        yield DocumentsView(
            self.service.client(),
            self.credentials,
            QueryStateStore(AddressBar(location=self.initial_location)),
            id="documents-view",
        )

    def show_login(self) -> None:
        self.login_requests += 1


def paged_handler(total: int, deleted: List[int]):
    """Serve ``total`` documents, ten per page, minus the deleted ones."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "DELETE":
            deleted.append(int(request.url.path.rsplit("/", 1)[-1]))
            return httpx.Response(204)
        if request.url.path == "/documents/tags":
            return json_response(["faktura"])
        ids = [i for i in range(1, total + 1) if i not in deleted]
        page = int(request.url.params.get("page", "1"))
        return json_response(page_payload(ids[(page - 1) * 10 : page * 10], len(ids), page))

    return handler


def list_requests(service: FakeDocumentService) -> List[httpx.Request]:
    return [r for r in service.requests if r.method == "GET" and r.url.path == "/documents"]


async def settle(app: App[Any], pilot: Any) -> None:
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


class TestRendering:
    """Tests for the initial render."""

    @pytest.mark.asyncio
    async def test_rows_and_hidden_pagination(self, credentials) -> None:
        service = FakeDocumentService(paged_handler(3, []))
        app = DocumentsTestApp(service, credentials)
        async with app.run_test() as pilot:
            await settle(app, pilot)

            table = app.query_one("#documents-table", DataTable)
            assert table.row_count == 3
            assert app.query_one("#pagination").display is False

            view = app.query_one(DocumentsView)
            assert view._current_vm.status_text == "3 dokumenty"

    @pytest.mark.asyncio
    async def test_pagination_shown_for_several_pages(self, credentials) -> None:
        service = FakeDocumentService(paged_handler(25, []))
        app = DocumentsTestApp(service, credentials)
        async with app.run_test() as pilot:
            await settle(app, pilot)

            assert app.query_one("#pagination").display is True
            view = app.query_one(DocumentsView)
            assert view._current_vm.page_info == "Strana 1 z 3"

    @pytest.mark.asyncio
    async def test_without_token_asks_for_login(self) -> None:
        service = FakeDocumentService(paged_handler(3, []))
        app = DocumentsTestApp(service, CredentialProvider())
        async with app.run_test() as pilot:
            await settle(app, pilot)

            assert app.login_requests == 1
            assert service.requests == []


class TestActions:
    """Tests for keyboard actions."""

    @pytest.mark.asyncio
    async def test_next_page_key(self, credentials) -> None:
        service = FakeDocumentService(paged_handler(25, []))
        app = DocumentsTestApp(service, credentials)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            app.query_one("#documents-table", DataTable).focus()

            await pilot.press("right_square_bracket")
            await settle(app, pilot)

            assert list_requests(service)[-1].url.params["page"] == "2"
            assert app.query_one(DocumentsView)._current_vm.page_info == "Strana 2 z 3"

    @pytest.mark.asyncio
    async def test_delete_after_confirmation(self, credentials) -> None:
        deleted: List[int] = []
        service = FakeDocumentService(paged_handler(3, deleted))
        app = DocumentsTestApp(service, credentials)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            app.query_one("#documents-table", DataTable).focus()

            await pilot.press("d")
            await pilot.pause()
            await pilot.pause()
            assert isinstance(app.screen, ConfirmDeleteModal)

            await pilot.press("y")
            await settle(app, pilot)

            assert deleted == [1]
            assert app.query_one("#documents-table", DataTable).row_count == 2

    @pytest.mark.asyncio
    async def test_delete_cancelled(self, credentials) -> None:
        deleted: List[int] = []
        service = FakeDocumentService(paged_handler(3, deleted))
        app = DocumentsTestApp(service, credentials)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            app.query_one("#documents-table", DataTable).focus()
            before = len(list_requests(service))

            await pilot.press("d")
            await pilot.pause()
            await pilot.pause()
            await pilot.press("n")
            await settle(app, pilot)

            assert deleted == []
            assert len(list_requests(service)) == before

    @pytest.mark.asyncio
    async def test_logout_key_asks_for_login(self, credentials) -> None:
        service = FakeDocumentService(paged_handler(3, []))
        app = DocumentsTestApp(service, credentials)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            app.query_one("#documents-table", DataTable).focus()

            await pilot.press("L")
            await pilot.pause()

            assert credentials.is_authenticated is False
            assert app.login_requests == 1

    @pytest.mark.asyncio
    async def test_refresh_key_reloads_tags(self, credentials) -> None:
        tags = ["faktura"]
        base = paged_handler(3, [])

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/documents/tags":
                return json_response(list(tags))
            return base(request)

        service = FakeDocumentService(handler)
        app = DocumentsTestApp(service, credentials)
        async with app.run_test() as pilot:
            await settle(app, pilot)
            app.query_one("#documents-table", DataTable).focus()
            tags.append("zmluvy")

            await pilot.press("r")
            await settle(app, pilot)

            assert app.query_one(DocumentsView)._current_vm.available_tags == ["faktura", "zmluvy"]
            tag_requests = [r for r in service.requests if r.url.path == "/documents/tags"]
            assert len(tag_requests) == 2
