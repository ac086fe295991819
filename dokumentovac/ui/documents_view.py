"""
DocumentsView - the documents list widget.

Features:
- Search by name or description, filter by tag
- Paginated table of documents ("Strana X z Y")
- Create, edit and delete documents
- Download of attached files
- Scroll position kept across page changes

The widget only renders ViewModels and forwards user actions; all fetch
logic lives in DocumentListPresenter. Presenter calls run as Textual
workers so a slow request never blocks input, and overlapping requests are
sorted out by the presenter's stale-response check.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widget import Widget
from textual.widgets import Button, DataTable, Input, Label, Select, Static

from ..services.credentials import CredentialProvider
from ..services.document_service import DocumentServiceClient
from . import messages
from .modals import ConfirmDeleteModal, DocumentFormScreen
from .presenters import DocumentListPresenter
from .query_state import QueryStateStore
from .viewmodels import DocumentListItem, DocumentListVM

logger = logging.getLogger(__name__)


class DocumentsView(Widget):
    """Documents list with search, tag filter and pagination."""

    DEFAULT_CSS = """
    DocumentsView {
        layout: vertical;
        height: 100%;
    }

    DocumentsView #filters {
        height: 3;
    }

    DocumentsView #search-input {
        width: 2fr;
    }

    DocumentsView #tag-select {
        width: 1fr;
    }

    DocumentsView #documents-table {
        height: 1fr;
    }

    DocumentsView #pagination {
        height: 3;
        align: center middle;
    }

    DocumentsView #page-info {
        margin: 1 2;
    }

    DocumentsView #browser-status {
        height: 1;
        background: $boost;
        color: $text;
        padding: 0 1;
        dock: bottom;
    }
    """

    BINDINGS = [
        Binding("n", "new_document", "Nový"),
        Binding("e", "edit_document", "Upraviť"),
        Binding("d", "delete_document", "Odstrániť"),
        Binding("s", "download_document", "Stiahnuť"),
        Binding("r", "refresh", "Obnoviť"),
        Binding("slash", "focus_search", "Hľadať", show=False),
        Binding("left_square_bracket", "previous_page", "Predchádzajúca", show=False),
        Binding("right_square_bracket", "next_page", "Nasledujúca", show=False),
        Binding("L", "logout", "Odhlásiť"),
    ]

    def __init__(
        self,
        client: DocumentServiceClient,
        credentials: CredentialProvider,
        query: QueryStateStore,
        *args,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.credentials = credentials

        # Current ViewModel (updated by presenter callbacks)
        self._current_vm: Optional[DocumentListVM] = None
        self._shown_tags: Optional[List[str]] = None

        self.presenter = DocumentListPresenter(
            client,
            credentials,
            self._on_list_update,
            notify=self._notify,
            confirm=self._confirm,
            on_unauthenticated=self._on_unauthenticated,
            query=query,
        )

    def compose(self) -> ComposeResult:
        state = self.presenter.query.state
        with Vertical():
            with Horizontal(id="filters"):
                yield Input(
                    value=state.search,
                    placeholder=messages.SEARCH_PLACEHOLDER,
                    id="search-input",
                )
                # Seeded with the current tag so the initial Changed event is a no-op
                options = [(messages.ALL_TAGS, "")]
                if state.tag:
                    options.append((state.tag, state.tag))
                yield Select(
                    options,
                    value=state.tag,
                    allow_blank=False,
                    id="tag-select",
                )
            yield DataTable(id="documents-table", cursor_type="row", zebra_stripes=True)
            with Horizontal(id="pagination"):
                yield Button(messages.PREVIOUS_PAGE, id="previous-page")
                yield Label("", id="page-info")
                yield Button(messages.NEXT_PAGE, id="next-page")
        yield Static(messages.LOADING_DOCUMENTS, id="browser-status")

    async def on_mount(self) -> None:
        logger.info("DocumentsView mounted")
        table = self.query_one("#documents-table", DataTable)
        table.add_columns("Názov", "Tag", "Popis", "Súbor", "Vytvorené")
        self.query_one("#pagination").display = False
        self.run_worker(self.presenter.start(), group="fetch")

    def on_unmount(self) -> None:
        self.presenter.detach()

    # -------------------------------------------------------------------------
    # Presenter Callbacks
    # -------------------------------------------------------------------------

    async def _on_list_update(self, vm: DocumentListVM) -> None:
        self._current_vm = vm
        self._render_filters(vm)
        self._render_table(vm)
        self._render_pagination(vm)
        self.query_one("#browser-status", Static).update(vm.status_text)

        if vm.restore_scroll_to is not None:
            table = self.query_one("#documents-table", DataTable)
            self.call_after_refresh(table.scroll_to, y=vm.restore_scroll_to, animate=False)

    def _render_filters(self, vm: DocumentListVM) -> None:
        tags = list(vm.available_tags)
        if vm.tag and vm.tag not in tags:
            tags.append(vm.tag)
        select = self.query_one("#tag-select", Select)
        with select.prevent(Select.Changed):
            if tags != self._shown_tags:
                self._shown_tags = tags
                select.set_options([(messages.ALL_TAGS, "")] + [(tag, tag) for tag in tags])
            if select.value != vm.tag:
                select.value = vm.tag

    def _render_table(self, vm: DocumentListVM) -> None:
        table = self.query_one("#documents-table", DataTable)
        table.clear()
        for doc in vm.documents:
            table.add_row(
                doc.name,
                doc.tag_display,
                doc.description_display,
                doc.file_display,
                doc.created_display,
                key=str(doc.id),
            )

    def _render_pagination(self, vm: DocumentListVM) -> None:
        self.query_one("#pagination").display = vm.show_pagination
        if not vm.show_pagination:
            return
        self.query_one("#page-info", Label).update(vm.page_info)
        self.query_one("#previous-page", Button).disabled = not vm.can_go_previous
        self.query_one("#next-page", Button).disabled = not vm.can_go_next

    def _notify(self, message: str, severity: str) -> None:
        self.app.notify(message, severity=severity)

    async def _confirm(self, message: str) -> bool:
        result: asyncio.Future = asyncio.get_running_loop().create_future()

        def on_dismiss(confirmed: Optional[bool]) -> None:
            if not result.done():
                result.set_result(bool(confirmed))

        self.app.push_screen(ConfirmDeleteModal(message), on_dismiss)
        return await result

    def _on_unauthenticated(self) -> None:
        show_login = getattr(self.app, "show_login", None)
        if show_login is not None:
            show_login()

    # -------------------------------------------------------------------------
    # Event Handlers
    # -------------------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            self.run_worker(self.presenter.set_search(event.value), group="fetch")

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "tag-select":
            tag = event.value if isinstance(event.value, str) else ""
            self.run_worker(self.presenter.set_tag(tag), group="fetch")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "previous-page":
            self.action_previous_page()
        elif event.button.id == "next-page":
            self.action_next_page()

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def _selected_document(self) -> Optional[DocumentListItem]:
        table = self.query_one("#documents-table", DataTable)
        if table.row_count == 0:
            return None
        return self.presenter.get_document_at_index(table.cursor_row)

    def _scroll_offset(self) -> float:
        return float(self.query_one("#documents-table", DataTable).scroll_y)

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def action_refresh(self) -> None:
        self.run_worker(self.presenter.reload(), group="fetch")

    def action_next_page(self) -> None:
        self.run_worker(self.presenter.next_page(self._scroll_offset()), group="fetch")

    def action_previous_page(self) -> None:
        self.run_worker(self.presenter.previous_page(self._scroll_offset()), group="fetch")

    def action_new_document(self) -> None:
        form = self.presenter.open_create()
        self.app.push_screen(DocumentFormScreen(form, self.presenter.create_or_update), self._on_form_closed)

    def action_edit_document(self) -> None:
        doc = self._selected_document()
        if doc is None:
            return
        form = self.presenter.open_edit(doc)
        self.app.push_screen(DocumentFormScreen(form, self.presenter.create_or_update), self._on_form_closed)

    def _on_form_closed(self, saved: Optional[bool]) -> None:
        if not saved:
            self.presenter.close_form()

    def action_delete_document(self) -> None:
        doc = self._selected_document()
        if doc is not None:
            self.run_worker(self.presenter.remove(doc.id), group="mutation")

    def action_download_document(self) -> None:
        doc = self._selected_document()
        if doc is None or not doc.has_file:
            return
        self.run_worker(self.presenter.download(doc.id, doc.file_name or ""), group="mutation")

    def action_logout(self) -> None:
        self.credentials.logout()
