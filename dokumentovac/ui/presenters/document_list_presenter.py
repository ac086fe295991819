"""
Presenter for the documents view.

This presenter owns the fetch lifecycle of the documents list:
- Deriving request parameters from the query state (search, tag, page)
- Fetching pages from the document service and mapping them to ViewModels
- Dropping responses that were superseded by a newer fetch
- Keeping the page inside the valid range after the total changes
- Create/update/delete/download requests coming from the view
- Scroll restore after pagination

Data flows one way: QueryState -> RequestParams -> DocumentPageResult ->
DocumentListVM. Only the fetch is impure; the other stages are plain
functions in ``query_state`` and ``viewmodels``.

The view supplies callbacks for rendering (``on_list_update``),
notifications (``notify``), confirmations (``confirm``) and for leaving the
view when the user is not logged in (``on_unauthenticated``).
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

from ...config.constants import DEFAULT_PAGE_SIZE
from ...exceptions import DokumentovacError, ServiceError
from ...models.documents import DocumentSubmission
from ...services.credentials import CredentialProvider
from ...services.document_service import DocumentServiceClient
from ...services.downloads import FileSaver
from .. import messages
from ..forms import DocumentForm, FormMode
from ..query_state import QueryState, QueryStateStore, build_request_params
from ..scroll import ScrollContinuityManager
from ..viewmodels import (
    DocumentListItem,
    DocumentListVM,
    FetchStatus,
    clamp_page,
    to_list_item,
    total_pages,
)
from .tag_catalog import TagCatalogLoader

logger = logging.getLogger(__name__)

# Severities understood by Textual's App.notify
INFO = "information"
ERROR = "error"

Notify = Callable[[str, str], None]
Confirm = Callable[[str], Awaitable[bool]]


@dataclass
class FormSession:
    """The create/edit modal currently open."""

    form: DocumentForm


class DocumentListPresenter:
    """Presenter for the documents list business logic."""

    def __init__(
        self,
        client: DocumentServiceClient,
        credentials: CredentialProvider,
        on_list_update: Callable[[DocumentListVM], Awaitable[None]],
        *,
        notify: Notify,
        confirm: Confirm,
        on_unauthenticated: Callable[[], None],
        query: Optional[QueryStateStore] = None,
        tag_catalog: Optional[TagCatalogLoader] = None,
        file_saver: Optional[FileSaver] = None,
        scroll: Optional[ScrollContinuityManager] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        """Initialize the presenter.

        Args:
            client: Document service client
            credentials: Source of the bearer token, re-read on every dispatch
            on_list_update: Called with a fresh ViewModel whenever the list changes
            notify: Shows a non-blocking ``(message, severity)`` notification
            confirm: Asks the user a yes/no question
            on_unauthenticated: Leaves the view for the entry view
            query: Query state store (created from an empty address bar if None)
            tag_catalog: Tag loader (created from client/credentials if None)
            file_saver: Where downloads are written
            scroll: Scroll continuity manager
            page_size: Documents per page
        """
        self._client = client
        self._credentials = credentials
        self.on_list_update = on_list_update
        self._notify = notify
        self._confirm = confirm
        self._on_unauthenticated = on_unauthenticated
        self.query = query or QueryStateStore()
        self.tag_catalog = tag_catalog or TagCatalogLoader(client, credentials)
        self._file_saver = file_saver or FileSaver()
        self.scroll = scroll or ScrollContinuityManager()
        self.page_size = page_size

        # Displayed state, replaced atomically by applied fetches
        self._documents: List[DocumentListItem] = []
        self._total_count: int = 0
        self._status: FetchStatus = FetchStatus.IDLE
        self._error: Optional[str] = None

        # Every dispatch takes the next generation; only the latest may apply
        self._generation: int = 0

        self._form_session: Optional[FormSession] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self) -> None:
        """Attach to the credential provider, then load tags and the first page."""
        self.attach()
        if not self._credentials.is_authenticated:
            self._reject_unauthenticated(messages.LOGIN_REQUIRED_FOR_DOCUMENTS)
            return
        await self.tag_catalog.ensure_loaded()
        await self.refresh()

    def attach(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._credentials.subscribe(self._on_credentials_changed)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_credentials_changed(self, token: Optional[str]) -> None:
        if not token:
            logger.info("Logged out while the documents view was open")
            self._reject_unauthenticated(messages.LOGIN_REQUIRED_FOR_DOCUMENTS)

    # -------------------------------------------------------------------------
    # ViewModel
    # -------------------------------------------------------------------------

    @property
    def total_pages(self) -> int:
        return total_pages(self._total_count, self.page_size)

    @property
    def documents(self) -> List[DocumentListItem]:
        return list(self._documents)

    @property
    def status(self) -> FetchStatus:
        return self._status

    def _create_list_vm(self, restore_scroll_to: Optional[float] = None) -> DocumentListVM:
        state = self.query.state
        return DocumentListVM(
            documents=list(self._documents),
            total_count=self._total_count,
            page=state.page,
            page_size=self.page_size,
            total_pages=self.total_pages,
            status=self._status,
            error=self._error,
            search=state.search,
            tag=state.tag,
            available_tags=self.tag_catalog.tags,
            location=self.query.address_bar.location,
            restore_scroll_to=restore_scroll_to,
        )

    async def _emit(self, restore_scroll_to: Optional[float] = None) -> None:
        await self.on_list_update(self._create_list_vm(restore_scroll_to))

    # -------------------------------------------------------------------------
    # Fetching
    # -------------------------------------------------------------------------

    async def refresh(self) -> bool:
        """Fetch the page described by the current query state.

        Returns:
            True if this call's result was applied to the displayed state
        """
        token = self._credentials.token
        if not token:
            self.scroll.reset()
            self._reject_unauthenticated(messages.LOGIN_REQUIRED)
            return False

        while True:
            state = self.query.state
            params = build_request_params(state, self.page_size)

            self._generation += 1
            generation = self._generation
            self.scroll.begin_fetch(generation)
            self._status = FetchStatus.LOADING
            await self._emit()

            logger.info(f"Fetching documents #{generation} with params: {params.as_query()}")
            try:
                result = await self._client.list_documents(token, params.as_query())
            except ServiceError as e:
                return await self._apply_failure(
                    generation, state, e.user_message(messages.DOCUMENTS_LOAD_FAILED)
                )
            except DokumentovacError as e:
                logger.error(f"Error loading documents: {e}")
                return await self._apply_failure(generation, state, messages.UNEXPECTED_ERROR)

            if self._is_stale(generation, state):
                return False

            self._documents = [to_list_item(record) for record in result.records]
            self._total_count = result.total
            self._status = FetchStatus.SUCCESS
            self._error = None

            # Re-drive to an existing page, e.g. after the last item on the last page was deleted
            valid_page = clamp_page(state.page, self.total_pages)
            if valid_page != state.page:
                logger.info(
                    f"Page {state.page} is past the last page ({self.total_pages}), "
                    f"moving to page {valid_page}"
                )
                self.query.set_page(valid_page)
                continue

            logger.info(
                f"Loaded {len(self._documents)} documents "
                f"(page {state.page}/{self.total_pages}, total {self._total_count})"
            )
            restore = self.scroll.finish(generation, success=True)
            await self._emit(restore_scroll_to=restore)
            return True

    def _is_stale(self, generation: int, state: QueryState) -> bool:
        if generation != self._generation or state != self.query.state:
            logger.debug(
                f"Discarding stale response #{generation} (latest #{self._generation})"
            )
            return True
        return False

    async def _apply_failure(self, generation: int, state: QueryState, message: str) -> bool:
        if self._is_stale(generation, state):
            return False

        # Never show stale rows next to an error
        self._documents = []
        self._total_count = 0
        self._status = FetchStatus.FAILED
        self._error = message
        self.scroll.finish(generation, success=False)

        self._notify(message, ERROR)
        await self._emit()
        return False

    # -------------------------------------------------------------------------
    # Query changes
    # -------------------------------------------------------------------------

    async def set_search(self, search: str) -> None:
        if self.query.set_search(search):
            await self.refresh()

    async def set_tag(self, tag: str) -> None:
        if self.query.set_tag(tag):
            await self.refresh()

    async def go_to_page(self, page: int) -> None:
        if self.query.set_page(page):
            await self.refresh()

    async def next_page(self, scroll_offset: float = 0.0) -> None:
        """Pagination: next page, keeping the scroll position."""
        page = self.query.state.page
        if page >= self.total_pages:
            return
        self.scroll.capture(scroll_offset)
        self.query.set_page(min(self.total_pages, page + 1))
        await self.refresh()

    async def previous_page(self, scroll_offset: float = 0.0) -> None:
        """Pagination: previous page, keeping the scroll position."""
        page = self.query.state.page
        if page <= 1:
            return
        self.scroll.capture(scroll_offset)
        self.query.set_page(max(1, page - 1))
        await self.refresh()

    async def reload(self) -> bool:
        """Fetch the tag catalog again, then the current page."""
        await self.tag_catalog.reload()
        return await self.refresh()

    # -------------------------------------------------------------------------
    # Create / edit session
    # -------------------------------------------------------------------------

    @property
    def form_session(self) -> Optional[FormSession]:
        return self._form_session

    def open_create(self) -> DocumentForm:
        form = DocumentForm(FormMode.CREATE, existing_tags=self.tag_catalog.tags)
        self._form_session = FormSession(form)
        return form

    def open_edit(self, document: DocumentListItem) -> DocumentForm:
        form = DocumentForm(FormMode.EDIT, document, existing_tags=self.tag_catalog.tags)
        self._form_session = FormSession(form)
        return form

    def close_form(self) -> None:
        self._form_session = None

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create_or_update(
        self, submission: DocumentSubmission, existing_id: Optional[int] = None
    ) -> bool:
        """Create a document, or update ``existing_id``.

        On success the form session is closed and the list refetched. On
        failure the session stays open so the user can retry.

        Returns:
            True if the service accepted the change
        """
        token = self._credentials.token
        if not token:
            self._reject_unauthenticated(messages.LOGIN_REQUIRED)
            return False

        is_update = existing_id is not None
        try:
            if is_update:
                await self._client.update_document(token, existing_id, submission)
            else:
                await self._client.create_document(token, submission)
        except ServiceError as e:
            fallback = messages.UPDATE_FAILED if is_update else messages.CREATE_FAILED
            self._notify(e.user_message(fallback), ERROR)
            return False
        except (DokumentovacError, OSError) as e:
            logger.error(f"Error saving document: {e}")
            self._notify(messages.UNEXPECTED_ERROR, ERROR)
            return False

        self._notify(messages.DOCUMENT_UPDATED if is_update else messages.DOCUMENT_CREATED, INFO)
        self.close_form()
        # The saved document may carry a tag the filter does not list yet
        await self.tag_catalog.reload()
        await self.refresh()
        return True

    async def remove(self, doc_id: int) -> bool:
        """Delete a document after the user confirms.

        Returns:
            True if the document was deleted
        """
        if not await self._confirm(messages.CONFIRM_DELETE):
            logger.info(f"Delete of document {doc_id} cancelled")
            return False

        token = self._credentials.token
        if not token:
            self._reject_unauthenticated(messages.LOGIN_REQUIRED)
            return False

        try:
            await self._client.delete_document(token, doc_id)
        except ServiceError as e:
            self._notify(e.user_message(messages.DELETE_FAILED), ERROR)
            return False
        except DokumentovacError as e:
            logger.error(f"Error deleting document: {e}")
            self._notify(messages.UNEXPECTED_ERROR, ERROR)
            return False

        self._notify(messages.DOCUMENT_DELETED, INFO)
        await self.refresh()
        return True

    async def download(self, doc_id: int, display_name: str) -> Optional[Path]:
        """Save a document's file under ``display_name``. The list is untouched.

        Returns:
            Path of the saved file, or None on failure
        """
        token = self._credentials.token
        if not token:
            self._reject_unauthenticated(messages.LOGIN_REQUIRED)
            return None

        try:
            content = await self._client.download_document(token, doc_id)
            path = self._file_saver.save(display_name, content)
        except ServiceError as e:
            self._notify(e.user_message(messages.DOWNLOAD_FAILED), ERROR)
            return None
        except OSError as e:
            logger.error(f"Error saving download: {e}")
            self._notify(messages.DOWNLOAD_FAILED, ERROR)
            return None
        except DokumentovacError as e:
            logger.error(f"Error downloading document: {e}")
            self._notify(messages.UNEXPECTED_ERROR, ERROR)
            return None

        self._notify(messages.download_saved(str(path)), INFO)
        return path

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _reject_unauthenticated(self, message: str) -> None:
        self._notify(message, ERROR)
        self._on_unauthenticated()

    def get_document_at_index(self, index: int) -> Optional[DocumentListItem]:
        if 0 <= index < len(self._documents):
            return self._documents[index]
        return None
