"""
Textual application: the entry (login) view and the documents view.

The documents view is only reachable with a credential token. Whenever the
presenter finds none it calls back into ``DocumentsApp.show_login``.
"""

import logging
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Label, Static

from ..config.ui_config import get_last_location, get_theme, set_last_location
from ..services.credentials import CredentialProvider
from ..services.document_service import DocumentServiceClient
from . import messages
from .documents_view import DocumentsView
from .query_state import AddressBar, QueryStateStore

logger = logging.getLogger(__name__)


class LoginScreen(Screen):
    """Entry view: sign in with an access token."""

    DEFAULT_CSS = """
    LoginScreen {
        align: center middle;
    }

    #login-dialog {
        width: 70;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    #login-dialog Input {
        margin-bottom: 1;
    }

    #login-error {
        color: $error;
        height: auto;
    }
    """

    def __init__(self, credentials: CredentialProvider, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.credentials = credentials

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="login-dialog"):
            yield Label("Prihlásenie")
            yield Input(value=self.credentials.user or "", placeholder="Email", id="email-input")
            yield Input(placeholder="Prístupový token", password=True, id="token-input")
            yield Static("", id="login-error")
            yield Button("Prihlásiť sa", variant="primary", id="login-button")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#email-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._login()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "login-button":
            self._login()

    def _login(self) -> None:
        email = self.query_one("#email-input", Input).value.strip()
        token = self.query_one("#token-input", Input).value.strip()
        if not self.credentials.login(token, email):
            self.query_one("#login-error", Static).update(messages.LOGIN_REQUIRED)
            return
        self.app.show_documents()


class DocumentsScreen(Screen):
    """Hosts the documents view."""

    def __init__(self, documents_view: DocumentsView, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.documents_view = documents_view

    def compose(self) -> ComposeResult:
        yield Header()
        yield self.documents_view
        yield Footer()


class DocumentsApp(App):
    """Dokumentovač terminal client."""

    TITLE = "Dokumentovač"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Koniec"),
    ]

    def __init__(
        self,
        client: DocumentServiceClient,
        credentials: CredentialProvider,
        location: Optional[str] = None,
        theme: Optional[str] = None,
        *args,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.client = client
        self.credentials = credentials
        self._requested_theme = theme
        self.address_bar = AddressBar(
            location=get_last_location() if location is None else location,
            on_change=self._on_location_change,
        )
        self.query_store = QueryStateStore(self.address_bar)

    def on_mount(self) -> None:
        theme = self._requested_theme or get_theme()
        try:
            self.theme = theme
        except Exception as e:
            logger.warning(f"Unknown theme {theme!r}: {e}")

        self.sub_title = self.address_bar.url
        if self.credentials.is_authenticated:
            self.show_documents()
        else:
            self.show_login()

    def show_documents(self) -> None:
        self.sub_title = self.address_bar.url
        view = DocumentsView(self.client, self.credentials, self.query_store, id="documents-view")
        self._replace_screen(DocumentsScreen(view))

    def show_login(self) -> None:
        if isinstance(self.screen, LoginScreen):
            return
        self._replace_screen(LoginScreen(self.credentials))

    def _on_location_change(self, location: str) -> None:
        set_last_location(location)
        if self.is_running:
            self.sub_title = self.address_bar.url

    def _replace_screen(self, screen: Screen) -> None:
        while len(self.screen_stack) > 1:
            self.pop_screen()
        self.push_screen(screen)

    async def on_unmount(self) -> None:
        await self.client.aclose()


def run_app(
    client: DocumentServiceClient,
    credentials: CredentialProvider,
    location: Optional[str] = None,
    theme: Optional[str] = None,
) -> None:
    """Run the TUI until the user quits."""
    logger.info("Starting documents TUI")
    DocumentsApp(client, credentials, location=location, theme=theme).run()
