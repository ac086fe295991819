"""
Modal dialogs for the documents view.
"""

import logging
from typing import Awaitable, Callable, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static, TextArea

from ..exceptions import ValidationError
from ..models.documents import DocumentSubmission
from . import messages
from .forms import DocumentForm, FormMode

logger = logging.getLogger(__name__)

SaveHandler = Callable[[DocumentSubmission, Optional[int]], Awaitable[bool]]


class ConfirmDeleteModal(ModalScreen[bool]):
    """Modal for confirming document deletion."""

    DEFAULT_CSS = """
    ConfirmDeleteModal {
        align: center middle;
    }

    #delete-dialog {
        background: $surface;
        border: thick $error;
        padding: 2;
        width: 60;
        height: auto;
    }

    #delete-message {
        margin: 1 0;
        text-align: center;
    }

    #button-container {
        margin-top: 1;
        align: center middle;
        height: 3;
    }

    Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("y", "confirm", "Áno", show=False),
        Binding("n", "cancel", "Nie", show=False),
        Binding("escape", "cancel", "Zrušiť", show=False),
    ]

    def __init__(self, message: str = messages.CONFIRM_DELETE, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="delete-dialog"):
            yield Static(self.message, id="delete-message")
            with Horizontal(id="button-container"):
                yield Button("Odstrániť", variant="error", id="delete-button")
                yield Button("Zrušiť", variant="default", id="cancel-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "delete-button")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class DocumentFormScreen(ModalScreen[bool]):
    """Create/edit modal.

    The modal stays open until ``save_handler`` reports success, so a rejected
    request keeps what the user typed. Dismisses with True after a save and
    False on cancel.
    """

    DEFAULT_CSS = """
    DocumentFormScreen {
        align: center middle;
    }

    #form-dialog {
        background: $surface;
        border: thick $primary;
        padding: 1 2;
        width: 80;
        height: auto;
    }

    #form-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #form-dialog Input {
        margin-bottom: 1;
    }

    #description-input {
        height: 6;
        margin-bottom: 1;
    }

    #tag-suggestions {
        color: $text-muted;
        height: auto;
        margin-bottom: 1;
    }

    #form-error {
        color: $error;
        height: auto;
    }

    #form-buttons {
        height: 3;
        align: right middle;
    }

    Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Zrušiť", show=False),
    ]

    def __init__(self, form: DocumentForm, save_handler: SaveHandler, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.form = form
        self.save_handler = save_handler
        self._saving = False

    def compose(self) -> ComposeResult:
        form = self.form
        with Vertical(id="form-dialog"):
            yield Label(form.title, id="form-title")
            yield Label("Názov dokumentu")
            yield Input(value=form.name, placeholder="Názov", id="name-input")
            yield Label("Tag")
            yield Input(value=form.tag, placeholder="Tag", id="tag-input")
            yield Static("", id="tag-suggestions")
            yield Label("Popis")
            yield TextArea(form.description, id="description-input")
            if form.mode is FormMode.CREATE:
                yield Label("Súbor")
                yield Input(placeholder="Cesta k súboru", id="file-input")
            yield Static("", id="form-error")
            with Horizontal(id="form-buttons"):
                yield Button("Zrušiť", variant="default", id="cancel-button")
                yield Button(form.submit_label, variant="primary", id="save-button")

    def on_mount(self) -> None:
        self.query_one("#name-input", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "tag-input":
            self.form.tag = event.value
            suggestions = self.form.tag_suggestions()
            self.query_one("#tag-suggestions", Static).update(", ".join(suggestions[:8]))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-button":
            self._submit()
        else:
            self.action_cancel()

    def action_cancel(self) -> None:
        self.dismiss(False)

    def _collect(self) -> None:
        self.form.name = self.query_one("#name-input", Input).value
        self.form.tag = self.query_one("#tag-input", Input).value
        self.form.description = self.query_one("#description-input", TextArea).text
        if self.form.mode is FormMode.CREATE:
            self.form.set_file(self.query_one("#file-input", Input).value.strip())

    def _submit(self) -> None:
        if self._saving:
            return
        self._collect()
        try:
            submission = self.form.submit()
        except ValidationError as e:
            self.query_one("#form-error", Static).update(str(e))
            return

        self.query_one("#form-error", Static).update("")
        self.run_worker(self._save(submission), exclusive=True)

    async def _save(self, submission: DocumentSubmission) -> None:
        self._saving = True
        try:
            saved = await self.save_handler(submission, self.form.document_id)
        finally:
            self._saving = False
        if saved:
            self.dismiss(True)
