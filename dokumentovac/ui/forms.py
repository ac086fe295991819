"""
Form state for the create/edit document modal.

Validation happens here, before anything is dispatched: a form that fails
validation raises ``ValidationError`` and no request is made.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..exceptions import ValidationError
from ..models.documents import DocumentSubmission
from . import messages
from .viewmodels import DocumentListItem


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


def filter_tags(existing: Sequence[str], text: str) -> List[str]:
    """Tag autocomplete: case-insensitive substring match, all tags for empty text."""
    if not text:
        return list(existing)
    needle = text.lower()
    return [tag for tag in existing if needle in tag.lower()]


class DocumentForm:
    """State of the create/edit modal."""

    def __init__(
        self,
        mode: FormMode = FormMode.CREATE,
        document: Optional[DocumentListItem] = None,
        existing_tags: Sequence[str] = (),
    ) -> None:
        self.mode = mode
        self.document = document if mode is FormMode.EDIT else None
        self.existing_tags = list(existing_tags)
        self.reset()

    @property
    def title(self) -> str:
        return "Upraviť dokument" if self.mode is FormMode.EDIT else "Vytvoriť nový dokument"

    @property
    def submit_label(self) -> str:
        return "Uložiť zmeny" if self.mode is FormMode.EDIT else "Vytvoriť"

    @property
    def document_id(self) -> Optional[int]:
        return self.document.id if self.document else None

    def reset(self) -> None:
        """Back to the initial values (the document's own in edit mode)."""
        self.name = self.document.name if self.document else ""
        self.tag = self.document.tag if self.document else ""
        self.description = self.document.description if self.document else ""
        self.file_path: Optional[Path] = None

    def set_file(self, path: Union[str, Path, None]) -> None:
        self.file_path = Path(path).expanduser() if path else None

    def tag_suggestions(self) -> List[str]:
        return filter_tags(self.existing_tags, self.tag)

    def submit(self) -> DocumentSubmission:
        """Validate and build the submission. Field values are kept for a retry.

        Raises:
            ValidationError: Missing name, or missing/unreadable file in create mode
        """
        name = self.name.strip()
        if not name:
            raise ValidationError(messages.NAME_REQUIRED, field="name")

        file_path: Optional[Path] = None
        if self.mode is FormMode.CREATE:
            if self.file_path is None:
                raise ValidationError(messages.FILE_REQUIRED, field="file")
            if not self.file_path.is_file():
                raise ValidationError(messages.FILE_NOT_FOUND, field="file", path=str(self.file_path))
            file_path = self.file_path

        return DocumentSubmission(
            name=name,
            tag=self.tag.strip(),
            description=self.description.strip(),
            file_path=file_path,
        )

