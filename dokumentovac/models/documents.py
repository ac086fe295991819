"""Document records exchanged with the document service."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class DocumentPageResult:
    """One page of ``GET /documents``.

    ``records`` keep the service's shape (``filename``/``filepath``/
    ``createdAt``); mapping to view records happens in the presenter.
    """

    records: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 0

    @classmethod
    def from_payload(cls, payload: Any, *, page: int, limit: int) -> DocumentPageResult:
        """Build a result from the JSON body, tolerating missing fields."""
        if not isinstance(payload, dict):
            return cls(page=page, limit=limit)

        records = payload.get("data") or []
        if not isinstance(records, list):
            records = []

        try:
            total = max(0, int(payload.get("total") or 0))
        except (TypeError, ValueError):
            total = 0

        return cls(
            records=[r for r in records if _is_record(r)],
            total=total,
            page=_as_int(payload.get("page"), page),
            limit=_as_int(payload.get("limit"), limit),
        )


@dataclass(frozen=True)
class DocumentSubmission:
    """A completed create/edit form, ready to send.

    ``file_path`` is only sent on create; the service does not accept a file
    replacement on update.
    """

    name: str
    tag: str = ""
    description: str = ""
    file_path: Path | None = None

    def form_fields(self) -> dict[str, str]:
        return {
            "name": self.name,
            "tag": self.tag,
            "description": self.description,
        }

    def file_part(self) -> tuple[str, bytes, str]:
        """(filename, content, content type) for the multipart ``file`` field."""
        if self.file_path is None:
            raise ValueError("Submission has no file")
        content_type = mimetypes.guess_type(self.file_path.name)[0] or "application/octet-stream"
        return self.file_path.name, self.file_path.read_bytes(), content_type


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _is_record(value: Any) -> bool:
    """A dict with an id; anything else is not a document row."""
    return isinstance(value, dict) and value.get("id") is not None
