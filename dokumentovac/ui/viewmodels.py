"""
ViewModels for the documents view.

Lightweight objects holding everything needed to render the list, with
display formatting already applied. The helpers at the bottom are the pure
stages between a fetch result and the rendered list.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from ..config.constants import DEFAULT_PAGE_SIZE, FIRST_PAGE
from ..utils.datetime_utils import MISSING_VALUE, format_sk_date, parse_datetime
from . import messages


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class DocumentListItem:
    """ViewModel for a single document row."""

    id: int
    name: str
    tag: str = ""
    description: str = ""
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def has_file(self) -> bool:
        return bool(self.file_name)

    @property
    def tag_display(self) -> str:
        return self.tag or MISSING_VALUE

    @property
    def description_display(self) -> str:
        return self.description or MISSING_VALUE

    @property
    def file_display(self) -> str:
        return self.file_name or MISSING_VALUE

    @property
    def created_display(self) -> str:
        return format_sk_date(self.created_at)


@dataclass
class DocumentListVM:
    """ViewModel for the documents list and its pagination."""

    documents: List[DocumentListItem] = field(default_factory=list)
    total_count: int = 0
    page: int = FIRST_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    total_pages: int = 0
    status: FetchStatus = FetchStatus.IDLE
    error: Optional[str] = None
    search: str = ""
    tag: str = ""
    available_tags: List[str] = field(default_factory=list)
    location: str = ""
    restore_scroll_to: Optional[float] = None

    @property
    def is_loading(self) -> bool:
        return self.status is FetchStatus.LOADING

    @property
    def show_pagination(self) -> bool:
        return self.total_pages > 1

    @property
    def can_go_previous(self) -> bool:
        return self.page > FIRST_PAGE

    @property
    def can_go_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def page_info(self) -> str:
        return messages.page_info(self.page, self.total_pages)

    @property
    def status_text(self) -> str:
        if self.is_loading:
            return messages.LOADING_DOCUMENTS
        if self.error:
            return self.error
        if not self.documents:
            return messages.NO_DOCUMENTS
        if self.show_pagination:
            return f"{self.page_info} | {messages.documents_count(self.total_count)}"
        return messages.documents_count(self.total_count)


def total_pages(total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """ceil(total / page_size), 0 when there is nothing (or nonsense) to page."""
    if total <= 0 or page_size <= 0:
        return 0
    return math.ceil(total / page_size)


def clamp_page(page: int, pages: int) -> int:
    """The nearest page that exists; page 1 when there are no pages at all."""
    if pages <= 0:
        return FIRST_PAGE
    return min(max(FIRST_PAGE, page), pages)


def to_list_item(record: Dict[str, Any]) -> DocumentListItem:
    """Map a service record (``filename``/``filepath``/``createdAt``) to a row.

    ``file_url`` is derived from the relative ``filepath``; both file fields
    stay None for documents without a file.
    """
    filepath = record.get("filepath")
    file_url = f"/{str(filepath).lstrip('/')}" if filepath else None

    return DocumentListItem(
        id=record["id"],
        name=record.get("name") or "",
        tag=record.get("tag") or "",
        description=record.get("description") or "",
        file_name=record.get("filename") or None,
        file_url=file_url,
        created_at=parse_datetime(record.get("createdAt")),
    )
