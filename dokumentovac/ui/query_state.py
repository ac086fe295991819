"""
Query state for the documents view and its address-bar form.

``QueryState`` is the single derivation key for what is requested: search
text, selected tag and page number. It round-trips through a location
string (``search=invoice&tag=faktura&page=2``); empty search, empty tag and
page 1 are left out so locations stay canonical.

``QueryStateStore`` is the get/set surface used by the presenter. Every
change is written to the ``AddressBar`` with replace semantics, so stepping
back through history does not replay each keystroke.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional

import httpx

from ..config.constants import (
    DEFAULT_PAGE_SIZE,
    FIRST_PAGE,
    LOCATION_PATH,
    PAGE_PARAM,
    SEARCH_PARAM,
    TAG_PARAM,
)

logger = logging.getLogger(__name__)


def normalize_page(value: Any) -> int:
    """Coerce a page number; anything non-numeric or below 1 becomes 1."""
    if isinstance(value, bool):
        return FIRST_PAGE
    try:
        page = int(value)
    except (TypeError, ValueError):
        try:
            page = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return FIRST_PAGE
    return max(FIRST_PAGE, page)


@dataclass(frozen=True)
class QueryState:
    """What page of what filter is requested."""

    search: str = ""
    tag: str = ""
    page: int = FIRST_PAGE

    def __post_init__(self) -> None:
        object.__setattr__(self, "search", self.search or "")
        object.__setattr__(self, "tag", self.tag or "")
        object.__setattr__(self, "page", normalize_page(self.page))

    def with_search(self, search: str) -> QueryState:
        return replace(self, search=search, page=FIRST_PAGE)

    def with_tag(self, tag: str) -> QueryState:
        return replace(self, tag=tag, page=FIRST_PAGE)

    def with_page(self, page: Any) -> QueryState:
        return replace(self, page=normalize_page(page))

    def to_location(self) -> str:
        """Serialize the non-default fields as a query string."""
        params: Dict[str, str] = {}
        if self.search:
            params[SEARCH_PARAM] = self.search
        if self.tag:
            params[TAG_PARAM] = self.tag
        if self.page > FIRST_PAGE:
            params[PAGE_PARAM] = str(self.page)
        return str(httpx.QueryParams(params))

    @classmethod
    def from_location(cls, location: Optional[str]) -> QueryState:
        """Parse a query string, ``?query`` or full ``/documents?query`` location."""
        if not location:
            return cls()
        _, sep, query = location.partition("?")
        if not sep:
            query = location
        params = httpx.QueryParams(query)
        return cls(
            search=params.get(SEARCH_PARAM, ""),
            tag=params.get(TAG_PARAM, ""),
            page=params.get(PAGE_PARAM, FIRST_PAGE),
        )


@dataclass(frozen=True)
class RequestParams:
    """Parameters of one ``GET /documents`` call."""

    page: int
    limit: int = DEFAULT_PAGE_SIZE
    search: Optional[str] = None
    tag: Optional[str] = None

    def as_query(self) -> Dict[str, Any]:
        query: Dict[str, Any] = {"page": self.page, "limit": self.limit}
        if self.search is not None:
            query["search"] = self.search
        if self.tag is not None:
            query["tag"] = self.tag
        return query


def build_request_params(state: QueryState, page_size: int = DEFAULT_PAGE_SIZE) -> RequestParams:
    """Derive request parameters; blank search/tag are omitted, search is trimmed."""
    search = state.search.strip()
    return RequestParams(
        page=state.page,
        limit=page_size,
        search=search or None,
        tag=state.tag if state.tag.strip() else None,
    )


@dataclass
class AddressBar:
    """The view's current location, with browser-like history.

    ``on_change`` is called with the new location after every replace;
    the TUI uses it to persist the location between runs.
    """

    location: str = ""
    history: List[str] = field(default_factory=list)
    on_change: Optional[Callable[[str], None]] = None

    def __post_init__(self) -> None:
        if not self.history:
            self.history.append(self.location)

    def replace(self, location: str) -> None:
        """Change the location without adding a history entry."""
        self.location = location
        self.history[-1] = location
        self._changed()

    @property
    def url(self) -> str:
        """Shareable form, e.g. ``/documents?search=invoice``."""
        return f"{LOCATION_PATH}?{self.location}" if self.location else LOCATION_PATH

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self.location)


class QueryStateStore:
    """Single source of truth for the documents query, kept in the address bar."""

    def __init__(self, address_bar: Optional[AddressBar] = None) -> None:
        self.address_bar = address_bar or AddressBar()
        # Initial load: reconstruct the query from the address bar
        self._state = QueryState.from_location(self.address_bar.location)
        self._sync_address_bar()

    @property
    def state(self) -> QueryState:
        return self._state

    def set_search(self, search: str) -> bool:
        """Set search text; resets page to 1. Returns True if the state changed."""
        if search == self._state.search:
            return False
        return self._commit(self._state.with_search(search))

    def set_tag(self, tag: str) -> bool:
        """Set the tag filter; resets page to 1. Returns True if the state changed."""
        if tag == self._state.tag:
            return False
        return self._commit(self._state.with_tag(tag))

    def set_page(self, page: Any) -> bool:
        return self._commit(self._state.with_page(page))

    def set_state(self, state: QueryState) -> bool:
        return self._commit(state)

    def _commit(self, new_state: QueryState) -> bool:
        if new_state == self._state:
            return False
        logger.debug("Query state %s -> %s", self._state, new_state)
        self._state = new_state
        self._sync_address_bar()
        return True

    def _sync_address_bar(self) -> None:
        location = self._state.to_location()
        if location != self.address_bar.location:
            self.address_bar.replace(location)
