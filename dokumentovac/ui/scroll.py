"""
Scroll continuity across page changes.

Paging through documents should keep the reader where they were on screen;
changing the search or tag should not (the list starts from the top). The
manager is a small state machine driven only by the presenter:

    IDLE --capture()--> CAPTURED --begin_fetch()--> FETCHING --finish()--> IDLE

``capture`` is called only from pagination handlers. ``finish`` returns the
offset to restore when the fetch that followed the capture succeeded, and
``None`` in every other case.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class ScrollPhase(str, Enum):
    IDLE = "idle"
    CAPTURED = "captured"
    FETCHING = "fetching"


class ScrollContinuityManager:
    """Remembers the scroll offset across one pagination-triggered fetch."""

    def __init__(self) -> None:
        self._phase = ScrollPhase.IDLE
        self._offset = 0.0
        self._generation: Optional[int] = None

    @property
    def phase(self) -> ScrollPhase:
        return self._phase

    def capture(self, offset: float) -> None:
        """Record the offset before a pagination fetch starts."""
        self._phase = ScrollPhase.CAPTURED
        self._offset = max(0.0, float(offset))
        self._generation = None
        logger.debug("Captured scroll offset %.1f", self._offset)

    def begin_fetch(self, generation: int) -> None:
        """Tie a captured offset to the fetch that was just dispatched."""
        if self._phase is ScrollPhase.CAPTURED:
            self._phase = ScrollPhase.FETCHING
            self._generation = generation

    def reset(self) -> None:
        """Drop a capture whose fetch was never dispatched."""
        self._phase = ScrollPhase.IDLE
        self._generation = None

    def finish(self, generation: int, success: bool) -> Optional[float]:
        """Settle after the fetch ``generation`` was applied.

        Returns:
            The offset to restore, or None when there is nothing to restore
            (failed fetch, or a later non-pagination fetch superseded it)
        """
        if self._phase is not ScrollPhase.FETCHING or self._generation is None:
            return None
        if generation < self._generation:
            return None

        restore = success and generation == self._generation
        self._phase = ScrollPhase.IDLE
        self._generation = None
        if restore:
            logger.debug("Restoring scroll offset %.1f", self._offset)
            return self._offset
        return None
