"""Tests for the scroll continuity manager."""

from dokumentovac.ui.scroll import ScrollContinuityManager, ScrollPhase


class TestScrollContinuity:
    """Tests for capture/restore around pagination fetches."""

    def test_restores_after_successful_pagination_fetch(self) -> None:
        manager = ScrollContinuityManager()
        manager.capture(42.0)
        manager.begin_fetch(1)
        assert manager.phase is ScrollPhase.FETCHING

        assert manager.finish(1, success=True) == 42.0
        assert manager.phase is ScrollPhase.IDLE

    def test_no_restore_without_capture(self) -> None:
        """Search/tag fetches never capture, so nothing is restored."""
        manager = ScrollContinuityManager()
        manager.begin_fetch(1)
        assert manager.phase is ScrollPhase.IDLE
        assert manager.finish(1, success=True) is None

    def test_no_restore_after_failure(self) -> None:
        manager = ScrollContinuityManager()
        manager.capture(10.0)
        manager.begin_fetch(1)
        assert manager.finish(1, success=False) is None
        assert manager.phase is ScrollPhase.IDLE

    def test_restores_only_once(self) -> None:
        manager = ScrollContinuityManager()
        manager.capture(5.0)
        manager.begin_fetch(3)
        assert manager.finish(3, success=True) == 5.0
        assert manager.finish(3, success=True) is None

    def test_older_generation_is_ignored(self) -> None:
        manager = ScrollContinuityManager()
        manager.capture(8.0)
        manager.begin_fetch(2)

        assert manager.finish(1, success=True) is None
        assert manager.phase is ScrollPhase.FETCHING
        assert manager.finish(2, success=True) == 8.0

    def test_negative_offset_is_clamped(self) -> None:
        manager = ScrollContinuityManager()
        manager.capture(-3)
        manager.begin_fetch(1)
        assert manager.finish(1, success=True) == 0.0

    def test_reset_drops_capture(self) -> None:
        manager = ScrollContinuityManager()
        manager.capture(12.0)
        manager.reset()
        manager.begin_fetch(1)
        assert manager.finish(1, success=True) is None
