"""Tests for spantext.claims.ClaimTracker."""
import pytest

from spantext.claims import ClaimTracker


def _ranges(tracker: ClaimTracker) -> list[tuple[int, int]]:
    return [(span.char_start, span.char_end) for span in tracker]


class TestIsFree:
    def test_empty_tracker(self) -> None:
        tracker = ClaimTracker()
        assert tracker.is_free(0, 10) is True
        assert len(tracker) == 0

    def test_overlap_detection(self) -> None:
        tracker = ClaimTracker()
        tracker.claim(5, 10, 0)
        assert tracker.is_free(0, 5) is True
        assert tracker.is_free(10, 12) is True
        assert tracker.is_free(4, 6) is False
        assert tracker.is_free(9, 11) is False
        assert tracker.is_free(6, 8) is False
        assert tracker.is_free(0, 20) is False

    def test_between_claims(self) -> None:
        tracker = ClaimTracker()
        tracker.claim(0, 3, 0)
        tracker.claim(8, 10, 0)
        assert tracker.is_free(3, 8) is True
        assert tracker.is_free(2, 4) is False
        assert tracker.is_free(7, 9) is False


class TestNextFree:
    def test_unclaimed_offset_returned_as_is(self) -> None:
        tracker = ClaimTracker()
        tracker.claim(2, 5, 0)
        assert tracker.next_free(0) == 0
        assert tracker.next_free(5) == 5

    def test_claimed_offset_jumps_to_span_end(self) -> None:
        tracker = ClaimTracker()
        tracker.claim(2, 5, 0)
        assert tracker.next_free(2) == 5
        assert tracker.next_free(4) == 5


class TestClaim:
    def test_keeps_spans_sorted(self) -> None:
        tracker = ClaimTracker()
        tracker.claim(10, 12, 1)
        tracker.claim(0, 2, 0)
        tracker.claim(5, 7, 2)
        assert _ranges(tracker) == [(0, 2), (5, 7), (10, 12)]
        assert [s.pattern_index for s in tracker.spans] == [0, 2, 1]

    def test_adjacent_spans_allowed(self) -> None:
        tracker = ClaimTracker()
        tracker.claim(0, 3, 0)
        tracker.claim(3, 6, 1)
        assert _ranges(tracker) == [(0, 3), (3, 6)]

    def test_overlap_rejected(self) -> None:
        tracker = ClaimTracker()
        tracker.claim(0, 5, 0)
        with pytest.raises(ValueError, match="overlaps"):
            tracker.claim(4, 8, 1)
        assert _ranges(tracker) == [(0, 5)]

    def test_empty_interval_rejected(self) -> None:
        tracker = ClaimTracker()
        with pytest.raises(ValueError, match="empty"):
            tracker.claim(3, 3, 0)

    def test_metadata_carried(self) -> None:
        tracker = ClaimTracker()
        handler = object()
        span = tracker.claim(
            0, 3, 4,
            match_index=2, text="foo", display="FOO",
            on_press=handler, extra={"role": "x"},
        )
        assert span.pattern_index == 4
        assert span.match_index == 2
        assert span.display == "FOO"
        assert span.on_press is handler
        assert span.extra == {"role": "x"}
        assert tracker.spans == (span,)
