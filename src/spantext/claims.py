"""Sorted, non-overlapping interval set of claimed text spans."""

from __future__ import annotations

import bisect
from collections.abc import Iterator, Mapping
from typing import Any

from spantext.types import ClaimedSpan


class ClaimTracker:
    """Tracks which offsets of one text are already owned by a pattern.

    Spans are kept sorted by ``char_start``. ``claim`` refuses anything that
    would overlap an existing span, so the set never needs conflict
    resolution afterwards.
    """

    def __init__(self) -> None:
        self._spans: list[ClaimedSpan] = []
        self._starts: list[int] = []

    def __len__(self) -> int:
        return len(self._spans)

    def __iter__(self) -> Iterator[ClaimedSpan]:
        return iter(self._spans)

    @property
    def spans(self) -> tuple[ClaimedSpan, ...]:
        return tuple(self._spans)

    def _covering(self, offset: int) -> ClaimedSpan | None:
        idx = bisect.bisect_right(self._starts, offset) - 1
        if idx < 0:
            return None
        span = self._spans[idx]
        return span if offset < span.char_end else None

    def is_free(self, start: int, end: int) -> bool:
        """True iff [start, end) intersects no claimed span."""
        if end <= start:
            return self._covering(start) is None
        # Only the last span starting before ``end`` can reach into the interval.
        idx = bisect.bisect_left(self._starts, end) - 1
        if idx < 0:
            return True
        return self._spans[idx].char_end <= start

    def next_free(self, offset: int) -> int:
        """``offset`` if unclaimed, else the end of the span covering it."""
        span = self._covering(offset)
        return offset if span is None else span.char_end

    def claim(
        self,
        start: int,
        end: int,
        pattern_index: int,
        *,
        match_index: int = 0,
        text: str = "",
        display: Any = None,
        on_press: Any = None,
        extra: Mapping[str, Any] | None = None,
    ) -> ClaimedSpan:
        if end <= start:
            raise ValueError(f"Cannot claim empty interval [{start}, {end})")
        if not self.is_free(start, end):
            raise ValueError(f"Interval [{start}, {end}) overlaps an existing claim")
        span = ClaimedSpan(
            char_start=start,
            char_end=end,
            pattern_index=pattern_index,
            match_index=match_index,
            text=text,
            display=display,
            on_press=on_press,
            extra=dict(extra or {}),
        )
        idx = bisect.bisect_left(self._starts, start)
        self._starts.insert(idx, start)
        self._spans.insert(idx, span)
        return span
