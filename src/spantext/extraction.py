"""Priority-ordered, non-overlapping text segmentation.

Patterns run strictly in the order given. Each one only claims text that no
earlier pattern (and none of its own earlier matches) already owns, so the
first pattern in the list wins any overlap. The result is a flat list of
segments whose raw text concatenates back to the input.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from spantext.claims import ClaimTracker
from spantext.matcher import find_unclaimed_matches
from spantext.patterns import CompiledPattern, compile_patterns
from spantext.segments import build_segments
from spantext.types import Segment

log = logging.getLogger(__name__)


def claim_spans(text: str, patterns: Iterable[CompiledPattern]) -> ClaimTracker:
    """Run every pattern over ``text`` in order and return the filled tracker."""
    tracker = ClaimTracker()
    for pattern in patterns:
        matches = find_unclaimed_matches(pattern, text, tracker)
        for match_index, match in enumerate(matches):
            tracker.claim(
                match.char_start,
                match.char_end,
                pattern.index,
                match_index=match_index,
                text=match.text,
                display=pattern.render(match),
                on_press=pattern.on_press,
                extra=pattern.extra,
            )
        log.debug("pattern[%d] claimed %d span(s)", pattern.index, len(matches))
    return tracker


class TextExtractor:
    """Compiled, reusable pattern list.

    Patterns are compiled in the constructor, so configuration errors raise
    before any text is seen. ``parse`` keeps no state between calls and may
    be called concurrently.
    """

    def __init__(self, patterns: Iterable[Any] = ()) -> None:
        self._patterns: tuple[CompiledPattern, ...] = tuple(compile_patterns(patterns))

    @property
    def patterns(self) -> tuple[CompiledPattern, ...]:
        return self._patterns

    def parse(self, text: str) -> list[Segment]:
        if not isinstance(text, str):
            raise TypeError(f"text must be a str, got {type(text).__name__}")
        tracker = claim_spans(text, self._patterns)
        return build_segments(text, tracker.spans)


def segment(text: str, patterns: Iterable[Any] = ()) -> list[Segment]:
    """Split ``text`` into plain and matched segments.

    Args:
        text: Raw text; never modified.
        patterns: PatternDescriptor objects, bare regexes/literals, or
            mappings, in priority order.

    Returns:
        Ordered segments. With no patterns or no matches, a single plain
        segment containing the whole text.

    Raises:
        PatternError: A descriptor is invalid (raised before matching).
    """
    return TextExtractor(patterns).parse(text)
