"""Turn the claimed span set back into an ordered, lossless segment list."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from spantext.types import ClaimedSpan, Segment


def _plain(text: str, start: int, end: int) -> Segment:
    chunk = text[start:end]
    return Segment(children=chunk, text=chunk, char_start=start, char_end=end)


def build_segments(text: str, spans: Sequence[ClaimedSpan]) -> list[Segment]:
    """Splice plain gaps between claimed spans.

    ``spans`` must be sorted by start and non-overlapping (as produced by
    ClaimTracker). With no spans the whole text is returned as one plain
    segment, even when it is empty. Empty gaps are never emitted.
    """
    if not spans:
        return [_plain(text, 0, len(text))]

    segments: list[Segment] = []
    cursor = 0
    for span in spans:
        if span.char_start < cursor:
            raise ValueError(
                f"Claimed spans overlap or are unsorted at offset {span.char_start}",
            )
        if span.char_start > cursor:
            segments.append(_plain(text, cursor, span.char_start))
        segments.append(
            Segment(
                children=span.display,
                on_press=span.on_press,
                extra=span.extra,
                text=text[span.char_start:span.char_end],
                char_start=span.char_start,
                char_end=span.char_end,
                pattern_index=span.pattern_index,
                match_index=span.match_index,
            )
        )
        cursor = span.char_end
    if cursor < len(text):
        segments.append(_plain(text, cursor, len(text)))
    return segments


def segments_to_dicts(segments: Iterable[Segment]) -> list[dict[str, Any]]:
    return [seg.to_dict() for seg in segments]


def reconstruct(segments: Iterable[Segment]) -> str:
    """Join the raw source slices; always equals the segmented text."""
    return "".join(seg.text for seg in segments)
