"""Left-to-right scan of one pattern over the text regions left unclaimed."""

from __future__ import annotations

from spantext.claims import ClaimTracker
from spantext.patterns import CompiledPattern
from spantext.types import Match


def find_unclaimed_matches(
    pattern: CompiledPattern,
    text: str,
    tracker: ClaimTracker,
) -> list[Match]:
    """Collect the pattern's matches that do not touch any claimed span.

    A match overlapping a claim is dropped whole and, like an accepted one,
    moves the cursor past its end (jumping over any claim that lands in), so
    text inside a rejected match is never rescanned. The returned matches
    are ordered and never overlap each other; claiming them is up to the
    caller.
    """
    limit = pattern.max_matches
    matches: list[Match] = []
    if limit == 0:
        return matches

    cursor = tracker.next_free(0)
    while cursor <= len(text):
        match = pattern.find_next(text, cursor)
        if match is None:
            break
        cursor = tracker.next_free(match.char_end)
        if not tracker.is_free(match.char_start, match.char_end):
            continue
        matches.append(match)
        if limit is not None and len(matches) >= limit:
            break
    return matches
