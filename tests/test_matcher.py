"""Tests for spantext.matcher.find_unclaimed_matches."""
import re

from spantext.claims import ClaimTracker
from spantext.matcher import find_unclaimed_matches
from spantext.patterns import CompiledPattern, MatchedText, PatternDescriptor, compile_pattern


def _texts(matches: list) -> list[str]:
    return [m.text for m in matches]


class _CountingRegex:
    """Regex wrapper that counts search calls."""

    def __init__(self, regex: re.Pattern[str]) -> None:
        self.regex = regex
        self.calls = 0

    def search(self, text: str, pos: int) -> re.Match[str] | None:
        self.calls += 1
        return self.regex.search(text, pos)


class TestFindUnclaimedMatches:
    def test_all_matches_left_to_right(self) -> None:
        pattern = compile_pattern("ab")
        matches = find_unclaimed_matches(pattern, "ab ab ab", ClaimTracker())
        assert [(m.char_start, m.char_end) for m in matches] == [(0, 2), (3, 5), (6, 8)]

    def test_own_matches_do_not_overlap(self) -> None:
        pattern = compile_pattern("aa")
        matches = find_unclaimed_matches(pattern, "aaaaa", ClaimTracker())
        assert [(m.char_start, m.char_end) for m in matches] == [(0, 2), (2, 4)]

    def test_match_inside_claim_is_skipped(self) -> None:
        tracker = ClaimTracker()
        tracker.claim(0, 6, 0)
        matches = find_unclaimed_matches(compile_pattern("bar"), "barbar bar", tracker)
        assert [(m.char_start, m.char_end) for m in matches] == [(7, 10)]

    def test_partial_overlap_rejected_not_truncated(self) -> None:
        tracker = ClaimTracker()
        tracker.claim(3, 6, 0)
        pattern = compile_pattern(re.compile(r"foo\w*"))
        assert find_unclaimed_matches(pattern, "foobar", tracker) == []

    def test_scanning_resumes_after_rejection(self) -> None:
        tracker = ClaimTracker()
        tracker.claim(1, 2, 0)
        pattern = compile_pattern(re.compile(r"\w+"))
        assert _texts(find_unclaimed_matches(pattern, "ab cd", tracker)) == ["cd"]

    def test_does_not_claim(self) -> None:
        tracker = ClaimTracker()
        find_unclaimed_matches(compile_pattern("a"), "aaa", tracker)
        assert len(tracker) == 0

    def test_zero_width_pattern_terminates(self) -> None:
        pattern = compile_pattern(re.compile(r"(?=a)|a*"))
        matches = find_unclaimed_matches(pattern, "baab", ClaimTracker())
        assert all(m.char_end > m.char_start for m in matches)

    def test_max_matches_caps_results(self) -> None:
        pattern = compile_pattern(PatternDescriptor(matcher="x", max_matches=2))
        assert len(find_unclaimed_matches(pattern, "xxxxx", ClaimTracker())) == 2

    def test_max_matches_zero(self) -> None:
        pattern = compile_pattern(PatternDescriptor(matcher="x", max_matches=0))
        assert find_unclaimed_matches(pattern, "xxx", ClaimTracker()) == []

    def test_empty_text(self) -> None:
        assert find_unclaimed_matches(compile_pattern("a"), "", ClaimTracker()) == []

    def test_rejected_match_is_not_rescanned(self) -> None:
        tracker = ClaimTracker()
        tracker.claim(1, 2, 0)
        pattern = compile_pattern(re.compile(r"\w+"))
        assert _texts(find_unclaimed_matches(pattern, "aXbb cc", tracker)) == ["cc"]

    def test_greedy_run_into_claim_scans_once(self) -> None:
        text = "a" * 5000 + "X"
        tracker = ClaimTracker()
        tracker.claim(5000, 5001, 0)
        counting = _CountingRegex(re.compile(r"a+X"))
        pattern = CompiledPattern(index=1, matcher=counting, display=MatchedText())  # type: ignore[arg-type]
        assert find_unclaimed_matches(pattern, text, tracker) == []
        assert counting.calls <= 2
