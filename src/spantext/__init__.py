"""Priority-ordered pattern extraction that segments text for rich rendering."""

from spantext.claims import ClaimTracker
from spantext.extraction import TextExtractor, claim_spans, segment
from spantext.matcher import find_unclaimed_matches
from spantext.pattern_sets import PatternSet, load_pattern_set, pattern_set_from_dict
from spantext.patterns import (
    PRESET_PATTERNS,
    CompiledPattern,
    ComputedText,
    DisplayValue,
    MatchedText,
    PatternDescriptor,
    PatternError,
    StaticText,
    compile_pattern,
    compile_patterns,
)
from spantext.segments import build_segments, reconstruct, segments_to_dicts
from spantext.types import ClaimedSpan, Match, Segment

__all__ = [
    "PRESET_PATTERNS",
    "ClaimTracker",
    "ClaimedSpan",
    "CompiledPattern",
    "ComputedText",
    "DisplayValue",
    "Match",
    "MatchedText",
    "PatternDescriptor",
    "PatternError",
    "PatternSet",
    "Segment",
    "StaticText",
    "TextExtractor",
    "build_segments",
    "claim_spans",
    "compile_pattern",
    "compile_patterns",
    "find_unclaimed_matches",
    "load_pattern_set",
    "pattern_set_from_dict",
    "reconstruct",
    "segment",
    "segments_to_dicts",
]
