"""Pattern descriptors and their normalization into compiled matchers.

A descriptor names what to look for (a compiled regex, or a literal string
matched verbatim) plus the metadata attached to every span it claims:

  render_text  static display value, or callable (text, [text, *groups])
  on_press     opaque handle forwarded to the segment, never invoked here
  extra        arbitrary passthrough fields copied onto the segment
  max_matches  cap on spans claimed by the pattern (None = unlimited)

Descriptors may also be given as mappings (e.g. decoded from JSON), where the
matcher comes from exactly one of ``pattern``/``matcher``, ``regex`` (source
string, optional ``flags``), ``literal`` or ``type`` (a preset name).
Unrecognised keys become ``extra``.

All configuration problems surface as PatternError while compiling, before
any text is scanned.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from spantext.types import Match

log = logging.getLogger(__name__)


class PatternError(ValueError):
    """Invalid pattern descriptor (bad regex, unknown preset, wrong types)."""


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

PRESET_PATTERNS: dict[str, re.Pattern[str]] = {
    "url": re.compile(
        r"(?:https?://|www\.)[-a-zA-Z0-9@:%._+~#=]{1,256}\.(?:xn--)?[a-z0-9-]{2,20}\b"
        r"(?:[-a-zA-Z0-9@:%_+\[\],.~#?&/=]*[-a-zA-Z0-9@:%_+\]~#?&/=])?",
        re.IGNORECASE,
    ),
    "email": re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+"),
    "phone": re.compile(r"\+?\(?\d{3}\)?[-\s.]?\d{3}[-\s.]?\d{4,6}"),
}

_FLAG_NAMES: dict[str, re.RegexFlag] = {
    "IGNORECASE": re.IGNORECASE,
    "I": re.IGNORECASE,
    "MULTILINE": re.MULTILINE,
    "M": re.MULTILINE,
    "DOTALL": re.DOTALL,
    "S": re.DOTALL,
    "VERBOSE": re.VERBOSE,
    "X": re.VERBOSE,
    "ASCII": re.ASCII,
    "A": re.ASCII,
}

_MATCHER_KEYS = ("pattern", "matcher", "regex", "literal", "type")
_RENDER_KEYS = ("render_text", "renderText")
_HANDLE_KEYS = ("on_press", "onPress")
_RESERVED_KEYS = frozenset(
    (*_MATCHER_KEYS, *_RENDER_KEYS, *_HANDLE_KEYS, "flags", "max_matches"),
)


# ---------------------------------------------------------------------------
# Display value variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MatchedText:
    """Display the matched text unchanged."""

    def render(self, text: str, groups: tuple[str | None, ...]) -> Any:
        return text


@dataclass(frozen=True, slots=True)
class StaticText:
    """Display a fixed value regardless of the match."""

    value: Any

    def render(self, text: str, groups: tuple[str | None, ...]) -> Any:
        return self.value


@dataclass(frozen=True, slots=True)
class ComputedText:
    """Display the result of ``fn(text, [text, *groups])``."""

    fn: Callable[[str, list[str | None]], Any]

    def render(self, text: str, groups: tuple[str | None, ...]) -> Any:
        return self.fn(text, [text, *groups])


DisplayValue: TypeAlias = MatchedText | StaticText | ComputedText


def display_value_for(render_text: Any) -> DisplayValue:
    if render_text is None:
        return MatchedText()
    if callable(render_text):
        return ComputedText(render_text)
    return StaticText(render_text)


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PatternDescriptor:
    """Caller-supplied pattern plus the metadata attached to its spans."""

    matcher: re.Pattern[str] | str
    render_text: Any = None
    on_press: Any = None
    extra: Mapping[str, Any] = field(default_factory=dict)
    max_matches: int | None = None


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """Normalized matcher with resolved display variant."""

    index: int
    matcher: re.Pattern[str] | str
    display: DisplayValue
    on_press: Any = None
    extra: Mapping[str, Any] = field(default_factory=dict)
    max_matches: int | None = None

    @property
    def is_literal(self) -> bool:
        return isinstance(self.matcher, str)

    def find_next(self, text: str, pos: int) -> Match | None:
        """First non-empty match starting at or after ``pos``.

        Zero-width regex matches are skipped by searching again one character
        further on, so the returned match always has char_start < char_end.
        """
        if isinstance(self.matcher, str):
            if not self.matcher:
                return None
            start = text.find(self.matcher, pos)
            if start < 0:
                return None
            return Match(start, start + len(self.matcher), self.matcher)

        at = pos
        while at <= len(text):
            found = self.matcher.search(text, at)
            if found is None:
                return None
            if found.end() > found.start():
                return Match(found.start(), found.end(), found.group(0), found.groups())
            at = found.start() + 1
        return None

    def render(self, match: Match) -> Any:
        return self.display.render(match.text, match.groups)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def parse_flags(flags: Any) -> int:
    """Resolve flag names ("IGNORECASE", "M", ...) or an int into re flags."""
    if flags is None:
        return 0
    if isinstance(flags, bool):
        raise PatternError(f"flags must be names or an int, got {flags!r}")
    if isinstance(flags, int):
        return flags
    if isinstance(flags, str):
        names = [part.strip() for part in flags.split("|") if part.strip()]
    elif isinstance(flags, (list, tuple)):
        names = list(flags)
    else:
        raise PatternError(f"flags must be names or an int, got {type(flags).__name__}")

    value = 0
    for name in names:
        if not isinstance(name, str):
            raise PatternError(f"Flag names must be strings, got {name!r}")
        flag = _FLAG_NAMES.get(name.strip().upper())
        if flag is None:
            raise PatternError(f"Unknown regex flag: {name!r}")
        value |= flag
    return value


def compile_regex(source: str, flags: Any = None) -> re.Pattern[str]:
    """Compile a regex source string, raising PatternError on bad syntax."""
    if not isinstance(source, str):
        raise PatternError(f"regex must be a string, got {type(source).__name__}")
    try:
        return re.compile(source, parse_flags(flags))
    except re.error as exc:
        raise PatternError(f"Invalid regex {source!r}: {exc}") from exc


def _first_key(payload: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def descriptor_from_mapping(payload: Mapping[str, Any]) -> PatternDescriptor:
    """Build a PatternDescriptor from a mapping such as a decoded JSON object."""
    present = [key for key in _MATCHER_KEYS if key in payload]
    if not present:
        raise PatternError(
            f"Pattern needs one of {', '.join(_MATCHER_KEYS)}; got keys {sorted(payload)}",
        )
    if len(present) > 1:
        raise PatternError(f"Pattern has conflicting matcher keys: {present}")
    key = present[0]
    raw = payload[key]

    if "flags" in payload and key != "regex":
        raise PatternError("flags are only accepted together with 'regex'")

    matcher: re.Pattern[str] | str
    if key == "regex":
        matcher = compile_regex(raw, payload.get("flags"))
    elif key == "literal":
        if not isinstance(raw, str):
            raise PatternError(f"literal must be a string, got {type(raw).__name__}")
        matcher = raw
    elif key == "type":
        preset = PRESET_PATTERNS.get(raw) if isinstance(raw, str) else None
        if preset is None:
            raise PatternError(
                f"Unknown pattern type {raw!r}; expected one of {sorted(PRESET_PATTERNS)}",
            )
        matcher = preset
    else:
        matcher = raw

    if "children" in payload:
        raise PatternError("'children' is set from the match and cannot be passed through")
    extra = {k: v for k, v in payload.items() if k not in _RESERVED_KEYS}
    return PatternDescriptor(
        matcher=matcher,
        render_text=_first_key(payload, _RENDER_KEYS),
        on_press=_first_key(payload, _HANDLE_KEYS),
        extra=extra,
        max_matches=payload.get("max_matches"),
    )


def as_descriptor(value: Any) -> PatternDescriptor:
    """Accept a descriptor, a bare regex/literal, or a mapping."""
    if isinstance(value, PatternDescriptor):
        return value
    if isinstance(value, (re.Pattern, str)):
        return PatternDescriptor(matcher=value)
    if isinstance(value, Mapping):
        return descriptor_from_mapping(value)
    raise PatternError(f"Unsupported pattern descriptor: {type(value).__name__}")


def compile_pattern(value: Any, index: int = 0) -> CompiledPattern:
    descriptor = as_descriptor(value)
    matcher = descriptor.matcher
    if isinstance(matcher, re.Pattern):
        if not isinstance(matcher.pattern, str):
            raise PatternError("Byte-string regexes cannot match text")
    elif not isinstance(matcher, str):
        raise PatternError(
            f"matcher must be a compiled regex or a string, got {type(matcher).__name__}",
        )

    max_matches = descriptor.max_matches
    if max_matches is not None and (
        isinstance(max_matches, bool) or not isinstance(max_matches, int) or max_matches < 0
    ):
        raise PatternError(f"max_matches must be a non-negative int, got {max_matches!r}")

    return CompiledPattern(
        index=index,
        matcher=matcher,
        display=display_value_for(descriptor.render_text),
        on_press=descriptor.on_press,
        extra=dict(descriptor.extra),
        max_matches=max_matches,
    )


def compile_patterns(values: Iterable[Any]) -> list[CompiledPattern]:
    """Compile descriptors in priority order; earlier entries win overlaps."""
    compiled: list[CompiledPattern] = []
    for index, value in enumerate(values):
        try:
            compiled.append(compile_pattern(value, index))
        except PatternError as exc:
            raise PatternError(f"pattern[{index}]: {exc}") from exc
    log.debug("Compiled %d pattern(s)", len(compiled))
    return compiled
