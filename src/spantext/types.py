"""Core types for pattern matching, span claiming, and segment output."""

from __future__ import annotations

import functools
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Match:
    """One non-empty match of a single pattern in the raw text."""

    char_start: int
    char_end: int
    text: str
    groups: tuple[str | None, ...] = ()

    def __post_init__(self) -> None:
        if self.char_start < 0:
            raise ValueError(f"char_start must be >= 0, got {self.char_start}")
        if self.char_end <= self.char_start:
            raise ValueError(
                f"char_end must be > char_start, got {self.char_end} <= {self.char_start}",
            )


@dataclass(frozen=True, slots=True)
class ClaimedSpan:
    """Interval of the raw text owned by exactly one pattern."""

    char_start: int
    char_end: int
    pattern_index: int
    match_index: int
    text: str
    display: Any
    on_press: Any = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.char_start < 0:
            raise ValueError(f"char_start must be >= 0, got {self.char_start}")
        if self.char_end <= self.char_start:
            raise ValueError(
                f"char_end must be > char_start, got {self.char_end} <= {self.char_start}",
            )
        if self.pattern_index < 0:
            raise ValueError("pattern_index must be >= 0")


@dataclass(frozen=True, slots=True)
class Segment:
    """One output unit: plain text, or a matched span with its metadata.

    Equality covers only what a renderer sees (``children``, ``on_press``,
    ``extra``). Provenance fields are carried for callers that need offsets
    or the raw source slice but are excluded from comparison.
    """

    children: Any
    on_press: Any = None
    extra: Mapping[str, Any] = field(default_factory=dict)
    text: str = field(default="", compare=False)
    char_start: int = field(default=0, compare=False)
    char_end: int = field(default=0, compare=False)
    pattern_index: int | None = field(default=None, compare=False)
    match_index: int | None = field(default=None, compare=False)

    @property
    def is_matched(self) -> bool:
        return self.pattern_index is not None

    def to_dict(self) -> dict[str, Any]:
        """Renderer payload with only present values."""
        out: dict[str, Any] = dict(self.extra)
        out["children"] = self.children
        if self.on_press is not None:
            out["on_press"] = self.on_press
        return out

    def bind_on_press(self) -> Callable[[], Any] | None:
        """Zero-arg callable invoking the handle with (matched text, match index).

        Returns None for plain segments or segments without a callable handle.
        Nothing in this package calls the result; it is for the host UI.
        """
        if not callable(self.on_press):
            return None
        return functools.partial(self.on_press, self.text, self.match_index)
