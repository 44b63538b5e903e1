"""Named pattern sets persisted as JSON.

A pattern set file is a JSON object::

    {
      "name": "chat",
      "patterns": [
        {"type": "url", "role": "link"},
        {"regex": "\\\\[(@[^:]+):([^\\\\]]+)\\\\]", "flags": ["IGNORECASE"]},
        {"literal": "bar", "render_text": "BAR", "max_matches": 1}
      ]
    }

Entries use the mapping form accepted by ``spantext.patterns``. Keys starting
with ``_`` are treated as comments and dropped. JSON cannot carry callables,
so ``render_text`` is always a static value here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson

from spantext.extraction import TextExtractor
from spantext.patterns import (
    PatternDescriptor,
    PatternError,
    compile_pattern,
    descriptor_from_mapping,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PatternSet:
    name: str
    patterns: tuple[PatternDescriptor, ...]

    def compile(self) -> TextExtractor:
        return TextExtractor(self.patterns)


def _strip_private_fields(payload: Mapping[str, Any]) -> dict[str, Any]:
    return {
        k: v for k, v in payload.items()
        if not (isinstance(k, str) and k.startswith("_"))
    }


def pattern_set_from_dict(payload: Any, *, name: str = "") -> PatternSet:
    """Validate a decoded pattern set payload.

    Raises:
        ValueError: The payload shape is wrong.
        PatternError: An entry is not a valid pattern.
    """
    if not isinstance(payload, dict):
        raise ValueError("Pattern set payload must be a JSON object")
    payload = _strip_private_fields(payload)
    entries = payload.get("patterns")
    if not isinstance(entries, list):
        raise ValueError("Pattern set requires a 'patterns' list")

    set_name = payload.get("name", name)
    if not isinstance(set_name, str):
        raise ValueError(f"Pattern set name must be a string, got {set_name!r}")

    descriptors: list[PatternDescriptor] = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise PatternError(f"patterns[{idx}] must be an object")
        try:
            descriptor = descriptor_from_mapping(_strip_private_fields(entry))
            compile_pattern(descriptor, idx)
        except PatternError as exc:
            raise PatternError(f"patterns[{idx}]: {exc}") from exc
        descriptors.append(descriptor)
    return PatternSet(name=set_name, patterns=tuple(descriptors))


def load_pattern_set(path: Path) -> PatternSet:
    """Load a pattern set file; the file stem is the default name."""
    try:
        payload = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"Pattern set is not valid JSON: {path}: {exc}") from exc
    pattern_set = pattern_set_from_dict(payload, name=path.stem)
    log.debug("Loaded pattern set %r (%d patterns) from %s",
              pattern_set.name, len(pattern_set.patterns), path)
    return pattern_set
