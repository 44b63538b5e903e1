#!/usr/bin/env python3
"""Segment a text with a pattern set and emit the segments as JSON.

Usage:
    python3 scripts/segment_text.py --patterns patterns/chat.json --input message.txt
    echo "see https://example.com" | python3 scripts/segment_text.py --patterns patterns/chat.json

Structured JSON output goes to stdout (or --output); human messages go to stderr.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import orjson

from spantext.pattern_sets import PatternSet, load_pattern_set
from spantext.types import Segment

log = logging.getLogger("segment_text")


def dump_json(obj: Any, *, compact: bool = False, output: Path | None = None) -> None:
    opts = 0 if compact else orjson.OPT_INDENT_2
    payload = orjson.dumps(obj, option=opts, default=str) + b"\n"
    if output is None:
        sys.stdout.buffer.write(payload)
        sys.stdout.buffer.flush()
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(payload)


def segment_record(seg: Segment) -> dict[str, Any]:
    """JSON-safe view of a segment. Handles are dropped; they cannot be serialized."""
    record: dict[str, Any] = dict(seg.extra)
    record.update({
        "children": seg.children,
        "text": seg.text,
        "char_start": seg.char_start,
        "char_end": seg.char_end,
        "pattern_index": seg.pattern_index,
    })
    return record


def build_report(pattern_set: PatternSet, text: str) -> dict[str, Any]:
    segments = pattern_set.compile().parse(text)
    return {
        "pattern_set": pattern_set.name,
        "segment_count": len(segments),
        "matched_count": sum(1 for seg in segments if seg.is_matched),
        "segments": [segment_record(seg) for seg in segments],
    }


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Segment text with a prioritized pattern set.",
    )
    parser.add_argument(
        "--patterns", type=Path, required=True,
        help="Path to pattern set JSON",
    )
    parser.add_argument(
        "--input", type=Path, default=None,
        help="Text file to segment (default: stdin)",
    )
    parser.add_argument(
        "--output", type=Path, default=None,
        help="Write JSON here instead of stdout",
    )
    parser.add_argument("--compact", action="store_true", help="Single-line JSON")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.patterns.exists():
        log.error("pattern set not found at %s", args.patterns)
        sys.exit(1)
    try:
        pattern_set = load_pattern_set(args.patterns)
    except (OSError, ValueError) as exc:
        log.error("invalid pattern set %s: %s", args.patterns, exc)
        sys.exit(1)

    if args.input is not None:
        if not args.input.exists():
            log.error("input file not found at %s", args.input)
            sys.exit(1)
        try:
            text = args.input.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            log.error("cannot read input %s: %s", args.input, exc)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    report = build_report(pattern_set, text)
    log.info(
        "%d segment(s), %d matched, pattern set %r",
        report["segment_count"], report["matched_count"], pattern_set.name,
    )
    dump_json(report, compact=args.compact, output=args.output)


if __name__ == "__main__":
    main()
