#!/usr/bin/env python3
"""Render raw rich-text content (blocks + entityMap) to HTML fragments.

Usage:
    python3 scripts/render_raw.py --input content.json
    python3 scripts/render_raw.py --input docs.jsonl --jsonl --output out.jsonl --check
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from drafthtml.blocks import content_text, render_content
from drafthtml.default_rules import default_resolver, default_transformer
from drafthtml.errors import ConversionError
from drafthtml.html_utils import is_well_nested, visible_text
from drafthtml.io_utils import load_content, save_fragments

log = logging.getLogger("render_raw")


def _render_one(raw: dict[str, Any], *, check: bool) -> tuple[str, str | None]:
    """Render one content state; return ``(html, failure_reason or None)``."""
    html = render_content(
        raw,
        resolver=default_resolver(),
        transformer=default_transformer(),
    )
    if not check:
        return html, None
    if visible_text(html) != content_text(raw):
        return html, "text_mismatch"
    if not is_well_nested(html):
        return html, "not_well_nested"
    return html, None


def main() -> int:
    parser = argparse.ArgumentParser(description="Render raw rich-text content to HTML")
    parser.add_argument("--input", type=Path, required=True)
    parser.add_argument("--output", type=Path, default=None)
    parser.add_argument("--jsonl", action="store_true", help="Input holds one content state per line")
    parser.add_argument("--check", action="store_true", help="Verify rendered text and tag nesting")
    parser.add_argument("--json", action="store_true", help="Print a JSON summary instead of HTML")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        records = load_content(args.input, jsonl=args.jsonl)
    except ConversionError as exc:
        log.error("%s", exc)
        return 1
    rows: list[dict[str, Any]] = []
    failures: list[dict[str, Any]] = []

    for index, raw in enumerate(records):
        try:
            html, reason = _render_one(raw, check=args.check)
        except ConversionError as exc:
            log.error("record %d: %s", index, exc)
            failures.append({"index": index, "reason": type(exc).__name__, "detail": str(exc)})
            continue
        if reason is not None:
            log.warning("record %d: %s", index, reason)
            failures.append({"index": index, "reason": reason})
        rows.append({"index": index, "html": html})

    if args.output is not None:
        save_fragments(rows, args.output, jsonl=args.jsonl)
        log.info("wrote %d fragment(s) to %s", len(rows), args.output)

    if args.json:
        print(json.dumps({"rendered": len(rows), "failures": failures}, indent=2))
    elif args.output is None:
        for row in rows:
            print(row["html"])

    return 0 if not failures else 1


if __name__ == "__main__":
    raise SystemExit(main())
