"""Reading raw content files and writing rendered fragments, backed by orjson.

A raw content file holds one content state (``{"blocks": [...],
"entityMap": {...}}``) or, in JSON Lines form, one content state per line.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson

from drafthtml.errors import ConversionError


def _check_content(record: Any, where: str) -> dict[str, Any]:
    if not isinstance(record, dict):
        raise ConversionError(f"{where}: expected a JSON object, got {type(record).__name__}")
    if not isinstance(record.get("blocks"), list):
        raise ConversionError(f"{where}: content has no 'blocks' list")
    return record


def load_content(path: Path, *, jsonl: bool = False) -> list[dict[str, Any]]:
    """Load raw content states from *path*.

    Blank lines in JSON Lines input are skipped.

    Raises:
        ConversionError: the file is not valid JSON, or a record is not an
            object with a ``blocks`` list.
    """
    raw = path.read_bytes()
    lines = raw.split(b"\n") if jsonl else [raw]
    records: list[dict[str, Any]] = []
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        where = f"{path}:{lineno}" if jsonl else str(path)
        try:
            decoded = orjson.loads(line)
        except orjson.JSONDecodeError as exc:
            raise ConversionError(f"{where}: invalid JSON ({exc})") from exc
        records.append(_check_content(decoded, where))
    return records


def save_fragments(rows: list[dict[str, Any]], path: Path, *, jsonl: bool = False) -> None:
    """Write rendered ``{"index", "html"}`` rows.

    JSON Lines keeps the record index beside each fragment; otherwise the
    fragments are written one per line as plain HTML.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if jsonl:
        payload = b"".join(orjson.dumps(row) + b"\n" for row in rows)
    else:
        payload = "".join(f"{row['html']}\n" for row in rows).encode("utf-8")
    path.write_bytes(payload)
