"""Serialization helpers for artifact files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import orjson
from pydantic import BaseModel

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

_JSONL_OPTIONS = orjson.OPT_SORT_KEYS
_JSON_OPTIONS = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2


def _payload(record: object) -> object:
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json")
    return record


def write_jsonl(path: Path, records: Iterable[object]) -> int:
    """Write one sorted-key JSON object per line and return the record count."""
    count = 0
    with path.open("wb") as handle:
        for record in records:
            handle.write(orjson.dumps(_payload(record), option=_JSONL_OPTIONS))
            handle.write(b"\n")
            count += 1
    return count


def write_json(path: Path, document: object) -> None:
    path.write_bytes(orjson.dumps(_payload(document), option=_JSON_OPTIONS) + b"\n")


def load_jsonl(path: Path) -> list[dict[str, Any]]:
    """Load the object records of a JSONL artifact, skipping blank lines."""
    records: list[dict[str, Any]] = []
    with path.open("rb") as handle:
        for line in handle:
            if not line.strip():
                continue
            record = orjson.loads(line)
            if isinstance(record, dict):
                records.append(record)
    return records


def output_dir_name(out_dir: Path, root: Path) -> str:
    """Top-level directory of ``out_dir`` inside ``root``, or "" when outside."""
    if not out_dir.is_relative_to(root):
        return ""
    parts = out_dir.relative_to(root).parts
    return parts[0] if parts else ""


__all__ = ["load_jsonl", "output_dir_name", "write_json", "write_jsonl"]
