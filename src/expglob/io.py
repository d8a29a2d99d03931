"""Input/output helpers for the expglob CLI.

Items are the strings a pattern is searched in. They are kept verbatim
apart from the line terminator, so blank lines, surrounding whitespace and
embedded NUL characters all reach the matcher.
"""
import csv
import json
import os
import sys
from collections.abc import Callable, Iterator
from typing import TextIO

ItemReader = Callable[[TextIO], Iterator[str]]


def _iter_lines(handle: TextIO) -> Iterator[str]:
    for line in handle:
        if line.endswith("\r\n"):
            yield line[:-2]
        elif line.endswith(("\n", "\r")):
            yield line[:-1]
        else:
            yield line


def _iter_jsonl(handle: TextIO, key: str = "item") -> Iterator[str]:
    for number, raw in enumerate(handle, start=1):
        if not raw.strip():
            continue
        try:
            obj = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"line {number}: invalid JSON: {exc.msg}") from exc
        if isinstance(obj, dict):
            if key not in obj:
                raise ValueError(f"line {number}: object has no {key!r} key")
            obj = obj[key]
        yield obj if isinstance(obj, str) else json.dumps(obj)


def _iter_csv(handle: TextIO, column: str = "item") -> Iterator[str]:
    reader = csv.DictReader(handle)
    if column not in (reader.fieldnames or []):
        raise ValueError(f"CSV missing required column {column!r}")
    for row in reader:
        yield row[column] or ""


_READERS: dict[str, ItemReader] = {
    ".json": _iter_jsonl,
    ".jsonl": _iter_jsonl,
    ".csv": _iter_csv,
}


def read_items(path: str) -> list[str]:
    """Read search items from ``path``; ``-`` reads lines from stdin."""
    if path == "-":
        return list(_iter_lines(sys.stdin))
    reader = _READERS.get(os.path.splitext(path)[1].lower(), _iter_lines)
    with open(path, encoding="utf-8", newline="") as handle:
        return list(reader(handle))


def _dump(obj: object, handle: TextIO) -> None:
    json.dump(obj, handle, indent=2, sort_keys=True, ensure_ascii=False)
    handle.write("\n")


def write_json(obj: object, path: str) -> None:
    if path == "-":
        _dump(obj, sys.stdout)
        sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8") as handle:
        _dump(obj, handle)


def write_text(text: str, path: str) -> None:
    if not text.endswith("\n"):
        text += "\n"
    if path == "-":
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)
