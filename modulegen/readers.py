"""Leaf-format readers that turn a single file into a structured value."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict

import yaml

from .errors import InvalidFileContentsError, UnableToOpenFileError, UnsupportedFileTypeError

Reader = Callable[[Path], Any]


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidFileContentsError(path, str(exc)) from exc
    except OSError as exc:
        raise UnableToOpenFileError(path, exc.strerror or str(exc)) from exc


def read_json(path: Path) -> Any:
    text = _read_text(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidFileContentsError(path, str(exc)) from exc


def read_yaml(path: Path) -> Any:
    text = _read_text(path)
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidFileContentsError(path, str(exc)) from exc


def read_plain_text(path: Path) -> str:
    return _read_text(path)


_READERS_BY_SUFFIX: Dict[str, Reader] = {
    ".json": read_json,
    ".yaml": read_yaml,
    ".yml": read_yaml,
    ".txt": read_plain_text,
    ".md": read_plain_text,
    ".hjs": read_plain_text,
    ".j2": read_plain_text,
    ".jinja": read_plain_text,
}

SUPPORTED_SUFFIXES = tuple(sorted(_READERS_BY_SUFFIX))


def reader_for(path: Path) -> Reader:
    """Pick the reader for a path from its extension."""
    reader = _READERS_BY_SUFFIX.get(path.suffix.lower())
    if reader is None:
        raise UnsupportedFileTypeError(path, SUPPORTED_SUFFIXES)
    return reader


def read_file(path: Path) -> Any:
    """Parse the file at ``path`` into a JSON-compatible value."""
    return reader_for(path)(path)


__all__ = ["SUPPORTED_SUFFIXES", "read_file", "reader_for"]
