"""Identifier derivation from fragment paths."""

from __future__ import annotations

import os
from pathlib import Path, PurePath
from typing import Optional

from ..config import DEFAULT_LAYOUT, LayoutNames
from .paths import is_named

_SEPARATOR = "_"


def derive_identifier(
    anchor_path: Path, base_path: Path, names: LayoutNames = DEFAULT_LAYOUT
) -> Optional[str]:
    """Return the identifier of a fragment anchored at ``anchor_path``.

    Root marker files stand for their parent directory. The relative path
    from ``base_path`` is joined with underscores and the trailing extension
    is dropped, so ``a/b/c/something.yaml`` relative to ``a`` becomes
    ``b_c_something``. Returns ``None`` when no relative path exists.
    """
    anchor = anchor_path
    if is_named(anchor, names.root_marker):
        anchor = anchor.parent

    if anchor.is_absolute() != base_path.is_absolute():
        return None
    try:
        relative = os.path.relpath(anchor, base_path)
    except ValueError:
        return None

    parts = [part for part in PurePath(relative).parts if part not in (os.curdir, os.pardir)]
    if not parts:
        return None
    last = PurePath(parts[-1])
    if last.suffix:
        parts[-1] = last.stem
    return _SEPARATOR.join(parts)
