"""Merge a fragment's files into one structured value."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Iterable

from .config import DEFAULT_LAYOUT, LayoutNames
from .errors import RootNotAnObjectError
from .layout.paths import stem
from .models import Fragment, RenderingSparseDirectory, SingleFile, SparseDirectory
from .readers import read_file

FileReader = Callable[[Path], Any]


def extract_fragment_data(
    fragment: Fragment,
    *,
    names: LayoutNames = DEFAULT_LAYOUT,
    reader: FileReader = read_file,
) -> Any:
    """Return the merged value of a fragment.

    Sibling files are stored under their stem, replacing keys of the same
    name from the root file. A rendering sub-tree is stored as a mapping of
    template stem to template source under the rendering key.
    """
    if isinstance(fragment, SingleFile):
        return reader(fragment.path)

    root_data = reader(fragment.root_path)
    if not isinstance(root_data, dict):
        raise RootNotAnObjectError(fragment.root_path)

    result = dict(root_data)
    result.update(_read_by_stem(fragment.sibling_paths, reader))

    if isinstance(fragment, RenderingSparseDirectory):
        result[names.rendering] = _read_by_stem(fragment.rendering_paths, reader)
    elif not isinstance(fragment, SparseDirectory):  # pragma: no cover - closed union
        raise TypeError(f"Unknown fragment type: {type(fragment).__name__}")

    return result


def _read_by_stem(paths: Iterable[Path], reader: FileReader) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for path in paths:
        values[stem(path)] = reader(path)
    return values
