"""Name helpers and fragment classification for layout paths."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ..config import CONFIG_FILENAME, DEFAULT_LAYOUT, LayoutNames
from ..models import Fragment, RenderingSparseDirectory, SingleFile, SparseDirectory

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
    CONFIG_FILENAME,
}


def stem(path: Path) -> str:
    """Return the file or directory name without its extension."""
    return path.stem


def is_named(path: Path, name: str) -> bool:
    """Check whether a path has a given name, regardless of its extension."""
    return stem(path) == name


def list_children(directory: Path) -> List[Path]:
    """Return the entries of a directory, sorted by name.

    A path that is not a readable directory has no children.
    """
    try:
        children = [child for child in directory.iterdir() if child.name not in _EXCLUDED_FILES]
    except (FileNotFoundError, NotADirectoryError):
        return []
    return sorted(children, key=lambda child: child.name)


def first_child_named(directory: Path, name: str) -> Optional[Path]:
    """Find the first file (by name order) in a directory with the given stem."""
    for child in list_children(directory):
        if child.is_file() and is_named(child, name):
            return child
    return None


def classify_path(path: Path, names: LayoutNames = DEFAULT_LAYOUT) -> Optional[Fragment]:
    """Classify an existing path as a single fragment.

    Files are always a ``SingleFile``. Directories only form a fragment when a
    root marker file sits directly inside them; otherwise ``None`` is returned
    and their children have to be classified one by one.
    """
    if path.is_file():
        return SingleFile(path)
    if not path.is_dir():
        return None

    root_file = first_child_named(path, names.root_marker)
    if root_file is None:
        return None

    siblings = tuple(
        child
        for child in list_children(path)
        if child.is_file() and not is_named(child, names.root_marker)
    )

    rendering_dir = path / names.rendering
    if rendering_dir.is_dir():
        rendering_files = tuple(child for child in list_children(rendering_dir) if child.is_file())
        return RenderingSparseDirectory(
            root_path=root_file,
            sibling_paths=siblings,
            rendering_paths=rendering_files,
        )
    return SparseDirectory(root_path=root_file, sibling_paths=siblings)


def classify(directory: Path, name: str, names: LayoutNames = DEFAULT_LAYOUT) -> Optional[Fragment]:
    """Resolve a logical name inside a directory to a fragment, if one exists.

    A file whose stem matches ``name`` wins over a sparse directory of the
    same name.
    """
    named_file = first_child_named(directory, name)
    if named_file is not None:
        return SingleFile(named_file)
    candidate = directory / name
    if candidate.is_dir():
        return classify_path(candidate, names)
    return None
