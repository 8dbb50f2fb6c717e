"""Recursive collection of fragments below a base directory."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..config import DEFAULT_LAYOUT, LayoutNames
from ..models import FragmentCollection, SingleFile
from .paths import classify_path, first_child_named, list_children


def build_fragment_collection(
    base_directory: Path, names: LayoutNames = DEFAULT_LAYOUT
) -> Optional[FragmentCollection]:
    """Collect every fragment reachable from ``base_directory``.

    A directory holding a root marker collapses into one sparse fragment;
    otherwise each file it holds is its own fragment. Subdirectories other
    than the rendering directory are always walked and flattened in, in name
    order. Returns ``None`` when the directory does not exist.
    """
    if not base_directory.is_dir():
        return None

    result = FragmentCollection(base_path=base_directory)
    children = list_children(base_directory)

    if first_child_named(base_directory, names.root_marker) is not None:
        fragment = classify_path(base_directory, names)
        if fragment is not None:
            result.fragments.append(fragment)
    else:
        result.fragments.extend(SingleFile(child) for child in children if child.is_file())

    for child in children:
        if not child.is_dir() or child.name == names.rendering:
            continue
        nested = build_fragment_collection(child, names)
        if nested is not None:
            result.extend(nested)

    return result
