"""Core data models shared across modulegen components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Union


@dataclass(frozen=True)
class SingleFile:
    """A fragment whose whole value is the parsed content of one file."""

    path: Path

    @property
    def anchor(self) -> Path:
        return self.path


@dataclass(frozen=True)
class SparseDirectory:
    """A fragment split across a root marker file and its sibling files."""

    root_path: Path
    sibling_paths: Tuple[Path, ...] = ()

    @property
    def anchor(self) -> Path:
        return self.root_path


@dataclass(frozen=True)
class RenderingSparseDirectory:
    """A sparse directory that also owns a rendering sub-tree."""

    root_path: Path
    sibling_paths: Tuple[Path, ...] = ()
    rendering_paths: Tuple[Path, ...] = ()

    @property
    def anchor(self) -> Path:
        return self.root_path


Fragment = Union[SingleFile, SparseDirectory, RenderingSparseDirectory]


@dataclass
class FragmentCollection:
    """Fragments collected under a base path, in traversal order."""

    base_path: Path
    fragments: List[Fragment] = field(default_factory=list)

    def extend(self, other: "FragmentCollection") -> None:
        """Append fragments from a nested collection, keeping this base path."""
        self.fragments.extend(other.fragments)

    def __len__(self) -> int:
        return len(self.fragments)

    def __iter__(self):
        return iter(self.fragments)
