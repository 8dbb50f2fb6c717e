"""Module directory layout and assembly of module documents."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from .config import DEFAULT_LAYOUT, LayoutNames
from .document import ModuleDocument, decode_content, decode_module, decode_type
from .errors import (
    DuplicateIdentifierError,
    ExpectedDirectoryError,
    IdentityError,
    InvalidPathError,
    MissingRequiredEntryError,
)
from .extract import FileReader, extract_fragment_data
from .layout import build_fragment_collection, classify, derive_identifier
from .models import Fragment, FragmentCollection
from .readers import read_file

T = TypeVar("T")


@dataclass
class ModuleLayout:
    """Fragments that make up one module directory."""

    root: Path
    module: Fragment
    types: Optional[FragmentCollection] = None
    contents: Optional[FragmentCollection] = None


def load_module_layout(root: Path, names: LayoutNames = DEFAULT_LAYOUT) -> ModuleLayout:
    """Resolve the module descriptor and the types/contents trees under ``root``."""
    if not root.exists():
        raise InvalidPathError(root)
    if not root.is_dir():
        raise ExpectedDirectoryError(root)

    module = classify(root, names.module, names)
    if module is None:
        raise MissingRequiredEntryError(names.module, root)

    return ModuleLayout(
        root=root,
        module=module,
        types=build_fragment_collection(root / names.types, names),
        contents=build_fragment_collection(root / names.contents, names),
    )


class ModuleAssembler:
    """Builds a module document from its embedded descriptor and fragment trees.

    Filesystem definitions override embedded ones that share an identifier.
    """

    def __init__(self, names: LayoutNames = DEFAULT_LAYOUT, reader: FileReader = read_file) -> None:
        self.names = names
        self._reader = reader

    def assemble_layout(self, layout: ModuleLayout) -> ModuleDocument:
        return self.assemble(layout.module, layout.types, layout.contents)

    def assemble(
        self,
        module_fragment: Fragment,
        types: Optional[FragmentCollection] = None,
        contents: Optional[FragmentCollection] = None,
    ) -> ModuleDocument:
        value = self._extract(module_fragment)
        document = decode_module(value, str(module_fragment.anchor))

        fs_types = self._collect(types, decode_type)
        fs_contents = self._collect(contents, decode_content)

        return document.model_copy(
            update={
                "types": _merge(document.types, fs_types),
                "contents": _merge(document.contents, fs_contents),
            }
        )

    def _extract(self, fragment: Fragment) -> Any:
        return extract_fragment_data(fragment, names=self.names, reader=self._reader)

    def _collect(
        self,
        collection: Optional[FragmentCollection],
        decode: Callable[[Any, str], T],
    ) -> Dict[str, T]:
        if collection is None:
            return {}
        decoded: Dict[str, T] = {}
        origins: Dict[str, Path] = {}
        for fragment in collection:
            anchor = fragment.anchor
            identifier = derive_identifier(anchor, collection.base_path, self.names)
            if not identifier:
                raise IdentityError(
                    f"cannot derive an identifier for `{anchor}` relative to `{collection.base_path}`",
                    anchor,
                )
            if identifier in origins:
                raise DuplicateIdentifierError(identifier, origins[identifier], anchor)
            decoded[identifier] = decode(self._extract(fragment), f"{anchor} ({identifier})")
            origins[identifier] = anchor
        return decoded


def _merge(embedded: Optional[Dict[str, T]], discovered: Dict[str, T]) -> Optional[Dict[str, T]]:
    merged: Dict[str, T] = dict(embedded or {})
    merged.update(discovered)
    if not merged:
        return None
    return {key: merged[key] for key in sorted(merged)}


def build_module(root: Path, names: LayoutNames = DEFAULT_LAYOUT) -> Tuple[ModuleLayout, ModuleDocument]:
    """Resolve and assemble the module rooted at ``root`` in one pass."""
    layout = load_module_layout(root, names)
    return layout, ModuleAssembler(names).assemble_layout(layout)
