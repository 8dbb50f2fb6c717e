"""Exception hierarchy shared across modulegen components."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class ModuleGenError(RuntimeError):
    """Base class for every failure raised by modulegen."""


class LayoutError(ModuleGenError):
    """The directory tree does not follow the module layout."""


class InvalidPathError(LayoutError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"module path not found: {path}")
        self.path = path


class ExpectedDirectoryError(LayoutError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"expected directory but found a file instead: {path}")
        self.path = path


class MissingRequiredEntryError(LayoutError):
    def __init__(self, name: str, directory: Path) -> None:
        super().__init__(f"missing required entry `{name}` in {directory}")
        self.name = name
        self.directory = directory


class UnsupportedFileTypeError(ModuleGenError):
    """Raised before reading a file whose extension has no reader."""

    def __init__(self, path: Path, supported: Sequence[str]) -> None:
        expected = ", ".join(supported)
        super().__init__(f"unsupported file type `{path}` (expected one of {expected})")
        self.path = path


class ReadError(ModuleGenError):
    """A file could not be opened or parsed."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class UnableToOpenFileError(ReadError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"unable to open file `{path}`: {reason}", path)


class InvalidFileContentsError(ReadError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"the contents of the file `{path}` were invalid: {reason}", path)


class ShapeError(ModuleGenError):
    """A value does not have the shape the assembler expects."""


class RootNotAnObjectError(ShapeError):
    def __init__(self, path: Path) -> None:
        super().__init__(
            f"root file `{path}` is not an object and cannot be extended with sibling files"
        )
        self.path = path


class DocumentShapeError(ShapeError):
    def __init__(self, what: str, location: str, detail: str) -> None:
        super().__init__(f"invalid {what} at {location}: {detail}")
        self.what = what
        self.location = location


class IdentityError(ModuleGenError):
    """A fragment could not be given an identifier."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class DuplicateIdentifierError(IdentityError):
    def __init__(self, identifier: str, first: Path, second: Path) -> None:
        super().__init__(
            f"identifier `{identifier}` is derived from both `{first}` and `{second}`",
            second,
        )
        self.identifier = identifier
        self.first = first


class RenderError(ModuleGenError):
    """Compiling or executing rendering templates failed."""


class NoRenderableTypesError(RenderError):
    def __init__(self) -> None:
        super().__init__("no renderable types are present")


class MissingContentsError(RenderError):
    def __init__(self) -> None:
        super().__init__("found no contents in the module")


class MissingTypeError(RenderError):
    def __init__(self, identifier: str | None = None) -> None:
        label = f"content item `{identifier}`" if identifier else "content item"
        super().__init__(f"{label} declares no type")
        self.identifier = identifier


class MissingTemplateError(RenderError):
    def __init__(self, type_id: str, format_name: str) -> None:
        super().__init__(f"no compiled template for type `{type_id}` and format `{format_name}`")
        self.type_id = type_id
        self.format_name = format_name


class TemplateExecutionError(RenderError):
    def __init__(self, type_id: str, format_name: str, reason: str) -> None:
        super().__init__(
            f"template for type `{type_id}` and format `{format_name}` failed: {reason}"
        )
        self.type_id = type_id
        self.format_name = format_name


class SchemaLoadError(ModuleGenError):
    """The external module schema could not be loaded."""


__all__ = [
    "DocumentShapeError",
    "DuplicateIdentifierError",
    "ExpectedDirectoryError",
    "IdentityError",
    "InvalidFileContentsError",
    "InvalidPathError",
    "LayoutError",
    "MissingContentsError",
    "MissingRequiredEntryError",
    "MissingTemplateError",
    "MissingTypeError",
    "ModuleGenError",
    "NoRenderableTypesError",
    "ReadError",
    "RenderError",
    "RootNotAnObjectError",
    "SchemaLoadError",
    "ShapeError",
    "TemplateExecutionError",
    "UnableToOpenFileError",
    "UnsupportedFileTypeError",
]
