"""Module document shapes and their JSON form."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, ValidationError
from pydantic_core import to_jsonable_python

from .errors import DocumentShapeError
from .readers import read_file

ContentItem = Dict[str, Any]


class TypeDefinition(BaseModel):
    """A named schema, description and rendering bundle for content items."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    description: str
    json_schema: Optional[Any] = Field(default=None, alias="schema")
    rendering: Optional[Dict[str, str]] = None

    def to_data(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"description": self.description}
        if self.json_schema is not None:
            data["schema"] = to_jsonable_python(self.json_schema)
        if self.rendering is not None:
            data["rendering"] = {key: self.rendering[key] for key in sorted(self.rendering)}
        return data


class ModuleDocument(BaseModel):
    """Title, description and source of a module plus its types and contents."""

    model_config = ConfigDict(extra="ignore")

    title: str
    description: str
    source: AnyUrl
    types: Optional[Dict[str, TypeDefinition]] = None
    contents: Optional[Dict[str, ContentItem]] = None

    def to_data(self) -> Dict[str, Any]:
        """Return the JSON form, omitting absent maps and sorting identifiers."""
        data: Dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "source": str(self.source),
        }
        if self.types is not None:
            data["types"] = {key: self.types[key].to_data() for key in sorted(self.types)}
        if self.contents is not None:
            data["contents"] = {
                key: to_jsonable_python(self.contents[key]) for key in sorted(self.contents)
            }
        return data

    def to_json(self, *, pretty: bool = True) -> str:
        if pretty:
            return json.dumps(self.to_data(), indent=2, ensure_ascii=False)
        return json.dumps(self.to_data(), separators=(",", ":"), ensure_ascii=False)


def decode_module(value: Any, location: str) -> ModuleDocument:
    """Decode a raw value into a module document."""
    if not isinstance(value, dict):
        raise DocumentShapeError("module", location, "expected an object")
    try:
        return ModuleDocument.model_validate(value)
    except ValidationError as exc:
        raise DocumentShapeError("module", location, _describe(exc)) from exc


def decode_type(value: Any, location: str) -> TypeDefinition:
    """Decode a raw value into a type definition."""
    if not isinstance(value, dict):
        raise DocumentShapeError("type", location, "expected an object")
    try:
        return TypeDefinition.model_validate(value)
    except ValidationError as exc:
        raise DocumentShapeError("type", location, _describe(exc)) from exc


def decode_content(value: Any, location: str) -> ContentItem:
    """Decode a raw value into a content item."""
    if not isinstance(value, dict):
        raise DocumentShapeError("content item", location, "expected an object")
    for key in value:
        if not isinstance(key, str):
            raise DocumentShapeError("content item", location, f"field name {key!r} is not a string")
    return dict(value)


def load_document(path: Path) -> ModuleDocument:
    """Read a serialized module document from disk."""
    return decode_module(read_file(path), str(path))


def _describe(exc: ValidationError) -> str:
    details = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        details.append(f"{loc}: {error.get('msg', 'invalid value')}")
    return "; ".join(details)


__all__ = [
    "ContentItem",
    "ModuleDocument",
    "TypeDefinition",
    "decode_content",
    "decode_module",
    "decode_type",
    "load_document",
]
