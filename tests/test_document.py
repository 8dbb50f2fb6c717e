"""Tests for module document decoding and serialization."""

from __future__ import annotations

import datetime as dt
import json

import pytest

from modulegen.document import (
    TypeDefinition,
    decode_content,
    decode_module,
    decode_type,
    load_document,
)
from modulegen.errors import DocumentShapeError


def _module(**overrides):
    value = {
        "title": "Sample",
        "description": "A sample module",
        "source": "https://example.com/sample",
    }
    value.update(overrides)
    return value


def test_decode_minimal_module() -> None:
    document = decode_module(_module(), "module.json")

    assert document.title == "Sample"
    assert document.types is None
    assert document.contents is None
    assert document.to_data() == _module()


def test_decode_module_with_types_and_contents() -> None:
    document = decode_module(
        _module(
            types={"spell": {"description": "A spell", "schema": {"type": "object"}}},
            contents={"fireball": {"type": "spell", "level": 3}},
        ),
        "module.json",
    )

    assert document.types["spell"].json_schema == {"type": "object"}
    assert document.contents["fireball"] == {"type": "spell", "level": 3}


def test_unknown_module_fields_are_dropped() -> None:
    document = decode_module(_module(author="someone"), "module.json")

    assert "author" not in document.to_data()


@pytest.mark.parametrize("missing", ["title", "description", "source"])
def test_required_module_fields(missing: str) -> None:
    value = _module()
    del value[missing]

    with pytest.raises(DocumentShapeError) as excinfo:
        decode_module(value, "module.json")

    assert excinfo.value.location == "module.json"
    assert missing in str(excinfo.value)


def test_source_must_be_a_url() -> None:
    with pytest.raises(DocumentShapeError):
        decode_module(_module(source="not a url"), "module.json")


def test_module_must_be_an_object() -> None:
    with pytest.raises(DocumentShapeError) as excinfo:
        decode_module(["title"], "module.yaml")

    assert "expected an object" in str(excinfo.value)


def test_type_requires_description() -> None:
    with pytest.raises(DocumentShapeError) as excinfo:
        decode_type({"schema": {}}, "types/a.json (a)")

    assert excinfo.value.what == "type"
    assert "description" in str(excinfo.value)


def test_type_rendering_must_map_to_strings() -> None:
    with pytest.raises(DocumentShapeError):
        decode_type({"description": "d", "rendering": {"md": 3}}, "types/a.json (a)")


def test_type_to_data_omits_absent_fields_and_sorts_formats() -> None:
    definition = TypeDefinition(description="d", rendering={"txt": "t", "md": "m"})

    data = definition.to_data()

    assert data == {"description": "d", "rendering": {"md": "m", "txt": "t"}}
    assert list(data["rendering"]) == ["md", "txt"]


def test_type_schema_is_populated_by_either_name() -> None:
    by_alias = TypeDefinition.model_validate({"description": "d", "schema": True})
    by_name = TypeDefinition(description="d", json_schema=True)

    assert by_alias.to_data() == by_name.to_data() == {"description": "d", "schema": True}


def test_content_items_must_be_objects() -> None:
    with pytest.raises(DocumentShapeError) as excinfo:
        decode_content("just text", "contents/a.txt (a)")

    assert excinfo.value.what == "content item"


def test_content_items_are_copied() -> None:
    value = {"type": "a"}

    decoded = decode_content(value, "contents/a.json (a)")
    decoded["extra"] = 1

    assert value == {"type": "a"}


def test_to_data_sorts_identifiers() -> None:
    document = decode_module(
        _module(
            types={"b": {"description": "b"}, "a": {"description": "a"}},
            contents={"z": {"type": "a"}, "m": {"type": "b"}},
        ),
        "module.json",
    )

    data = document.to_data()

    assert list(data["types"]) == ["a", "b"]
    assert list(data["contents"]) == ["m", "z"]


def test_to_data_makes_yaml_dates_json_compatible() -> None:
    document = decode_module(
        _module(contents={"event": {"type": "a", "date": dt.date(2024, 5, 1)}}),
        "module.yaml",
    )

    assert document.to_data()["contents"]["event"]["date"] == "2024-05-01"


def test_pretty_and_minimized_json() -> None:
    document = decode_module(_module(), "module.json")

    pretty = document.to_json()
    minimized = document.to_json(pretty=False)

    assert pretty.startswith("{\n  ")
    assert "\n" not in minimized
    assert " " not in minimized.replace("A sample module", "")
    assert json.loads(pretty) == json.loads(minimized)


def test_load_document_round_trips_serialized_form(module_tree) -> None:
    document = decode_module(
        _module(types={"a": {"description": "t"}}, contents={"x": {"type": "a"}}),
        "module.json",
    )

    module_tree.write({"built.json": document.to_json(pretty=False)})

    assert load_document(module_tree.path("built.json")).to_data() == document.to_data()


def test_load_document_rejects_non_module_json(module_tree) -> None:
    module_tree.write({"built.json": "[1, 2]"})

    with pytest.raises(DocumentShapeError) as excinfo:
        load_document(module_tree.path("built.json"))

    assert excinfo.value.location == str(module_tree.path("built.json"))


def test_load_document_reads_serialized_module(module_tree) -> None:
    module_tree.write({"module.json": json.dumps(_module(contents={"x": {"type": "a"}}))})

    document = load_document(module_tree.path("module.json"))

    assert document.contents == {"x": {"type": "a"}}
