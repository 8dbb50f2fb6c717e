"""Tests for the build/render/validate pipelines."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from modulegen.config import LayoutNames, ModuleGenConfig, OutputConfig
from modulegen.errors import MissingContentsError
from modulegen.orchestrator import Orchestrator
from modulegen.validators import ValidationError, ValidationIssue


def _build(sample_module, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return Orchestrator().run_build(sample_module.path()).path


def test_run_build_writes_pretty_json_in_working_directory(sample_module, tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    outcome = Orchestrator().run_build(sample_module.path())

    assert outcome.path == Path("module.json")
    text = (tmp_path / "module.json").read_text(encoding="utf-8")
    assert text.startswith("{\n  ")
    data = json.loads(text)
    assert data["title"] == "Sample"
    assert sorted(data["types"]) == ["a", "b"]
    assert sorted(data["contents"]) == ["first", "second"]


def test_run_build_minimized_with_custom_name(sample_module, tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    outcome = Orchestrator().run_build(sample_module.path(), output="compact", style="minimized")

    assert outcome.path == Path("compact.json")
    assert "\n" not in (tmp_path / "compact.json").read_text(encoding="utf-8")


def test_run_build_reads_config_from_module_root(sample_module, tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    sample_module.write(
        {
            ".modulegen.yml": """
                output:
                  name: configured
                  style: minimized
            """
        }
    )

    outcome = Orchestrator().run_build(sample_module.path())

    assert outcome.path == Path("configured.json")
    assert "\n" not in outcome.path.read_text(encoding="utf-8")


def test_build_module_honours_layout_override(module_tree) -> None:
    module_tree.write(
        {
            "descriptor.json": '{"title": "T", "description": "D", "source": "https://example.com/m"}',
            "kinds/a.json": '{"description": "a"}',
        }
    )
    config = ModuleGenConfig(root=module_tree.path(), layout=LayoutNames(module="descriptor", types="kinds"))

    document = Orchestrator(config=config).build_module(module_tree.path())

    assert list(document.types) == ["a"]


def test_run_render_writes_format_file(sample_module, tmp_path, monkeypatch) -> None:
    built = _build(sample_module, tmp_path, monkeypatch)

    target = Orchestrator().run_render(built, "md", output="book")

    assert target == Path("book.md")
    assert (tmp_path / "book.md").read_text(encoding="utf-8") == "# embedded\n# from disk\n"


def test_run_render_without_contents(module_tree, tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    module_tree.write(
        {
            "module.json": """
                {"title": "T", "description": "D", "source": "https://example.com/m",
                 "types": {"a": {"description": "a", "rendering": {"md": ""}}}}
            """
        }
    )

    with pytest.raises(MissingContentsError):
        Orchestrator().run_render(module_tree.path("module.json"), "md")


def test_run_validate_accepts_valid_module(sample_module, tmp_path, monkeypatch) -> None:
    built = _build(sample_module, tmp_path, monkeypatch)

    document = Orchestrator().run_validate(built)

    assert document.title == "Sample"


def test_run_validate_uses_module_schema(sample_module, tmp_path, monkeypatch) -> None:
    built = _build(sample_module, tmp_path, monkeypatch)
    schema = tmp_path / "schema.json"
    schema.write_text(json.dumps({"type": "object", "required": ["authors"]}), encoding="utf-8")

    with pytest.raises(ValidationError) as excinfo:
        Orchestrator().run_validate(built, schema=str(schema))

    assert [issue.location for issue in excinfo.value.issues] == ["module"]


def test_run_validate_reads_schema_from_config(sample_module, tmp_path, monkeypatch) -> None:
    built = _build(sample_module, tmp_path, monkeypatch)
    (tmp_path / "schema.yaml").write_text("type: object\nrequired: [authors]\n", encoding="utf-8")
    (tmp_path / ".modulegen.yml").write_text(
        f"validation:\n  schema: {tmp_path / 'schema.yaml'}\n", encoding="utf-8"
    )

    with pytest.raises(ValidationError):
        Orchestrator().run_validate(built)


def test_custom_validators_replace_defaults(sample_module, tmp_path, monkeypatch) -> None:
    built = _build(sample_module, tmp_path, monkeypatch)

    class Flagging:
        name = "flagging"

        def validate(self, context):
            return [ValidationIssue("module", "flagged", self.name)]

    with pytest.raises(ValidationError) as excinfo:
        Orchestrator(validators=[Flagging()]).run_validate(built)

    assert excinfo.value.issues[0].validator == "flagging"


def test_explicit_config_skips_config_file(sample_module, tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    sample_module.write({".modulegen.yml": "output:\n  name: ignored\n"})
    config = ModuleGenConfig(root=sample_module.path(), output=OutputConfig(name="explicit"))

    outcome = Orchestrator(config=config).run_build(sample_module.path())

    assert outcome.path == Path("explicit.json")


def test_check_document_returns_issues_without_raising(sample_module, tmp_path, monkeypatch) -> None:
    built = _build(sample_module, tmp_path, monkeypatch)
    (tmp_path / "schema.json").write_text(json.dumps({"required": ["authors"]}), encoding="utf-8")
    (tmp_path / ".modulegen.yml").write_text("validation:\n  schema: schema.json\n", encoding="utf-8")
    monkeypatch.chdir(sample_module.path())

    document, issues = Orchestrator().check_document(tmp_path / built)

    assert document.title == "Sample"
    assert [issue.location for issue in issues] == ["module"]


def test_check_document_without_schema_checks_contents_only(sample_module, tmp_path, monkeypatch) -> None:
    built = _build(sample_module, tmp_path, monkeypatch)

    _, issues = Orchestrator().check_document(built)

    assert issues == []
