"""Pipeline orchestration for build/render/validate flows."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlparse

from .assembler import build_module
from .config import ModuleGenConfig, load_config
from .document import ModuleDocument, load_document
from .logging import get_logger
from .rendering import compile_module, render_module
from .validators import (
    ValidationError,
    ValidationIssue,
    Validator,
    load_schema,
    validate_module,
)


@dataclass
class BuildOutcome:
    """Result of a module build."""

    path: Path
    document: ModuleDocument


class Orchestrator:
    """Coordinates the build, render and validate pipelines."""

    def __init__(
        self,
        config: ModuleGenConfig | None = None,
        validators: Optional[Iterable[Validator]] = None,
    ) -> None:
        self._config_override = config
        self._validator_overrides = list(validators) if validators is not None else None
        self.logger = get_logger("orchestrator")

    def build_module(self, path: str | Path) -> ModuleDocument:
        """Assemble the module rooted at ``path`` without writing anything."""
        root = Path(path).expanduser().resolve()
        config = self._load_config(root)
        self.logger.info("Starting to build the module at %s", root)
        layout, document = build_module(root, config.layout)
        self.logger.debug(
            "Resolved layout: module=%s, %d type fragment(s), %d content fragment(s)",
            layout.module.anchor,
            len(layout.types) if layout.types is not None else 0,
            len(layout.contents) if layout.contents is not None else 0,
        )
        self.logger.debug(
            "Assembled module with %d type(s) and %d content item(s)",
            len(document.types or {}),
            len(document.contents or {}),
        )
        return document

    def run_build(
        self,
        path: str | Path,
        *,
        output: str | None = None,
        style: str | None = None,
    ) -> BuildOutcome:
        """Build the module and write it as ``<output>.json``."""
        root = Path(path).expanduser().resolve()
        config = self._load_config(root)
        document = self.build_module(root)
        style = style or config.output.style
        target = Path(f"{output or config.output.name}.json")
        self.logger.debug("Writing module as %s to %s", style, target)
        target.write_text(document.to_json(pretty=style != "minimized"), encoding="utf-8")
        self.logger.info("Module written to %s", target)
        return BuildOutcome(path=target, document=document)

    def render_document(self, document: ModuleDocument, format_name: str) -> str:
        renderer = compile_module(document)
        self.logger.debug("Compiled templates: %s", renderer.formats)
        return render_module(document, format_name, renderer)

    def run_render(self, source: str | Path, format_name: str, *, output: str | None = None) -> Path:
        """Render every content item of a serialized module to ``<output>.<format>``."""
        source_path = Path(source).expanduser().resolve()
        config = self._load_config(source_path)
        self.logger.info("Starting to render %s as %s", source_path, format_name)
        document = load_document(source_path)
        rendered = self.render_document(document, format_name)
        target = Path(f"{output or config.output.name}.{format_name}")
        target.write_text(rendered, encoding="utf-8")
        self.logger.info("Rendered module written to %s", target)
        return target

    def validate_document(
        self,
        document: ModuleDocument,
        *,
        schema: str | None = None,
        timeout: float = 30.0,
    ) -> List[ValidationIssue]:
        module_schema = None
        if schema:
            self.logger.debug("Loading module schema from %s", schema)
            module_schema = load_schema(schema, timeout=timeout)
        else:
            self.logger.info("No module schema configured; only content items will be checked")
        return validate_module(document, module_schema, self._validator_overrides)

    def check_document(
        self, source: str | Path, *, schema: str | None = None
    ) -> Tuple[ModuleDocument, List[ValidationIssue]]:
        """Validate a serialized module and return it with every issue found.

        Without an explicit ``schema`` the one configured next to the document
        is used; relative paths in the config resolve against its directory.
        """
        source_path = Path(source).expanduser().resolve()
        config = self._load_config(source_path)
        self.logger.info("Starting to validate %s", source_path)
        document = load_document(source_path)
        if not schema and config.validation.schema:
            schema = _resolve_schema_location(config.validation.schema, config.root)
        issues = self.validate_document(document, schema=schema, timeout=config.validation.timeout)
        return document, issues

    def run_validate(self, source: str | Path, *, schema: str | None = None) -> ModuleDocument:
        """Validate a serialized module, raising ``ValidationError`` on violations."""
        document, issues = self.check_document(source, schema=schema)
        if issues:
            for issue in issues:
                self.logger.error("Validation failure at %s: %s", issue.location, issue.message)
            raise ValidationError(f"Module failed validation with {len(issues)} issue(s)", issues)
        self.logger.info("Module is valid")
        return document

    def _load_config(self, path: Path) -> ModuleGenConfig:
        if self._config_override is not None:
            return self._config_override
        return load_config(path)


def _resolve_schema_location(location: str, base: Path) -> str:
    if urlparse(location).scheme:
        return location
    path = Path(location).expanduser()
    return str(path if path.is_absolute() else base / path)
