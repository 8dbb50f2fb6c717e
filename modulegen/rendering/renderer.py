"""Compiles type templates and renders content items with Jinja."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Tuple

from jinja2 import DictLoader, Environment, Template, TemplateError

from ..document import ContentItem, ModuleDocument
from ..errors import (
    MissingContentsError,
    MissingTemplateError,
    MissingTypeError,
    NoRenderableTypesError,
    RenderError,
    TemplateExecutionError,
)
from ..logging import get_logger
from .helpers import register_helpers

TYPE_KEY = "type"

_logger = get_logger("rendering")


def _template_name(type_id: str, format_name: str) -> str:
    return f"{type_id}/{format_name}"


def _create_env(sources: Mapping[str, str]) -> Environment:
    env = Environment(
        loader=DictLoader(dict(sources)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    return register_helpers(env)


class ModuleRenderer:
    """Holds the compiled templates of a module and renders its content items.

    Templates receive two variables: ``content`` (the item being rendered)
    and ``module`` (the whole module document in its JSON form).
    """

    def __init__(self, module: ModuleDocument, templates: Dict[Tuple[str, str], Template]) -> None:
        self.module = module
        self._templates = templates
        self._module_data = module.to_data()

    @property
    def formats(self) -> Dict[str, list[str]]:
        """Map each type identifier to the formats it can render."""
        result: Dict[str, list[str]] = {}
        for type_id, format_name in sorted(self._templates):
            result.setdefault(type_id, []).append(format_name)
        return result

    def render(self, content: ContentItem, format_name: str, *, identifier: str | None = None) -> str:
        type_id = content.get(TYPE_KEY)
        if not isinstance(type_id, str) or not type_id:
            raise MissingTypeError(identifier)
        template = self._templates.get((type_id, format_name))
        if template is None:
            raise MissingTemplateError(type_id, format_name)
        try:
            return template.render(content=content, module=self._module_data)
        except (TemplateError, TypeError, ValueError, LookupError, AttributeError) as exc:
            raise TemplateExecutionError(type_id, format_name, str(exc)) from exc


def compile_module(module: ModuleDocument) -> ModuleRenderer:
    """Compile one template per (type, format) pair of the module's types."""
    if not module.types:
        raise NoRenderableTypesError()

    sources: Dict[str, str] = {}
    for type_id, definition in sorted(module.types.items()):
        if definition.rendering is None:
            _logger.warning("Type `%s` does not have rendering templates", type_id)
            continue
        for format_name, source in definition.rendering.items():
            sources[_template_name(type_id, format_name)] = source

    env = _create_env(sources)
    templates: Dict[Tuple[str, str], Template] = {}
    for type_id, definition in sorted(module.types.items()):
        for format_name in definition.rendering or {}:
            try:
                templates[(type_id, format_name)] = env.get_template(
                    _template_name(type_id, format_name)
                )
            except TemplateError as exc:
                raise RenderError(
                    f"failed to compile template for type `{type_id}` and format `{format_name}`: {exc}"
                ) from exc
    return ModuleRenderer(module, templates)


def render_module(module: ModuleDocument, format_name: str, renderer: ModuleRenderer | None = None) -> str:
    """Render every content item of the module, in identifier order."""
    if not module.contents:
        raise MissingContentsError()
    renderer = renderer or compile_module(module)
    chunks = []
    for identifier in sorted(module.contents):
        chunks.append(renderer.render(module.contents[identifier], format_name, identifier=identifier))
        chunks.append("\n")
    return "".join(chunks)


__all__ = ["TYPE_KEY", "ModuleRenderer", "compile_module", "render_module"]
