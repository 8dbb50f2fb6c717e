"""JSON-schema validators for modules and their content items."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

import yaml
from jsonschema import exceptions as schema_exceptions
from jsonschema.validators import validator_for

from ..document import ModuleDocument
from ..errors import ModuleGenError, SchemaLoadError
from ..readers import read_file
from ..rendering import TYPE_KEY
from .base import ValidationContext, ValidationIssue, Validator, build_context


def load_schema(location: str, *, timeout: float = 30.0) -> Mapping[str, Any]:
    """Load a schema document from an http(s) URL or a local json/yaml file."""
    scheme = urlparse(location).scheme.lower()
    if scheme in {"http", "https"}:
        data = _fetch_schema(location, timeout)
    else:
        path = Path(location[len("file://"):] if scheme == "file" else location).expanduser()
        try:
            data = read_file(path)
        except ModuleGenError as exc:
            raise SchemaLoadError(f"Failed to load schema from {location}: {exc}") from exc
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Schema at {location} is not an object")
    return data


def _fetch_schema(url: str, timeout: float) -> Any:
    request = Request(url, headers={"Accept": "application/json, application/yaml"})
    try:
        with urlopen(request, timeout=timeout) as response:  # noqa: S310 - schemes checked above
            raw = response.read()
    except HTTPError as exc:
        raise SchemaLoadError(f"Schema download failed with status {exc.code}: {url}") from exc
    except URLError as exc:
        raise SchemaLoadError(f"Schema download failed: {exc.reason}") from exc
    except OSError as exc:
        raise SchemaLoadError(f"Schema download failed: {exc}") from exc

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SchemaLoadError(f"Schema at {url} is not valid UTF-8") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaLoadError(f"Schema at {url} is neither JSON nor YAML") from exc


def _check_instance(
    schema: Any, instance: Any, location: str, validator_name: str
) -> List[ValidationIssue]:
    if not isinstance(schema, (dict, bool)):
        return [
            ValidationIssue(
                location=location,
                message="invalid schema: expected an object or boolean",
                validator=validator_name,
            )
        ]
    cls = validator_for(schema)
    try:
        cls.check_schema(schema)
    except schema_exceptions.SchemaError as exc:
        return [
            ValidationIssue(
                location=location,
                message=f"invalid schema: {exc.message}",
                validator=validator_name,
            )
        ]

    issues: List[ValidationIssue] = []
    errors = sorted(
        cls(schema).iter_errors(instance),
        key=lambda error: [str(part) for part in error.absolute_path],
    )
    for error in errors:
        pointer = "/".join(str(part) for part in error.absolute_path)
        where = f"{location}/{pointer}" if pointer else location
        issues.append(ValidationIssue(location=where, message=error.message, validator=validator_name))
    return issues


class ModuleSchemaValidator:
    """Checks the whole module document against the external module schema."""

    name = "module_schema"

    def validate(self, context: ValidationContext) -> List[ValidationIssue]:
        if context.module_schema is None:
            return []
        return _check_instance(context.module_schema, dict(context.module_data), "module", self.name)


class ContentSchemaValidator:
    """Checks each content item against the schema of the type it declares."""

    name = "content_schema"

    def validate(self, context: ValidationContext) -> List[ValidationIssue]:
        module = context.module
        types = module.types or {}
        contents = context.module_data.get("contents") or {}
        issues: List[ValidationIssue] = []
        for identifier, item in contents.items():
            location = f"contents/{identifier}"
            type_id = item.get(TYPE_KEY)
            if not isinstance(type_id, str) or not type_id:
                issues.append(ValidationIssue(location, f"content item declares no `{TYPE_KEY}`", self.name))
                continue
            definition = types.get(type_id)
            if definition is None:
                issues.append(ValidationIssue(location, f"unknown type `{type_id}`", self.name))
                continue
            if definition.json_schema is None:
                continue
            issues.extend(_check_instance(definition.json_schema, item, location, self.name))
        return issues


def default_validators() -> List[Validator]:
    return [ModuleSchemaValidator(), ContentSchemaValidator()]


def run_validators(
    context: ValidationContext, validators: Optional[Iterable[Validator]] = None
) -> List[ValidationIssue]:
    """Run every validator and collect their issues in order."""
    issues: List[ValidationIssue] = []
    for validator in validators if validators is not None else default_validators():
        issues.extend(validator.validate(context))
    return issues


def validate_module(
    document: ModuleDocument,
    module_schema: Optional[Mapping[str, Any]] = None,
    validators: Optional[Iterable[Validator]] = None,
) -> List[ValidationIssue]:
    """Validate a module document; an empty list means it is valid."""
    return run_validators(build_context(document, module_schema), validators)
