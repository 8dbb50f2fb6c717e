"""Validation package for assembled module documents."""

from .base import ValidationContext, ValidationError, ValidationIssue, Validator, build_context
from .schema import (
    ContentSchemaValidator,
    ModuleSchemaValidator,
    default_validators,
    load_schema,
    run_validators,
    validate_module,
)

__all__ = [
    "ContentSchemaValidator",
    "ModuleSchemaValidator",
    "ValidationContext",
    "ValidationError",
    "ValidationIssue",
    "Validator",
    "build_context",
    "default_validators",
    "load_schema",
    "run_validators",
    "validate_module",
]
