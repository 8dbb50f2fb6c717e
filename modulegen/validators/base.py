"""Core validation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Protocol, Sequence

from ..document import ModuleDocument


@dataclass
class ValidationIssue:
    """Represents a single violation found in a module document."""

    location: str
    message: str
    validator: str = ""


class ValidationError(RuntimeError):
    """Raised when validation fails for one or more parts of a module."""

    def __init__(self, message: str, issues: Sequence[ValidationIssue]) -> None:
        super().__init__(message)
        self.issues = list(issues)


@dataclass
class ValidationContext:
    """Context shared with validators when evaluating a module document."""

    module: ModuleDocument
    module_data: Mapping[str, Any]
    module_schema: Optional[Mapping[str, Any]] = None


class Validator(Protocol):
    """Protocol implemented by module validators."""

    name: str

    def validate(self, context: ValidationContext) -> List[ValidationIssue]:
        """Run validation and return any issues."""


def build_context(
    module: ModuleDocument, module_schema: Optional[Mapping[str, Any]] = None
) -> ValidationContext:
    return ValidationContext(module=module, module_data=module.to_data(), module_schema=module_schema)
