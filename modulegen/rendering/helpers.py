"""Template helpers registered on every rendering environment."""

from __future__ import annotations

from typing import Any, List

from jinja2 import Environment


def split_lines(value: Any) -> List[str]:
    """Split text into its lines, dropping line terminators."""
    if value is None:
        return []
    return str(value).splitlines()


def register_helpers(env: Environment) -> Environment:
    env.filters["split_lines"] = split_lines
    return env
