from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.module_tree import ModuleTreeBuilder


@pytest.fixture
def module_tree(tmp_path: Path) -> ModuleTreeBuilder:
    """Provide a reusable module tree builder rooted at the pytest tmp_path."""
    return ModuleTreeBuilder(tmp_path)


@pytest.fixture
def sample_module(module_tree: ModuleTreeBuilder) -> ModuleTreeBuilder:
    """A module with embedded and on-disk types and contents."""
    module_tree.write(
        {
            "module.json": """
                {
                  "title": "Sample",
                  "description": "A sample module",
                  "source": "https://example.com/sample",
                  "types": {
                    "a": {"description": "my type"}
                  },
                  "contents": {
                    "first": {"type": "a", "name": "embedded"}
                  }
                }
            """,
            "types/a.json": '{"description": "my replaced type", "rendering": {"md": "# {{ content.name }}"}}',
            "types/b.json": '{"description": "my new type"}',
            "contents/second.yaml": """
                type: a
                name: from disk
            """,
        }
    )
    return module_tree
