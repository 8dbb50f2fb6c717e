"""Directory-convention resolution: classification, traversal and identifiers."""

from .identifiers import derive_identifier
from .paths import classify, classify_path, first_child_named, is_named, list_children, stem
from .tree import build_fragment_collection

__all__ = [
    "build_fragment_collection",
    "classify",
    "classify_path",
    "derive_identifier",
    "first_child_named",
    "is_named",
    "list_children",
    "stem",
]
