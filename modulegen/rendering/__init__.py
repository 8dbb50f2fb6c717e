"""Per-type template compilation and content rendering."""

from .renderer import TYPE_KEY, ModuleRenderer, compile_module, render_module

__all__ = ["TYPE_KEY", "ModuleRenderer", "compile_module", "render_module"]
