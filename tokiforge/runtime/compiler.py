"""Theme compilation helpers."""

from __future__ import annotations

from tokiforge.runtime.registry import ThemeRegistry
from tokiforge.tokens.exporters import export_css


def compile_theme_css(registry: ThemeRegistry, name: str, *, selector: str, prefix: str) -> str:
    """Compile a registered theme into the CSS text the runtime injects."""
    return export_css(registry.resolved_tokens(name), selector=selector, prefix=prefix)
