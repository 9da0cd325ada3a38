"""Theme runtime exports."""

from tokiforge.runtime.constants import STORAGE_KEY, STYLE_ELEMENT_ID
from tokiforge.runtime.models import RuntimeState, Theme, ThemeConfig
from tokiforge.runtime.registry import ThemeRegistry
from tokiforge.runtime.service import ThemeRuntime
from tokiforge.runtime.sinks import DocumentSink, NullDocumentSink, StyleDocument, StyleDocumentSink
from tokiforge.runtime.store import MemoryThemeStore, ThemeStore

__all__ = [
    "STORAGE_KEY",
    "STYLE_ELEMENT_ID",
    "DocumentSink",
    "MemoryThemeStore",
    "NullDocumentSink",
    "RuntimeState",
    "StyleDocument",
    "StyleDocumentSink",
    "Theme",
    "ThemeConfig",
    "ThemeRegistry",
    "ThemeRuntime",
    "ThemeStore",
]
