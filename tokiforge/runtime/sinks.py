"""Document sinks: where the runtime writes its stylesheet."""

from __future__ import annotations

from html import escape
from typing import Callable

from tokiforge.runtime.constants import STYLE_ELEMENT_ID
from tokiforge.runtime.system_theme import LIGHT, detect_system_theme, watch_system_theme


class DocumentSink:
    """Capability interface the runtime receives at construction."""

    def inject(self, css_text: str) -> None:
        """Create the owned style element if needed and replace its text."""
        raise NotImplementedError

    def remove(self) -> None:
        """Remove the owned style element."""
        raise NotImplementedError

    def system_theme(self) -> str:
        raise NotImplementedError

    def observe_system_theme(self, callback: Callable[[str], None]) -> Callable[[], None]:
        raise NotImplementedError


class NullDocumentSink(DocumentSink):
    """Sink for non-interactive contexts; writes nothing."""

    def inject(self, css_text: str) -> None:
        return None

    def remove(self) -> None:
        return None

    def system_theme(self) -> str:
        return LIGHT

    def observe_system_theme(self, callback: Callable[[str], None]) -> Callable[[], None]:
        return lambda: None


class StyleDocument:
    """In-memory document head holding ``<style>`` elements by id."""

    def __init__(self) -> None:
        self._elements: dict[str, str] = {}
        self._claimed: set[str] = set()

    def claim_id(self, base: str = STYLE_ELEMENT_ID) -> str:
        """Reserve a unique element id, suffixing ``-2``, ``-3``... on collision."""
        candidate = base
        counter = 2
        while candidate in self._claimed:
            candidate = f"{base}-{counter}"
            counter += 1
        self._claimed.add(candidate)
        return candidate

    def release_id(self, element_id: str) -> None:
        self._claimed.discard(element_id)
        self._elements.pop(element_id, None)

    def set_text(self, element_id: str, text: str) -> None:
        self._elements[element_id] = text

    def get_text(self, element_id: str) -> str | None:
        return self._elements.get(element_id)

    def element_ids(self) -> list[str]:
        return list(self._elements)

    def render(self) -> str:
        """Return the ``<style>`` markup for every element, in insertion order."""
        return "\n".join(
            f'<style id="{escape(element_id)}">{text}</style>'
            for element_id, text in self._elements.items()
        )


class StyleDocumentSink(DocumentSink):
    """Owns one style element of a StyleDocument; reads the scheme from Qt."""

    def __init__(self, document: StyleDocument, element_id: str | None = None) -> None:
        self._document = document
        self._element_id = document.claim_id(element_id or STYLE_ELEMENT_ID)

    @property
    def element_id(self) -> str:
        return self._element_id

    @property
    def document(self) -> StyleDocument:
        return self._document

    def inject(self, css_text: str) -> None:
        self._document.set_text(self._element_id, css_text)

    def remove(self) -> None:
        self._document.release_id(self._element_id)

    def system_theme(self) -> str:
        return detect_system_theme()

    def observe_system_theme(self, callback: Callable[[str], None]) -> Callable[[], None]:
        return watch_system_theme(callback)
