"""Runtime theme apply and persistence service."""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Mapping

from PySide6.QtCore import QObject, Signal

from tokiforge.errors import RuntimeDestroyedError
from tokiforge.runtime.compiler import compile_theme_css
from tokiforge.runtime.constants import STORAGE_KEY
from tokiforge.runtime.models import RuntimeState, ThemeConfig
from tokiforge.runtime.registry import ThemeRegistry
from tokiforge.runtime.sinks import DocumentSink, NullDocumentSink
from tokiforge.runtime.store import ThemeStore
from tokiforge.tokens.constants import DEFAULT_PREFIX, DEFAULT_SELECTOR
from tokiforge.tokens.models import TokenTree

logger = logging.getLogger(__name__)


class ThemeRuntime(QObject):
    """Apply themes to a document sink, track the current theme and persist it.

    ``theme_changed`` is emitted once per successful ``apply_theme`` call,
    after the stylesheet has been replaced, with the theme name and its
    resolved token tree. Slots must treat the tree as read-only.
    """

    theme_changed = Signal(str, object)

    def __init__(
        self,
        config: ThemeConfig | ThemeRegistry | Mapping[str, object],
        sink: DocumentSink | None = None,
        *,
        store: ThemeStore | None = None,
        storage_key: str = STORAGE_KEY,
        restore: bool = False,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        if isinstance(config, ThemeRegistry):
            self._registry = config
        elif isinstance(config, ThemeConfig):
            self._registry = ThemeRegistry(config)
        else:
            self._registry = ThemeRegistry(ThemeConfig.from_mapping(config))
        self._sink = sink if sink is not None else NullDocumentSink()
        self._store = store
        self._storage_key = storage_key
        self._state = RuntimeState.UNINITIALIZED
        self._current_theme = self._registry.config.initial_theme
        self._selector = DEFAULT_SELECTOR
        self._prefix = DEFAULT_PREFIX
        self._watch_cancels: list[Callable[[], None]] = []
        self._applying = False
        self._pending: deque[tuple[str, str | None, str | None]] = deque()
        if restore:
            self._restore_persisted_theme()

    @property
    def state(self) -> RuntimeState:
        return self._state

    @property
    def current_theme(self) -> str:
        return self._current_theme

    @property
    def registry(self) -> ThemeRegistry:
        return self._registry

    def available_themes(self) -> list[str]:
        return self._registry.theme_names()

    def get_theme_tokens(self, name: str | None = None) -> TokenTree:
        """Return the resolved tokens of ``name`` (default: the current theme)."""
        return self._registry.resolved_tokens(name or self._current_theme)

    def init(self, selector: str = DEFAULT_SELECTOR, prefix: str = DEFAULT_PREFIX) -> None:
        """Inject the current theme's stylesheet without notifying observers."""
        self._ensure_alive("init")
        css = compile_theme_css(self._registry, self._current_theme, selector=selector, prefix=prefix)
        self._sink.inject(css)
        self._selector = selector
        self._prefix = prefix
        self._state = RuntimeState.INITIALIZED
        logger.debug("theme runtime initialized with %s", self._current_theme)

    def apply_theme(self, name: str, selector: str | None = None, prefix: str | None = None) -> None:
        """Switch to ``name``; raises ThemeNotFoundError before any side effect.

        Calls made from a ``theme_changed`` slot are queued and applied once
        the running switch has finished.
        """
        self._ensure_alive("apply_theme")
        if self._applying:
            self._registry.require_theme(name)
            self._pending.append((name, selector, prefix))
            return

        self._applying = True
        try:
            self._apply(name, selector, prefix)
            while self._pending and self._state is not RuntimeState.DESTROYED:
                self._apply(*self._pending.popleft())
        finally:
            self._applying = False
            self._pending.clear()

    def next_theme(self) -> str:
        """Apply the theme after the current one, wrapping to the first."""
        self._ensure_alive("next_theme")
        names = self.available_themes()
        index = names.index(self._current_theme)
        name = names[(index + 1) % len(names)]
        self.apply_theme(name)
        return name

    def detect_system_theme(self) -> str:
        return self._sink.system_theme()

    def watch_system_theme(self, callback: Callable[[str], None]) -> Callable[[], None]:
        """Observe system scheme changes until cancelled or destroyed."""
        self._ensure_alive("watch_system_theme")
        cancel_observer = self._sink.observe_system_theme(callback)
        self._watch_cancels.append(cancel_observer)

        def cancel() -> None:
            if cancel_observer in self._watch_cancels:
                self._watch_cancels.remove(cancel_observer)
                cancel_observer()

        return cancel

    def follow_system_theme(self, mapping: Mapping[str, str] | None = None) -> Callable[[], None]:
        """Apply the theme matching the system scheme whenever it changes.

        ``mapping`` translates "light"/"dark" into theme names; schemes without
        a configured theme are ignored.
        """
        names = dict(mapping or {})

        def on_scheme(scheme: str) -> None:
            name = names.get(scheme, scheme)
            if self._registry.has_theme(name) and name != self._current_theme:
                self.apply_theme(name)

        return self.watch_system_theme(on_scheme)

    def destroy(self) -> None:
        """Remove the style element and cancel observers; later calls fail."""
        if self._state is RuntimeState.DESTROYED:
            return
        while self._watch_cancels:
            self._watch_cancels.pop()()
        self._sink.remove()
        self._state = RuntimeState.DESTROYED
        logger.debug("theme runtime destroyed")

    def _apply(self, name: str, selector: str | None, prefix: str | None) -> None:
        self._registry.require_theme(name)
        selector = self._selector if selector is None else selector
        prefix = self._prefix if prefix is None else prefix
        tokens = self._registry.resolved_tokens(name)
        css = compile_theme_css(self._registry, name, selector=selector, prefix=prefix)

        self._sink.inject(css)
        self._current_theme = name
        self._selector = selector
        self._prefix = prefix
        self._state = RuntimeState.INITIALIZED
        if self._store is not None:
            self._store.set(self._storage_key, name)
        logger.debug("applied theme %s", name)
        self.theme_changed.emit(name, tokens)

    def _restore_persisted_theme(self) -> None:
        if self._store is None:
            return
        stored = self._store.get(self._storage_key)
        if not stored:
            return
        if self._registry.has_theme(stored):
            self._current_theme = stored
        else:
            logger.warning("ignoring persisted theme %r: not among %s", stored, self.available_themes())

    def _ensure_alive(self, operation: str) -> None:
        if self._state is RuntimeState.DESTROYED:
            raise RuntimeDestroyedError(operation)
