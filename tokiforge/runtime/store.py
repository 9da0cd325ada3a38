"""Persistence contract for the last-applied theme name."""

from __future__ import annotations

from typing import Protocol


class ThemeStore(Protocol):
    """Durable key-value store owned by the host."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryThemeStore:
    """Process-local store, useful for hosts without durable storage."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
