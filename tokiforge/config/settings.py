"""Durable theme selection via QSettings."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QSettings


class ThemeSettings:
    """Wraps QSettings as the runtime's theme-name store.

    With ``path`` the values live in that INI file; otherwise the platform's
    native settings location for ``organization``/``application`` is used.
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        organization: str = "TokiForge",
        application: str = "TokiForge",
    ) -> None:
        if path is not None:
            self._qs = QSettings(str(path), QSettings.Format.IniFormat)
        else:
            self._qs = QSettings(organization, application)

    # -- theme store contract --

    def get(self, key: str) -> str | None:
        raw = self._qs.value(self._key(key), "", type=str)
        value = (raw or "").strip()
        return value or None

    def set(self, key: str, value: str) -> None:
        self._qs.setValue(self._key(key), (value or "").strip())
        self._qs.sync()

    # -- helpers --

    @staticmethod
    def _key(key: str) -> str:
        return f"ui/{key}"
