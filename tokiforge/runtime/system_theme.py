"""System colour-scheme query and observation through Qt."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtGui import QGuiApplication

LIGHT = "light"
DARK = "dark"


def _gui_app() -> QGuiApplication | None:
    app = QGuiApplication.instance()
    return app if isinstance(app, QGuiApplication) else None


def scheme_name(scheme: Qt.ColorScheme) -> str:
    return DARK if scheme == Qt.ColorScheme.Dark else LIGHT


def detect_system_theme() -> str:
    """Return "dark" or "light"; "light" when there is no GUI application."""
    if _gui_app() is None:
        return LIGHT
    return scheme_name(QGuiApplication.styleHints().colorScheme())


def watch_system_theme(callback: Callable[[str], None]) -> Callable[[], None]:
    """Call ``callback`` with the new scheme on every change.

    Returns a cancel callable. Without a GUI application nothing is observed
    and the callable does nothing.
    """
    if _gui_app() is None:
        return lambda: None

    hints = QGuiApplication.styleHints()

    def handler(scheme: Qt.ColorScheme) -> None:
        callback(scheme_name(scheme))

    hints.colorSchemeChanged.connect(handler)
    connected = True

    def cancel() -> None:
        nonlocal connected
        if connected:
            connected = False
            hints.colorSchemeChanged.disconnect(handler)

    return cancel
