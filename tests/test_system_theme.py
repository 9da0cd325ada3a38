"""Tests for system colour-scheme helpers."""

from __future__ import annotations

import os

import pytest
from PySide6.QtCore import Qt
from PySide6.QtGui import QGuiApplication

from tokiforge.runtime import system_theme
from tokiforge.runtime.service import ThemeRuntime
from tokiforge.runtime.sinks import StyleDocument, StyleDocumentSink
from tokiforge.runtime.system_theme import detect_system_theme, scheme_name, watch_system_theme


@pytest.fixture
def no_gui_app(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(system_theme, "_gui_app", lambda: None)


@pytest.fixture(scope="module")
def qt_app() -> QGuiApplication:
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication([])
    return app


def _emit_scheme(scheme: Qt.ColorScheme) -> None:
    QGuiApplication.styleHints().colorSchemeChanged.emit(scheme)


def test_scheme_name_mapping() -> None:
    assert scheme_name(Qt.ColorScheme.Dark) == "dark"
    assert scheme_name(Qt.ColorScheme.Light) == "light"
    assert scheme_name(Qt.ColorScheme.Unknown) == "light"


def test_detect_defaults_to_light_without_gui_app(no_gui_app: None) -> None:
    assert detect_system_theme() == "light"


def test_watch_without_gui_app_is_noop(no_gui_app: None) -> None:
    seen: list[str] = []

    cancel = watch_system_theme(seen.append)
    cancel()

    assert seen == []


def test_style_document_sink_reads_system_scheme(no_gui_app: None) -> None:
    sink = StyleDocumentSink(StyleDocument())

    assert sink.system_theme() == "light"


class TestWithGuiApplication:
    """Scheme query and observation against an offscreen Qt application."""

    def test_detect_reads_style_hints(self, qt_app: QGuiApplication) -> None:
        expected = scheme_name(QGuiApplication.styleHints().colorScheme())

        assert detect_system_theme() == expected

    def test_watch_does_not_fire_on_subscribe(self, qt_app: QGuiApplication) -> None:
        seen: list[str] = []

        cancel = watch_system_theme(seen.append)
        cancel()

        assert seen == []

    def test_watch_delivers_changes_until_cancelled(self, qt_app: QGuiApplication) -> None:
        seen: list[str] = []

        cancel = watch_system_theme(seen.append)
        _emit_scheme(Qt.ColorScheme.Dark)
        _emit_scheme(Qt.ColorScheme.Light)
        cancel()
        cancel()
        _emit_scheme(Qt.ColorScheme.Dark)

        assert seen == ["dark", "light"]

    def test_runtime_follows_scheme_changes_only(self, qt_app: QGuiApplication) -> None:
        config = {
            "themes": [
                {"name": "light", "tokens": {"color": {"bg": {"value": "#ffffff"}}}},
                {"name": "dark", "tokens": {"color": {"bg": {"value": "#000000"}}}},
            ]
        }
        document = StyleDocument()
        runtime = ThemeRuntime(config, StyleDocumentSink(document))
        runtime.init()
        events: list[str] = []
        runtime.theme_changed.connect(lambda name, tokens: events.append(name))

        runtime.follow_system_theme()
        assert events == []

        _emit_scheme(Qt.ColorScheme.Dark)
        assert events == ["dark"]
        assert "#000000" in document.get_text("tokiforge-theme")

        runtime.destroy()
        _emit_scheme(Qt.ColorScheme.Light)
        assert events == ["dark"]
