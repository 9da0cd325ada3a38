"""Theme lookup, resolution cache and directory discovery."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from tokiforge.errors import ErrorCode, ThemeConfigError, ThemeNotFoundError, TokiForgeError
from tokiforge.runtime.models import Theme, ThemeConfig
from tokiforge.tokens.constants import TOKEN_FILE_SUFFIXES
from tokiforge.tokens.loader import read_token_data
from tokiforge.tokens.models import TokenTree
from tokiforge.tokens.resolver import resolve

_MAX_THEME_FILE_CANDIDATES = 512


class ThemeRegistry:
    """Holds the configured themes and their resolved token trees."""

    def __init__(self, config: ThemeConfig) -> None:
        self._config = config
        self._themes: dict[str, Theme] = {theme.name: theme for theme in config.themes}
        self._resolved: dict[str, TokenTree] = {}
        self._load_errors: list[str] = []

    @property
    def config(self) -> ThemeConfig:
        return self._config

    def theme_names(self) -> list[str]:
        return self._config.theme_names

    def has_theme(self, name: str) -> bool:
        return name in self._themes

    def get_theme(self, name: str) -> Theme | None:
        return self._themes.get(name)

    def require_theme(self, name: str) -> Theme:
        theme = self._themes.get(name)
        if theme is None:
            raise ThemeNotFoundError(name, self.theme_names())
        return theme

    def resolved_tokens(self, name: str) -> TokenTree:
        """Return the resolved tree of a theme, resolving it on first use."""
        cached = self._resolved.get(name)
        if cached is None:
            cached = resolve(self.require_theme(name).tokens)
            self._resolved[name] = cached
        return cached

    def load_errors(self) -> list[str]:
        return list(self._load_errors)

    @classmethod
    def from_directory(cls, root: Path, *, default_theme: str | None = None) -> "ThemeRegistry":
        """Build a registry from one token file per theme under ``root``.

        The theme name is the file stem. Unreadable files are skipped and
        reported through ``load_errors()``. When no file loads, the
        ``ThemeConfigError`` carries them under ``details["load_errors"]``.
        """
        themes: list[Theme] = []
        errors: list[str] = []
        try:
            candidates = sorted(
                path
                for path in root.iterdir()
                if path.is_file() and path.suffix.lower() in TOKEN_FILE_SUFFIXES
            )
        except OSError as exc:
            candidates = []
            errors.append(f"Failed to list themes in {root}: {exc}")

        if len(candidates) > _MAX_THEME_FILE_CANDIDATES:
            errors.append(
                f"Theme file limit exceeded in {root}; "
                f"only first {_MAX_THEME_FILE_CANDIDATES} files were scanned."
            )
            candidates = candidates[:_MAX_THEME_FILE_CANDIDATES]

        seen: set[str] = set()
        for path in candidates:
            if path.is_symlink():
                errors.append(f"Skipping symlink theme file: {path}")
                continue
            if path.stem in seen:
                errors.append(f"Duplicate theme name {path.stem!r} at {path}; skipping.")
                continue
            try:
                tokens: Mapping[str, object] = read_token_data(path)
            except TokiForgeError as exc:
                errors.append(str(exc))
                continue
            seen.add(path.stem)
            themes.append(Theme(name=path.stem, tokens=tokens))

        if not themes:
            raise ThemeConfigError(
                ErrorCode.THEME_LIST_EMPTY,
                message=f"No theme files could be loaded from {root}.",
                path=root,
                details={"load_errors": errors},
            )
        registry = cls(ThemeConfig(themes=tuple(themes), default_theme=default_theme))
        registry._load_errors = errors
        return registry
