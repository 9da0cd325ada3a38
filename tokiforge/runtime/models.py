"""Theme runtime models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Sequence

from tokiforge.errors import ErrorCode, ThemeConfigError


class RuntimeState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    DESTROYED = "destroyed"


@dataclass(frozen=True, slots=True)
class Theme:
    """A named token tree; never mutated after construction."""

    name: str
    tokens: Mapping[str, object]


@dataclass(frozen=True, slots=True)
class ThemeConfig:
    """An ordered, non-empty set of themes plus an optional default."""

    themes: tuple[Theme, ...]
    default_theme: str | None = None

    def __post_init__(self) -> None:
        if not self.themes:
            raise ThemeConfigError(ErrorCode.THEME_LIST_EMPTY)
        names = [theme.name for theme in self.themes]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ThemeConfigError(
                ErrorCode.THEME_DUPLICATE,
                message=f"Duplicate theme names: {', '.join(duplicates)}",
                details={"duplicates": duplicates},
            )
        if self.default_theme is not None and self.default_theme not in names:
            raise ThemeConfigError(
                ErrorCode.DEFAULT_THEME_MISSING,
                message=f'Default theme "{self.default_theme}" not found in themes',
                details={"default_theme": self.default_theme, "available": names},
            )

    @property
    def theme_names(self) -> list[str]:
        return [theme.name for theme in self.themes]

    @property
    def initial_theme(self) -> str:
        return self.default_theme if self.default_theme is not None else self.themes[0].name

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "ThemeConfig":
        """Build a config from ``{"themes": [...], "defaultTheme": ...}`` data."""
        raw_themes = data.get("themes") or []
        if not isinstance(raw_themes, Sequence) or isinstance(raw_themes, (str, bytes)):
            raise ThemeConfigError(ErrorCode.THEME_CONFIG_INVALID, message="themes must be a list")
        themes: list[Theme] = []
        for index, raw in enumerate(raw_themes):
            if isinstance(raw, Theme):
                themes.append(raw)
                continue
            if not isinstance(raw, Mapping):
                raise ThemeConfigError(
                    ErrorCode.THEME_CONFIG_INVALID,
                    message=f"themes[{index}] must be an object with name and tokens",
                )
            name = raw.get("name")
            tokens = raw.get("tokens")
            if not isinstance(name, str) or not name.strip():
                raise ThemeConfigError(
                    ErrorCode.THEME_CONFIG_INVALID,
                    message=f"themes[{index}].name must be a non-empty string",
                )
            if not isinstance(tokens, Mapping):
                raise ThemeConfigError(
                    ErrorCode.THEME_CONFIG_INVALID,
                    message=f"themes[{index}].tokens must be an object",
                )
            themes.append(Theme(name=name, tokens=tokens))
        default = data.get("defaultTheme", data.get("default_theme"))
        return cls(themes=tuple(themes), default_theme=default if isinstance(default, str) else None)
