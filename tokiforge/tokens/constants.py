"""Token engine constants."""

from __future__ import annotations

DEFAULT_PREFIX = "hf"
DEFAULT_SELECTOR = ":root"
DEFAULT_FORMAT = "css"

EXPORT_FORMATS: tuple[str, ...] = (
    "css",
    "scss",
    "js",
    "ts",
    "json",
)

TOKEN_TYPES: tuple[str, ...] = (
    "color",
    "dimension",
    "fontFamily",
    "fontWeight",
    "duration",
    "custom",
)

VALUE_KEYS: tuple[str, ...] = ("value", "$value")
ALIAS_KEYS: tuple[str, ...] = ("alias", "$alias")
TOKEN_KEYS: tuple[str, ...] = VALUE_KEYS + ALIAS_KEYS

TOKEN_FILE_SUFFIXES: tuple[str, ...] = (".json", ".yaml", ".yml")
