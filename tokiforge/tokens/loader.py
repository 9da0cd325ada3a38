"""Token file parsing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

import yaml

from tokiforge.errors import TokenParseError
from tokiforge.tokens.models import TokenTree
from tokiforge.tokens.resolver import resolve
from tokiforge.tokens.tree import ingest
from tokiforge.tokens.validator import validate

_MAX_TOKEN_FILE_BYTES = 4 * 1024 * 1024


def read_token_data(path: Path) -> Mapping[str, object]:
    """Read a JSON or YAML token file into a plain mapping."""
    content = _read_text_limited(path, max_bytes=_MAX_TOKEN_FILE_BYTES)
    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise TokenParseError(f"Invalid token file {path}: {exc}", path=path) from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise TokenParseError(f"Expected a mapping at the top of {path}", path=path)
    return data


def load_token_file(
    path: Path,
    *,
    validate_tokens: bool = True,
    expand_references: bool = True,
) -> TokenTree:
    """Parse a token file, optionally validating it and resolving its aliases."""
    data = read_token_data(path)
    if validate_tokens:
        validate(data)
    if expand_references:
        return resolve(data)
    return ingest(data)


def _read_text_limited(path: Path, *, max_bytes: int) -> str:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise TokenParseError(f"Unable to stat {path}: {exc}", path=path) from exc
    if size > max_bytes:
        raise TokenParseError(f"{path}: file exceeds max size ({max_bytes} bytes)", path=path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TokenParseError(f"Unable to read {path}: {exc}", path=path) from exc
