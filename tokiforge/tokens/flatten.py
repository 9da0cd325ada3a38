"""Path flattening and CSS variable naming."""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from tokiforge.tokens.constants import DEFAULT_PREFIX
from tokiforge.tokens.models import Token, TokenTree, is_token
from tokiforge.tokens.tree import ingest, join_path

_UPPER_RE = re.compile(r"([A-Z])")


def flatten(tree: Mapping[str, object]) -> list[tuple[str, Token]]:
    """Return ``(dot.path, token)`` pairs in depth-first key order.

    Raw input is ingested first. Lists are opaque and never emitted.
    """
    result: list[tuple[str, Token]] = []
    _walk(ingest(tree), "", result)
    return result


def _walk(tree: TokenTree, path: str, result: list[tuple[str, Token]]) -> None:
    for key, node in tree.items():
        child_path = join_path(path, key)
        if is_token(node):
            result.append((child_path, node))
        elif isinstance(node, Mapping):
            _walk(node, child_path, result)


def unflatten(pairs: Iterable[tuple[str, object]]) -> TokenTree:
    """Rebuild a nested tree from ``(dot.path, leaf)`` pairs."""
    result: TokenTree = {}
    for path, leaf in pairs:
        parts = path.split(".")
        current = result
        for part in parts[:-1]:
            child = current.get(part)
            if not isinstance(child, dict):
                child = {}
                current[part] = child
            current = child
        current[parts[-1]] = leaf
    return result


def kebab_segment(segment: str) -> str:
    """``colorPrimary`` -> ``color-primary``; every uppercase letter is split off."""
    return _UPPER_RE.sub(r"-\1", segment).lower()


def variable_name(path: str, prefix: str = DEFAULT_PREFIX, sigil: str = "--") -> str:
    """Return the CSS/SCSS variable name of a dot-path.

    >>> variable_name("colorPrimary.background")
    '--hf-color-primary-background'
    """
    parts = path.split(".")
    if prefix:
        parts = [prefix, *parts]
    return sigil + "-".join(kebab_segment(part) for part in parts)
