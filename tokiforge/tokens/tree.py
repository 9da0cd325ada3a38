"""Conversion between deserialized token data and the typed token tree."""

from __future__ import annotations

import copy
from typing import Mapping

from tokiforge.errors import InvalidReferenceFormatError, TokenValidationError, ValidationProblem
from tokiforge.tokens.constants import ALIAS_KEYS, TOKEN_KEYS, VALUE_KEYS
from tokiforge.tokens.models import (
    AliasToken,
    LiteralToken,
    Token,
    TokenTree,
    alias_target,
    is_alias_string,
    is_scalar_value,
    is_token,
)

# Keys with a dedicated field on the token models.
_MODELLED_KEYS = frozenset(TOKEN_KEYS + ("type", "description"))


def join_path(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key


def is_token_shape(node: object) -> bool:
    """Return True when a raw mapping is shaped like a terminal token."""
    if is_token(node):
        return True
    return isinstance(node, Mapping) and any(key in node for key in TOKEN_KEYS)


def raw_alias(node: Mapping[str, object]) -> object | None:
    """Return the declared alias of a raw token mapping, if any."""
    for key in ALIAS_KEYS:
        value = node.get(key)
        if value not in (None, ""):
            return value
    return None


def raw_value(node: Mapping[str, object]) -> object | None:
    for key in VALUE_KEYS:
        value = node.get(key)
        if value is not None:
            return value
    return None


def declared_alias(node: object) -> object | None:
    """Return the alias a raw or typed token declares, including aliased values."""
    if isinstance(node, AliasToken):
        return node.reference
    if isinstance(node, LiteralToken):
        return node.value if is_alias_string(node.value) else None
    if not isinstance(node, Mapping):
        return None
    alias = raw_alias(node)
    if alias is not None:
        return alias
    value = raw_value(node)
    if is_alias_string(value):
        return value
    return None


def ingest_token(node: object, path: str) -> Token:
    """Convert one raw token mapping into a LiteralToken or AliasToken."""
    if isinstance(node, AliasToken):
        return node
    if isinstance(node, LiteralToken):
        if is_alias_string(node.value):
            return _alias_token(node.value, path, node.type, node.description, node.extensions)
        return node
    if not isinstance(node, Mapping):
        raise TokenValidationError(
            [ValidationProblem(path, f"expected a token mapping, got {type(node).__name__}")]
        )

    token_type = node.get("type", node.get("$type"))
    description = node.get("description", node.get("$description"))
    token_type = token_type if isinstance(token_type, str) else None
    description = description if isinstance(description, str) else None
    extensions = {
        key: copy.deepcopy(item) for key, item in node.items() if key not in _MODELLED_KEYS
    }

    alias = raw_alias(node)
    if alias is not None:
        return _alias_token(alias, path, token_type, description, extensions)

    value = raw_value(node)
    if is_alias_string(value):
        return _alias_token(value, path, token_type, description, extensions)
    if value is None:
        raise TokenValidationError([ValidationProblem(path, "token has no value or alias")])
    if not is_scalar_value(value):
        raise TokenValidationError(
            [ValidationProblem(path, f"token value must be a string or number, got {type(value).__name__}")]
        )
    return LiteralToken(value=value, type=token_type, description=description, extensions=extensions)


def _alias_token(
    alias: object,
    path: str,
    token_type: str | None,
    description: str | None,
    extensions: Mapping[str, object],
) -> AliasToken:
    target = alias_target(alias) if isinstance(alias, str) else None
    if target is None:
        raise InvalidReferenceFormatError(alias, path)
    return AliasToken(target_path=target, type=token_type, description=description, extensions=extensions)


def ingest(tree: Mapping[str, object], path: str = "") -> TokenTree:
    """Convert a deserialized token tree into the typed tree.

    Lists are kept as opaque leaves. Raises ``TokenValidationError`` for
    nodes that are neither tokens nor groups.
    """
    if not isinstance(tree, Mapping):
        raise TokenValidationError(
            [ValidationProblem(path, f"expected a mapping, got {type(tree).__name__}")]
        )
    result: TokenTree = {}
    for key, node in tree.items():
        child_path = join_path(path, str(key))
        if is_token_shape(node):
            result[key] = ingest_token(node, child_path)
        elif isinstance(node, list):
            result[key] = list(node)
        elif isinstance(node, Mapping):
            result[key] = ingest(node, child_path)
        else:
            raise TokenValidationError(
                [ValidationProblem(child_path, "expected a token or a group of tokens")]
            )
    return result


def _metadata(node: LiteralToken | AliasToken) -> dict[str, object]:
    raw: dict[str, object] = {}
    # $type and $description spellings travel in extensions.
    if node.type is not None and node.extensions.get("$type") != node.type:
        raw["type"] = node.type
    if node.description is not None and node.extensions.get("$description") != node.description:
        raw["description"] = node.description
    raw.update(copy.deepcopy(dict(node.extensions)))
    return raw


def to_raw(tree: Mapping[str, object]) -> dict[str, object]:
    """Convert a typed token tree back into plain JSON-compatible data.

    Every extra field a token was ingested with is written back unchanged.
    """
    result: dict[str, object] = {}
    for key, node in tree.items():
        if isinstance(node, LiteralToken):
            result[key] = {"value": node.value, **_metadata(node)}
        elif isinstance(node, AliasToken):
            result[key] = {"$alias": node.reference, **_metadata(node)}
        elif isinstance(node, Mapping):
            result[key] = to_raw(node)
        else:
            result[key] = node
    return result
