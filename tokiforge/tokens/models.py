"""Token tree models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union

TokenScalar = Union[str, int, float]


@dataclass(frozen=True, slots=True)
class LiteralToken:
    """A terminal token carrying a concrete value."""

    value: TokenScalar
    type: str | None = None
    description: str | None = None
    # Any other fields of the source token, e.g. deprecated or $extensions.
    extensions: Mapping[str, object] = field(default_factory=dict, hash=False)


@dataclass(frozen=True, slots=True)
class AliasToken:
    """A terminal token pointing at another token by dot-path."""

    target_path: str
    type: str | None = None
    description: str | None = None
    extensions: Mapping[str, object] = field(default_factory=dict, hash=False)

    @property
    def reference(self) -> str:
        return "{" + self.target_path + "}"


Token = Union[LiteralToken, AliasToken]

# Values are tokens, nested trees, or opaque lists.
TokenTree = dict[str, object]


def is_token(node: object) -> bool:
    return isinstance(node, (LiteralToken, AliasToken))


def is_scalar_value(value: object) -> bool:
    """Return True for string and number values; booleans are rejected."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (str, int, float))


def is_alias_string(value: object) -> bool:
    """Return True when ``value`` is a ``{a.b.c}`` reference string."""
    return (
        isinstance(value, str)
        and len(value) > 2
        and value.startswith("{")
        and value.endswith("}")
    )


def alias_target(value: str) -> str | None:
    """Return the dot-path inside a reference string, or None if malformed."""
    if not is_alias_string(value):
        return None
    path = value[1:-1]
    segments = path.split(".")
    if any(not segment or segment != segment.strip() for segment in segments):
        return None
    if any(ch in path for ch in "{}"):
        return None
    return path
