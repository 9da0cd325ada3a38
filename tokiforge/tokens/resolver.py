"""Alias/reference resolution for token trees."""

from __future__ import annotations

from typing import Mapping

from tokiforge.errors import CyclicReferenceError, ReferenceNotFoundError, ReferenceToGroupError
from tokiforge.tokens.models import AliasToken, LiteralToken, TokenScalar, TokenTree
from tokiforge.tokens.tree import ingest, join_path


class _Resolver:
    """Resolves every alias of one tree against that tree's root."""

    def __init__(self, root: TokenTree) -> None:
        self._root = root
        self._resolved: dict[str, TokenScalar] = {}
        self._chain: list[str] = []

    def resolve_tree(self, tree: TokenTree, path: str = "") -> TokenTree:
        result: TokenTree = {}
        for key, node in tree.items():
            child_path = join_path(path, key)
            if isinstance(node, AliasToken):
                self._chain = [child_path]
                value = self._value_of(node.target_path, child_path)
                result[key] = LiteralToken(
                    value=value,
                    type=node.type,
                    description=node.description,
                    extensions=node.extensions,
                )
            elif isinstance(node, LiteralToken):
                result[key] = node
            elif isinstance(node, Mapping):
                result[key] = self.resolve_tree(node, child_path)
            else:
                result[key] = node
        return result

    def _value_of(self, target: str, referenced_from: str) -> TokenScalar:
        cached = self._resolved.get(target)
        if cached is not None:
            return cached
        if target in self._chain:
            raise CyclicReferenceError(self._chain[self._chain.index(target):] + [target])

        node = self._lookup(target, referenced_from)
        if isinstance(node, LiteralToken):
            value = node.value
        else:
            self._chain.append(target)
            value = self._value_of(node.target_path, target)
            self._chain.pop()
        self._resolved[target] = value
        return value

    def _lookup(self, target: str, referenced_from: str) -> LiteralToken | AliasToken:
        current: object = self._root
        for segment in target.split("."):
            if not isinstance(current, Mapping) or segment not in current:
                raise ReferenceNotFoundError(target, referenced_from)
            current = current[segment]
        if isinstance(current, (LiteralToken, AliasToken)):
            return current
        if isinstance(current, Mapping):
            raise ReferenceToGroupError(target, referenced_from)
        raise ReferenceNotFoundError(target, referenced_from)


def resolve(tree: Mapping[str, object]) -> TokenTree:
    """Return a copy of ``tree`` in which every token carries a literal value.

    Accepts raw deserialized data or an already ingested tree. Alias paths are
    always looked up from the root of ``tree``; chains are followed until a
    literal is reached. Raises ``ReferenceNotFoundError``,
    ``ReferenceToGroupError``, ``CyclicReferenceError`` or
    ``InvalidReferenceFormatError``; nothing is returned on failure.
    """
    root = ingest(tree)
    return _Resolver(root).resolve_tree(root)
