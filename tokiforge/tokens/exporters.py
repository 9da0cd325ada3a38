"""Format exporters turning resolved token trees into text artifacts."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Callable, Mapping

from tokiforge.errors import UnsupportedFormatError
from tokiforge.tokens.constants import DEFAULT_FORMAT, DEFAULT_PREFIX, DEFAULT_SELECTOR, EXPORT_FORMATS
from tokiforge.tokens.flatten import flatten, unflatten, variable_name
from tokiforge.tokens.models import LiteralToken, TokenScalar, TokenTree
from tokiforge.tokens.resolver import resolve
from tokiforge.tokens.tree import to_raw


@dataclass(frozen=True, slots=True)
class ExportOptions:
    format: str = DEFAULT_FORMAT
    selector: str = DEFAULT_SELECTOR
    prefix: str = DEFAULT_PREFIX
    variables: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "ExportOptions":
        options = cls()
        known = {"format", "selector", "prefix", "variables"}
        return replace(options, **{key: value for key, value in data.items() if key in known})


def format_value(value: TokenScalar) -> str:
    """Render a token value the way it appears in CSS and SCSS."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _json_value(value: TokenScalar) -> TokenScalar:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _literal_pairs(tree: Mapping[str, object]) -> list[tuple[str, LiteralToken]]:
    # resolve() is the identity on already-resolved trees
    return [(path, token) for path, token in flatten(resolve(tree)) if isinstance(token, LiteralToken)]


def export_css(
    tree: Mapping[str, object],
    *,
    selector: str = DEFAULT_SELECTOR,
    prefix: str = DEFAULT_PREFIX,
) -> str:
    lines = [f"{selector} {{"]
    for path, token in _literal_pairs(tree):
        lines.append(f"  {variable_name(path, prefix)}: {format_value(token.value)};")
    lines.append("}")
    return "\n".join(lines)


def export_scss(tree: Mapping[str, object], *, prefix: str = DEFAULT_PREFIX) -> str:
    return "\n".join(
        f"{variable_name(path, prefix, sigil='$')}: {format_value(token.value)};"
        for path, token in _literal_pairs(tree)
    )


def _value_tree(tree: Mapping[str, object], prefix: str, variables: bool) -> TokenTree:
    pairs: list[tuple[str, object]] = []
    for path, token in _literal_pairs(tree):
        leaf = f"var({variable_name(path, prefix)})" if variables else _json_value(token.value)
        pairs.append((path, leaf))
    return unflatten(pairs)


def export_js(
    tree: Mapping[str, object],
    *,
    prefix: str = DEFAULT_PREFIX,
    variables: bool = False,
) -> str:
    body = json.dumps(_value_tree(tree, prefix, variables), indent=2, ensure_ascii=False)
    return f"export default {body};"


def _ts_key(key: str) -> str:
    return key if key.isidentifier() else json.dumps(key, ensure_ascii=False)


def _type_lines(values: Mapping[str, object], depth: int) -> list[str]:
    indent = "  " * depth
    lines: list[str] = []
    for key, leaf in values.items():
        if isinstance(leaf, Mapping):
            lines.append(f"{indent}{_ts_key(key)}: {{")
            lines.extend(_type_lines(leaf, depth + 1))
            lines.append(f"{indent}}};")
        else:
            ts_type = "string" if isinstance(leaf, str) else "number"
            lines.append(f"{indent}{_ts_key(key)}: {ts_type};")
    return lines


def export_ts(
    tree: Mapping[str, object],
    *,
    prefix: str = DEFAULT_PREFIX,
    variables: bool = False,
) -> str:
    values = _value_tree(tree, prefix, variables)
    type_def = "\n".join(["export type Tokens = {", *_type_lines(values, 1), "};"])
    body = json.dumps(values, indent=2, ensure_ascii=False)
    return f"{type_def}\n\nconst tokens: Tokens = {body};\n\nexport default tokens;"


def export_json(tree: Mapping[str, object]) -> str:
    return json.dumps(to_raw(resolve(tree)), indent=2, ensure_ascii=False)


_EXPORTERS: dict[str, Callable[[Mapping[str, object], ExportOptions], str]] = {
    "css": lambda tree, opts: export_css(tree, selector=opts.selector, prefix=opts.prefix),
    "scss": lambda tree, opts: export_scss(tree, prefix=opts.prefix),
    "js": lambda tree, opts: export_js(tree, prefix=opts.prefix, variables=opts.variables),
    "ts": lambda tree, opts: export_ts(tree, prefix=opts.prefix, variables=opts.variables),
    "json": lambda tree, opts: export_json(tree),
}


def export(
    tree: Mapping[str, object],
    options: ExportOptions | Mapping[str, object] | None = None,
) -> str:
    """Export a token tree in the requested format.

    Unknown formats raise ``UnsupportedFormatError``; there is no fallback.
    """
    if options is None:
        options = ExportOptions()
    elif not isinstance(options, ExportOptions):
        options = ExportOptions.from_mapping(options)
    exporter = _EXPORTERS.get(options.format) if isinstance(options.format, str) else None
    if exporter is None:
        raise UnsupportedFormatError(options.format, EXPORT_FORMATS)
    return exporter(tree, options)
