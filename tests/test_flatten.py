"""Tests for path flattening and variable naming."""

from __future__ import annotations

from tokiforge.tokens.flatten import flatten, kebab_segment, unflatten, variable_name
from tokiforge.tokens.models import AliasToken, LiteralToken
from tokiforge.tokens.tree import ingest


def test_flatten_depth_first_in_key_order() -> None:
    tree = {
        "color": {
            "primary": {"value": "#7C3AED"},
            "text": {"muted": {"value": "#888"}, "strong": {"value": "#111"}},
        },
        "radius": {"value": "4px"},
    }

    paths = [path for path, _ in flatten(tree)]

    assert paths == ["color.primary", "color.text.muted", "color.text.strong", "radius"]


def test_token_node_is_not_recursed_into() -> None:
    tree = {"shadow": {"value": "0 1px 2px #000", "type": "custom", "meta": {"value": "ignored"}}}

    assert flatten(tree) == [("shadow", LiteralToken(value="0 1px 2px #000", type="custom"))]


def test_flatten_keeps_aliases_unresolved() -> None:
    tree = {"a": {"value": 1}, "b": {"$alias": "{a}"}}

    assert flatten(tree)[1] == ("b", AliasToken(target_path="a"))


def test_lists_are_skipped() -> None:
    assert flatten({"stack": ["a", "b"], "x": {"value": 1}}) == [("x", LiteralToken(value=1))]


def test_unflatten_round_trip_for_literal_tree() -> None:
    raw = {
        "color": {"primary": {"value": "#7C3AED", "type": "color"}, "bg": {"value": "#fff"}},
        "space": {"sm": {"value": 4}, "lg": {"value": 16.5}},
    }

    assert unflatten(flatten(raw)) == ingest(raw)


def test_kebab_segment() -> None:
    assert kebab_segment("colorPrimary") == "color-primary"
    assert kebab_segment("background") == "background"
    assert kebab_segment("fontSizeXL") == "font-size-x-l"


def test_variable_name_is_byte_exact() -> None:
    assert variable_name("colorPrimary.background", "hf") == "--hf-color-primary-background"


def test_variable_name_prefix_and_sigil() -> None:
    assert variable_name("color.primary", "") == "--color-primary"
    assert variable_name("color.primary", "myApp") == "--my-app-color-primary"
    assert variable_name("space.md", "hf", sigil="$") == "$hf-space-md"
