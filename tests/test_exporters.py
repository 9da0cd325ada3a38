"""Tests for the format exporters."""

from __future__ import annotations

import json

import pytest

from tokiforge.errors import UnsupportedFormatError
from tokiforge.tokens.exporters import ExportOptions, export, export_css, format_value
from tokiforge.tokens.resolver import resolve
from tokiforge.tokens.tree import to_raw


def _tokens() -> dict[str, object]:
    return {
        "color": {
            "primary": {"value": "#7C3AED", "type": "color"},
            "text": {"$alias": "{color.primary}"},
        },
        "space": {"md": {"value": 8, "type": "dimension"}},
    }


def test_css_export() -> None:
    css = export(_tokens(), ExportOptions(format="css"))

    assert css == (
        ":root {\n"
        "  --hf-color-primary: #7C3AED;\n"
        "  --hf-color-text: #7C3AED;\n"
        "  --hf-space-md: 8;\n"
        "}"
    )


def test_css_export_custom_selector_and_prefix() -> None:
    css = export(_tokens(), {"format": "css", "selector": "[data-theme=dark]", "prefix": "ds"})

    assert css.startswith("[data-theme=dark] {\n")
    assert "  --ds-space-md: 8;" in css


def test_css_camel_case_naming() -> None:
    css = export_css({"colorPrimary": {"background": {"value": "#7C3AED"}}})

    assert "--hf-color-primary-background: #7C3AED;" in css


def test_css_empty_tree_is_valid_block() -> None:
    assert export_css({}) == ":root {\n}"


def test_scss_export() -> None:
    scss = export(_tokens(), {"format": "scss"})

    assert scss.splitlines() == [
        "$hf-color-primary: #7C3AED;",
        "$hf-color-text: #7C3AED;",
        "$hf-space-md: 8;",
    ]


def test_js_export_nested_literals() -> None:
    js = export(_tokens(), {"format": "js"})

    assert js.startswith("export default ")
    assert js.endswith(";")
    body = json.loads(js[len("export default "):-1])
    assert body == {"color": {"primary": "#7C3AED", "text": "#7C3AED"}, "space": {"md": 8}}


def test_js_export_with_css_variables() -> None:
    js = export(_tokens(), {"format": "js", "variables": True})

    body = json.loads(js[len("export default "):-1])
    assert body["color"]["primary"] == "var(--hf-color-primary)"
    assert body["space"]["md"] == "var(--hf-space-md)"


def test_ts_export_has_type_declaration_above_values() -> None:
    ts = export(_tokens(), {"format": "ts"})

    type_block, _, rest = ts.partition("\n\n")
    assert type_block.splitlines() == [
        "export type Tokens = {",
        "  color: {",
        "    primary: string;",
        "    text: string;",
        "  };",
        "  space: {",
        "    md: number;",
        "  };",
        "};",
    ]
    assert rest.startswith("const tokens: Tokens = {")
    assert ts.endswith("export default tokens;")


def test_ts_export_with_variables_types_all_leaves_as_string() -> None:
    ts = export(_tokens(), {"format": "ts", "variables": True})

    assert "md: string;" in ts
    assert "number" not in ts


def test_ts_quotes_non_identifier_keys() -> None:
    ts = export({"space": {"2xl": {"value": "3rem"}}}, {"format": "ts"})

    assert '"2xl": string;' in ts


def test_json_export_round_trips_to_resolved_tree() -> None:
    tokens = _tokens()

    output = export(tokens, {"format": "json"})

    assert json.loads(output) == to_raw(resolve(tokens))
    assert json.loads(output)["color"]["text"] == {"value": "#7C3AED"}


def test_json_export_keeps_extra_token_fields() -> None:
    tokens = {
        "color": {
            "primary": {"value": "#fff", "type": "color", "deprecated": True, "$extensions": {"x": 1}},
            "text": {"$alias": "{color.primary}", "deprecated": False},
        }
    }

    output = json.loads(export(tokens, {"format": "json"}))

    assert output["color"]["primary"] == {
        "value": "#fff",
        "type": "color",
        "deprecated": True,
        "$extensions": {"x": 1},
    }
    assert output["color"]["text"] == {"value": "#fff", "deprecated": False}


def test_export_is_deterministic() -> None:
    for fmt in ("css", "scss", "js", "ts", "json"):
        assert export(_tokens(), {"format": fmt}) == export(_tokens(), {"format": fmt})


def test_unsupported_format_fails_fast() -> None:
    with pytest.raises(UnsupportedFormatError) as excinfo:
        export(_tokens(), {"format": "xml"})

    assert excinfo.value.format == "xml"
    assert "xml" in excinfo.value.message


def test_default_options_export_css() -> None:
    assert export(_tokens()).startswith(":root {")


def test_format_value_drops_integral_float_suffix() -> None:
    assert format_value(16.0) == "16"
    assert format_value(1.5) == "1.5"
    assert format_value("1rem") == "1rem"
