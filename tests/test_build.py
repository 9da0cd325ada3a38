"""Tests for config-driven artifact builds and the command-line entry."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tokiforge.app import run_app
from tokiforge.build import BuildConfig, build, check, load_build_config
from tokiforge.errors import BuildConfigError


def _write_json(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _tokens() -> dict[str, object]:
    return {
        "color": {
            "primary": {"value": "#7C3AED", "type": "color"},
            "accent": {"$alias": "{color.primary}"},
        }
    }


@pytest.fixture
def project(tmp_path: Path) -> Path:
    _write_json(tmp_path / "tokens.json", _tokens())
    _write_json(
        tmp_path / "tokiforge.config.json",
        {
            "input": "tokens.json",
            "output": {
                "css": "dist/tokens.css",
                "scss": "dist/tokens.scss",
                "js": "dist/tokens.js",
                "ts": "dist/tokens.ts",
                "json": "dist/tokens.json",
            },
            "prefix": "hf",
        },
    )
    return tmp_path


def test_build_writes_every_configured_artifact(project: Path) -> None:
    written = build(project)

    assert sorted(path.name for path in written) == [
        "tokens.css",
        "tokens.js",
        "tokens.json",
        "tokens.scss",
        "tokens.ts",
    ]
    css = (project / "dist" / "tokens.css").read_text(encoding="utf-8")
    assert "  --hf-color-accent: #7C3AED;" in css.splitlines()
    js = (project / "dist" / "tokens.js").read_text(encoding="utf-8")
    assert '"primary": "var(--hf-color-primary)"' in js
    data = json.loads((project / "dist" / "tokens.json").read_text(encoding="utf-8"))
    assert data["color"]["accent"] == {"value": "#7C3AED"}


def test_yaml_config_supported(tmp_path: Path) -> None:
    _write_json(tmp_path / "tokens.json", _tokens())
    (tmp_path / "tokiforge.config.yaml").write_text(
        "input: tokens.json\noutput:\n  scss: out/vars.scss\nprefix: ds\n",
        encoding="utf-8",
    )

    config = load_build_config(tmp_path)

    assert config == BuildConfig(
        input=tmp_path / "tokens.json",
        outputs={"scss": tmp_path / "out" / "vars.scss"},
        prefix="ds",
    )
    build(tmp_path)
    assert (tmp_path / "out" / "vars.scss").read_text(encoding="utf-8").startswith("$ds-color-primary")


def test_missing_config_rejected(tmp_path: Path) -> None:
    with pytest.raises(BuildConfigError):
        build(tmp_path)


def test_unknown_output_format_rejected(tmp_path: Path) -> None:
    with pytest.raises(BuildConfigError):
        BuildConfig.from_mapping({"input": "tokens.json", "output": {"xml": "a.xml"}}, tmp_path)


def test_check_reports_orphans(project: Path) -> None:
    _write_json(project / "tokens.json", {"a": {"$alias": "{missing}"}})

    assert check(project).passed is True
    assert check(project, strict=True).passed is False


def test_run_app_build_and_failure_exit_codes(project: Path, tmp_path_factory: pytest.TempPathFactory) -> None:
    assert run_app(["build", str(project)]) == 0
    assert (project / "dist" / "tokens.ts").exists()

    empty = tmp_path_factory.mktemp("empty")
    assert run_app(["build", str(empty)]) == 1


def test_run_app_check_prints_report(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run_app(["check", str(project)]) == 0

    assert "Result: passed" in capsys.readouterr().out
