"""Artifact builds driven by tokiforge.config.json / tokiforge.config.yaml."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

import yaml

from tokiforge.errors import BuildConfigError
from tokiforge.tokens.constants import DEFAULT_PREFIX, DEFAULT_SELECTOR, EXPORT_FORMATS
from tokiforge.tokens.exporters import ExportOptions, export
from tokiforge.tokens.loader import load_token_file, read_token_data
from tokiforge.tokens.validator import CheckReport, run_checks

logger = logging.getLogger(__name__)

CONFIG_FILENAMES: tuple[str, ...] = (
    "tokiforge.config.json",
    "tokiforge.config.yaml",
    "tokiforge.config.yml",
)


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Where to read tokens from and which artifacts to write."""

    input: Path
    outputs: dict[str, Path] = field(default_factory=dict)
    prefix: str = DEFAULT_PREFIX
    selector: str = DEFAULT_SELECTOR

    @classmethod
    def from_mapping(cls, data: Mapping[str, object], base_dir: Path) -> "BuildConfig":
        raw_input = data.get("input")
        if not isinstance(raw_input, str) or not raw_input.strip():
            raise BuildConfigError("Build config field 'input' must be a non-empty string")
        raw_outputs = data.get("output", {})
        if not isinstance(raw_outputs, Mapping):
            raise BuildConfigError("Build config field 'output' must be an object")
        unknown = sorted(str(key) for key in raw_outputs if key not in EXPORT_FORMATS)
        if unknown:
            raise BuildConfigError(f"Unsupported output formats in build config: {', '.join(unknown)}")
        outputs: dict[str, Path] = {}
        for fmt in EXPORT_FORMATS:
            target = raw_outputs.get(fmt)
            if target is None:
                continue
            if not isinstance(target, str) or not target.strip():
                raise BuildConfigError(f"Output path for {fmt!r} must be a non-empty string")
            outputs[fmt] = base_dir / target
        prefix = data.get("prefix", DEFAULT_PREFIX)
        selector = data.get("selector", DEFAULT_SELECTOR)
        if not isinstance(prefix, str) or not isinstance(selector, str):
            raise BuildConfigError("Build config fields 'prefix' and 'selector' must be strings")
        return cls(
            input=base_dir / raw_input,
            outputs=outputs,
            prefix=prefix or DEFAULT_PREFIX,
            selector=selector or DEFAULT_SELECTOR,
        )


def find_config(project_dir: Path) -> Path:
    for name in CONFIG_FILENAMES:
        candidate = project_dir / name
        if candidate.is_file():
            return candidate
    raise BuildConfigError(f"No {CONFIG_FILENAMES[0]} found in {project_dir}", path=project_dir)


def load_build_config(project_dir: Path) -> BuildConfig:
    path = find_config(project_dir)
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise BuildConfigError(f"Unable to read {path}: {exc}", path=path) from exc
    if not isinstance(data, Mapping):
        raise BuildConfigError(f"Expected an object in {path}", path=path)
    return BuildConfig.from_mapping(data, project_dir)


def build(project_dir: Path) -> list[Path]:
    """Validate, resolve and export the configured token file; return written paths."""
    config = load_build_config(project_dir)
    logger.info("parsing tokens from %s", config.input)
    tokens = load_token_file(config.input)

    written: list[Path] = []
    for fmt, target in config.outputs.items():
        options = ExportOptions(
            format=fmt,
            selector=config.selector,
            prefix=config.prefix,
            variables=fmt in ("js", "ts"),
        )
        content = export(tokens, options)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.info("generated %s: %s", fmt.upper(), target)
        written.append(target)
    return written


def check(project_dir: Path, *, strict: bool = False) -> CheckReport:
    """Run the token checks against the configured input file."""
    config = load_build_config(project_dir)
    return run_checks(read_token_data(config.input), strict=strict)
