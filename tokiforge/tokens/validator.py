"""Structural and alias validation of token trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from tokiforge.errors import TokenValidationError, TokiForgeError, ValidationProblem
from tokiforge.tokens.models import AliasToken, LiteralToken, alias_target, is_alias_string, is_scalar_value
from tokiforge.tokens.resolver import resolve
from tokiforge.tokens.tree import declared_alias, is_token_shape, join_path, raw_alias, raw_value


def collect_problems(tree: object) -> list[ValidationProblem]:
    """Return every structural problem in ``tree`` in traversal order."""
    problems: list[ValidationProblem] = []
    if not isinstance(tree, Mapping):
        problems.append(ValidationProblem("", f"expected a mapping, got {type(tree).__name__}"))
        return problems
    _check_group(tree, "", problems)
    return problems


def validate(tree: object) -> None:
    """Validate a raw or typed token tree, reporting all problems at once."""
    problems = collect_problems(tree)
    if problems:
        raise TokenValidationError(problems)


def _check_group(group: Mapping[object, object], path: str, problems: list[ValidationProblem]) -> None:
    for key, node in group.items():
        if not isinstance(key, str):
            problems.append(ValidationProblem(path, f"group keys must be strings, got {key!r}"))
            continue
        child_path = join_path(path, key)
        if is_token_shape(node):
            _check_token(node, child_path, problems)
        elif isinstance(node, list):
            continue
        elif isinstance(node, Mapping):
            if not node:
                problems.append(ValidationProblem(child_path, "empty object is neither a token nor a group"))
                continue
            _check_group(node, child_path, problems)
        else:
            problems.append(
                ValidationProblem(
                    child_path,
                    f"expected a token or a group of tokens, got {type(node).__name__}",
                )
            )


def _check_token(node: object, path: str, problems: list[ValidationProblem]) -> None:
    if isinstance(node, AliasToken):
        return
    if isinstance(node, LiteralToken):
        value = node.value
        alias = None
    else:
        value = raw_value(node)
        alias = raw_alias(node)

    if alias is not None:
        if not isinstance(alias, str) or alias_target(alias) is None:
            problems.append(ValidationProblem(path, f'invalid alias {alias!r}: must be in format "{{token.path}}"'))
        return

    if value is None:
        problems.append(ValidationProblem(path, "token has no value or alias"))
    elif not is_scalar_value(value):
        problems.append(
            ValidationProblem(path, f"token value must be a string or number, got {type(value).__name__}")
        )
    elif is_alias_string(value) and alias_target(value) is None:
        problems.append(ValidationProblem(path, f'invalid alias {value!r}: must be in format "{{token.path}}"'))


def collect_token_paths(tree: Mapping[str, object], path: str = "", result: set[str] | None = None) -> set[str]:
    """Return the dot-paths of every token in ``tree``."""
    if result is None:
        result = set()
    for key, node in tree.items():
        child_path = join_path(path, str(key))
        if is_token_shape(node):
            result.add(child_path)
        elif isinstance(node, Mapping):
            collect_token_paths(node, child_path, result)
    return result


@dataclass(frozen=True, slots=True)
class AliasReport:
    """Outcome of an alias check."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def validate_aliases(tree: Mapping[str, object]) -> AliasReport:
    """Check every declared alias against the token paths of the tree."""
    known = collect_token_paths(tree)
    errors: list[str] = []
    _check_aliases(tree, "", known, errors)
    return AliasReport(valid=not errors, errors=errors)


def _check_aliases(tree: Mapping[str, object], path: str, known: set[str], errors: list[str]) -> None:
    for key, node in tree.items():
        child_path = join_path(path, str(key))
        if is_token_shape(node):
            alias = declared_alias(node)
            if alias is None:
                continue
            target = alias_target(alias) if isinstance(alias, str) else None
            if target is None:
                errors.append(f"Alias at {child_path} has invalid format: {alias!r}")
            elif target not in known:
                errors.append(f"Alias at {child_path} references non-existent token: {target}")
        elif isinstance(node, Mapping):
            _check_aliases(node, child_path, known, errors)


@dataclass(frozen=True, slots=True)
class CheckResult:
    name: str
    passed: bool
    message: str = ""


@dataclass
class CheckReport:
    """Combined outcome of the CI-style token checks."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    checks: list[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def render(self) -> str:
        lines = ["Token checks:"]
        for check in self.checks:
            mark = "PASS" if check.passed else "FAIL"
            suffix = f" ({check.message})" if check.message else ""
            lines.append(f"  [{mark}] {check.name}{suffix}")
        if self.errors:
            lines.append("")
            lines.append("Errors:")
            lines.extend(f"  - {error}" for error in self.errors)
        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            lines.extend(f"  - {warning}" for warning in self.warnings)
        lines.append("")
        lines.append("Result: " + ("passed" if self.passed else "failed"))
        return "\n".join(lines)


def run_checks(tree: Mapping[str, object], *, strict: bool = False) -> CheckReport:
    """Run structural, alias and resolution checks without raising.

    In strict mode orphaned aliases are errors; otherwise they are warnings.
    """
    report = CheckReport()

    problems = collect_problems(tree)
    if problems:
        report.errors.extend(str(problem) for problem in problems)
        report.checks.append(CheckResult("Token Validation", False, f"{len(problems)} problem(s) found"))
    else:
        report.checks.append(CheckResult("Token Validation", True))

    aliases = validate_aliases(tree)
    if aliases.valid:
        report.checks.append(CheckResult("Alias Validation", True))
    else:
        (report.errors if strict else report.warnings).extend(aliases.errors)
        report.checks.append(
            CheckResult("Alias Validation", not strict, f"{len(aliases.errors)} alias error(s) found")
        )

    if problems or not aliases.valid:
        report.checks.append(CheckResult("Reference Resolution", report.passed, "skipped"))
        return report
    try:
        resolve(tree)
    except TokiForgeError as exc:
        report.errors.append(exc.message)
        report.checks.append(CheckResult("Reference Resolution", False, exc.code.name))
    else:
        report.checks.append(CheckResult("Reference Resolution", True))
    return report
