"""Error codes and error handling utilities for TokiForge."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for TokiForge operations."""

    # Configuration errors
    THEME_LIST_EMPTY = auto()
    THEME_CONFIG_INVALID = auto()
    THEME_DUPLICATE = auto()
    DEFAULT_THEME_MISSING = auto()
    INVALID_REFERENCE_FORMAT = auto()
    BUILD_CONFIG_INVALID = auto()

    # Resolution errors
    REFERENCE_NOT_FOUND = auto()
    CYCLIC_REFERENCE = auto()
    REFERENCE_TO_GROUP = auto()

    # Validation errors
    TOKEN_INVALID = auto()

    # Runtime errors
    THEME_NOT_FOUND = auto()
    UNSUPPORTED_FORMAT = auto()
    RUNTIME_DESTROYED = auto()

    # Source errors
    TOKEN_FILE_UNREADABLE = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.THEME_LIST_EMPTY: "ThemeConfig must have at least one theme.",
    ErrorCode.THEME_CONFIG_INVALID: "The theme configuration is malformed.",
    ErrorCode.THEME_DUPLICATE: "Theme names must be unique within a ThemeConfig.",
    ErrorCode.DEFAULT_THEME_MISSING: "The default theme is not one of the configured themes.",
    ErrorCode.INVALID_REFERENCE_FORMAT: 'Aliases must use the format "{token.path}".',
    ErrorCode.BUILD_CONFIG_INVALID: "The build configuration is invalid.",
    ErrorCode.REFERENCE_NOT_FOUND: "A token reference points to a path that does not exist.",
    ErrorCode.CYCLIC_REFERENCE: "Token references form a cycle.",
    ErrorCode.REFERENCE_TO_GROUP: "A token reference points to a group instead of a token.",
    ErrorCode.TOKEN_INVALID: "The token tree failed validation.",
    ErrorCode.THEME_NOT_FOUND: "The requested theme does not exist.",
    ErrorCode.UNSUPPORTED_FORMAT: "The requested export format is not supported.",
    ErrorCode.RUNTIME_DESTROYED: "The theme runtime has been destroyed.",
    ErrorCode.TOKEN_FILE_UNREADABLE: "The token file could not be read or parsed.",
}

ERROR_SUGGESTIONS: dict[ErrorCode, str] = {
    ErrorCode.THEME_LIST_EMPTY: "Add at least one theme to the configuration.",
    ErrorCode.DEFAULT_THEME_MISSING: "Set defaultTheme to one of the configured theme names.",
    ErrorCode.INVALID_REFERENCE_FORMAT: "Wrap the referenced path in braces, e.g. {color.primary}.",
    ErrorCode.REFERENCE_NOT_FOUND: "Check the spelling of the referenced token path.",
    ErrorCode.CYCLIC_REFERENCE: "Point one of the tokens in the chain at a literal value.",
    ErrorCode.REFERENCE_TO_GROUP: "Reference a token inside the group instead of the group itself.",
    ErrorCode.THEME_NOT_FOUND: "Pick one of the available themes.",
    ErrorCode.UNSUPPORTED_FORMAT: "Use one of: css, scss, js, ts, json.",
    ErrorCode.RUNTIME_DESTROYED: "Create a new ThemeRuntime.",
}


@dataclass
class TokiForgeError(Exception):
    """Base exception for TokiForge with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion:
            self.suggestion = ERROR_SUGGESTIONS.get(self.code, "")

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"\nFile: {self.path}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or UI display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class ThemeConfigError(TokiForgeError):
    """Raised when a ThemeConfig cannot be constructed."""


class InvalidReferenceFormatError(TokiForgeError):
    def __init__(self, alias: object, location: str) -> None:
        super().__init__(
            ErrorCode.INVALID_REFERENCE_FORMAT,
            message=(
                f'Invalid alias format at {location or "<root>"}: {alias!r} '
                'must be in format "{token.path}"'
            ),
            details={"alias": alias, "location": location},
        )
        self.alias = alias
        self.location = location


class ReferenceNotFoundError(TokiForgeError):
    def __init__(self, path: str, referenced_from: str) -> None:
        super().__init__(
            ErrorCode.REFERENCE_NOT_FOUND,
            message=f"Token reference not found: {path} (referenced from {referenced_from})",
            details={"path": path, "referenced_from": referenced_from},
        )
        self.reference = path
        self.referenced_from = referenced_from


class ReferenceToGroupError(TokiForgeError):
    def __init__(self, path: str, referenced_from: str) -> None:
        super().__init__(
            ErrorCode.REFERENCE_TO_GROUP,
            message=(
                f"Token reference {path} resolves to a group, not a token "
                f"(referenced from {referenced_from})"
            ),
            details={"path": path, "referenced_from": referenced_from},
        )
        self.reference = path
        self.referenced_from = referenced_from


class CyclicReferenceError(TokiForgeError):
    def __init__(self, chain: list[str]) -> None:
        super().__init__(
            ErrorCode.CYCLIC_REFERENCE,
            message=f"Cyclic token reference: {' -> '.join(chain)}",
            details={"chain": list(chain)},
        )
        self.chain = list(chain)


@dataclass(frozen=True, slots=True)
class ValidationProblem:
    """A single structural problem found in a token tree."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path or '<root>'}: {self.message}"


class TokenValidationError(TokiForgeError):
    """Raised with every problem found while validating a token tree."""

    def __init__(self, problems: list[ValidationProblem]) -> None:
        count = len(problems)
        lines = "\n".join(f"  - {problem}" for problem in problems)
        super().__init__(
            ErrorCode.TOKEN_INVALID,
            message=f"Token validation failed with {count} problem(s):\n{lines}",
            details={"problems": [str(problem) for problem in problems]},
        )
        self.problems = list(problems)


class ThemeNotFoundError(TokiForgeError):
    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(
            ErrorCode.THEME_NOT_FOUND,
            message=f'Theme "{name}" not found. Available themes: {", ".join(available)}',
            details={"theme": name, "available": list(available)},
        )
        self.theme = name
        self.available = list(available)


class UnsupportedFormatError(TokiForgeError):
    def __init__(self, fmt: object, supported: tuple[str, ...]) -> None:
        super().__init__(
            ErrorCode.UNSUPPORTED_FORMAT,
            message=f"Unsupported format: {fmt}. Supported formats: {', '.join(supported)}",
            details={"format": fmt, "supported": list(supported)},
        )
        self.format = fmt
        self.supported = supported


class RuntimeDestroyedError(TokiForgeError):
    def __init__(self, operation: str) -> None:
        super().__init__(
            ErrorCode.RUNTIME_DESTROYED,
            message=f"Cannot call {operation}() on a destroyed ThemeRuntime",
            details={"operation": operation},
        )


class TokenParseError(TokiForgeError):
    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(ErrorCode.TOKEN_FILE_UNREADABLE, message=message, path=path)


class BuildConfigError(TokiForgeError):
    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(ErrorCode.BUILD_CONFIG_INVALID, message=message, path=path)


def format_error_for_user(error: TokiForgeError | Exception) -> str:
    """Format an error for display to the user with actionable suggestions."""
    if isinstance(error, TokiForgeError):
        parts = [error.message]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n\nHint: {error.suggestion}")
        if error.path:
            parts.append(f"\n\nFile: {error.path}")
        return "".join(parts)
    return f"{type(error).__name__}: {error}"
