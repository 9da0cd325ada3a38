"""Token resolution and export engine exports."""

from tokiforge.tokens.exporters import ExportOptions, export
from tokiforge.tokens.flatten import flatten, unflatten, variable_name
from tokiforge.tokens.loader import load_token_file
from tokiforge.tokens.models import AliasToken, LiteralToken, Token, TokenTree
from tokiforge.tokens.resolver import resolve
from tokiforge.tokens.tree import ingest, to_raw
from tokiforge.tokens.validator import AliasReport, CheckReport, run_checks, validate, validate_aliases

__all__ = [
    "AliasReport",
    "AliasToken",
    "CheckReport",
    "ExportOptions",
    "LiteralToken",
    "Token",
    "TokenTree",
    "export",
    "flatten",
    "ingest",
    "load_token_file",
    "resolve",
    "run_checks",
    "to_raw",
    "unflatten",
    "validate",
    "validate_aliases",
    "variable_name",
]
