"""Parsing helpers for model output."""

from .json_parser import (
    parse_json_response,
    extract_largest_balanced_json,
    fix_json_escapes,
    strip_code_fences,
)

__all__ = [
    "parse_json_response",
    "extract_largest_balanced_json",
    "fix_json_escapes",
    "strip_code_fences",
]
