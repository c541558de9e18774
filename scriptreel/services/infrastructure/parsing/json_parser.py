"""
Tolerant JSON parsing for LLM output.

Models asked for strict JSON still wrap it in markdown fences, prepend prose
or emit invalid escapes. ``parse_json_response`` tries progressively looser
strategies and returns a default when none succeeds.
"""

import json
import re
from typing import Any, Dict, List, Optional


def strip_code_fences(text: str) -> str:
    """Drop markdown fence lines (```json ... ```), keeping their content."""
    text = text.strip()
    if "```" not in text:
        return text
    lines = [line for line in text.split("\n") if not line.strip().startswith("```")]
    return "\n".join(lines).strip()


def extract_largest_balanced_json(text: str, expect_array: bool = False) -> Optional[str]:
    """Extract the largest balanced JSON object/array from text.

    Scans for balanced braces/brackets while respecting string literals and
    escapes, so bracketed markers inside script strings do not confuse it.

    Args:
        text: Source text potentially containing JSON.
        expect_array: If True, only return a JSON array (starts with '[').
    """
    if not text:
        return None

    in_string = False
    escape = False
    stack: List[str] = []
    start_idx: Optional[int] = None
    best: Optional[str] = None

    for i, ch in enumerate(text):
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
            continue

        if ch in "{[":
            if not stack:
                start_idx = i
            stack.append(ch)
            continue

        if ch in "}]":
            if not stack:
                continue
            open_ch = stack[-1]
            if (open_ch == "{" and ch == "}") or (open_ch == "[" and ch == "]"):
                stack.pop()
                if not stack and start_idx is not None:
                    candidate = text[start_idx:i + 1]
                    start_idx = None
                    if expect_array and not candidate.startswith("["):
                        continue
                    if best is None or len(candidate) > len(best):
                        best = candidate
            else:
                # Mismatched closing; reset state.
                stack.clear()
                start_idx = None

    return best


def fix_json_escapes(text: str) -> str:
    """Escape lone backslashes while preserving valid JSON escapes."""
    valid_escapes = {
        '\\"': '<<QUOTE>>',
        '\\\\': '<<BACKSLASH>>',
        '\\/': '<<SLASH>>',
        '\\b': '<<BACKSPACE>>',
        '\\f': '<<FORMFEED>>',
        '\\n': '<<NEWLINE>>',
        '\\r': '<<RETURN>>',
        '\\t': '<<TAB>>',
    }

    for old, new in valid_escapes.items():
        text = text.replace(old, new)
    text = re.sub(r'\\u([0-9a-fA-F]{4})', r'<<UNICODE_\1>>', text)

    text = text.replace('\\', '\\\\')

    for old, new in valid_escapes.items():
        text = text.replace(new, old)
    text = re.sub(r'<<UNICODE_([0-9a-fA-F]{4})>>', r'\\u\1', text)

    return text


def parse_json_response(text: str, default: Optional[Any] = None) -> Any:
    """Parse JSON from an LLM response with error recovery.

    Handles:
    - Markdown code block wrapping (```json ... ```)
    - Prose before or after the payload
    - Invalid escape sequences

    Returns:
        Parsed JSON value, or ``default`` ({} when omitted) if parsing fails
    """
    if default is None:
        default = {}
    if not text:
        return default

    text = strip_code_fences(text)

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    try:
        return json.loads(fix_json_escapes(text))
    except json.JSONDecodeError:
        pass

    candidate = extract_largest_balanced_json(text)
    if candidate:
        for attempt in (candidate, fix_json_escapes(candidate)):
            try:
                return json.loads(attempt)
            except json.JSONDecodeError:
                continue

    return default
