"""
Narration script sanitizer.

Generated scripts carry structural annotations such as ``[HOOK]`` or a
leading ``BODY:`` label. The video provider reads its input aloud verbatim, so
only the spoken text may be sent.
"""

import re

SECTION_LABELS = ("HOOK", "BODY", "CLOSING STATEMENT", "CTA", "CLOSING", "STATEMENT")

_BRACKETED = re.compile(r"\[[^\]]*\]")
_STRAY_BRACKET = re.compile(r"[\[\]]")
# Longest alternatives first so "CLOSING STATEMENT" is not consumed as "CLOSING".
_SECTION_LABEL = re.compile(
    r"^(?:"
    + "|".join(re.escape(label) for label in sorted(SECTION_LABELS, key=len, reverse=True))
    + r")\b:?\s*",
    re.IGNORECASE | re.MULTILINE,
)
_WHITESPACE = re.compile(r"\s+")
_REPEATED_DOTS = re.compile(r"\.{2,}")
_REPEATED_MARKS = re.compile(r"([!?])\1+")


def sanitize_script(raw: str) -> str:
    """
    Convert an annotated script into spoken-only narration text.

    Steps, in order:
        1. Drop every ``[...]`` span (non-greedy), brackets included.
        2. Drop any unmatched ``[`` or ``]``.
        3. Drop section labels at the start of a line, with an optional colon.
        4. Collapse whitespace runs (newlines included) to one space.
        5. Trim.
        6. Collapse repeated ``!`` and ``?`` to one mark; a run of dots becomes
           a single ``.``, or a single ``...`` ellipsis when three or more.

    The result never contains brackets and sanitizing it again is a no-op.

    Example:
        >>> sanitize_script("[HOOK] Did you know...?? [CTA] Subscribe now!!!")
        'Did you know...? Subscribe now!'
    """
    if not raw:
        return ""

    cleaned = _BRACKETED.sub("", raw)
    cleaned = _STRAY_BRACKET.sub("", cleaned)
    cleaned = _strip_section_labels(cleaned)
    cleaned = _WHITESPACE.sub(" ", cleaned)
    cleaned = cleaned.strip()
    cleaned = _REPEATED_DOTS.sub(_collapse_dots, cleaned)
    cleaned = _REPEATED_MARKS.sub(r"\1", cleaned)

    # Collapsing whitespace can move a label to the start of the text
    # ("  HOOK: ..."); strip again so the output is a fixed point.
    if _SECTION_LABEL.match(cleaned):
        return sanitize_script(cleaned)
    return cleaned


def _collapse_dots(match: re.Match) -> str:
    return "..." if len(match.group(0)) >= 3 else "."


def _strip_section_labels(text: str) -> str:
    previous = None
    while previous != text:
        previous = text
        text = _SECTION_LABEL.sub("", text)
    return text
