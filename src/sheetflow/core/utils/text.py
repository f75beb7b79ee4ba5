"""Text repair helpers applied to candidate JSON fragments.

Every helper is pure: it returns a new string and never touches its input.
"""
from __future__ import annotations

import re

_INVISIBLE_RE = re.compile(r"[\u200b-\u200d\ufeff]")
_SINGLE_QUOTES_RE = re.compile(r"[\u2018\u2019]")
_DOUBLE_QUOTES_RE = re.compile(r"[\u201c\u201d]")
# Line break right before a closing brace/bracket, a quote or a backslash.
_BREAK_BEFORE_CLOSER_RE = re.compile(r'\n\s*(["}\]\\])')
# Stray comma + line break right after an opening brace/bracket.
_COMMA_AFTER_OPENER_RE = re.compile(r"([{\[]),\s*\n\s*")
_ESCAPED_BREAK_RE = re.compile(r"\\[nr]")


def strip_invisible(text: str) -> str:
    """Remove zero-width characters and byte-order marks."""
    return _INVISIBLE_RE.sub("", text)


def straighten_quotes(text: str) -> str:
    text = _SINGLE_QUOTES_RE.sub("'", text)
    return _DOUBLE_QUOTES_RE.sub('"', text)


def collapse_broken_lines(text: str) -> str:
    text = _BREAK_BEFORE_CLOSER_RE.sub(r"\1", text)
    return _COMMA_AFTER_OPENER_RE.sub(r"\1", text)


def flatten_escaped_breaks(text: str) -> str:
    """Replace literal ``\\n`` / ``\\r`` escape sequences with a space."""
    return _ESCAPED_BREAK_RE.sub(" ", text)


def repair_fragment(text: str) -> str:
    """Clean a candidate fragment so a strict JSON parse has a chance."""
    text = strip_invisible(text)
    text = straighten_quotes(text)
    text = collapse_broken_lines(text)
    return flatten_escaped_breaks(text)
