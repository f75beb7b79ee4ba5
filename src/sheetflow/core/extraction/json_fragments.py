"""Locate and parse JSON fragments embedded in free text.

Two candidate scanners are available:

- ``pattern``: a greedy regular expression that tolerates one level of
  nested braces/brackets. It can over-match across unrelated fragments and
  under-match deeper nesting; both are accepted limitations of the heuristic.
- ``balanced``: a stack-based scanner that tracks string literals and yields
  each outermost balanced span.

Either way every candidate is repaired and parsed on its own; a candidate
that fails to parse is skipped.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterator, List

from .. import config
from ..errors import ExtractionError
from ..utils.text import repair_fragment

logger = logging.getLogger(__name__)

FRAGMENT_RE = re.compile(
    r"(\{(?:[^{}]|(?:\{[^{}]*\}))*\}"
    r"|\[(?:[^\[\]]|(?:\[.*?\]))*\])"
)

_CLOSERS = {"{": "}", "[": "]"}


def iter_pattern_fragments(text: str) -> Iterator[str]:
    for match in FRAGMENT_RE.finditer(text):
        yield match.group(0)


def iter_balanced_fragments(text: str) -> Iterator[str]:
    """Yield outermost ``{...}`` / ``[...]`` spans with matching delimiters.

    An unexpected closer resets the scan. An opener that is never closed is
    skipped and scanning resumes right after it.
    """
    pos = 0
    while pos < len(text):
        stack: List[str] = []
        start = -1
        in_string = False
        escaped = False

        for idx in range(pos, len(text)):
            ch = text[idx]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue

            if ch in _CLOSERS:
                if not stack:
                    start = idx
                stack.append(_CLOSERS[ch])
            elif ch in ("}", "]"):
                if not stack:
                    continue
                if stack[-1] != ch:
                    stack = []
                    continue
                stack.pop()
                if not stack:
                    yield text[start : idx + 1]
            elif ch == '"' and stack:
                in_string = True

        if not stack:
            return
        pos = start + 1


def iter_candidate_fragments(text: str, strategy: str = config.DEFAULT_FRAGMENT_STRATEGY) -> Iterator[str]:
    if strategy == "pattern":
        return iter_pattern_fragments(text)
    if strategy == "balanced":
        return iter_balanced_fragments(text)
    raise ExtractionError(f"Unknown fragment strategy: {strategy}")


def parse_fragment(fragment: str) -> Any:
    """Repair and strictly parse one fragment; raises ``ValueError`` on failure."""
    return json.loads(repair_fragment(fragment))


def find_json_objects(text: str, strategy: str = config.DEFAULT_FRAGMENT_STRATEGY) -> List[Any]:
    """Return every value parsed from fragments of ``text``, in order of appearance.

    Arrays are spliced into the result element by element.
    """
    results: List[Any] = []
    skipped = 0
    for fragment in iter_candidate_fragments(text, strategy):
        try:
            parsed = parse_fragment(fragment)
        except (ValueError, RecursionError):
            skipped += 1
            continue
        if isinstance(parsed, list):
            results.extend(parsed)
        else:
            results.append(parsed)

    logger.debug("JSON fragments: %d values parsed, %d candidates skipped", len(results), skipped)
    return results
