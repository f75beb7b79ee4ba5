"""Fallback extraction of ``key: value`` / ``key = value`` blocks."""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Tuple

from ..models.records import Record

logger = logging.getLogger(__name__)

# Blank lines and any brace/bracket act as block boundaries, paired or not.
BLOCK_SPLIT_RE = re.compile(r"(?:\r?\n\s*\r?\n|\{|\}|\[|\])+")
LINE_SPLIT_RE = re.compile(r"[\n;]+")
PAIR_RE = re.compile(r"^([^:=]+)[:=]\s*(.+)$")

_QUOTES_RE = re.compile(r"['\"]")
_KEY_GAPS_RE = re.compile(r"[\s_]+")
_KEY_JUNK_RE = re.compile(r"[^\w\s-]")
_EDGE_QUOTES_RE = re.compile(r"^[\"']|[\"']$")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_key(raw: str) -> str:
    key = _QUOTES_RE.sub("", raw.strip())
    key = _KEY_GAPS_RE.sub("_", key)
    key = _KEY_JUNK_RE.sub("", key)
    return key.lower()


def normalize_value(raw: str) -> str:
    value = _EDGE_QUOTES_RE.sub("", raw.strip())
    return _WHITESPACE_RE.sub(" ", value)


def split_blocks(text: str) -> List[str]:
    return [block for block in BLOCK_SPLIT_RE.split(text) if block.strip()]


def split_lines(block: str) -> List[str]:
    return [line for line in LINE_SPLIT_RE.split(block) if line.strip()]


def match_pair(line: str) -> Tuple[str, str] | None:
    """Return the normalized ``(key, value)`` of a line, or None."""
    match = PAIR_RE.match(line)
    if not match:
        return None
    key = normalize_key(match.group(1))
    value = normalize_value(match.group(2))
    if not key or not value:
        return None
    return key, value


def extract_key_value_pairs(text: str) -> List[Record]:
    """Build one record per block that holds at least one key/value pair."""
    entries: List[Record] = []
    blocks = split_blocks(text)
    for block in blocks:
        entry: Dict[str, str] = {}
        for line in split_lines(block):
            pair = match_pair(line)
            if pair is None:
                continue
            key, value = pair
            entry[key] = value
        if entry:
            entries.append(entry)

    logger.debug("Key-value blocks: %d scanned, %d records", len(blocks), len(entries))
    return entries
