"""Extraction orchestrator."""
from __future__ import annotations

import json
import logging
from typing import Any, List

from ..errors import NoEntriesError
from ..models.documents import DocSource, aload_text, load_text
from ..models.options import ParseOptions
from ..models.records import ParseResult, Record
from ..normalize.merge import merge_entries, schema_union
from ..normalize.table import normalize_data
from ..utils.text import strip_invisible
from .json_fragments import find_json_objects
from .key_values import extract_key_value_pairs

logger = logging.getLogger(__name__)

_UNSET = object()


# --- internal helpers ---

def _strict_parse(text: str) -> Any:
    """Parse the whole text as JSON; ``_UNSET`` when it is not JSON."""
    try:
        return json.loads(strip_invisible(text))
    except (ValueError, RecursionError):
        return _UNSET


def _scan_text(text: str, options: ParseOptions) -> tuple[List[Record], List[Record]]:
    json_entries: List[Record] = []
    values = find_json_objects(text, options.fragment_strategy)
    if values:
        json_entries = normalize_data(values, sep=options.key_separator, joiner=options.list_joiner)

    kv_entries: List[Record] = []
    if options.extract_key_values:
        kv_entries = extract_key_value_pairs(text)
    return json_entries, kv_entries


# --- public API ---

def collect_entries(text: str, document: bool = False, options: ParseOptions | None = None) -> tuple[List[Record], dict]:
    """Run the extractors and return the concatenated, unmerged records.

    Plain text input is first tried as one JSON value; documents always go
    through fragment scanning and the key-value fallback.
    """
    opts = options or ParseOptions()
    if not document:
        parsed = _strict_parse(text)
        if parsed is not _UNSET:
            entries = normalize_data(parsed, sep=opts.key_separator, joiner=opts.list_joiner)
            return entries, {"strategy": "json", "json_entries": len(entries), "kv_entries": 0}

    json_entries, kv_entries = _scan_text(text, opts)
    stats = {"strategy": "scan", "json_entries": len(json_entries), "kv_entries": len(kv_entries)}
    return json_entries + kv_entries, stats


def parse_text(
    text: str,
    document: bool = False,
    options: ParseOptions | None = None,
    name: str = "inline",
) -> ParseResult:
    entries, stats = collect_entries(text, document=document, options=options)
    # A record without keys (e.g. from "{}") carries nothing to tabulate.
    entries = [entry for entry in entries if entry]
    if not entries:
        logger.debug("No entries found in %s", name)
        raise NoEntriesError()

    records = merge_entries(entries)
    meta = {
        "source": name,
        "document": document,
        **stats,
        "total_entries": len(entries),
        "duplicates_removed": len(entries) - len(records),
    }
    logger.debug(
        "Parsed %s: %d entries, %d records after merge", name, len(entries), len(records)
    )
    return ParseResult(records=records, columns=schema_union(records), meta=meta)


def parse_source(source: DocSource, options: ParseOptions | None = None) -> ParseResult:
    text = load_text(source)
    return parse_text(text, document=source.is_document, options=options, name=source.display_name())


async def aparse_source(source: DocSource, options: ParseOptions | None = None) -> ParseResult:
    """Async variant of :func:`parse_source`; only decoding is awaited."""
    text = await aload_text(source)
    return parse_text(text, document=source.is_document, options=options, name=source.display_name())
