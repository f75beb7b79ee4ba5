"""Deduplicate records and pad them to a common schema."""
from __future__ import annotations

import json
from typing import Iterable, List, Set

from ..models.records import Record


def canonical_key(record: Record) -> str:
    return json.dumps(record, sort_keys=True, ensure_ascii=False)


def remove_duplicates(entries: Iterable[Record]) -> List[Record]:
    """Keep the first occurrence of each record; key order does not matter."""
    seen: Set[str] = set()
    unique: List[Record] = []
    for entry in entries:
        key = canonical_key(entry)
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)
    return unique


def schema_union(entries: Iterable[Record]) -> List[str]:
    """All keys across ``entries`` in order of first appearance."""
    keys: dict = {}
    for entry in entries:
        for key in entry:
            keys.setdefault(key, None)
    return list(keys)


def pad_records(entries: Iterable[Record], columns: List[str]) -> List[Record]:
    return [{key: entry.get(key, "") for key in columns} for entry in entries]


def merge_entries(entries: Iterable[Record]) -> List[Record]:
    unique = remove_duplicates(entries)
    # Padding can make distinct records equal ({a} vs {a, b: ""}).
    return remove_duplicates(pad_records(unique, schema_union(unique)))
