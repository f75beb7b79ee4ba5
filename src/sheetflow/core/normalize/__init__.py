"""Flattening, tabular normalization and schema merging."""

from .flatten import flatten_record, stringify
from .merge import merge_entries, remove_duplicates, schema_union
from .table import normalize_data

__all__ = [
    "flatten_record",
    "stringify",
    "merge_entries",
    "remove_duplicates",
    "schema_union",
    "normalize_data",
]
