"""Turn parsed JSON values into a uniform list of flat records."""
from __future__ import annotations

import logging
from typing import Any, List

from .. import config
from ..models.records import Record
from .flatten import flatten_record, stringify

logger = logging.getLogger(__name__)


def _rows_to_records(data: List[Any]) -> List[Record]:
    """First row supplies lower-cased column names; the rest are values."""
    headers = [stringify(h).lower() for h in data[0]]
    records: List[Record] = []
    for row in data[1:]:
        if not isinstance(row, list):
            logger.debug("Skipping non-list row in tabular input: %r", type(row).__name__)
            continue
        record: Record = {}
        for idx, header in enumerate(headers):
            record[header] = stringify(row[idx]) if idx < len(row) else ""
        records.append(record)
    return records


def is_tabular(data: Any) -> bool:
    return isinstance(data, list) and bool(data) and isinstance(data[0], list)


def normalize_data(
    data: Any,
    sep: str = config.DEFAULT_KEY_SEPARATOR,
    joiner: str = config.DEFAULT_LIST_JOINER,
) -> List[Record]:
    if not isinstance(data, list):
        data = [data]

    if is_tabular(data):
        return _rows_to_records(data)

    records: List[Record] = []
    for entry in data:
        if isinstance(entry, dict):
            records.append(flatten_record(entry, sep=sep, joiner=joiner))
        else:
            records.append({"value": stringify(entry)})
    return records
