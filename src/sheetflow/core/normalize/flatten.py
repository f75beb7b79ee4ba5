"""Collapse nested JSON values into single-level records."""
from __future__ import annotations

import json
import math
from typing import Any, Dict, Mapping

from .. import config
from ..models.records import Record


def stringify(value: Any) -> str:
    """String form of a JSON scalar (``None`` becomes an empty string)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if _is_container(value):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _format_float(value: float) -> str:
    # JSON number spelling: 1.0 -> "1", NaN/Infinity as json.dumps writes them.
    if math.isnan(value) or math.isinf(value):
        return json.dumps(value)
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def _flatten_into(
    out: Dict[str, str],
    key: str,
    value: Any,
    sep: str,
    joiner: str,
) -> None:
    if isinstance(value, dict):
        for child_key, child in value.items():
            _flatten_into(out, f"{key}{sep}{child_key}", child, sep, joiner)
    elif isinstance(value, list):
        if any(_is_container(item) for item in value):
            for idx, item in enumerate(value):
                _flatten_into(out, f"{key}{sep}{idx}", item, sep, joiner)
        else:
            out[key] = joiner.join(stringify(item) for item in value)
    else:
        out[key] = stringify(value)


def flatten_record(
    obj: Mapping[str, Any],
    prefix: str = "",
    sep: str = config.DEFAULT_KEY_SEPARATOR,
    joiner: str = config.DEFAULT_LIST_JOINER,
) -> Record:
    """Flatten ``obj`` depth-first.

    Nested mappings join keys with ``sep`` (``user_name``); lists of scalars
    become one ``joiner``-separated value; lists holding mappings or lists
    are indexed (``items_0_sku``). Empty mappings contribute no keys.
    """
    flattened: Dict[str, str] = {}
    for key, value in obj.items():
        new_key = f"{prefix}{sep}{key}" if prefix else str(key)
        _flatten_into(flattened, new_key, value, sep, joiner)
    return flattened
