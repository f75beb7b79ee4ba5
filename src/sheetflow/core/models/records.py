"""Record and result types."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

# Flat, string-keyed, string-valued row. Key order is insertion order.
Record = Dict[str, str]


@dataclass
class ParseResult:
    records: List[Record]
    columns: List[str] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)