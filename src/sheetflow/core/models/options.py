"""Parse options."""
from __future__ import annotations

from dataclasses import dataclass

from .. import config
from ..errors import ExtractionError


@dataclass
class ParseOptions:
    key_separator: str = config.DEFAULT_KEY_SEPARATOR
    list_joiner: str = config.DEFAULT_LIST_JOINER
    fragment_strategy: str = config.DEFAULT_FRAGMENT_STRATEGY
    extract_key_values: bool = True

    def __post_init__(self) -> None:
        if self.fragment_strategy not in config.FRAGMENT_STRATEGIES:
            raise ExtractionError(f"Invalid fragment strategy: {self.fragment_strategy}")

    def merged(self, override: "ParseOptions | None") -> "ParseOptions":
        """Return a copy where every non-default field of ``override`` wins."""
        if override is None:
            return self
        defaults = ParseOptions()
        return ParseOptions(
            key_separator=self._pick(override.key_separator, self.key_separator, defaults.key_separator),
            list_joiner=self._pick(override.list_joiner, self.list_joiner, defaults.list_joiner),
            fragment_strategy=self._pick(
                override.fragment_strategy, self.fragment_strategy, defaults.fragment_strategy
            ),
            extract_key_values=override.extract_key_values and self.extract_key_values,
        )

    @staticmethod
    def _pick(new, current, default):
        return current if new == default else new
