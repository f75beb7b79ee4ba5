"""Core engine for SheetFlow (extraction, flattening, merging)."""

from . import config, errors

__all__ = ["config", "errors"]
