"""Core models."""

from .documents import DocSource, FileSource, RawTextSource, WordDocumentSource, aload_text, load_text
from .options import ParseOptions
from .records import ParseResult, Record

__all__ = [
    "DocSource",
    "FileSource",
    "RawTextSource",
    "WordDocumentSource",
    "aload_text",
    "load_text",
    "ParseOptions",
    "ParseResult",
    "Record",
]
