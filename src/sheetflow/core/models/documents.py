"""Document sources and text decoding."""
from __future__ import annotations

import asyncio
import io
from dataclasses import dataclass
from pathlib import Path
from typing import List, Protocol, runtime_checkable

from docx import Document

from .. import config
from ..errors import DocumentError


@runtime_checkable
class DocSource(Protocol):
    @property
    def is_document(self) -> bool:
        ...

    def load(self) -> bytes | str:
        ...

    def display_name(self) -> str:
        ...


@dataclass
class FileSource:
    path: Path

    @property
    def is_document(self) -> bool:
        return self.path.suffix.lower() in config.WORD_DOCUMENT_SUFFIXES

    def load(self) -> bytes:
        try:
            return self.path.read_bytes()
        except FileNotFoundError as exc:
            raise DocumentError(f"File not found: {self.path}") from exc
        except OSError as exc:  # pragma: no cover
            raise DocumentError(f"Failed to read file {self.path}: {exc}") from exc

    def display_name(self) -> str:
        return self.path.name


@dataclass
class WordDocumentSource:
    data: bytes
    name: str = "document.docx"

    @property
    def is_document(self) -> bool:
        return True

    def load(self) -> bytes:
        return self.data

    def display_name(self) -> str:
        return self.name


@dataclass
class RawTextSource:
    text: str
    name: str = "inline"

    @property
    def is_document(self) -> bool:
        return False

    def load(self) -> str:
        return self.text

    def display_name(self) -> str:
        return self.name


def extract_docx_text(data: bytes) -> str:
    """Plain text of a Word payload: paragraphs, then table cells, one per line."""
    try:
        document = Document(io.BytesIO(data))
    except Exception as exc:
        raise DocumentError(f"Failed to read Word document: {exc}") from exc

    lines: List[str] = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        lines.append("")
        for row in table.rows:
            lines.extend(cell.text for cell in row.cells)
    return "\n".join(lines)


def decode_text(data: bytes | str, is_document: bool = False) -> str:
    if isinstance(data, str):
        return data
    if is_document:
        return extract_docx_text(data)
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DocumentError(f"Input is not valid UTF-8 text: {exc}") from exc


def load_text(source: DocSource) -> str:
    try:
        data = source.load()
    except DocumentError:
        raise
    except Exception as exc:  # pragma: no cover
        raise DocumentError(f"Failed to load {source.display_name()}: {exc}") from exc

    if not isinstance(data, (bytes, str)):
        raise DocumentError("Document loader must return bytes or string")
    return decode_text(data, is_document=source.is_document)


async def aload_text(source: DocSource) -> str:
    """Decode ``source`` off the event loop; Word decoding is blocking I/O."""
    return await asyncio.to_thread(load_text, source)
