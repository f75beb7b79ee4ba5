"""Core exception hierarchy."""

REMEDIATION_MESSAGE = (
    "Could not parse the document. Please ensure:\n"
    "- The document contains valid data (JSON or key-value pairs)\n"
    "- Each entry is properly formatted\n"
    "- There are no special characters or formatting issues"
)


class SheetflowError(Exception):
    """Base class for SheetFlow errors."""


class DocumentError(SheetflowError):
    """Document loading or decoding error."""


class ExtractionError(SheetflowError):
    """Orchestration or extraction error."""


class NoEntriesError(ExtractionError):
    """No valid data entries found by any extractor."""

    def __init__(self, message: str = REMEDIATION_MESSAGE) -> None:
        super().__init__(message)


class ExportError(SheetflowError):
    """Spreadsheet export rejected its input."""
