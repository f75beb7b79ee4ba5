"""SheetFlow: turn loosely structured text into uniform spreadsheet rows."""

__version__ = "0.3.0"
