"""SheetFlow SDK: configuration, client, spreadsheet export and CLI."""
