"""Core defaults (no environment reads)."""
DEFAULT_KEY_SEPARATOR = "_"
DEFAULT_LIST_JOINER = ", "
DEFAULT_FRAGMENT_STRATEGY = "pattern"
FRAGMENT_STRATEGIES = ("pattern", "balanced")
DEFAULT_SHEET_NAME = "Data"
MAX_COLUMN_WIDTH = 50
WORD_DOCUMENT_SUFFIXES = (".docx",)
