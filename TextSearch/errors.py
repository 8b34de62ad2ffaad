"""
Exceptions raised by the TextSearch core.
"""


class SearchError(Exception):
    """Base class for all TextSearch errors."""


class CorpusError(SearchError):
    """The document directory is missing or cannot be listed."""


class DocumentReadError(SearchError):
    """A single document could not be read or decoded."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Cannot read document '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ResultIndexError(SearchError, IndexError):
    """Requested result position does not exist (or no query was run yet)."""


class EmptyQueryError(SearchError):
    """None of the query terms are part of the vocabulary."""
