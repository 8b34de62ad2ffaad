"""
File-system access for the search engine: listing and reading plain-text documents.
"""
import os
from typing import List

from loguru import logger

from .errors import CorpusError, DocumentReadError


def list_documents(directory: str) -> List[str]:
    """
    List the documents directly inside a directory (non-recursive).

    Args:
        directory: Path to the document directory

    Returns:
        Sorted list of absolute file paths
    """
    if not os.path.exists(directory):
        raise CorpusError(f"Directory '{directory}' does not exist")
    if not os.path.isdir(directory):
        raise CorpusError(f"'{directory}' is not a directory")

    try:
        entries = sorted(os.listdir(directory))
    except OSError as e:
        raise CorpusError(f"Cannot list directory '{directory}': {e}") from e

    paths = []
    for entry in entries:
        path = os.path.abspath(os.path.join(directory, entry))
        if not os.path.isfile(path):
            logger.debug("Skipping {}, not a regular file", path)
            continue
        paths.append(path)
    return paths


def read_document(path: str, encoding: str = "utf-8") -> str:
    """Read the full text of one document."""
    try:
        with open(path, "r", encoding=encoding) as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(path, str(e)) from e
