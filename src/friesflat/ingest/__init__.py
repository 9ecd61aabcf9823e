"""Locate FRIES part files on disk and map them to document ids."""

from .discovery import (
    DocumentFiles,
    discover_documents,
    read_collections,
    validate_document,
)
from .filename_map import load_filename_map

__all__ = [
    "DocumentFiles",
    "discover_documents",
    "load_filename_map",
    "read_collections",
    "validate_document",
]
