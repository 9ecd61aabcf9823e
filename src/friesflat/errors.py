"""Exception hierarchy shared across the converter."""

from __future__ import annotations


class FriesflatError(Exception):
    """Base class for errors raised by :mod:`friesflat`."""


class DocumentError(FriesflatError):
    """Raised when a single document cannot be converted.

    The runner treats this as local to the document: it is logged, the
    document is skipped and processing continues with the next one.
    """

    def __init__(self, document_id: str, message: str) -> None:
        super().__init__(f"{document_id}: {message}")
        self.document_id = document_id


class ConfigError(FriesflatError):
    """Raised when a settings file cannot be loaded or contains unknown keys."""


__all__ = ["FriesflatError", "DocumentError", "ConfigError"]
