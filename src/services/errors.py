# src/services/errors.py
from __future__ import annotations

from typing import Optional

from src.models.upload import UploadRecord


class PresignError(RuntimeError):
    """Base class for failures of a single upload invocation."""


class ConfigurationError(PresignError):
    """Raised when the environment does not describe a usable handler."""


class IssuanceError(PresignError):
    """Raised when a presigned URL cannot be generated for an object."""


class PersistenceError(PresignError):
    """Raised when the ledger rejects the upload record."""

    def __init__(self, message: str, record: Optional[UploadRecord] = None) -> None:
        super().__init__(message)
        self.record = record


class DispatchError(PresignError):
    """Raised when the notification could not be published.

    The ledger record has already been written when this is raised.
    """

    def __init__(self, message: str, record: Optional[UploadRecord] = None) -> None:
        super().__init__(message)
        self.record = record


__all__ = [
    "PresignError",
    "ConfigurationError",
    "IssuanceError",
    "PersistenceError",
    "DispatchError",
]
