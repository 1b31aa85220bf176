from __future__ import annotations

from typing import Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ImportFormatError(DomainError):
    """Raised when an uploaded file cannot be read or lacks a required column."""

    def __init__(self, message: str, *, headers: Sequence[str] = ()):
        super().__init__(message)
        self.headers = tuple(headers)


class RemoteStoreError(Exception):
    """Raised when a call to the remote row store fails."""

    def __init__(self, message: str, *, table: str | None = None):
        super().__init__(message)
        self.table = table
