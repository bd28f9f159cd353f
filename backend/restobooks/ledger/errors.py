# Overview: Error types raised by the pure ledger core.

from __future__ import annotations


class LedgerError(Exception):
    """Base class for ledger core errors."""


class MalformedDateError(LedgerError, ValueError):
    """A calendar date could not be parsed into a valid YYYYMMDD day."""

    def __init__(self, value, reason: str | None = None):
        self.value = value
        message = f"malformed calendar date: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
