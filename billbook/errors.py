"""Exceptions raised by the bill book."""


class BillBookError(Exception):
    """Base class for bill book errors."""


class ValidationError(BillBookError, ValueError):
    """A bill is missing required fields or carries invalid values."""


class NotFoundError(BillBookError, KeyError):
    """No bill with the requested id exists."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Bill not found."


class StorageCorruptionError(BillBookError):
    """The persisted collection could not be parsed."""
