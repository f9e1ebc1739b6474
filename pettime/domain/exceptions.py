"""
Domain-specific exception hierarchy for the pettime application.
"""


class PetTimeError(Exception):
    """Base class for all application-level errors."""


class ApiError(PetTimeError):
    """Raised when shop or task data cannot be fetched or parsed."""


class ReminderStoreError(PetTimeError):
    """Raised when the pending reminder store cannot be read or written."""
