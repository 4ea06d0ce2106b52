from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found (unknown short id or already purged)."""

    def __init__(self, message: str = "Session not found") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a browser tries to act on a session it did not create."""


class WindowClosedError(UserError):
    """Raised when an action is attempted outside the phase that allows it."""

    def __init__(self, message: str = "Session is no longer accepting submissions") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class InvalidPhoneError(ValidationError):
    """Raised when a phone number does not match the international format."""

    def __init__(self, message: str = "Phone number must be in international format, e.g. +233501234567") -> None:
        super().__init__(message)


class DuplicateNameError(UserError):
    """Raised when a name has already been submitted to the same session."""

    def __init__(self, message: str = "This name has already been submitted for this session") -> None:
        super().__init__(message)


class StoreUnavailableError(UserError):
    """Raised when the backing store cannot complete the request."""

    def __init__(self, message: str = "Storage is temporarily unavailable, please try again") -> None:
        super().__init__(message)


class ConflictError(Exception):
    """Unique constraint race in the store. Retryable, never shown to the user."""
