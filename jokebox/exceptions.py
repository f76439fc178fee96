"""
Jokebox — Custom Exception Hierarchy
=====================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return responses with the matching HTTP status code.
Who:   Raised by the store, services and routes; caught by global handlers.

Exception Hierarchy:
    JokeboxError (base)
    ├── ValidationError            → 400 Bad Request (client can fix)
    │   └── MissingFileError       → 400 Bad Request (upload without a file)
    ├── StoreError                 (raised by JokeStore, never reaches HTTP directly)
    │   ├── StoreConnectionError   → startup-fatal
    │   ├── StoreReadError
    │   └── StoreWriteError
    ├── ServiceError(kind)         → 500 Internal Server Error (plain text)
    └── FileStorageError           → 500 Internal Server Error

Store errors are translated into ServiceError by JokeService, so route
handlers only ever see ValidationError or ServiceError from it.
"""

import enum
from typing import Any, Dict, Optional


class JokeboxError(Exception):
    """
    Base exception for all Jokebox application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(JokeboxError):
    """
    Raised when client input fails validation.

    When:    Missing or empty title/description, malformed request body.
    HTTP:    400 Bad Request

    Title and description are validated together: a missing title and a
    missing description produce the same message.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MissingFileError(ValidationError):
    """Raised when POST /upload carries no `file` part (HTTP 400)."""

    def __init__(
        self,
        message: str = "No file uploaded",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreError(JokeboxError):
    """
    Base class for document store failures.

    The message here is for logs; JokeService replaces it with a
    user-facing one before anything reaches the client.
    """

    def __init__(
        self,
        message: str = "Document store operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreConnectionError(StoreError):
    """
    Raised when the store cannot be reached or authenticated against.

    When:    JokeStore.connect() fails, or an operation runs before connect().
    Effect:  Fatal at startup; the lifespan re-raises and the process exits.
    """

    def __init__(
        self,
        message: str = "Could not connect to the document store",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreReadError(StoreError):
    """Raised when count() or find_all() fails."""

    def __init__(
        self,
        message: str = "Could not read from the document store",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreWriteError(StoreError):
    """Raised when insert_one() or insert_many() fails."""

    def __init__(
        self,
        message: str = "Could not write to the document store",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ServiceErrorKind(str, enum.Enum):
    """Service-level failure categories. Only UNAVAILABLE exists today."""

    UNAVAILABLE = "unavailable"


class ServiceError(JokeboxError):
    """
    Raised by JokeService when the store fails during a request.

    HTTP:    500 Internal Server Error, body is the plain-text message

    Security Note:
        The message is always a fixed, generic string ("Error fetching jokes").
        Driver details (host names, auth errors) stay in `context` and logs.
    """

    def __init__(
        self,
        message: str = "Service unavailable",
        kind: ServiceErrorKind = ServiceErrorKind.UNAVAILABLE,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        ctx["kind"] = kind.value
        super().__init__(message=message, context=ctx)
        self.kind = kind


class FileStorageError(JokeboxError):
    """
    Raised when writing an uploaded file fails.

    When:    Disk full, permission denied, upload directory not writable.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
