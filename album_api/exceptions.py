"""
Album API - Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for each failure class the API reports.
How:   Each exception carries a message, an optional context dict and the HTTP
       status code it maps to. The global exception handler registered in
       main.py turns any AlbumAPIError into `{"error": <message>}`.
Who:   Raised by routes, the AlbumStore and the configuration loader.

Exception Hierarchy:
    AlbumAPIError (base)          → 500
    ├── ClientInputError          → 400 Bad Request (malformed body, empty id)
    ├── NotFoundError             → 404 Not Found
    ├── MethodNotAllowedError     → 405 Method Not Allowed
    ├── StoreError                → 500 Internal Server Error
    └── ConfigurationError        → startup only, never rendered over HTTP

Note on StoreError:
    The message of a StoreError is the database driver's own message and is
    returned to the client verbatim, duplicate-key violations included.
"""

from typing import Any, Dict, Iterable, Optional


class AlbumAPIError(Exception):
    """
    Base exception for all Album API errors.

    Attributes:
        message:      Text placed in the `error` field of the JSON response
        context:      Additional debug info (logged, not returned)
        status_code:  HTTP status used by the global handler
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ClientInputError(AlbumAPIError):
    """
    Raised when the request itself is unusable.

    When:  Body is not valid JSON / not an Album, or the album id is empty.
    HTTP:  400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid request",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(AlbumAPIError):
    """
    Raised when no row matches the requested album id.

    When:  GET or DELETE /albums/{id} for an id that is not stored.
    HTTP:  404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "album",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class MethodNotAllowedError(AlbumAPIError):
    """
    Raised when a known path is called with a method it does not serve.

    HTTP:  405 Method Not Allowed, with an Allow header built from `allowed`.
    """

    status_code = 405

    def __init__(
        self,
        allowed: Iterable[str] = (),
        context: Optional[Dict[str, Any]] = None,
    ):
        self.allowed = list(allowed)
        ctx = context or {}
        ctx["allowed"] = self.allowed
        super().__init__(message="Method not allowed", context=ctx)


class StoreError(AlbumAPIError):
    """
    Raised when a database operation fails for any reason other than
    "no matching row".

    When:  Connection refused, unique-constraint violation, missing table, etc.
    HTTP:  500 Internal Server Error, underlying driver message in the body.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(AlbumAPIError):
    """
    Raised when required configuration is missing at startup.

    The lifespan lets it propagate so uvicorn aborts before serving requests.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
