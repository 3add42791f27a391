"""
Food Ordering Backend — Custom Exception Hierarchy
====================================================

What:  Application-specific exceptions for each failure kind.
How:   Each exception carries a user-safe message and an optional context
       dict. Global handlers (registered in main.py) map them to HTTP
       status codes and a JSON body with a `message` field.
Who:   Raised by stores and route helpers; caught by the global handlers.

Exception Hierarchy:
    FoodOrderingError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── AuthError         → 401 Unauthorized
    ├── NotFoundError     → 404 Not Found
    ├── ConflictError     → 409 Conflict
    └── InternalError     → 500 Internal Server Error

`context` is logged server-side and never returned to the client.
"""

from typing import Any, Dict, Optional


class FoodOrderingError(Exception):
    """
    Base exception for all application errors.

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


class ValidationError(FoodOrderingError):
    """
    Raised when client input is missing or malformed.

    When:    Empty username/email/password, missing menu fields, negative
             price, request body that fails schema parsing.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthError(FoodOrderingError):
    """
    Raised when credentials do not match.

    The `reason` distinguishes "not found" from "bad credentials" for the
    server log; the HTTP response uses the same message for both.
    HTTP:    401 Unauthorized
    """

    NOT_FOUND = "not found"
    BAD_CREDENTIALS = "bad credentials"
    INVALID_TOKEN = "invalid token"

    def __init__(
        self,
        reason: str = BAD_CREDENTIALS,
        message: str = "Invalid credentials.",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(message=message, context=ctx)
        self.reason = reason


class NotFoundError(FoodOrderingError):
    """
    Raised when no entity exists at the requested identifier.

    SQLAlchemy returns None for missing rows; stores convert that into this
    exception. Malformed identifiers are reported the same way.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"{resource.capitalize()} not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class ConflictError(FoodOrderingError):
    """
    Raised when a write would violate a uniqueness rule.

    When:    Registering an email or username that is already taken, either
             detected by the pre-insert lookup or by the unique index.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Resource already exists.",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InternalError(FoodOrderingError):
    """
    Raised when a store or driver operation fails unexpectedly.

    The client message is always generic; the driver error type is kept in
    `context` for the server log.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A server error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
