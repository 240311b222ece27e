"""
Fleet API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the CRUD error model.
Why:   Each failure kind maps to exactly one HTTP status code and one error slug,
       so every endpoint fails the same way.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses.
Who:   Raised by the store and the resource services; caught by global handlers.

Exception Hierarchy:
    FleetError (base)            → 500 Internal Server Error
    ├── ValidationError          → 400 Bad Request (missing/mistyped field)
    ├── BadRequestError          → 400 Bad Request (malformed identifier or filter)
    ├── NotFoundError            → 404 Not Found
    └── PersistenceError         → 500 Internal Server Error (store failure)
"""

from typing import Any, Dict, Optional, Sequence


class FleetError(Exception):
    """
    Base exception for all Fleet API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where the handler allows)
    """

    status_code = 500
    error = "internal_server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(FleetError):
    """
    Raised when a request body is missing a required field or carries a wrong type.

    HTTP:  400 Bad Request. FastAPI's own 422 body validation is normalized to
           this status as well, so clients see one code for invalid input.
    """

    status_code = 400
    error = "validation_error"

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

    @classmethod
    def from_errors(cls, errors: Sequence[Dict[str, Any]]) -> "ValidationError":
        """
        Build from pydantic-style error dicts (`loc`, `msg`).

        Used both for FastAPI's RequestValidationError and for bodies validated
        inside the services. The `body` prefix FastAPI puts in `loc` is dropped.
        """
        problems = []
        for err in errors:
            loc = [str(part) for part in err.get("loc", ()) if part != "body"]
            problems.append({"field": ".".join(loc), "message": err.get("msg", "")})
        if not problems:
            return cls(message="Request body is invalid")
        first = problems[0]
        message = first["message"] or "Invalid value"
        if first["field"]:
            message = f"Invalid value for '{first['field']}': {message}"
        return cls(message=message, field=first["field"] or None, context={"errors": problems})


class BadRequestError(FleetError):
    """Raised when an identifier or filter value is syntactically malformed."""

    status_code = 400
    error = "bad_request"

    def __init__(
        self,
        message: str = "Bad request",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(FleetError):
    """
    Raised when a referenced record does not exist.

    When:  get, replace, merge or delete targeting an id that was never created
           or was already deleted. The store reports "zero records affected";
           the service turns that into this exception.
    HTTP:  404 Not Found
    """

    status_code = 404
    error = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class PersistenceError(FleetError):
    """
    Raised when the store is unreachable or fails internally.

    Security Note:
        The message returned to the client is always generic. Driver errors,
        SQL text and constraint names are logged server-side only.
    """

    status_code = 500
    error = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
