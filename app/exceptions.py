"""
Student Records API — Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the three fault classes a request
       can end in: bad input, missing record, storage failure.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return a JSON `{"message": ...}` body with the matching HTTP status.
Who:   Raised by StudentService; StorageError is raised by the stores.

Exception Hierarchy:
    StudentAPIError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error

    StorageError          → raised by StudentStore implementations, never
                            reaches a route; StudentService wraps it in
                            DatabaseError.
"""

from typing import Any, Dict, Optional


class StudentAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged, not returned to the client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StudentAPIError):
    """
    Raised when a submitted record fails the schema check.

    HTTP:    400 Bad Request
    Message: echoes the underlying cause, e.g.
             "Student validation failed: age: Input should be a valid integer"
    """

    status_code = 400

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


class NotFoundError(StudentAPIError):
    """
    Raised when a requested record does not exist.

    HTTP:    404 Not Found

    The stores report a missing record as None (not an exception); the
    service layer converts None → NotFoundError so the route stays thin.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Student",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class DatabaseError(StudentAPIError):
    """
    Raised when a storage operation fails for any reason other than a
    missing record (connectivity, server error, unexpected fault).

    HTTP:    500 Internal Server Error
    Message: the underlying storage message is passed through.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(Exception):
    """
    Raised by StudentStore implementations when the backend fails.

    Keeps driver exception types (PyMongoError, ...) out of the service
    layer; `message` is the backend's own description of the fault.
    """

    def __init__(self, message: str, operation: Optional[str] = None):
        self.message = message
        self.operation = operation
        super().__init__(message)
