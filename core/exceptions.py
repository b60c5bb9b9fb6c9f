"""
Custom exceptions for PrintShop Desk.

Exception Hierarchy:
    PrintShopError (base)
    ├── ValidationError  - Request payload failed validation (HTTP 400)
    ├── NotFoundError    - Unknown resource id (HTTP 404)
    ├── PersistenceError - Relational store rejected or failed a write (HTTP 500)
    └── RenderError      - PDF document could not be produced (HTTP 500)

Usage:
    Services raise these; the error handlers registered in create_app()
    translate each one into a JSON response with the matching status code.
    Catalog lookup misses are NOT errors and never raise.
"""

from typing import Optional, Dict, Any, List


class PrintShopError(Exception):
    """
    Base exception for all PrintShop Desk errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_response(self) -> Dict[str, Any]:
        """JSON body sent to the client."""
        return {"error": self.message}


# =============================================================================
# CLIENT ERRORS - the request is at fault
# =============================================================================

class ValidationError(PrintShopError):
    """
    One or more fields of a request payload are missing or malformed.

    Carries a list of {"field", "message"} entries so a UI can attach each
    message to its input.
    """

    status_code = 400

    def __init__(self, field_errors: List[Dict[str, str]], message: str = "Validation failed"):
        super().__init__(message, {"fields": field_errors})
        self.field_errors = field_errors

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        """Shortcut for a payload with exactly one bad field."""
        return cls([{"field": field, "message": message}])

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.message, "fields": self.field_errors}


class NotFoundError(PrintShopError):
    """
    A resource id in the URL does not exist.

    Typical causes:
    - Stale link to a deleted price list entry or customer
    - Receipt requested for an order id that was never created
    """

    status_code = 404

    def __init__(self, resource: str, resource_id: Any):
        message = f"{resource} not found"
        super().__init__(message, {"resource": resource, "id": resource_id})
        self.resource = resource
        self.resource_id = resource_id


# =============================================================================
# SERVER ERRORS - the request was fine, the server could not complete it
# =============================================================================

class PersistenceError(PrintShopError):
    """
    The relational store failed while reading or writing.

    The session has already been rolled back when this is raised; nothing
    from the failed operation was committed.
    """

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        message = f"Failed to {operation}"
        details = {"operation": operation}
        if cause is not None:
            details["cause"] = repr(cause)
        super().__init__(message, details)
        self.operation = operation


class RenderError(PrintShopError):
    """
    A PDF document (receipt or report) could not be generated.

    Typical causes:
    - Corrupt itemized breakdown JSON in a stored receipt
    - ReportLab failure while laying out the page
    """

    def __init__(self, document: str, cause: Optional[BaseException] = None):
        message = f"Failed to generate {document} PDF"
        details = {"document": document}
        if cause is not None:
            details["cause"] = repr(cause)
        super().__init__(message, details)
        self.document = document
