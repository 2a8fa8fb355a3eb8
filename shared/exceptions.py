"""
Custom exceptions and error handling utilities.

This module centralizes all custom exceptions used throughout the application
and provides utilities for consistent error handling and reporting.
"""

from typing import Dict, Any, Optional


# =================== BASE EXCEPTIONS ===================

class HandoverAppError(Exception):
    """Base exception for all handover application errors."""

    http_status: int = 500

    def __init__(
        self,
        message: str,
        code: str = None,
        details: Dict[str, Any] = None,
        original_exception: Exception = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.replace("Error", "").lower()
        self.details = details or {}
        self.original_exception = original_exception

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        result = {
            "error": self.message,
            "code": self.code,
            "type": self.__class__.__name__
        }

        if self.details:
            result["details"] = self.details

        if self.original_exception:
            result["original_error"] = str(self.original_exception)

        return result


# =================== DATA AND VALIDATION EXCEPTIONS ===================

class DataValidationError(HandoverAppError):
    """Raised when data validation fails."""

    http_status = 400


class InvalidPageRequestError(DataValidationError):
    """Raised when page or size arguments are out of range."""

    def __init__(self, page: int, size: int, reason: str):
        super().__init__(
            message=f"Invalid page request (page={page}, size={size}): {reason}",
            code="invalid_page_request",
            details={"page": page, "size": size, "reason": reason}
        )
        self.page = page
        self.size = size


# =================== REPOSITORY EXCEPTIONS ===================

class RepositoryError(HandoverAppError):
    """Base class for repository errors."""
    pass


class EntityNotFoundError(RepositoryError):
    """Raised when requested entity is not found."""

    http_status = 404

    def __init__(self, entity_type: str, identifier: Any, details: Dict[str, Any] = None):
        message = f"{entity_type} not found: {identifier}"
        super().__init__(
            message=message,
            code="entity_not_found",
            details={
                "entity_type": entity_type,
                "identifier": identifier,
                **(details or {})
            }
        )
        self.entity_type = entity_type
        self.identifier = identifier


class ConsistencyError(RepositoryError):
    """Raised when a unit of work could not be committed as a whole."""

    def __init__(
        self,
        operation: str,
        original_exception: Exception = None,
        conflict: bool = False,
    ):
        super().__init__(
            message=f"Transaction failed during {operation}; no changes were applied",
            code="consistency_failure",
            details={"operation": operation, "conflict": conflict},
            original_exception=original_exception
        )
        self.operation = operation
        self.conflict = conflict
        if conflict:
            self.http_status = 409


class RepositoryConnectionError(RepositoryError):
    """Raised when repository cannot connect to data store."""

    http_status = 503

    def __init__(self, repository_name: str, original_exception: Exception = None):
        message = f"Cannot connect to {repository_name}"
        super().__init__(
            message=message,
            code="repository_connection_error",
            details={"repository_name": repository_name},
            original_exception=original_exception
        )
        self.repository_name = repository_name


# =================== ERROR HANDLING UTILITIES ===================

def create_error_response(
    exception: Exception,
    include_details: bool = True
) -> Dict[str, Any]:
    """
    Create standardized error response from exception.

    Args:
        exception: The exception to convert
        include_details: Whether to include detailed error information

    Returns:
        Standardized error response dictionary
    """
    if isinstance(exception, HandoverAppError):
        response = {
            "success": False,
            "error": exception.message,
            "code": exception.code
        }

        if include_details and exception.details:
            response["details"] = exception.details

        return response
    else:
        return {
            "success": False,
            "error": str(exception),
            "code": "unexpected_error"
        }


def validate_page_request(page: int, size: int, max_size: Optional[int] = None) -> None:
    """
    Validate pagination arguments and raise appropriate exception.

    Args:
        page: Zero-based page index
        size: Page size
        max_size: Optional upper bound for page size

    Raises:
        InvalidPageRequestError: If page or size is invalid
    """
    if page is None or page < 0:
        raise InvalidPageRequestError(page, size, "page must be >= 0")

    if size is None or size < 1:
        raise InvalidPageRequestError(page, size, "size must be >= 1")

    if max_size is not None and size > max_size:
        raise InvalidPageRequestError(page, size, f"size must be <= {max_size}")


# =================== EXPORT ALL EXCEPTIONS ===================

__all__ = [
    # Base exceptions
    "HandoverAppError",

    # Data validation exceptions
    "DataValidationError",
    "InvalidPageRequestError",

    # Repository exceptions
    "RepositoryError",
    "EntityNotFoundError",
    "ConsistencyError",
    "RepositoryConnectionError",

    # Utility functions
    "create_error_response",
    "validate_page_request",
]
