"""Custom exception classes"""

from typing import Any, Optional


class PageantryException(Exception):
    """Base exception for the tabulation backend"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(PageantryException):
    """Exception for validation errors (bad category, out-of-range score, malformed input)"""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, status_code=422, details=details)


class ForbiddenException(PageantryException):
    """Exception for inactive judges or candidates attempting to participate"""

    def __init__(self, message: str = "Action not permitted", details: Optional[dict[str, Any]] = None):
        super().__init__(message, status_code=403, details=details)


class NotFoundException(PageantryException):
    """Exception for resource not found errors"""

    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class ConflictException(PageantryException):
    """Exception for resource conflict errors"""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, status_code=409, details=details)
