"""
Custom exceptions for the Crowdfund API.
Provides consistent error handling across the application.
"""
from fastapi import status


class CrowdfundException(Exception):
    """Base exception for Crowdfund"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(CrowdfundException):
    """Resource not found"""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource", resource_id=None):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message)


class ValidationError(CrowdfundException):
    """Malformed or illegal input, raised before any write"""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message)


class InvalidOperationError(CrowdfundException):
    """Legal input but the entity is in the wrong state"""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Invalid operation"):
        super().__init__(message)


class UnauthorizedError(CrowdfundException):
    """Authentication failed"""
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)


class ForbiddenError(CrowdfundException):
    """Access denied"""
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "You don't have permission to access this resource"):
        super().__init__(message)


class StorageError(CrowdfundException):
    """Database call failed"""

    def __init__(self, message: str = "Storage unavailable", retryable: bool = False):
        self.retryable = retryable
        super().__init__(message)

    @property
    def status_code(self) -> int:
        if self.retryable:
            return status.HTTP_503_SERVICE_UNAVAILABLE
        return status.HTTP_500_INTERNAL_SERVER_ERROR
