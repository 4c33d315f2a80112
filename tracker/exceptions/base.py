from typing import Optional, Dict, Any


class AppException(Exception):
    """Base application exception."""
    
    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """Validation error exception."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, details=details)


class AuthenticationError(AppException):
    """Raised when an operation needs a user session and none exists."""
    
    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message, status_code=401)


class NotFoundError(AppException):
    """Resource not found exception."""
    
    def __init__(self, resource: str, resource_id: Any):
        message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message, status_code=404)


class StoreError(AppException):
    """A query against the remote data store failed."""
    
    def __init__(self, operation: str, cause: Exception):
        message = f"Store operation '{operation}' failed: {cause}"
        super().__init__(message, status_code=502, details={"operation": operation})
        self.cause = cause


class ConsistencyError(AppException):
    """The in-memory workspace no longer matches its own invariants."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=500, details=details)
