from .base import AppException, ValidationError, AuthenticationError, NotFoundError, StoreError, ConsistencyError
from .handlers import app_exception_handler, general_exception_handler

__all__ = [
    "AppException",
    "ValidationError",
    "AuthenticationError",
    "NotFoundError",
    "StoreError",
    "ConsistencyError",
    "app_exception_handler",
    "general_exception_handler"
]
