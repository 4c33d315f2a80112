from .base import BaseService
from .data_access import DataAccessService, open_store
from .auth import AuthService

__all__ = [
    "BaseService",
    "DataAccessService",
    "open_store",
    "AuthService"
]
