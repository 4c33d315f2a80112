from abc import ABC
from typing import Callable, TypeVar
from sqlalchemy.orm import Session

from tracker.core.logging import get_logger
from tracker.exceptions import AppException, StoreError
from tracker.results import Fetched

T = TypeVar("T")


class BaseService(ABC):
    """Base service class with transaction and error-mapping helpers."""

    def __init__(self, db: Session):
        self.db = db
        self.logger = get_logger(self.__class__.__name__)

    def commit(self):
        """Commit database transaction."""
        try:
            self.db.commit()
            self.logger.debug("Database transaction committed")
        except Exception as e:
            self.logger.error(f"Database commit failed: {str(e)}")
            self.db.rollback()
            raise

    def rollback(self):
        """Rollback database transaction."""
        self.db.rollback()
        self.logger.debug("Database transaction rolled back")

    def run_read(self, operation: str, default: T, query: Callable[[], T]) -> Fetched[T]:
        """Run a read; any failure degrades to ``default`` flagged as failed."""
        try:
            return Fetched.success(query())
        except Exception as e:
            self.rollback()
            self.logger.error(f"Error in {operation}: {str(e)}")
            return Fetched.failure(default, e)

    def run_write(self, operation: str, mutation: Callable[[], T]) -> T:
        """Run a write in its own transaction; failures are logged and re-raised."""
        try:
            result = mutation()
            self.commit()
            return result
        except AppException as e:
            self.rollback()
            self.logger.error(f"Error in {operation}: {e.message}")
            raise
        except Exception as e:
            self.rollback()
            self.logger.error(f"Error in {operation}: {str(e)}")
            raise StoreError(operation, e) from e
