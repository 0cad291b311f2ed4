"""
Base service class providing common functionality for all services.
"""

from contextlib import contextmanager
from datetime import datetime, timezone
from functools import wraps
from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import BaseAppException, handle_database_exception
from app.core.logging import get_logger
from app.repositories.base.base_repository import BaseRepository

logger = get_logger(__name__)

TModel = TypeVar("TModel")
TRepo = TypeVar("TRepo", bound=BaseRepository)


def track_performance(operation_name: str):
    """Decorator to track operation performance."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = datetime.now(timezone.utc)
            try:
                result = func(*args, **kwargs)
                duration = (datetime.now(timezone.utc) - start_time).total_seconds()
                logger.debug(
                    f"Operation '{operation_name}' completed in {duration:.3f}s",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                    }
                )
                return result
            except BaseAppException as e:
                duration = (datetime.now(timezone.utc) - start_time).total_seconds()
                logger.info(
                    f"Operation '{operation_name}' rejected after {duration:.3f}s: {e.message}",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                        "error_code": e.error_code.value,
                    }
                )
                raise
            except Exception as e:
                duration = (datetime.now(timezone.utc) - start_time).total_seconds()
                logger.error(
                    f"Operation '{operation_name}' failed after {duration:.3f}s: {str(e)}",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                        "error": str(e)
                    },
                    exc_info=True
                )
                raise
        return wrapper
    return decorator


class BaseService(Generic[TModel, TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Transaction management utilities

    Failures are raised as BaseAppException subclasses and rendered by the
    API layer.
    """

    def __init__(self, repository: TRepo, db_session: Session):
        """
        Initialize base service.

        Args:
            repository: Repository instance for data access
            db_session: SQLAlchemy database session
        """
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger(self.__class__.__name__)

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self, auto_commit: bool = True):
        """
        Context manager for database transactions with automatic rollback.

        Args:
            auto_commit: Whether to commit automatically on success

        Example:
            with self.transaction():
                self.repository.create(entity, commit=False)
                # automatic commit on success, rollback on exception
        """
        try:
            yield self.db
            if auto_commit:
                self._commit()
        except SQLAlchemyError as e:
            self._rollback()
            self._logger.error(f"Transaction failed: {e}", exc_info=True)
            raise handle_database_exception(e) from e
        except Exception:
            self._rollback()
            raise

    def _commit(self) -> None:
        """Commit the current transaction."""
        self.db.commit()
        self._logger.debug("Transaction committed successfully")

    def _rollback(self) -> None:
        """Rollback the current transaction, suppressing rollback errors."""
        try:
            self.db.rollback()
            self._logger.debug("Transaction rolled back")
        except SQLAlchemyError as e:
            # Rollback errors must not mask the original error
            self._logger.warning(f"Rollback failed: {e}")
