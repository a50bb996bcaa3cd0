# bookkeeping/services/base.py
import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookkeeping.core.config import settings, DELETE_POLICIES
from bookkeeping.services.errors import (
    ServiceError,
    StorageFault,
    is_unique_violation,
    is_foreign_key_violation,
)


class BaseService:
    """
    Shared plumbing for the entity services.

    A service wraps one Session. Every public method does its existence
    check and its mutation in that session and commits once, so the pair
    runs inside a single database transaction.
    """

    logger = logging.getLogger(__name__)

    def __init__(self, db: Session, delete_policy: Optional[str] = None):
        self.db = db
        self.delete_policy = delete_policy or settings.DELETE_POLICY
        if self.delete_policy not in DELETE_POLICIES:
            raise ValueError(f"unknown delete policy: {self.delete_policy!r}")

    @property
    def cascade_deletes(self) -> bool:
        return self.delete_policy == "cascade"

    @contextmanager
    def storage(
        self,
        operation: str,
        fault_message: str,
        on_duplicate: Optional[Type[ServiceError]] = None,
        on_foreign_key: Optional[Type[ServiceError]] = None,
    ) -> Iterator[None]:
        """
        Run a block of persistence calls, translating storage errors.

        Service errors raised inside the block pass through untouched.
        Unique and foreign key violations become `on_duplicate` /
        `on_foreign_key` when given; anything else from SQLAlchemy becomes
        a StorageFault carrying only `fault_message`.
        """
        try:
            yield
        except ServiceError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            if on_duplicate is not None and is_unique_violation(exc):
                self.logger.warning("%s failed - error: %s", operation, on_duplicate.default_message)
                raise on_duplicate() from exc
            if on_foreign_key is not None and is_foreign_key_violation(exc):
                self.logger.warning("%s failed - error: %s", operation, on_foreign_key.default_message)
                raise on_foreign_key() from exc
            self.logger.exception("%s failed - error: Database error", operation)
            raise StorageFault(fault_message) from exc
