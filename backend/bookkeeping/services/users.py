# bookkeeping/services/users.py
import logging
from typing import Any, Dict, List

from sqlalchemy import select

from bookkeeping.db import models
from bookkeeping.services.base import BaseService
from bookkeeping.services.errors import (
    DependentRowsExist,
    DuplicateEmail,
    NotFound,
    Unauthorized,
)
from bookkeeping.services.security import hash_password, verify_password

UPDATABLE_FIELDS = ("name", "email", "password")


class UserService(BaseService):
    """User directory: CRUD over users plus the credential check used by login."""

    logger = logging.getLogger(__name__)

    def create(self, name: str, email: str, password: str) -> models.User:
        self.logger.info("User creation started - email: %s", email)
        user = models.User(name=name, email=email, password=hash_password(password))
        with self.storage("User creation", "Error creating user", on_duplicate=DuplicateEmail):
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        self.logger.info("User creation completed - userId: %s", user.id)
        return user

    def list(self, skip: int = 0, take: int = 10) -> List[models.User]:
        self.logger.info("List users operation started - skip: %s, take: %s", skip, take)
        with self.storage("List users operation", "Error listing users"):
            users = self.db.query(models.User).offset(skip).limit(take).all()
        self.logger.info("List users operation completed - count: %s", len(users))
        return users

    def get(self, user_id: str) -> models.User:
        with self.storage("Get user operation", "Error finding user"):
            user = self.db.get(models.User, user_id)
        if user is None:
            self.logger.warning("Get user operation failed - userId: %s, error: User not found", user_id)
            raise NotFound(f"User with ID {user_id} not found")
        return user

    def find_by_email(self, email: str) -> models.User:
        """Return the hash-bearing record. Only for authentication; never serialize it as-is."""
        with self.storage("Get user by email", "Error finding user"):
            user = self.db.query(models.User).filter(models.User.email == email).first()
        if user is None:
            self.logger.warning("Get user by email failed - email: %s, error: User not found", email)
            raise NotFound(f"User with email {email} not found")
        return user

    def authenticate(self, email: str, password: str) -> models.User:
        # unknown email and wrong password must look the same to the caller
        try:
            user = self.find_by_email(email)
        except NotFound:
            raise Unauthorized() from None
        if not verify_password(password, user.password):
            self.logger.warning("Authentication failed - email: %s", email)
            raise Unauthorized()
        return user

    def update(self, user_id: str, fields: Dict[str, Any]) -> models.User:
        self.logger.info("Update user operation started - userId: %s", user_id)
        with self.storage("Update user operation", "Error updating user", on_duplicate=DuplicateEmail):
            user = self.get(user_id)
            for key, value in fields.items():
                if key not in UPDATABLE_FIELDS:
                    continue
                if key == "password":
                    value = hash_password(value)
                setattr(user, key, value)
            self.db.commit()
            self.db.refresh(user)
        self.logger.info("Update user operation completed - userId: %s", user_id)
        return user

    def reset_password(self, email: str, password: str) -> models.User:
        user = self.find_by_email(email)
        return self.update(user.id, {"password": password})

    def remove(self, user_id: str) -> None:
        self.logger.info("Delete user operation started - userId: %s", user_id)
        with self.storage("Delete user operation", "Error deleting user", on_foreign_key=DependentRowsExist):
            user = self.get(user_id)
            owned = select(models.BankAccount.id).where(models.BankAccount.user_id == user_id)
            if self.cascade_deletes:
                self.db.query(models.Transaction).filter(
                    models.Transaction.bank_account_id.in_(owned)
                ).delete(synchronize_session=False)
                self.db.query(models.BankAccount).filter(
                    models.BankAccount.user_id == user_id
                ).delete(synchronize_session=False)
            elif self.db.query(owned.exists()).scalar():
                self.logger.warning("Delete user operation failed - userId: %s, error: User has bank accounts", user_id)
                raise DependentRowsExist(f"User with ID {user_id} still has bank accounts")
            self.db.delete(user)
            self.db.commit()
        self.logger.info("Delete user operation completed - userId: %s", user_id)
