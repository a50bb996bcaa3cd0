# bookkeeping/services/bank_accounts.py
import logging
from typing import Any, Dict, List

from sqlalchemy import select

from bookkeeping.db import models
from bookkeeping.services.base import BaseService
from bookkeeping.services.errors import DependentRowsExist, NotFound

UPDATABLE_FIELDS = ("name", "api_token", "account_status", "connection_status")


class BankAccountService(BaseService):
    """
    Bank accounts always belong to a user. Every query and every mutation
    filters on (id, user_id), so one user can never read, change or delete
    another user's account; a predicate that matches no row is NotFound.
    """

    logger = logging.getLogger(__name__)

    def _owned(self, user_id: str, account_id: str):
        return self.db.query(models.BankAccount).filter(
            models.BankAccount.id == account_id,
            models.BankAccount.user_id == user_id,
        )

    def _not_found(self, user_id: str, account_id: str) -> NotFound:
        self.logger.warning("Bank account not found - id: %s, userId: %s", account_id, user_id)
        return NotFound(f"Bank account with ID {account_id} not found")

    def create(self, user_id: str, fields: Dict[str, Any]) -> models.BankAccount:
        self.logger.info("Bank account creation started - userId: %s", user_id)
        data = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        with self.storage("Bank account creation", "Error creating bank account"):
            if self.db.get(models.User, user_id) is None:
                raise NotFound(f"User with ID {user_id} not found")
            account = models.BankAccount(user_id=user_id, **data)
            self.db.add(account)
            self.db.commit()
            self.db.refresh(account)
        self.logger.info("Bank account creation completed - id: %s", account.id)
        return account

    def list(self, user_id: str) -> List[models.BankAccount]:
        with self.storage("List bank accounts", "Error listing bank accounts"):
            accounts = self.db.query(models.BankAccount).filter(models.BankAccount.user_id == user_id).all()
        self.logger.info("List bank accounts completed - userId: %s, count: %s", user_id, len(accounts))
        return accounts

    def get(self, user_id: str, account_id: str) -> models.BankAccount:
        with self.storage("Get bank account", "Error retrieving bank account"):
            account = self._owned(user_id, account_id).first()
        if account is None:
            raise self._not_found(user_id, account_id)
        return account

    def update(self, user_id: str, account_id: str, fields: Dict[str, Any]) -> models.BankAccount:
        self.logger.info("Update bank account started - id: %s, userId: %s", account_id, user_id)
        data = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if not data:
            return self.get(user_id, account_id)
        with self.storage("Update bank account", "Error updating bank account"):
            matched = self._owned(user_id, account_id).update(data, synchronize_session=False)
            if matched == 0:
                raise self._not_found(user_id, account_id)
            self.db.commit()
        self.logger.info("Update bank account completed - id: %s", account_id)
        return self.get(user_id, account_id)

    def remove(self, user_id: str, account_id: str) -> None:
        self.logger.info("Delete bank account started - id: %s, userId: %s", account_id, user_id)
        owned_id = select(models.BankAccount.id).where(
            models.BankAccount.id == account_id,
            models.BankAccount.user_id == user_id,
        )
        with self.storage("Delete bank account", "Error deleting bank account", on_foreign_key=DependentRowsExist):
            dependents = self.db.query(models.Transaction).filter(models.Transaction.bank_account_id.in_(owned_id))
            if self.cascade_deletes:
                dependents.delete(synchronize_session=False)
            elif self.db.query(dependents.exists()).scalar():
                self.logger.warning("Delete bank account failed - id: %s, reason: Account has transactions", account_id)
                raise DependentRowsExist(f"Bank account with ID {account_id} still has transactions")
            deleted = self._owned(user_id, account_id).delete(synchronize_session=False)
            if deleted == 0:
                raise self._not_found(user_id, account_id)
            self.db.commit()
        self.logger.info("Delete bank account completed - id: %s", account_id)
