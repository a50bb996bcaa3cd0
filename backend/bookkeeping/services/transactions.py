# bookkeeping/services/transactions.py
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import joinedload

from bookkeeping.db import models
from bookkeeping.services.base import BaseService
from bookkeeping.services.errors import DuplicateEntry, InvalidReference, NotFound

UPDATABLE_FIELDS = ("bank_account_id", "category_id", "name", "type", "amount", "date")


class TransactionDuplicate(DuplicateEntry):
    default_message = "Transaction already exists"


def to_datetime(value) -> datetime:
    """
    Convert an ISO-8601 string (or a datetime) to the naive UTC datetime the
    `transactions.date` column stores. Raises ValueError on malformed input.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if not isinstance(value, datetime):
        raise ValueError(f"not a datetime: {value!r}")
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class TransactionService(BaseService):
    logger = logging.getLogger(__name__)

    def _query(self):
        return self.db.query(models.Transaction).options(joinedload(models.Transaction.category))

    def _prepare(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        data = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if "date" in data:
            data["date"] = to_datetime(data["date"])
        if "amount" in data:
            data["amount"] = Decimal(str(data["amount"]))
        if "type" in data:
            data["type"] = models.TransactionType(getattr(data["type"], "value", data["type"]))
        for key in ("bank_account_id", "category_id"):
            if key in data:
                data[key] = str(data[key])
        return data

    def _check_references(self, data: Dict[str, Any]) -> None:
        if "category_id" in data and self.db.get(models.Category, data["category_id"]) is None:
            self.logger.warning("Invalid category reference - categoryId: %s", data["category_id"])
            raise InvalidReference(f"Category with ID {data['category_id']} not found")
        if "bank_account_id" in data and self.db.get(models.BankAccount, data["bank_account_id"]) is None:
            self.logger.warning("Invalid bank account reference - bankAccountId: %s", data["bank_account_id"])
            raise InvalidReference(f"Bank account with ID {data['bank_account_id']} not found")

    def create(self, fields: Dict[str, Any]) -> models.Transaction:
        self.logger.info(
            "Transaction creation started - amount: %s, type: %s", fields.get("amount"), fields.get("type")
        )
        data = self._prepare(fields)
        with self.storage(
            "Transaction creation",
            "Error creating transaction",
            on_duplicate=TransactionDuplicate,
            on_foreign_key=InvalidReference,
        ):
            self._check_references(data)
            transaction = models.Transaction(**data)
            self.db.add(transaction)
            self.db.commit()
            self.db.refresh(transaction)
        self.logger.info("Transaction creation completed - id: %s", transaction.id)
        return transaction

    def list(self, skip: int = 0, take: int = 10) -> List[models.Transaction]:
        self.logger.info("List transactions operation started - skip: %s, take: %s", skip, take)
        with self.storage("List transactions operation", "Error listing transactions"):
            transactions = self._query().offset(skip).limit(take).all()
        self.logger.info("List transactions operation completed - count: %s", len(transactions))
        return transactions

    def find_by_user(self, user_id: str, skip: int = 0, take: int = 10) -> List[models.Transaction]:
        """
        Transactions on any bank account owned by `user_id`, newest first.
        A user without bank accounts simply has no transactions.
        """
        self.logger.info(
            "Find transactions by user ID started - userId: %s, skip: %s, take: %s", user_id, skip, take
        )
        with self.storage("Find transactions by user ID", "Error finding transactions by user ID"):
            account_ids = [
                row.id
                for row in self.db.query(models.BankAccount.id).filter(models.BankAccount.user_id == user_id)
            ]
            if not account_ids:
                self.logger.warning("No bank accounts found for user - userId: %s", user_id)
                return []
            transactions = (
                self._query()
                .filter(models.Transaction.bank_account_id.in_(account_ids))
                .order_by(models.Transaction.date.desc(), models.Transaction.id.desc())
                .offset(skip)
                .limit(take)
                .all()
            )
        self.logger.info(
            "Find transactions by user ID completed - userId: %s, count: %s", user_id, len(transactions)
        )
        return transactions

    def get(self, transaction_id: str) -> models.Transaction:
        with self.storage("Get transaction", "Error retrieving transaction"):
            transaction = self._query().filter(models.Transaction.id == transaction_id).first()
        if transaction is None:
            self.logger.warning("Transaction not found - id: %s", transaction_id)
            raise NotFound(f"Transaction with ID {transaction_id} not found")
        return transaction

    def update(self, transaction_id: str, fields: Dict[str, Any]) -> models.Transaction:
        self.logger.info("Update transaction started - id: %s", transaction_id)
        with self.storage(
            "Update transaction",
            "Error updating transaction",
            on_duplicate=TransactionDuplicate,
            on_foreign_key=InvalidReference,
        ):
            transaction = self.get(transaction_id)
            data = self._prepare(fields)
            self._check_references(data)
            for key, value in data.items():
                setattr(transaction, key, value)
            self.db.commit()
        self.logger.info("Update transaction completed - id: %s", transaction_id)
        return self.get(transaction_id)

    def remove(self, transaction_id: str) -> None:
        self.logger.info("Delete transaction started - id: %s", transaction_id)
        with self.storage("Delete transaction", "Error deleting transaction"):
            transaction = self.get(transaction_id)
            self.db.delete(transaction)
            self.db.commit()
        self.logger.info("Delete transaction completed - id: %s", transaction_id)
