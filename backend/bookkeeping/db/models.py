# bookkeeping/db/models.py: User, BankAccount, Category, Transaction
import enum
import uuid

from sqlalchemy import Column, String, DateTime, func, Numeric, Text, ForeignKey, Enum
from sqlalchemy.orm import relationship
from .base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class TransactionType(enum.Enum):
    income = "income"
    expense = "expense"


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    # dependents are removed by the services according to DELETE_POLICY
    bank_accounts = relationship("BankAccount", back_populates="user", passive_deletes="all")


class BankAccount(Base):
    __tablename__ = "bank_accounts"
    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    api_token = Column(Text, nullable=False)
    account_status = Column(String(100), nullable=False)
    connection_status = Column(String(100), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="bank_accounts")
    transactions = relationship("Transaction", back_populates="bank_account", passive_deletes="all")


class Category(Base):
    __tablename__ = "categories"
    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(50), nullable=False)
    color = Column(String(50), nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    transactions = relationship("Transaction", back_populates="category", passive_deletes="all")


class Transaction(Base):
    __tablename__ = "transactions"
    id = Column(String(36), primary_key=True, default=_new_id)
    bank_account_id = Column(String(36), ForeignKey("bank_accounts.id"), nullable=False, index=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False, index=True)
    name = Column(String(255), nullable=True)
    type = Column(Enum(TransactionType), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    category = relationship("Category", back_populates="transactions")
    bank_account = relationship("BankAccount", back_populates="transactions")
