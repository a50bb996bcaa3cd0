# bookkeeping/schemas/transaction.py
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from datetime import datetime, timezone
from typing import ClassVar, FrozenSet, Optional
from decimal import Decimal
from enum import Enum
from uuid import UUID

from .category import CategoryOut
from .common import PartialUpdate

class TransactionType(str, Enum):
    income = "income"
    expense = "expense"

class TransactionCreate(BaseModel):
    bank_account_id: UUID
    category_id: UUID
    type: TransactionType
    # signed: expenses may be recorded as negative amounts
    amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    date: datetime
    name: Optional[str] = Field(None, max_length=255)

class TransactionUpdate(PartialUpdate):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"name"})

    bank_account_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    date: Optional[datetime] = None
    name: Optional[str] = Field(None, max_length=255)

class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    bank_account_id: str
    category_id: str
    type: TransactionType
    amount: Decimal
    date: datetime
    name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    category: Optional[CategoryOut] = None

    @field_validator("type", mode="before")
    @classmethod
    def enum_value(cls, v):
        # rows carry the ORM enum, not this one
        return getattr(v, "value", v)

    @field_serializer("date")
    def date_as_utc(self, value: datetime) -> datetime:
        # stored as naive UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value
