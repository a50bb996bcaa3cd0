# bookkeeping/schemas/bank_account.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from .common import PartialUpdate

class BankAccountCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    api_token: str = Field(..., min_length=1)
    account_status: str = Field(..., min_length=1, max_length=100)
    connection_status: str = Field(..., min_length=1, max_length=100)

class BankAccountUpdate(PartialUpdate):
    name: Optional[str] = Field(None, max_length=255)
    api_token: Optional[str] = None
    account_status: Optional[str] = Field(None, max_length=100)
    connection_status: Optional[str] = Field(None, max_length=100)

class BankAccountOut(BaseModel):
    # api_token is write-only
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    account_status: str
    connection_status: str
    created_at: datetime
    updated_at: datetime
