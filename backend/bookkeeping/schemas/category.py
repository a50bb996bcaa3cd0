# bookkeeping/schemas/category.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from .common import PartialUpdate

class CategoryBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    color: str = Field(..., max_length=50)
    description: str

class CategoryCreate(CategoryBase):
    pass

class CategoryUpdate(PartialUpdate):
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    color: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None

class CategoryOut(CategoryBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    # stored rows are not re-validated against the input limits
    name: str
    color: str
    created_at: datetime
    updated_at: datetime
