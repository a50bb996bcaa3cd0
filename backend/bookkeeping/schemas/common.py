# bookkeeping/schemas/common.py
from typing import ClassVar, FrozenSet

from pydantic import BaseModel, model_validator


class PartialUpdate(BaseModel):
    """
    Base for PATCH payloads: every field is optional.

    Omitted fields are left alone (callers dump with exclude_unset=True).
    Sending an explicit null is only allowed for the columns named in
    `nullable_fields`.
    """
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for field in self.model_fields_set:
            if getattr(self, field) is None and field not in self.nullable_fields:
                raise ValueError(f"{field} cannot be null")
        return self
