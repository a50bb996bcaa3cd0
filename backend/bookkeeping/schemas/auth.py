# bookkeeping/schemas/auth.py
from pydantic import BaseModel, EmailStr, Field

from .user import PASSWORD_MAX_LENGTH

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., max_length=PASSWORD_MAX_LENGTH)

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
