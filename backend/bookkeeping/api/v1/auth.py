# bookkeeping/api/v1/auth.py
from fastapi import APIRouter, Depends
from bookkeeping.api.v1.deps import get_user_service
from bookkeeping.schemas.auth import LoginRequest, Token
from bookkeeping.services.security import create_access_token
from bookkeeping.services.users import UserService

router = APIRouter()

@router.post("/login", response_model=Token)
def login(payload: LoginRequest, users: UserService = Depends(get_user_service)):
    # UserService.authenticate raises the same 401 for an unknown email and a wrong password
    user = users.authenticate(payload.email, payload.password)
    token = create_access_token(user.id)
    return {"access_token": token, "token_type": "bearer"}
