# bookkeeping/api/v1/deps.py
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from bookkeeping.db import models
from bookkeeping.db.session import get_db
from bookkeeping.services.bank_accounts import BankAccountService
from bookkeeping.services.categories import CategoryService
from bookkeeping.services.errors import NotFound
from bookkeeping.services.security import decode_access_token
from bookkeeping.services.transactions import TransactionService
from bookkeeping.services.users import UserService

bearer_scheme = HTTPBearer()  # "Authorization: Bearer <token>"


def _delete_policy(request: Request) -> str:
    return request.app.state.delete_policy


def get_user_service(request: Request, db: Session = Depends(get_db)) -> UserService:
    return UserService(db, delete_policy=_delete_policy(request))


def get_category_service(request: Request, db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db, delete_policy=_delete_policy(request))


def get_bank_account_service(request: Request, db: Session = Depends(get_db)) -> BankAccountService:
    return BankAccountService(db, delete_policy=_delete_policy(request))


def get_transaction_service(request: Request, db: Session = Depends(get_db)) -> TransactionService:
    return TransactionService(db, delete_policy=_delete_policy(request))


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    users: UserService = Depends(get_user_service),
) -> models.User:
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")

    sub = payload.get("sub")
    if sub is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token (no sub)")

    try:
        return users.get(sub)
    except NotFound:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
