# bookkeeping/api/v1/bank_accounts.py
from fastapi import APIRouter, Depends, status
from typing import List

from bookkeeping.api.v1.deps import get_bank_account_service, get_current_user
from bookkeeping.db import models
from bookkeeping.schemas.bank_account import BankAccountCreate, BankAccountOut, BankAccountUpdate
from bookkeeping.services.bank_accounts import BankAccountService

# every route acts on the accounts of the authenticated user only
router = APIRouter(tags=["bank-accounts"])

@router.post("", response_model=BankAccountOut, status_code=status.HTTP_201_CREATED)
def create_bank_account(
    payload: BankAccountCreate,
    current_user: models.User = Depends(get_current_user),
    accounts: BankAccountService = Depends(get_bank_account_service),
):
    return accounts.create(current_user.id, payload.model_dump())

@router.get("", response_model=List[BankAccountOut])
def list_bank_accounts(
    current_user: models.User = Depends(get_current_user),
    accounts: BankAccountService = Depends(get_bank_account_service),
):
    return accounts.list(current_user.id)

@router.get("/{account_id}", response_model=BankAccountOut)
def get_bank_account(
    account_id: str,
    current_user: models.User = Depends(get_current_user),
    accounts: BankAccountService = Depends(get_bank_account_service),
):
    return accounts.get(current_user.id, account_id)

@router.patch("/{account_id}", response_model=BankAccountOut)
def update_bank_account(
    account_id: str,
    payload: BankAccountUpdate,
    current_user: models.User = Depends(get_current_user),
    accounts: BankAccountService = Depends(get_bank_account_service),
):
    return accounts.update(current_user.id, account_id, payload.model_dump(exclude_unset=True))

@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bank_account(
    account_id: str,
    current_user: models.User = Depends(get_current_user),
    accounts: BankAccountService = Depends(get_bank_account_service),
):
    accounts.remove(current_user.id, account_id)
    return None
