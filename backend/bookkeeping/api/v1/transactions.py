# bookkeeping/api/v1/transactions.py
from fastapi import APIRouter, Depends, Query, status
from typing import List
from uuid import UUID

from bookkeeping.api.v1.deps import get_transaction_service
from bookkeeping.schemas.transaction import TransactionCreate, TransactionOut, TransactionUpdate
from bookkeeping.services.transactions import TransactionService

router = APIRouter(tags=["transactions"])

@router.post("", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
def create_transaction(payload: TransactionCreate, ledger: TransactionService = Depends(get_transaction_service)):
    """
    Create a transaction. Expect JSON:
    {
      "bank_account_id": "<uuid>",
      "category_id": "<uuid>",
      "type": "expense"|"income",
      "amount": -150.75,
      "date": "2025-03-10T13:24:18.000Z",
      "name": "..."   # optional
    }
    """
    # dates and amounts cross into the service in their external (JSON) form
    return ledger.create(payload.model_dump(mode="json"))

@router.get("", response_model=List[TransactionOut])
def list_transactions(
    skip: int = Query(0, ge=0),
    take: int = Query(10, ge=1, le=100),
    ledger: TransactionService = Depends(get_transaction_service),
):
    return ledger.list(skip, take)

@router.get("/user/{user_id}", response_model=List[TransactionOut])
def list_transactions_for_user(
    user_id: UUID,
    skip: int = Query(0, ge=0),
    take: int = Query(10, ge=1, le=100),
    ledger: TransactionService = Depends(get_transaction_service),
):
    """Transactions on all bank accounts of a user, newest first."""
    return ledger.find_by_user(str(user_id), skip, take)

@router.get("/{txn_id}", response_model=TransactionOut)
def get_transaction(txn_id: UUID, ledger: TransactionService = Depends(get_transaction_service)):
    return ledger.get(str(txn_id))

@router.patch("/{txn_id}", response_model=TransactionOut)
def update_transaction(
    txn_id: UUID,
    payload: TransactionUpdate,
    ledger: TransactionService = Depends(get_transaction_service),
):
    return ledger.update(str(txn_id), payload.model_dump(mode="json", exclude_unset=True))

@router.delete("/{txn_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(txn_id: UUID, ledger: TransactionService = Depends(get_transaction_service)):
    ledger.remove(str(txn_id))
    return None
