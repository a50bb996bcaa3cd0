# bookkeeping/api/v1/users.py
from fastapi import APIRouter, Depends, Query, status
from typing import List
from uuid import UUID

from bookkeeping.api.v1.deps import get_user_service
from bookkeeping.schemas.user import UserCreate, UserOut, UserUpdate
from bookkeeping.services.users import UserService

router = APIRouter(tags=["users"])

@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, users: UserService = Depends(get_user_service)):
    """Register a user. The password is hashed before storage and never returned."""
    return users.create(payload.name, payload.email, payload.password)

@router.get("", response_model=List[UserOut])
def list_users(
    skip: int = Query(0, ge=0),
    take: int = Query(10, ge=1, le=100),
    users: UserService = Depends(get_user_service),
):
    return users.list(skip, take)

@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: UUID, users: UserService = Depends(get_user_service)):
    return users.get(str(user_id))

@router.patch("/{user_id}", response_model=UserOut)
def update_user(user_id: UUID, payload: UserUpdate, users: UserService = Depends(get_user_service)):
    return users.update(str(user_id), payload.model_dump(exclude_unset=True))

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: UUID, users: UserService = Depends(get_user_service)):
    users.remove(str(user_id))
    return None
