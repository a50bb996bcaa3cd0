# bookkeeping/api/v1/categories.py
from fastapi import APIRouter, Depends, Query, status
from typing import List
from uuid import UUID

from bookkeeping.api.v1.deps import get_category_service
from bookkeeping.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from bookkeeping.services.categories import CategoryService

router = APIRouter(tags=["categories"])

@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(payload: CategoryCreate, categories: CategoryService = Depends(get_category_service)):
    return categories.create(payload.model_dump())

@router.get("", response_model=List[CategoryOut])
def list_categories(
    skip: int = Query(0, ge=0),
    take: int = Query(10, ge=1, le=100),
    categories: CategoryService = Depends(get_category_service),
):
    return categories.list(skip, take)

@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: UUID, categories: CategoryService = Depends(get_category_service)):
    return categories.get(str(category_id))

@router.patch("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: UUID,
    payload: CategoryUpdate,
    categories: CategoryService = Depends(get_category_service),
):
    return categories.update(str(category_id), payload.model_dump(exclude_unset=True))

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: UUID, categories: CategoryService = Depends(get_category_service)):
    categories.remove(str(category_id))
    return None
