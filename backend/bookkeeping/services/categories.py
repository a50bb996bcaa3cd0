# bookkeeping/services/categories.py
import logging
from typing import Any, Dict, List

from bookkeeping.db import models
from bookkeeping.services.base import BaseService
from bookkeeping.services.errors import DependentRowsExist, DuplicateEntry, NotFound

UPDATABLE_FIELDS = ("name", "color", "description")


class CategoryDuplicate(DuplicateEntry):
    default_message = "Category already exists"


class CategoryService(BaseService):
    logger = logging.getLogger(__name__)

    def create(self, fields: Dict[str, Any]) -> models.Category:
        self.logger.info("Category creation started - name: %s", fields.get("name"))
        category = models.Category(**{k: v for k, v in fields.items() if k in UPDATABLE_FIELDS})
        with self.storage("Category creation", "Error creating category", on_duplicate=CategoryDuplicate):
            self.db.add(category)
            self.db.commit()
            self.db.refresh(category)
        self.logger.info("Category creation completed - id: %s", category.id)
        return category

    def list(self, skip: int = 0, take: int = 10) -> List[models.Category]:
        self.logger.info("List categories operation started - skip: %s, take: %s", skip, take)
        with self.storage("List categories operation", "Error listing categories"):
            categories = self.db.query(models.Category).offset(skip).limit(take).all()
        self.logger.info("List categories operation completed - count: %s", len(categories))
        return categories

    def get(self, category_id: str) -> models.Category:
        with self.storage("Get category", "Error retrieving category"):
            category = self.db.get(models.Category, category_id)
        if category is None:
            self.logger.warning("Category not found - id: %s", category_id)
            raise NotFound(f"Category with ID {category_id} not found")
        return category

    def update(self, category_id: str, fields: Dict[str, Any]) -> models.Category:
        self.logger.info("Update category started - id: %s", category_id)
        with self.storage("Update category", "Error updating category", on_duplicate=CategoryDuplicate):
            category = self.get(category_id)
            for key, value in fields.items():
                if key in UPDATABLE_FIELDS:
                    setattr(category, key, value)
            self.db.commit()
            self.db.refresh(category)
        self.logger.info("Update category completed - id: %s", category_id)
        return category

    def remove(self, category_id: str) -> None:
        self.logger.info("Delete category started - id: %s", category_id)
        with self.storage("Delete category", "Error deleting category", on_foreign_key=DependentRowsExist):
            category = self.get(category_id)
            dependents = self.db.query(models.Transaction).filter(models.Transaction.category_id == category_id)
            if self.cascade_deletes:
                dependents.delete(synchronize_session=False)
            elif self.db.query(dependents.exists()).scalar():
                self.logger.warning("Delete category failed - id: %s, reason: Category is in use", category_id)
                raise DependentRowsExist(f"Category with ID {category_id} is still used by transactions")
            self.db.delete(category)
            self.db.commit()
        self.logger.info("Delete category completed - id: %s", category_id)
