"""Category domain service."""

from typing import Optional
from banksync.database.base import Database
from banksync.domain.entities import Category as CategoryEntity
from banksync.domain.errors import NotFoundError, ValidationError, category_path_not_found

PATH_SEPARATOR = " > "


class CategoryService:
    """Service for managing custom categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, name: str, parent_path: Optional[str] = None) -> int:
        """Create a category.

        Args:
            name: Category name
            parent_path: Optional parent category path (e.g., "Food & Dining")

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is empty or contains the path separator
            NotFoundError: If the parent category doesn't exist
        """
        name = name.strip()
        if not name or ">" in name:
            raise ValidationError(f"Invalid category name '{name}'")

        parent_id = None
        if parent_path is not None:
            parent = self.db.get_category_by_path(parent_path)
            if parent is None:
                raise NotFoundError(category_path_not_found(parent_path))
            parent_id = parent.id

        return self.db.create_category(name=name, parent_id=parent_id)

    def get_category_by_path(self, path: str) -> Optional[CategoryEntity]:
        return self.db.get_category_by_path(path)

    def list_categories(self, parent_id: Optional[int] = None) -> list[CategoryEntity]:
        """List categories under a parent (root categories when None)."""
        return self.db.list_categories(parent_id=parent_id)

    def format_category_path(self, category_id: int) -> str:
        """Build the full path of a category, e.g. "Food & Dining > Groceries"."""
        names = []
        current_id: Optional[int] = category_id
        while current_id is not None:
            category = self.db.get_category(current_id)
            if category is None:
                break
            names.append(category.name)
            current_id = category.parent_id
        return PATH_SEPARATOR.join(reversed(names))
