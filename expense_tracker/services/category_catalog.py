"""Category catalog: predefined and custom categories per account.

Predefined categories are seeded the first time an account's catalog is
touched. They can be edited and later restored from ``PREDEFINED_CATEGORIES``
but never deleted. Custom categories are capped per account and can only be
deleted once their expenses have somewhere else to go.
"""

import logging
import re
from typing import List, Optional

from ..core.clock import SystemClock
from ..core.errors import (
    CategoryAttributeInvalid,
    CategoryDeleteRequiresSubstitute,
    CategoryLimitReached,
    CategoryNameDuplicate,
    CategoryNameInvalid,
    CategoryNotFound,
    CategoryNotPredefinedOrNotEdited,
    CategoryPredefinedNotDeletable,
)
from ..models.category import CUSTOM, PREDEFINED, Category
from ..repositories.base import Storage

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 30
ICON_MAX_LENGTH = 50
MAX_CUSTOM_CATEGORIES = 15

_NAME_RE = re.compile(r"^[A-Za-z0-9 -]+$")
_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

# name -> (icon, color); insertion order is the seeding order
PREDEFINED_CATEGORIES = {
    "Food": ("utensils", "#4CAF50"),
    "Transport": ("car", "#2196F3"),
    "Leisure": ("ticket", "#9C27B0"),
    "Bills": ("document", "#F44336"),
    "Health": ("cross", "#E91E63"),
    "Education": ("book", "#FFC107"),
    "Shopping": ("bag", "#795548"),
    "Other": ("dots", "#9E9E9E"),
}


def normalize_name(name: str) -> str:
    return name.strip().lower()


def validate_name(name: str) -> str:
    """Return the trimmed name or raise CategoryNameInvalid."""
    cleaned = (name or "").strip()
    if len(cleaned) < NAME_MIN_LENGTH:
        raise CategoryNameInvalid(f"Name must have at least {NAME_MIN_LENGTH} characters")
    if len(cleaned) > NAME_MAX_LENGTH:
        raise CategoryNameInvalid(f"Name must have at most {NAME_MAX_LENGTH} characters")
    if not _NAME_RE.match(cleaned):
        raise CategoryNameInvalid("Name may only contain letters, digits, spaces and hyphens")
    return cleaned


def validate_appearance(icon: str, color: str):
    if not icon or not icon.strip() or len(icon) > ICON_MAX_LENGTH:
        raise CategoryAttributeInvalid(f"Icon must have between 1 and {ICON_MAX_LENGTH} characters")
    if not _COLOR_RE.match(color or ""):
        raise CategoryAttributeInvalid("Color must be a hexadecimal code like #A1B2C3")


class CategoryCatalog:
    def __init__(self, storage: Storage, clock=None):
        self._storage = storage
        self._clock = clock or SystemClock()

    def ensure_defaults(self, account_id: int):
        """Seed the predefined categories for an account seen for the first time."""
        with self._storage.transaction():
            if self._storage.categories.has_any(account_id):
                return
            now = self._clock.now()
            for name, (icon, color) in PREDEFINED_CATEGORIES.items():
                self._storage.categories.add(
                    Category(
                        account_id=account_id,
                        name=name,
                        icon=icon,
                        color=color,
                        kind=PREDEFINED,
                        edited=False,
                        original_name=name,
                        created_at=now,
                        updated_at=now,
                    )
                )
        logger.info("Seeded predefined categories for account %s", account_id)

    def list_categories(self, account_id: int) -> List[Category]:
        """Active categories ordered by name."""
        self.ensure_defaults(account_id)
        categories = self._storage.categories.list(account_id)
        return sorted(categories, key=lambda c: (c.name.casefold(), c.name))

    def get_category(self, account_id: int, category_id: int) -> Category:
        self.ensure_defaults(account_id)
        category = self._storage.categories.get(account_id, category_id)
        if category is None:
            raise CategoryNotFound(f"Category {category_id} not found")
        return category

    def _ensure_unique(self, account_id: int, name: str, exclude_id: Optional[int] = None):
        wanted = normalize_name(name)
        for other in self._storage.categories.list(account_id):
            if other.id != exclude_id and normalize_name(other.name) == wanted:
                logger.warning("Duplicate category name %r for account %s", name, account_id)
                raise CategoryNameDuplicate(f"A category named '{name}' already exists")

    def create_category(self, account_id: int, name: str, icon: str, color: str) -> Category:
        name = validate_name(name)
        validate_appearance(icon, color)

        with self._storage.transaction():
            self.ensure_defaults(account_id)
            self._ensure_unique(account_id, name)

            customs = [c for c in self._storage.categories.list(account_id) if c.kind == CUSTOM]
            if len(customs) >= MAX_CUSTOM_CATEGORIES:
                raise CategoryLimitReached(
                    f"An account can have at most {MAX_CUSTOM_CATEGORIES} custom categories"
                )

            now = self._clock.now()
            category = self._storage.categories.add(
                Category(
                    account_id=account_id,
                    name=name,
                    icon=icon.strip(),
                    color=color,
                    kind=CUSTOM,
                    edited=False,
                    original_name=None,
                    created_at=now,
                    updated_at=now,
                )
            )
        logger.info("Created category %s (%s) for account %s", category.id, name, account_id)
        return category

    def update_category(
        self, account_id: int, category_id: int, name: str, icon: str, color: str
    ) -> Category:
        with self._storage.transaction():
            category = self.get_category(account_id, category_id)
            name = validate_name(name)
            validate_appearance(icon, color)
            self._ensure_unique(account_id, name, exclude_id=category_id)

            category.name = name
            category.icon = icon.strip()
            category.color = color
            category.updated_at = self._clock.now()
            if category.is_predefined:
                category.edited = True
            category = self._storage.categories.save(category)
        logger.info("Updated category %s for account %s", category_id, account_id)
        return category

    def delete_category(
        self, account_id: int, category_id: int, substitute_id: Optional[int] = None
    ) -> int:
        """Soft-delete a custom category.

        Expenses filed under it are first moved to ``substitute_id``. Returns
        the number of expenses moved.
        """
        with self._storage.transaction():
            category = self.get_category(account_id, category_id)
            if category.is_predefined:
                raise CategoryPredefinedNotDeletable("Predefined categories cannot be deleted")

            moved = 0
            expenses = self._storage.expenses.list_by_category(account_id, category_id)
            if expenses:
                if substitute_id is None:
                    raise CategoryDeleteRequiresSubstitute(
                        f"Category has {len(expenses)} expense(s); choose a substitute category"
                    )
                substitute = self._storage.categories.get(account_id, substitute_id)
                if substitute is None or substitute_id == category_id:
                    raise CategoryDeleteRequiresSubstitute(
                        f"Substitute category {substitute_id} is not a valid target"
                    )
                now = self._clock.now()
                moved = self._storage.expenses.reassign_category(
                    account_id, category_id, substitute_id, now
                )

            category.deleted = True
            category.updated_at = self._clock.now()
            self._storage.categories.save(category)
        logger.info(
            "Deleted category %s for account %s, %s expense(s) reassigned",
            category_id,
            account_id,
            moved,
        )
        return moved

    def restore_category(self, account_id: int, category_id: int) -> Category:
        """Reset an edited predefined category to its seeded name, icon and color."""
        with self._storage.transaction():
            category = self.get_category(account_id, category_id)
            if not category.is_predefined:
                raise CategoryNotPredefinedOrNotEdited("Only predefined categories can be restored")
            if not category.edited:
                raise CategoryNotPredefinedOrNotEdited("Category has not been edited")

            original_name = category.original_name or category.name
            if original_name not in PREDEFINED_CATEGORIES:
                raise CategoryNotPredefinedOrNotEdited(
                    f"No defaults recorded for category '{original_name}'"
                )
            self._ensure_unique(account_id, original_name, exclude_id=category_id)

            icon, color = PREDEFINED_CATEGORIES[original_name]
            category.name = original_name
            category.icon = icon
            category.color = color
            category.edited = False
            category.updated_at = self._clock.now()
            category = self._storage.categories.save(category)
        logger.info("Restored category %s for account %s", category_id, account_id)
        return category
