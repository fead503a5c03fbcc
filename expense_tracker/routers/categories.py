from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlmodel import SQLModel

from ..dependencies import get_account_id, get_category_catalog
from ..models.category import Category
from ..services.category_catalog import CategoryCatalog

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
)

# ─────────────────────────────
#   SCHEMAS
# ─────────────────────────────

class CategoryWrite(SQLModel):
    # Length, charset and color rules live in CategoryCatalog so every caller gets them
    name: str
    icon: str
    color: str


class CategoryRead(SQLModel):
    id: int
    name: str
    icon: str
    color: str
    kind: str
    edited: bool


class CategoryDetail(CategoryRead):
    original_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CategoryDeleted(SQLModel):
    id: int
    reassigned_expenses: int


def _read(category: Category) -> CategoryRead:
    return CategoryRead(
        id=category.id,
        name=category.name,
        icon=category.icon,
        color=category.color,
        kind=category.kind,
        edited=category.edited,
    )


# ─────────────────────────────
#   ENDPOINTS
# ─────────────────────────────

@router.get(
    "",
    response_model=List[CategoryRead],
)
def list_categories(
    account_id: int = Depends(get_account_id),
    catalog: CategoryCatalog = Depends(get_category_catalog),
):
    """Active categories of the account, ordered by name."""
    return [_read(c) for c in catalog.list_categories(account_id)]


@router.post(
    "",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    payload: CategoryWrite,
    account_id: int = Depends(get_account_id),
    catalog: CategoryCatalog = Depends(get_category_catalog),
):
    category = catalog.create_category(account_id, payload.name, payload.icon, payload.color)
    return _read(category)


@router.get(
    "/{category_id}",
    response_model=CategoryDetail,
)
def get_category(
    category_id: int,
    account_id: int = Depends(get_account_id),
    catalog: CategoryCatalog = Depends(get_category_catalog),
):
    category = catalog.get_category(account_id, category_id)
    return CategoryDetail(
        **_read(category).model_dump(),
        original_name=category.original_name,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


@router.put(
    "/{category_id}",
    response_model=CategoryRead,
)
def update_category(
    category_id: int,
    payload: CategoryWrite,
    account_id: int = Depends(get_account_id),
    catalog: CategoryCatalog = Depends(get_category_catalog),
):
    """Edit name, icon and color. Editing a predefined category marks it as edited."""
    category = catalog.update_category(account_id, category_id, payload.name, payload.icon, payload.color)
    return _read(category)


@router.delete(
    "/{category_id}",
    response_model=CategoryDeleted,
)
def delete_category(
    category_id: int,
    substitute_category_id: Optional[int] = None,
    account_id: int = Depends(get_account_id),
    catalog: CategoryCatalog = Depends(get_category_catalog),
):
    """
    Delete a custom category.

    - If expenses still use it, substitute_category_id names where they move.
    - Predefined categories can only be edited or restored.
    """
    moved = catalog.delete_category(account_id, category_id, substitute_category_id)
    return CategoryDeleted(id=category_id, reassigned_expenses=moved)


@router.post(
    "/{category_id}/restore",
    response_model=CategoryRead,
)
def restore_category(
    category_id: int,
    account_id: int = Depends(get_account_id),
    catalog: CategoryCatalog = Depends(get_category_catalog),
):
    return _read(catalog.restore_category(account_id, category_id))
