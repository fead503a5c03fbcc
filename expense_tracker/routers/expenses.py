from datetime import datetime, date
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlmodel import SQLModel

from ..dependencies import get_account_id, get_expense_store, get_user_id
from ..services.expense_store import ExpenseStore

router = APIRouter(
    prefix="/expenses",
    tags=["expenses"],
)

# ─────────────────────────────
#   SCHEMAS
# ─────────────────────────────

class ExpenseCreate(SQLModel):
    amount: float
    category_id: int
    expense_date: Optional[date] = None
    description: Optional[str] = None


class ExpenseRead(SQLModel):
    id: int
    account_id: int
    user_id: int
    category_id: int
    amount: float
    expense_date: date
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ─────────────────────────────
#   ENDPOINTS
# ─────────────────────────────

@router.post(
    "",
    response_model=ExpenseRead,
    status_code=status.HTTP_201_CREATED,
)
def create_expense(
    expense_in: ExpenseCreate,
    account_id: int = Depends(get_account_id),
    user_id: int = Depends(get_user_id),
    store: ExpenseStore = Depends(get_expense_store),
):
    """
    Record an expense for the account.

    - amount must be positive, description at most 100 characters.
    - expense_date defaults to today.
    """
    expense = store.create_expense(
        account_id,
        user_id,
        expense_in.category_id,
        expense_in.amount,
        expense_date=expense_in.expense_date,
        description=expense_in.description,
    )
    return ExpenseRead(**expense.model_dump())


@router.get(
    "",
    response_model=List[ExpenseRead],
)
def list_expenses(
    category_id: Optional[int] = None,
    account_id: int = Depends(get_account_id),
    store: ExpenseStore = Depends(get_expense_store),
):
    """Non-deleted expenses of the account, newest first."""
    if category_id is not None:
        expenses = store.expenses_by_category(account_id, category_id)
    else:
        expenses = store.expenses_by_account(account_id)
    expenses.sort(key=lambda e: (e.expense_date, e.id), reverse=True)
    return [ExpenseRead(**e.model_dump()) for e in expenses]
