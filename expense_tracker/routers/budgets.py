from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlmodel import SQLModel

from ..dependencies import get_account_id, get_budget_provider
from ..services.budget_provider import BudgetProvider


router = APIRouter(
    prefix="/budget",
    tags=["budget"],
)


class BudgetUpdate(SQLModel):
    amount: float


class BudgetRead(SQLModel):
    account_id: int
    amount: float
    defined: bool
    updated_at: Optional[datetime] = None


@router.get(
    "",
    response_model=BudgetRead,
    status_code=status.HTTP_200_OK,
)
def get_budget(
    account_id: int = Depends(get_account_id),
    provider: BudgetProvider = Depends(get_budget_provider),
):
    budget = provider.get_budget_record(account_id)
    if budget is None:
        return BudgetRead(account_id=account_id, amount=0.0, defined=False)
    return BudgetRead(
        account_id=account_id,
        amount=budget.amount,
        defined=budget.amount > 0,
        updated_at=budget.updated_at,
    )


@router.put(
    "",
    response_model=BudgetRead,
    status_code=status.HTTP_200_OK,
)
def set_budget(
    payload: BudgetUpdate,
    account_id: int = Depends(get_account_id),
    provider: BudgetProvider = Depends(get_budget_provider),
):
    """Define the monthly budget. Sending 0 leaves the budget undefined."""
    budget = provider.set_budget(account_id, payload.amount)
    return BudgetRead(
        account_id=account_id,
        amount=budget.amount,
        defined=budget.amount > 0,
        updated_at=budget.updated_at,
    )
