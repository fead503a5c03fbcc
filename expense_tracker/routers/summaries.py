from typing import Optional

from fastapi import APIRouter, Depends

from ..dependencies import (
    get_account_id,
    get_available_balance_calculator,
    get_expense_chart_aggregator,
    get_monthly_total_aggregator,
)
from ..services.available_balance import AvailableBalance, AvailableBalanceCalculator
from ..services.expense_chart import ExpenseChart, ExpenseChartAggregator
from ..services.monthly_total import MonthlyTotal, MonthlyTotalAggregator


router = APIRouter(tags=["summaries"])


@router.get(
    "/monthly-total",
    response_model=MonthlyTotal,
)
def monthly_total(
    month: Optional[str] = None,
    account_id: int = Depends(get_account_id),
    aggregator: MonthlyTotalAggregator = Depends(get_monthly_total_aggregator),
):
    """Total of the month (YYYY-MM, default current) compared with the month before."""
    return aggregator.compute_monthly_total(account_id, month)


@router.get(
    "/available-balance",
    response_model=AvailableBalance,
)
def available_balance(
    month: Optional[str] = None,
    account_id: int = Depends(get_account_id),
    calculator: AvailableBalanceCalculator = Depends(get_available_balance_calculator),
):
    return calculator.compute_available_balance(account_id, month)


@router.get(
    "/expense-chart",
    response_model=ExpenseChart,
)
def expense_chart(
    month: Optional[str] = None,
    account_id: int = Depends(get_account_id),
    aggregator: ExpenseChartAggregator = Depends(get_expense_chart_aggregator),
):
    """Top 10 categories of the month plus an "Others" slice for the rest."""
    return aggregator.compute_expense_chart(account_id, month)
