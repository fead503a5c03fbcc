"""Monthly total with previous-month comparison and budget indicator."""

from decimal import Decimal
from typing import Optional

from sqlmodel import SQLModel

from ..core.clock import SystemClock
from ..core.money import format_percentage, percent_of, round_money, total
from ..core.periods import Period
from .budget_provider import BudgetProvider
from .expense_store import ExpenseStore

NO_COMPARISON_MESSAGE = "no comparison data available"
NO_BUDGET_MESSAGE = "budget not defined"

# budget usage (%) at or below which the indicator stays green / yellow
GREEN_LIMIT = Decimal("80")
YELLOW_LIMIT = Decimal("100")


class MonthlyTotal(SQLModel):
    month_reference: str
    month_reference_display: str
    total_current_month: float
    total_previous_month: float
    percentage_variation: Optional[float] = None
    percentage_variation_display: str
    visual_indicator: str
    budget_percentage: Optional[float] = None
    budget_percentage_display: str
    budget_amount: Optional[float] = None


def budget_indicator(budget_pct: Optional[Decimal]) -> str:
    if budget_pct is None:
        return "gray"
    if budget_pct <= GREEN_LIMIT:
        return "green"
    if budget_pct <= YELLOW_LIMIT:
        return "yellow"
    return "red"


def _rounded(value: Optional[Decimal]) -> Optional[float]:
    return float(round_money(value)) if value is not None else None


class MonthlyTotalAggregator:
    def __init__(self, expenses: ExpenseStore, budgets: BudgetProvider, clock=None):
        self._expenses = expenses
        self._budgets = budgets
        self._clock = clock or SystemClock()

    def compute_monthly_total(self, account_id: int, month: Optional[str] = None) -> MonthlyTotal:
        period = Period.resolve(month, self._clock.now())
        previous = period.previous()

        with self._expenses.snapshot():
            expenses = self._expenses.expenses_by_account(account_id)
            budget = self._budgets.get_budget(account_id)

        current_total = total(e.amount for e in expenses if period.contains(e.expense_date))
        previous_total = total(e.amount for e in expenses if previous.contains(e.expense_date))

        # No previous spending means there is nothing to compare against
        variation = None
        if previous_total != 0:
            variation = (current_total - previous_total) / previous_total * 100

        budget_pct = percent_of(current_total, budget)

        return MonthlyTotal(
            month_reference=period.key,
            month_reference_display=period.display_name,
            total_current_month=float(round_money(current_total)),
            total_previous_month=float(round_money(previous_total)),
            percentage_variation=_rounded(variation),
            percentage_variation_display=format_percentage(variation, NO_COMPARISON_MESSAGE),
            visual_indicator=budget_indicator(budget_pct),
            budget_percentage=_rounded(budget_pct),
            budget_percentage_display=format_percentage(budget_pct, NO_BUDGET_MESSAGE),
            budget_amount=float(round_money(budget)) if budget > 0 else None,
        )
