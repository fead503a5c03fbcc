"""Remaining monthly budget, its status and the fields the balance card shows."""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlmodel import SQLModel

from ..core.clock import SystemClock
from ..core.money import format_currency, format_percentage, percent_of, round_money, total
from ..core.periods import Period
from .budget_provider import BudgetProvider
from .expense_store import ExpenseStore

POSITIVE = "positive"
NEGATIVE = "negative"
WARNING = "warning"
UNDEFINED = "undefined"

STATUS_COLORS = {
    POSITIVE: "green",
    NEGATIVE: "red",
    WARNING: "yellow",
    UNDEFINED: "gray",
}

STATUS_MESSAGES = {
    POSITIVE: "balance available",
    NEGATIVE: "budget exceeded",
    WARNING: "low balance warning",
    UNDEFINED: "define a monthly budget",
}

# share of the budget left at or below which the balance is a warning
WARNING_REMAINING_SHARE = Decimal("0.10")
# utilization (%) from which the progress bar turns yellow
PROGRESS_WARNING_PCT = Decimal("90")

BUDGET_ACTION = "/budget"


class NoBudgetPrompt(SQLModel):
    visible: bool
    message: str
    action: str


class AvailableBalance(SQLModel):
    budget_amount: float
    total_expenses: float
    balance: float
    utilization_pct: Optional[float] = None
    status: str
    reference_month: date

    formatted_balance: str
    indicator_color: str
    status_message: str
    formatted_percentage: str
    progress_value: float
    progress_color: str

    no_budget_prompt: NoBudgetPrompt


def classify_balance(budget: Decimal, balance: Decimal) -> str:
    if budget == 0:
        return UNDEFINED
    if balance < 0:
        return NEGATIVE
    if balance <= budget * WARNING_REMAINING_SHARE:
        return WARNING
    return POSITIVE


def progress_color(utilization_pct: Optional[Decimal]) -> str:
    if utilization_pct is None:
        return "gray"
    if utilization_pct > 100:
        return "red"
    if utilization_pct >= PROGRESS_WARNING_PCT:
        return "yellow"
    return "green"


class AvailableBalanceCalculator:
    def __init__(self, expenses: ExpenseStore, budgets: BudgetProvider, clock=None, currency_symbol: str = "$"):
        self._expenses = expenses
        self._budgets = budgets
        self._clock = clock or SystemClock()
        self._currency_symbol = currency_symbol

    def compute_available_balance(self, account_id: int, month: Optional[str] = None) -> AvailableBalance:
        """Balance for ``month`` (``YYYY-MM``), the current month by default."""
        period = Period.resolve(month, self._clock.now())

        with self._expenses.snapshot():
            expenses = self._expenses.expenses_by_account(account_id)
            budget = self._budgets.get_budget(account_id)

        spent = total(e.amount for e in expenses if period.contains(e.expense_date))
        balance = budget - spent
        utilization = percent_of(spent, budget)
        status = classify_balance(budget, balance)

        progress = Decimal("0") if utilization is None else utilization / 100

        return AvailableBalance(
            budget_amount=float(round_money(budget)),
            total_expenses=float(round_money(spent)),
            balance=float(round_money(balance)),
            utilization_pct=float(round_money(utilization)) if utilization is not None else None,
            status=status,
            reference_month=period.first_day,
            formatted_balance=format_currency(balance, self._currency_symbol),
            indicator_color=STATUS_COLORS[status],
            status_message=STATUS_MESSAGES[status],
            formatted_percentage=format_percentage(utilization),
            progress_value=float(progress.quantize(Decimal("0.0001"))),
            progress_color=progress_color(utilization),
            no_budget_prompt=NoBudgetPrompt(
                visible=status == UNDEFINED,
                message=STATUS_MESSAGES[UNDEFINED],
                action=BUDGET_ACTION,
            ),
        )
