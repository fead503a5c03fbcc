"""Category distribution of a month's expenses.

The largest ``TOP_CATEGORIES`` categories are charted individually, anything
beyond that is folded into one "Others" slice. Percentages are rounded to one
decimal and then corrected so the slices add up to exactly 100.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from sqlmodel import SQLModel

from ..core.clock import SystemClock
from ..core.money import round_money, round_tenth, to_decimal
from ..core.periods import Period
from .category_catalog import CategoryCatalog
from .expense_store import ExpenseStore

TOP_CATEGORIES = 10

OTHERS_ID = 0
OTHERS_NAME = "Others"
OTHERS_ICON = "dots"
OTHERS_COLOR = "#9E9E9E"

HUNDRED = Decimal("100")


class CategoryChartEntry(SQLModel):
    category_id: int
    name: str
    icon: str
    color: str
    amount: float
    percentage: float
    is_others: bool = False


class ExpenseChart(SQLModel):
    period: str
    total_amount: float
    categories: List[CategoryChartEntry]
    timestamp: datetime


def rank_groups(groups: Dict[int, Decimal]) -> List[tuple]:
    """(category_id, amount) pairs, largest first, ties by category id."""
    return sorted(groups.items(), key=lambda item: (-item[1], item[0]))


def normalized_percentages(amounts: List[Decimal], whole: Decimal) -> List[Decimal]:
    if whole == 0:
        return [Decimal("0") for _ in amounts]
    percentages = [round_tenth(amount / whole * HUNDRED) for amount in amounts]
    residual = HUNDRED - sum(percentages, Decimal("0"))
    if percentages and abs(residual) > Decimal("0.01"):
        percentages[0] = round_tenth(percentages[0] + residual)
    return percentages


class ExpenseChartAggregator:
    def __init__(self, expenses: ExpenseStore, catalog: CategoryCatalog, clock=None):
        self._expenses = expenses
        self._catalog = catalog
        self._clock = clock or SystemClock()

    def compute_expense_chart(self, account_id: int, month: Optional[str] = None) -> ExpenseChart:
        now = self._clock.now()
        period = Period.resolve(month, now)

        with self._expenses.snapshot():
            expenses = self._expenses.expenses_by_account(account_id)
            categories = {c.id: c for c in self._catalog.list_categories(account_id)}

        groups: Dict[int, Decimal] = {}
        for expense in expenses:
            if not period.contains(expense.expense_date):
                continue
            # expenses of a category no longer in the catalog are not charted
            if expense.category_id not in categories:
                continue
            groups[expense.category_id] = groups.get(expense.category_id, Decimal("0")) + to_decimal(
                expense.amount
            )

        ranked = rank_groups(groups)
        whole = sum(groups.values(), Decimal("0"))

        slices = []
        for category_id, amount in ranked[:TOP_CATEGORIES]:
            category = categories[category_id]
            slices.append((category_id, category.name, category.icon, category.color, amount, False))

        tail = ranked[TOP_CATEGORIES:]
        if tail:
            others = sum((amount for _, amount in tail), Decimal("0"))
            slices.append((OTHERS_ID, OTHERS_NAME, OTHERS_ICON, OTHERS_COLOR, others, True))

        percentages = normalized_percentages([s[4] for s in slices], whole)

        entries = [
            CategoryChartEntry(
                category_id=category_id,
                name=name,
                icon=icon,
                color=color,
                amount=float(round_money(amount)),
                percentage=float(percentage),
                is_others=is_others,
            )
            for (category_id, name, icon, color, amount, is_others), percentage in zip(slices, percentages)
        ]

        return ExpenseChart(
            period=period.key,
            total_amount=float(round_money(whole)),
            categories=entries,
            timestamp=now,
        )
