from typing import Optional

from fastapi import Depends, Header

from .config import settings
from .core.clock import SystemClock
from .database import get_session
from .repositories.base import Storage
from .repositories.memory import InMemoryStorage
from .repositories.sql import SqlStorage
from .services.available_balance import AvailableBalanceCalculator
from .services.budget_provider import BudgetProvider
from .services.category_catalog import CategoryCatalog
from .services.expense_chart import ExpenseChartAggregator
from .services.expense_store import ExpenseStore
from .services.monthly_total import MonthlyTotalAggregator

# Shared by every request when STORAGE_BACKEND=memory
memory_storage = InMemoryStorage()
system_clock = SystemClock()


def get_storage():
    if settings.storage_backend != "sql":
        yield memory_storage
        return

    sessions = get_session()
    try:
        yield SqlStorage(next(sessions))
    finally:
        sessions.close()


def get_clock():
    return system_clock


def get_account_id(x_account_id: Optional[int] = Header(default=None)) -> int:
    # Stands in for authentication: the caller names its account
    return x_account_id if x_account_id is not None else settings.default_account_id


def get_user_id(x_user_id: Optional[int] = Header(default=None)) -> int:
    return x_user_id if x_user_id is not None else settings.default_user_id


def get_category_catalog(
    storage: Storage = Depends(get_storage),
    clock=Depends(get_clock),
) -> CategoryCatalog:
    return CategoryCatalog(storage, clock)


def get_expense_store(
    storage: Storage = Depends(get_storage),
    catalog: CategoryCatalog = Depends(get_category_catalog),
    clock=Depends(get_clock),
) -> ExpenseStore:
    return ExpenseStore(storage, catalog, clock)


def get_budget_provider(
    storage: Storage = Depends(get_storage),
    clock=Depends(get_clock),
) -> BudgetProvider:
    return BudgetProvider(storage, clock)


def get_monthly_total_aggregator(
    expenses: ExpenseStore = Depends(get_expense_store),
    budgets: BudgetProvider = Depends(get_budget_provider),
    clock=Depends(get_clock),
) -> MonthlyTotalAggregator:
    return MonthlyTotalAggregator(expenses, budgets, clock)


def get_available_balance_calculator(
    expenses: ExpenseStore = Depends(get_expense_store),
    budgets: BudgetProvider = Depends(get_budget_provider),
    clock=Depends(get_clock),
) -> AvailableBalanceCalculator:
    return AvailableBalanceCalculator(expenses, budgets, clock, currency_symbol=settings.currency_symbol)


def get_expense_chart_aggregator(
    expenses: ExpenseStore = Depends(get_expense_store),
    catalog: CategoryCatalog = Depends(get_category_catalog),
    clock=Depends(get_clock),
) -> ExpenseChartAggregator:
    return ExpenseChartAggregator(expenses, catalog, clock)
