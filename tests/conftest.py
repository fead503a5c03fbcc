from datetime import date, datetime, timezone

import pytest

from expense_tracker.core.clock import FixedClock
from expense_tracker.database import build_engine, init_db
from expense_tracker.repositories.memory import InMemoryStorage
from expense_tracker.services.available_balance import AvailableBalanceCalculator
from expense_tracker.services.budget_provider import BudgetProvider
from expense_tracker.services.category_catalog import CategoryCatalog
from expense_tracker.services.expense_chart import ExpenseChartAggregator
from expense_tracker.services.expense_store import ExpenseStore
from expense_tracker.services.monthly_total import MonthlyTotalAggregator

ACCOUNT = 1
USER = 1
NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def catalog(storage, clock):
    return CategoryCatalog(storage, clock)


@pytest.fixture
def store(storage, catalog, clock):
    return ExpenseStore(storage, catalog, clock)


@pytest.fixture
def budgets(storage, clock):
    return BudgetProvider(storage, clock)


@pytest.fixture
def monthly_totals(store, budgets, clock):
    return MonthlyTotalAggregator(store, budgets, clock)


@pytest.fixture
def balances(store, budgets, clock):
    return AvailableBalanceCalculator(store, budgets, clock, currency_symbol="$")


@pytest.fixture
def charts(store, catalog, clock):
    return ExpenseChartAggregator(store, catalog, clock)


def category_id(catalog, name, account_id=ACCOUNT):
    for category in catalog.list_categories(account_id):
        if category.name == name:
            return category.id
    raise LookupError(name)


def spend(store, category, amount, day=date(2024, 3, 10), account_id=ACCOUNT):
    return store.create_expense(account_id, USER, category, amount, expense_date=day)
