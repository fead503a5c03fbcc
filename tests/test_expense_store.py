from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.core.errors import (
    BudgetAmountInvalid,
    CategoryNotFound,
    ExpenseAmountInvalid,
    ExpenseDescriptionTooLong,
)
from expense_tracker.models.expense import Expense

from conftest import ACCOUNT, USER, NOW, category_id, spend


def test_create_expense_defaults_date_to_today(catalog, store):
    food = category_id(catalog, "Food")
    expense = store.create_expense(ACCOUNT, USER, food, 12.34, description="  lunch ")
    assert expense.id is not None
    assert expense.expense_date == NOW.date()
    assert expense.description == "lunch"
    assert expense.amount == 12.34
    assert expense.deleted is False


@pytest.mark.parametrize("amount", [0, -5, 0.001, float("nan"), "abc", None])
def test_non_positive_amount_is_rejected(catalog, store, amount):
    with pytest.raises(ExpenseAmountInvalid):
        store.create_expense(ACCOUNT, USER, category_id(catalog, "Food"), amount)


def test_description_length_limit(catalog, store):
    food = category_id(catalog, "Food")
    assert store.create_expense(ACCOUNT, USER, food, 1, description="x" * 100).description == "x" * 100
    with pytest.raises(ExpenseDescriptionTooLong):
        store.create_expense(ACCOUNT, USER, food, 1, description="x" * 101)


def test_blank_description_is_stored_as_none(catalog, store):
    expense = store.create_expense(ACCOUNT, USER, category_id(catalog, "Food"), 1, description="   ")
    assert expense.description is None


def test_unknown_or_deleted_category_is_rejected(catalog, store):
    with pytest.raises(CategoryNotFound):
        store.create_expense(ACCOUNT, USER, 999, 10)

    pets = catalog.create_category(ACCOUNT, "Pets", "paw", "#A1B2C3")
    catalog.delete_category(ACCOUNT, pets.id)
    with pytest.raises(CategoryNotFound):
        store.create_expense(ACCOUNT, USER, pets.id, 10)


def test_queries_skip_soft_deleted_and_other_accounts(catalog, store, storage):
    food = category_id(catalog, "Food")
    bills = category_id(catalog, "Bills")
    kept = spend(store, food, 10)
    spend(store, bills, 20)
    storage.expenses.add(
        Expense(account_id=ACCOUNT, user_id=USER, category_id=food, amount=99, expense_date=date(2024, 3, 1), deleted=True)
    )
    spend(store, category_id(catalog, "Food", account_id=2), 7, account_id=2)

    assert len(store.expenses_by_account(ACCOUNT)) == 2
    assert [e.id for e in store.expenses_by_category(ACCOUNT, food)] == [kept.id]


def test_returned_records_are_detached(catalog, store):
    food = category_id(catalog, "Food")
    expense = spend(store, food, 10)
    expense.amount = 1000
    assert store.expenses_by_account(ACCOUNT)[0].amount == 10


def test_reassign_category_moves_every_expense(catalog, store):
    food = category_id(catalog, "Food")
    other = category_id(catalog, "Other")
    spend(store, food, 10)
    spend(store, food, 20)

    assert store.reassign_category(ACCOUNT, food, other) == 2
    assert store.expenses_by_category(ACCOUNT, food) == []
    assert len(store.expenses_by_category(ACCOUNT, other)) == 2


def test_budget_defaults_to_zero(budgets):
    assert budgets.get_budget(ACCOUNT) == Decimal("0")


def test_set_and_clear_budget(budgets):
    budgets.set_budget(ACCOUNT, 1500.5)
    assert budgets.get_budget(ACCOUNT) == Decimal("1500.5")
    budgets.set_budget(ACCOUNT, 0)
    assert budgets.get_budget(ACCOUNT) == Decimal("0")


def test_negative_budget_is_rejected(budgets):
    with pytest.raises(BudgetAmountInvalid):
        budgets.set_budget(ACCOUNT, -1)


def test_non_numeric_budget_is_rejected(budgets):
    with pytest.raises(BudgetAmountInvalid):
        budgets.set_budget(ACCOUNT, "abc")
    assert budgets.get_budget_record(ACCOUNT) is None


def test_budget_record_keeps_update_time(budgets):
    assert budgets.get_budget_record(ACCOUNT) is None
    budgets.set_budget(ACCOUNT, 250)
    record = budgets.get_budget_record(ACCOUNT)
    assert record.amount == 250.0
    assert record.updated_at == NOW
