from datetime import date

import pytest

from conftest import ACCOUNT, category_id, spend


@pytest.fixture
def food(catalog):
    return category_id(catalog, "Food")


def test_undefined_without_budget_regardless_of_spending(store, balances, food):
    spend(store, food, 500, date(2024, 3, 2))

    result = balances.compute_available_balance(ACCOUNT)

    assert result.status == "undefined"
    assert result.utilization_pct is None
    assert result.balance == -500.0
    assert result.indicator_color == "gray"
    assert result.status_message == "define a monthly budget"
    assert result.formatted_percentage == "--"
    assert result.progress_value == 0
    assert result.progress_color == "gray"
    assert result.no_budget_prompt.visible is True
    assert result.no_budget_prompt.message == "define a monthly budget"
    assert result.no_budget_prompt.action == "/budget"


def test_positive_balance(store, budgets, balances, food):
    budgets.set_budget(ACCOUNT, 1000)
    spend(store, food, 850, date(2024, 3, 2))

    result = balances.compute_available_balance(ACCOUNT)

    assert result.status == "positive"
    assert result.balance == 150.0
    assert result.utilization_pct == 85.0
    assert result.indicator_color == "green"
    assert result.status_message == "balance available"
    assert result.formatted_balance == "$150.00"
    assert result.formatted_percentage == "85.0%"
    assert result.progress_value == 0.85
    assert result.progress_color == "green"
    assert result.no_budget_prompt.visible is False
    assert result.reference_month == date(2024, 3, 1)


def test_exactly_ten_percent_left_is_a_warning(store, budgets, balances, food):
    budgets.set_budget(ACCOUNT, 1000)
    spend(store, food, 900, date(2024, 3, 2))

    result = balances.compute_available_balance(ACCOUNT)

    assert result.balance == 100.0
    assert result.status == "warning"
    assert result.indicator_color == "yellow"
    assert result.status_message == "low balance warning"


def test_progress_bar_threshold_is_separate_from_status(store, budgets, balances, food):
    budgets.set_budget(ACCOUNT, 1000)
    spend(store, food, 899, date(2024, 3, 2))

    result = balances.compute_available_balance(ACCOUNT)

    # 101 left is above the 10% warning line, but 89.9% used is below the bar's 90%
    assert result.status == "positive"
    assert result.progress_color == "green"

    spend(store, food, 1, date(2024, 3, 3))
    result = balances.compute_available_balance(ACCOUNT)
    assert result.utilization_pct == 90.0
    assert result.progress_color == "yellow"


def test_overspent_budget_is_negative(store, budgets, balances, food):
    budgets.set_budget(ACCOUNT, 1000)
    spend(store, food, 1050, date(2024, 3, 2))

    result = balances.compute_available_balance(ACCOUNT)

    assert result.status == "negative"
    assert result.balance == -50.0
    assert result.formatted_balance == "-$50.00"
    assert result.indicator_color == "red"
    assert result.status_message == "budget exceeded"
    assert result.progress_value == 1.05
    assert result.progress_color == "red"


def test_spending_exactly_the_budget(store, budgets, balances, food):
    budgets.set_budget(ACCOUNT, 1000)
    spend(store, food, 1000, date(2024, 3, 2))

    result = balances.compute_available_balance(ACCOUNT)

    assert result.status == "warning"
    assert result.progress_color == "yellow"
    assert result.progress_value == 1.0


def test_balance_is_exact_to_the_cent(store, budgets, balances, food):
    budgets.set_budget(ACCOUNT, 100.10)
    spend(store, food, 33.33, date(2024, 3, 2))
    spend(store, food, 33.33, date(2024, 3, 3))

    result = balances.compute_available_balance(ACCOUNT)

    assert result.total_expenses == 66.66
    assert result.balance == 33.44


def test_only_the_evaluated_month_counts(store, budgets, balances, food):
    budgets.set_budget(ACCOUNT, 500)
    spend(store, food, 400, date(2024, 2, 20))
    spend(store, food, 100, date(2024, 3, 2))

    assert balances.compute_available_balance(ACCOUNT).balance == 400.0
    february = balances.compute_available_balance(ACCOUNT, "2024-02")
    assert february.balance == 100.0
    assert february.reference_month == date(2024, 2, 1)
