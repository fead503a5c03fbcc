"""Storage interfaces consumed by the services.

Services only talk to these abstractions, so the in-memory store and the
SQLModel store are interchangeable. Reads return detached records: mutating a
returned record has no effect until it is passed back to ``save``.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from typing import List, Optional

from ..models.budget import Budget
from ..models.category import Category
from ..models.expense import Expense


class CategoryRepository(ABC):
    @abstractmethod
    def list(self, account_id: int) -> List[Category]:
        """Active (non-deleted) categories of the account, in insertion order."""

    @abstractmethod
    def get(self, account_id: int, category_id: int) -> Optional[Category]:
        """Active category or None."""

    @abstractmethod
    def add(self, category: Category) -> Category:
        """Insert and return the stored record with its id assigned."""

    @abstractmethod
    def save(self, category: Category) -> Category:
        """Overwrite an existing record."""

    @abstractmethod
    def has_any(self, account_id: int) -> bool:
        """True when the account ever had a category, deleted ones included."""


class ExpenseRepository(ABC):
    @abstractmethod
    def list_by_account(self, account_id: int) -> List[Expense]:
        """Non-deleted expenses of the account."""

    @abstractmethod
    def list_by_category(self, account_id: int, category_id: int) -> List[Expense]:
        """Non-deleted expenses of the account filed under the category."""

    @abstractmethod
    def add(self, expense: Expense) -> Expense:
        pass

    @abstractmethod
    def reassign_category(
        self, account_id: int, from_category_id: int, to_category_id: int, when: datetime
    ) -> int:
        """Move every non-deleted expense of one category to another; returns the count."""


class BudgetRepository(ABC):
    @abstractmethod
    def get(self, account_id: int) -> Optional[Budget]:
        pass

    @abstractmethod
    def save(self, budget: Budget) -> Budget:
        """Insert or replace the account's budget."""


class Storage(ABC):
    """Bundle of repositories sharing one consistency boundary.

    Every multi-record read or write goes through ``transaction()`` so an
    aggregator never observes a half-applied category reassignment.
    """

    categories: CategoryRepository
    expenses: ExpenseRepository
    budgets: BudgetRepository

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        pass
