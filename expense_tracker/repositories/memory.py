"""Process-lifetime storage. Nothing survives a restart."""

import threading
from contextlib import contextmanager
from datetime import datetime
from itertools import count
from typing import Dict, List, Optional, TypeVar

from sqlmodel import SQLModel

from ..models.budget import Budget
from ..models.category import Category
from ..models.expense import Expense
from .base import BudgetRepository, CategoryRepository, ExpenseRepository, Storage

T = TypeVar("T", bound=SQLModel)


def _detached(record: T) -> T:
    return type(record)(**record.model_dump())


class InMemoryCategoryRepository(CategoryRepository):
    def __init__(self, lock: threading.RLock):
        self._lock = lock
        self._rows: Dict[int, Category] = {}
        self._ids = count(1)

    def list(self, account_id: int) -> List[Category]:
        with self._lock:
            return [
                _detached(c)
                for c in self._rows.values()
                if c.account_id == account_id and not c.deleted
            ]

    def get(self, account_id: int, category_id: int) -> Optional[Category]:
        with self._lock:
            row = self._rows.get(category_id)
            if row is None or row.account_id != account_id or row.deleted:
                return None
            return _detached(row)

    def add(self, category: Category) -> Category:
        with self._lock:
            stored = _detached(category)
            stored.id = next(self._ids)
            self._rows[stored.id] = stored
            return _detached(stored)

    def save(self, category: Category) -> Category:
        with self._lock:
            if category.id not in self._rows:
                raise KeyError(f"category {category.id} was never added")
            self._rows[category.id] = _detached(category)
            return _detached(category)

    def has_any(self, account_id: int) -> bool:
        with self._lock:
            return any(c.account_id == account_id for c in self._rows.values())


class InMemoryExpenseRepository(ExpenseRepository):
    def __init__(self, lock: threading.RLock):
        self._lock = lock
        self._rows: Dict[int, Expense] = {}
        self._ids = count(1)

    def list_by_account(self, account_id: int) -> List[Expense]:
        with self._lock:
            return [
                _detached(e)
                for e in self._rows.values()
                if e.account_id == account_id and not e.deleted
            ]

    def list_by_category(self, account_id: int, category_id: int) -> List[Expense]:
        return [e for e in self.list_by_account(account_id) if e.category_id == category_id]

    def add(self, expense: Expense) -> Expense:
        with self._lock:
            stored = _detached(expense)
            stored.id = next(self._ids)
            self._rows[stored.id] = stored
            return _detached(stored)

    def reassign_category(
        self, account_id: int, from_category_id: int, to_category_id: int, when: datetime
    ) -> int:
        moved = 0
        with self._lock:
            for row in self._rows.values():
                if row.account_id == account_id and row.category_id == from_category_id and not row.deleted:
                    row.category_id = to_category_id
                    row.updated_at = when
                    moved += 1
        return moved


class InMemoryBudgetRepository(BudgetRepository):
    def __init__(self, lock: threading.RLock):
        self._lock = lock
        self._rows: Dict[int, Budget] = {}

    def get(self, account_id: int) -> Optional[Budget]:
        with self._lock:
            row = self._rows.get(account_id)
            return _detached(row) if row is not None else None

    def save(self, budget: Budget) -> Budget:
        with self._lock:
            self._rows[budget.account_id] = _detached(budget)
            return _detached(budget)


class InMemoryStorage(Storage):
    def __init__(self):
        self._lock = threading.RLock()
        self.categories = InMemoryCategoryRepository(self._lock)
        self.expenses = InMemoryExpenseRepository(self._lock)
        self.budgets = InMemoryBudgetRepository(self._lock)

    @contextmanager
    def transaction(self):
        # Re-entrant: repository calls inside the block take the same lock
        with self._lock:
            yield self
