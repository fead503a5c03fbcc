"""SQLModel-backed storage, one instance per database session."""

from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional, TypeVar

from sqlmodel import Session, SQLModel, select

from ..models.budget import Budget
from ..models.category import Category
from ..models.expense import Expense
from .base import BudgetRepository, CategoryRepository, ExpenseRepository, Storage

T = TypeVar("T", bound=SQLModel)


def _detached(record: T) -> T:
    return type(record)(**record.model_dump())


class SqlCategoryRepository(CategoryRepository):
    def __init__(self, session: Session):
        self._session = session

    def list(self, account_id: int) -> List[Category]:
        statement = (
            select(Category)
            .where(Category.account_id == account_id)
            .where(Category.deleted == False)  # noqa: E712
            .order_by(Category.id)
        )
        return [_detached(c) for c in self._session.exec(statement).all()]

    def get(self, account_id: int, category_id: int) -> Optional[Category]:
        row = self._session.get(Category, category_id)
        if row is None or row.account_id != account_id or row.deleted:
            return None
        return _detached(row)

    def add(self, category: Category) -> Category:
        row = _detached(category)
        row.id = None
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return _detached(row)

    def save(self, category: Category) -> Category:
        row = self._session.merge(_detached(category))
        self._session.flush()
        return _detached(row)

    def has_any(self, account_id: int) -> bool:
        statement = select(Category.id).where(Category.account_id == account_id).limit(1)
        return self._session.exec(statement).first() is not None


class SqlExpenseRepository(ExpenseRepository):
    def __init__(self, session: Session):
        self._session = session

    def _active(self, account_id: int):
        return (
            select(Expense)
            .where(Expense.account_id == account_id)
            .where(Expense.deleted == False)  # noqa: E712
        )

    def list_by_account(self, account_id: int) -> List[Expense]:
        statement = self._active(account_id).order_by(Expense.id)
        return [_detached(e) for e in self._session.exec(statement).all()]

    def list_by_category(self, account_id: int, category_id: int) -> List[Expense]:
        statement = self._active(account_id).where(Expense.category_id == category_id).order_by(Expense.id)
        return [_detached(e) for e in self._session.exec(statement).all()]

    def add(self, expense: Expense) -> Expense:
        row = _detached(expense)
        row.id = None
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return _detached(row)

    def reassign_category(
        self, account_id: int, from_category_id: int, to_category_id: int, when: datetime
    ) -> int:
        statement = self._active(account_id).where(Expense.category_id == from_category_id)
        rows = self._session.exec(statement).all()
        for row in rows:
            row.category_id = to_category_id
            row.updated_at = when
            self._session.add(row)
        self._session.flush()
        return len(rows)


class SqlBudgetRepository(BudgetRepository):
    def __init__(self, session: Session):
        self._session = session

    def get(self, account_id: int) -> Optional[Budget]:
        row = self._session.get(Budget, account_id)
        return _detached(row) if row is not None else None

    def save(self, budget: Budget) -> Budget:
        row = self._session.merge(_detached(budget))
        self._session.flush()
        return _detached(row)


class SqlStorage(Storage):
    def __init__(self, session: Session):
        self._session = session
        self._depth = 0
        self.categories = SqlCategoryRepository(session)
        self.expenses = SqlExpenseRepository(session)
        self.budgets = SqlBudgetRepository(session)

    @contextmanager
    def transaction(self):
        # Only the outermost block commits
        self._depth += 1
        try:
            yield self
        except Exception:
            if self._depth == 1:
                self._session.rollback()
            raise
        else:
            if self._depth == 1:
                self._session.commit()
        finally:
            self._depth -= 1
