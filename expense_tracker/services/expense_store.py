import logging
from datetime import date
from decimal import InvalidOperation
from typing import List, Optional

from ..core.clock import SystemClock
from ..core.errors import ExpenseAmountInvalid, ExpenseDescriptionTooLong
from ..core.money import round_money, to_decimal
from ..models.expense import Expense
from ..repositories.base import Storage
from .category_catalog import CategoryCatalog

logger = logging.getLogger(__name__)

DESCRIPTION_MAX_LENGTH = 100


class ExpenseStore:
    def __init__(self, storage: Storage, catalog: CategoryCatalog, clock=None):
        self._storage = storage
        self._catalog = catalog
        self._clock = clock or SystemClock()

    def snapshot(self):
        """Context in which consecutive reads see one consistent state."""
        return self._storage.transaction()

    def create_expense(
        self,
        account_id: int,
        user_id: int,
        category_id: int,
        amount,
        expense_date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> Expense:
        try:
            value = to_decimal(amount)
        except InvalidOperation:
            raise ExpenseAmountInvalid(f"Amount must be a number, got {amount!r}")
        if not value.is_finite() or round_money(value) <= 0:
            raise ExpenseAmountInvalid("Amount must be greater than zero")

        if description is not None:
            description = description.strip() or None
        if description and len(description) > DESCRIPTION_MAX_LENGTH:
            raise ExpenseDescriptionTooLong(
                f"Description must have at most {DESCRIPTION_MAX_LENGTH} characters"
            )

        now = self._clock.now()
        with self._storage.transaction():
            # Raises CategoryNotFound for unknown or deleted categories
            self._catalog.get_category(account_id, category_id)
            expense = self._storage.expenses.add(
                Expense(
                    account_id=account_id,
                    user_id=user_id,
                    category_id=category_id,
                    amount=float(round_money(value)),
                    expense_date=expense_date or now.date(),
                    description=description,
                    created_at=now,
                    updated_at=now,
                    deleted=False,
                )
            )
        logger.info("Created expense %s (%s) for account %s", expense.id, expense.amount, account_id)
        return expense

    def expenses_by_account(self, account_id: int) -> List[Expense]:
        return self._storage.expenses.list_by_account(account_id)

    def expenses_by_category(self, account_id: int, category_id: int) -> List[Expense]:
        return self._storage.expenses.list_by_category(account_id, category_id)

    def reassign_category(self, account_id: int, from_category_id: int, to_category_id: int) -> int:
        with self._storage.transaction():
            moved = self._storage.expenses.reassign_category(
                account_id, from_category_id, to_category_id, self._clock.now()
            )
        logger.info(
            "Moved %s expense(s) from category %s to %s for account %s",
            moved,
            from_category_id,
            to_category_id,
            account_id,
        )
        return moved
