import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..core.clock import SystemClock
from ..core.errors import BudgetAmountInvalid
from ..core.money import round_money, to_decimal
from ..models.budget import Budget
from ..repositories.base import Storage

logger = logging.getLogger(__name__)


class BudgetProvider:
    """Monthly budget per account. An undefined budget reads as 0."""

    def __init__(self, storage: Storage, clock=None):
        self._storage = storage
        self._clock = clock or SystemClock()

    def get_budget_record(self, account_id: int) -> Optional[Budget]:
        return self._storage.budgets.get(account_id)

    def get_budget(self, account_id: int) -> Decimal:
        budget = self.get_budget_record(account_id)
        if budget is None:
            return Decimal("0")
        return to_decimal(budget.amount)

    def set_budget(self, account_id: int, amount) -> Budget:
        """Define (or with 0, clear) the account's monthly budget."""
        try:
            value = to_decimal(amount)
        except InvalidOperation:
            raise BudgetAmountInvalid(f"Budget amount must be a number, got {amount!r}")
        if not value.is_finite() or value < 0:
            logger.warning("Rejected budget %s for account %s", amount, account_id)
            raise BudgetAmountInvalid("Budget amount must be zero or positive")

        now = self._clock.now()
        with self._storage.transaction():
            existing = self._storage.budgets.get(account_id)
            budget = Budget(
                account_id=account_id,
                amount=float(round_money(value)),
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            saved = self._storage.budgets.save(budget)
        logger.info("Budget for account %s set to %s", account_id, saved.amount)
        return saved
