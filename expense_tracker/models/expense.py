from datetime import datetime, date, timezone
from typing import Optional
from sqlmodel import SQLModel, Field


class Expense(SQLModel, table=True):
    __tablename__ = "expenses"

    id: Optional[int] = Field(default=None, primary_key=True)

    account_id: int = Field(index=True)
    user_id: int = Field(index=True)
    category_id: int = Field(foreign_key="categories.id", index=True)

    amount: float
    expense_date: date = Field(default_factory=date.today)
    description: Optional[str] = Field(default=None, max_length=100)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    deleted: bool = Field(default=False, index=True)
