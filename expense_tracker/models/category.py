from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


PREDEFINED = "predefined"
CUSTOM = "custom"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(SQLModel, table=True):
    __tablename__ = "categories"
    # Custom categories carry no original_name, and NULLs never collide
    __table_args__ = (UniqueConstraint("account_id", "original_name", name="uq_categories_predefined"),)

    id: Optional[int] = Field(default=None, primary_key=True)

    account_id: int = Field(index=True)

    name: str = Field(max_length=30)
    icon: str = Field(max_length=50)
    color: str = Field(max_length=7)

    # PREDEFINED | CUSTOM
    kind: str = Field(default=CUSTOM, max_length=10)
    edited: bool = Field(default=False)
    # Name a predefined category was seeded with; restore looks it up in the defaults table
    original_name: Optional[str] = Field(default=None, max_length=30)

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    deleted: bool = Field(default=False, index=True)

    @property
    def is_predefined(self) -> bool:
        return self.kind == PREDEFINED
