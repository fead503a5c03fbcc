import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from .errors import PeriodInvalid

MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True)
class Period:
    """A calendar month."""

    year: int
    month: int

    @classmethod
    def parse(cls, value: str) -> "Period":
        """Parse a ``YYYY-MM`` string."""
        match = MONTH_RE.match(value or "")
        if match is None:
            raise PeriodInvalid(f"Invalid month: {value!r}, expected YYYY-MM")
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise PeriodInvalid(f"Invalid month: {value!r}, expected YYYY-MM")
        return cls(year, month)

    @classmethod
    def containing(cls, moment: Union[date, datetime]) -> "Period":
        return cls(moment.year, moment.month)

    @classmethod
    def resolve(cls, month: Optional[str], now: datetime) -> "Period":
        """Explicit ``YYYY-MM`` wins, otherwise the month ``now`` falls in."""
        if month:
            return cls.parse(month)
        return cls.containing(now)

    def previous(self) -> "Period":
        if self.month == 1:
            return Period(self.year - 1, 12)
        return Period(self.year, self.month - 1)

    def contains(self, moment: Union[date, datetime]) -> bool:
        return moment.year == self.year and moment.month == self.month

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def key(self) -> str:
        """Machine reference, e.g. ``01/2024``."""
        return f"{self.month:02d}/{self.year}"

    @property
    def display_name(self) -> str:
        """Human reference, e.g. ``January 2024``."""
        return f"{calendar.month_name[self.month]} {self.year}"

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
