"""ServiceDate class for appointment and document dates."""

from dataclasses import dataclass
from datetime import date as _date
from typing import Union

from dateutil import parser as date_parser


@dataclass(frozen=True, order=True)
class ServiceDate:
    """
    A plain year/month/day triple.

    No calendar validation: arithmetic carries the day unchanged, so
    31/1 plus one month is 31/2.
    """

    year: int
    month: int
    day: int

    def plus_months(self, months: int) -> "ServiceDate":
        """Add whole months, rolling the year over past December."""
        index = self.year * 12 + (self.month - 1) + months
        return ServiceDate(index // 12, index % 12 + 1, self.day)

    def plus_years(self, years: int) -> "ServiceDate":
        return ServiceDate(self.year + years, self.month, self.day)

    @classmethod
    def from_date(cls, value: _date) -> "ServiceDate":
        return cls(value.year, value.month, value.day)

    @classmethod
    def parse(cls, text: Union[str, "ServiceDate"]) -> "ServiceDate":
        """
        Parse a user supplied date.

        Accepts ISO (2023-11-14) and day-first forms (14/11/2023, 14.11.2023).
        """
        if isinstance(text, ServiceDate):
            return text
        text = text.strip()
        yearfirst = len(text) >= 5 and text[:4].isdigit() and not text[4].isdigit()
        parsed = date_parser.parse(text, dayfirst=not yearfirst, yearfirst=yearfirst)
        return cls.from_date(parsed.date())

    def __str__(self) -> str:
        return f"{self.day}/{self.month}/{self.year}"
