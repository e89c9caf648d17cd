"""Granularity at which interval endpoints are significant.

Each precision knows how to truncate a datetime down to its own unit and how
large one "tick" is. Calendar units (years, months, days) step with
python-dateutil's relativedelta so that adding a month always lands on the
following month regardless of its length.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing_extensions import override

from dateutil.relativedelta import relativedelta


class Precision(Enum):
    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"

    @classmethod
    def parse(cls, value: "Precision | str") -> "Precision":
        """Accept a Precision or its case-insensitive name."""
        if isinstance(value, Precision):
            return value
        try:
            return cls[value.strip().upper()]
        except KeyError:
            valid = ", ".join(member.name for member in cls)
            raise ValueError(
                f"Unknown precision {value!r}.\n" f"Valid precisions: {valid}"
            ) from None

    @property
    def step(self) -> relativedelta | timedelta:
        """The smallest meaningful increment at this precision."""
        return _STEPS[self]

    def round(self, moment: datetime) -> datetime:
        """Truncate every field finer than this precision to its minimum."""
        match self:
            case Precision.YEAR:
                return moment.replace(
                    month=1, day=1, hour=0, minute=0, second=0, microsecond=0
                )
            case Precision.MONTH:
                return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
            case Precision.DAY:
                return moment.replace(hour=0, minute=0, second=0, microsecond=0)
            case Precision.HOUR:
                return moment.replace(minute=0, second=0, microsecond=0)
            case Precision.MINUTE:
                return moment.replace(second=0, microsecond=0)
            case Precision.SECOND:
                return moment.replace(microsecond=0)

    def increment(self, moment: datetime) -> datetime:
        return self.round(moment + self.step)

    def decrement(self, moment: datetime) -> datetime:
        return self.round(moment - self.step)

    @override
    def __str__(self) -> str:
        return self.name


_STEPS: dict[Precision, relativedelta | timedelta] = {
    Precision.YEAR: relativedelta(years=1),
    Precision.MONTH: relativedelta(months=1),
    Precision.DAY: relativedelta(days=1),
    Precision.HOUR: timedelta(hours=1),
    Precision.MINUTE: timedelta(minutes=1),
    Precision.SECOND: timedelta(seconds=1),
}
