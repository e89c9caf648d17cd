"""Exceptions raised when an interval invariant is violated."""

from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from periodalgebra.precision import Precision


class PeriodError(ValueError):
    """Base class for interval algebra failures."""


class EndBeforeStart(PeriodError):
    def __init__(self, start: datetime, end: datetime):
        self.start: datetime = start
        self.end: datetime = end
        super().__init__(
            f"The end time '{end.isoformat()}' is before the start time "
            f"'{start.isoformat()}'.\n"
            f"Hint: Intervals are closed; pass the earlier moment as start."
        )


class PrecisionMismatch(PeriodError):
    def __init__(self, expected: "Precision", actual: "Precision"):
        self.expected: Precision = expected
        self.actual: Precision = actual
        super().__init__(
            f"Periods precision does not match: {expected} vs {actual}.\n"
            f"Hint: Rebuild one operand at the other's precision:\n"
            f"  Interval.make(period.start, period.end, Precision.{expected})"
        )
