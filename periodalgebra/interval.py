"""Closed time interval tagged with a precision.

An Interval's endpoints are truncated to its precision on construction and
both endpoints are included. Adjacency and remainder math therefore work in
whole precision steps: the moment "just after" an interval is ``end + step``,
never ``end`` itself.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING, Any, Literal

import structlog
from dateutil.relativedelta import relativedelta
from typing_extensions import override

from periodalgebra.errors import EndBeforeStart, PrecisionMismatch
from periodalgebra.precision import Precision
from periodalgebra.settings import get_settings

if TYPE_CHECKING:
    from periodalgebra.collection import IntervalCollection

log = structlog.get_logger(__name__)


def _coerce(moment: Any, edge: Literal["start", "end"]) -> datetime:
    """Accept a datetime as-is and turn a plain date into its midnight."""
    if isinstance(moment, datetime):
        return moment
    if isinstance(moment, date):
        return datetime.combine(moment, time.min)
    raise TypeError(
        f"Interval {edge} must be a date or datetime.\n"
        f"Got {type(moment).__name__!r}: {moment!r}\n"
        f"Examples:\n"
        f"  Interval.make(date(2024, 1, 1), date(2024, 1, 31))  # DAY precision\n"
        f"  Interval.make(datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 17))"
        f"  # SECOND precision"
    )


def _is_date_only(moment: Any) -> bool:
    return isinstance(moment, date) and not isinstance(moment, datetime)


def _collection(*intervals: "Interval") -> "IntervalCollection":
    # Import at runtime to avoid circular dependency
    from periodalgebra.collection import IntervalCollection

    return IntervalCollection(intervals)


@dataclass(frozen=True, kw_only=True)
class Interval:
    start: datetime
    end: datetime
    precision: Precision

    def __post_init__(self) -> None:
        # Endpoints are always stored as datetimes rounded to the precision
        precision = Precision.parse(self.precision)
        object.__setattr__(self, "precision", precision)
        object.__setattr__(
            self, "start", precision.round(_coerce(self.start, "start"))
        )
        object.__setattr__(self, "end", precision.round(_coerce(self.end, "end")))
        if self.start > self.end:
            log.debug(
                "end_before_start",
                start=self.start.isoformat(),
                end=self.end.isoformat(),
                precision=str(self.precision),
            )
            raise EndBeforeStart(self.start, self.end)

    @classmethod
    def make(
        cls,
        start: date | datetime,
        end: date | datetime,
        precision: Precision | str | None = None,
    ) -> "Interval":
        """Build an interval, rounding both endpoints to ``precision``.

        When no precision is given, date-only endpoints default to DAY and
        datetimes default to SECOND (both configurable through settings).

        Raises:
            EndBeforeStart: If the rounded end precedes the rounded start
            TypeError: If an endpoint is neither a date nor a datetime
        """
        if precision is None:
            settings = get_settings()
            if _is_date_only(start) and _is_date_only(end):
                precision = settings.date_precision
            else:
                precision = settings.datetime_precision
        return cls(start=start, end=end, precision=precision)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def _step(self) -> relativedelta | timedelta:
        return self.precision.step

    def _ensure_precision_matches(self, other: "Interval") -> None:
        if self.precision is other.precision:
            return
        log.debug(
            "precision_mismatch",
            expected=str(self.precision),
            actual=str(other.precision),
        )
        raise PrecisionMismatch(self.precision, other.precision)

    def overlaps_with(self, other: "Interval") -> bool:
        """True if the closed intervals share at least one instant."""
        self._ensure_precision_matches(other)
        return not (self.start > other.end or other.start > self.end)

    def touches_with(self, other: "Interval") -> bool:
        """True if the intervals are disjoint with no step between them."""
        self._ensure_precision_matches(other)
        if other.start > self.end:
            return self.end + self._step == other.start
        if self.start > other.end:
            return other.end + self._step == self.start
        return False

    def gap(self, other: "Interval") -> "Interval | None":
        """Return the interval strictly between two separated intervals.

        None when the intervals overlap or touch. The result is the same
        whichever operand is the receiver.
        """
        self._ensure_precision_matches(other)
        if self.overlaps_with(other) or self.touches_with(other):
            return None

        earlier, later = (other, self) if self.start >= other.end else (self, other)
        return Interval(
            start=self.precision.increment(earlier.end),
            end=self.precision.decrement(later.start),
            precision=self.precision,
        )

    def overlap(self, other: "Interval") -> "Interval | None":
        """Return the intersection of both intervals, or None if disjoint."""
        self._ensure_precision_matches(other)
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if start > end:
            return None
        return Interval(start=start, end=end, precision=self.precision)

    def overlap_all(self, *others: "Interval") -> "Interval | None":
        """Intersect this interval with every argument in turn."""
        overlap: Interval | None = self
        for other in others:
            overlap = overlap.overlap(other)
            if overlap is None:
                return None
        return overlap

    def overlap_any(self, *others: "Interval") -> "IntervalCollection":
        """Collect the overlap with each argument, skipping disjoint ones."""
        overlaps = _collection()
        for other in others:
            overlap = self.overlap(other)
            if overlap is not None:
                overlaps.append(overlap)
        return overlaps

    def subtract(self, other: "Interval") -> "IntervalCollection":
        """Remove ``other``'s span, leaving zero, one or two remainders."""
        self._ensure_precision_matches(other)
        if not self.overlaps_with(other):
            return _collection(self)

        remainders = _collection()
        if self.start < other.start:
            remainders.append(
                Interval(
                    start=self.start,
                    end=self.precision.decrement(other.start),
                    precision=self.precision,
                )
            )
        if self.end > other.end:
            remainders.append(
                Interval(
                    start=self.precision.increment(other.end),
                    end=self.end,
                    precision=self.precision,
                )
            )
        return remainders

    def subtract_all(
        self, *others: "Interval | Iterable[Interval]"
    ) -> "IntervalCollection":
        """Remove every argument's span from this interval.

        Accepts intervals as positional arguments or a single iterable of
        intervals.

        Each argument is subtracted from the receiver independently and the
        per-argument remainders are then intersected. What survives is the
        part of the receiver covered by none of the arguments, without ever
        merging the arguments themselves.
        """
        periods = flatten_intervals(others)
        if not periods:
            return _collection(self)
        return _collection(self).overlap_all(
            *(self.subtract(period) for period in periods)
        )

    def diff_symmetric(self, other: "Interval") -> "IntervalCollection":
        """Return the parts covered by exactly one of the two intervals."""
        overlap = self.overlap(other)
        if overlap is None:
            return _collection(self, other)

        boundaries = Interval(
            start=min(self.start, other.start),
            end=max(self.end, other.end),
            precision=self.precision,
        )
        return boundaries.subtract(overlap)

    def renew(self) -> "Interval":
        """Return the interval that immediately follows, spanning ``duration``.

        The new end is the new start plus the exact elapsed duration, then
        rounded. Durations therefore carry over exactly at DAY precision and
        finer; at MONTH and YEAR the rounded end can fall short, since
        calendar units vary in length.
        """
        start = self.precision.increment(self.end)
        return Interval(
            start=start, end=start + self.duration, precision=self.precision
        )

    def contains(self, item: "Interval | date | datetime") -> bool:
        """Check whether a moment or another interval lies within this one.

        Moments are rounded to this interval's precision first. Intervals
        are compared on their raw endpoints without a precision check.
        """
        if isinstance(item, Interval):
            return self.start <= item.start and self.end >= item.end
        moment = self.precision.round(_coerce(item, "start"))
        return self.start <= moment <= self.end

    def __contains__(self, item: "Interval | date | datetime") -> bool:
        return self.contains(item)

    def compare_to(self, other: "Interval") -> int:
        """Order by start; any unequal interval that does not start earlier
        compares greater.

        Two unequal intervals sharing a start therefore each compare greater
        than the other. Sorting only relies on ``<`` and stays stable for
        them.
        """
        if self == other:
            return 0
        if self.start < other.start:
            return -1
        return 1

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.compare_to(other) >= 0

    def __and__(self, other: "Interval") -> "Interval | None":
        if not isinstance(other, Interval):
            return NotImplemented
        return self.overlap(other)

    def __sub__(self, other: "Interval") -> "IntervalCollection":
        if not isinstance(other, Interval):
            return NotImplemented
        return self.subtract(other)

    def __xor__(self, other: "Interval") -> "IntervalCollection":
        if not isinstance(other, Interval):
            return NotImplemented
        return self.diff_symmetric(other)

    @override
    def __str__(self) -> str:
        return f"[{self.start.isoformat()}, {self.end.isoformat()}]"


def flatten_intervals(
    items: "Iterable[Interval | Iterable[Interval]]",
) -> tuple[Interval, ...]:
    """Expand a lone iterable argument into its intervals."""
    items = tuple(items)
    if len(items) == 1 and isinstance(items[0], Iterable):
        items = tuple(items[0])
    for item in items:
        if not isinstance(item, Interval):
            raise TypeError(
                f"Expected Interval arguments or a single iterable of intervals.\n"
                f"Got {type(item).__name__!r}: {item!r}"
            )
    return items  # type: ignore[return-value]
