"""Ordered collection of intervals with multi-interval set algebra.

Every algebraic operation here is built from Interval's pairwise primitives
and returns a new collection. Element order is always the caller's insertion
order; nothing is sorted or deduplicated.
"""

from collections.abc import Iterable, Iterator

import structlog
from typing_extensions import override

from periodalgebra.errors import PrecisionMismatch
from periodalgebra.interval import Interval, flatten_intervals
from periodalgebra.settings import get_settings

log = structlog.get_logger(__name__)


class IntervalCollection:
    """Mutable, ordered sequence of intervals.

    Mixed precisions may be stored together; a mismatch only surfaces when an
    operation compares two intervals of different precision.
    """

    def __init__(self, intervals: Iterable[Interval] = ()) -> None:
        self._data: list[Interval] = list(intervals)

    @classmethod
    def of(cls, *intervals: Interval) -> "IntervalCollection":
        return cls(intervals)

    @classmethod
    def empty(cls) -> "IntervalCollection":
        return cls()

    @classmethod
    def empty_if_none(
        cls, collection: "IntervalCollection | None"
    ) -> "IntervalCollection":
        return collection if collection is not None else cls()

    def boundaries(self) -> Interval | None:
        """Return the smallest interval spanning every element.

        The result takes the first element's precision. None when empty.

        Raises:
            PrecisionMismatch: If elements disagree on precision and the
                ``strict_collection_precision`` setting is enabled
        """
        if not self._data:
            return None

        precision = self._data[0].precision
        for interval in self._data:
            if interval.precision is precision:
                continue
            log.debug(
                "collection_mixed_precision",
                used=str(precision),
                found=str(interval.precision),
            )
            if get_settings().strict_collection_precision:
                raise PrecisionMismatch(precision, interval.precision)
            break

        return Interval(
            start=min(interval.start for interval in self._data),
            end=max(interval.end for interval in self._data),
            precision=precision,
        )

    def subtract(
        self, *intervals: "Interval | Iterable[Interval]"
    ) -> "IntervalCollection":
        """Remove the given intervals from every element.

        Accepts intervals as positional arguments or a single iterable (such
        as another collection). The remainders of all elements are
        concatenated in element order. Returns this collection itself when
        nothing is given.
        """
        periods = flatten_intervals(intervals)
        if not periods:
            return self

        subtracted = IntervalCollection()
        for interval in self._data:
            subtracted.add_all(interval.subtract_all(*periods))
        return subtracted

    def gaps(self) -> "IntervalCollection":
        """Return the uncovered stretches inside the collection's boundaries."""
        boundaries = self.boundaries()
        if boundaries is None:
            return IntervalCollection()
        return boundaries.subtract_all(*self._data)

    def union(self) -> "IntervalCollection":
        """Merge the elements into a minimal set of disjoint intervals.

        Computed as ``boundaries - (boundaries - elements)``: whatever is
        left of the boundaries once the gaps are removed.
        """
        boundaries = self.boundaries()
        if boundaries is None:
            return IntervalCollection()
        return boundaries.subtract_all(*boundaries.subtract_all(*self._data))

    def intersect(self, interval: Interval) -> "IntervalCollection":
        """Clip every element to ``interval``, dropping disjoint ones."""
        intersected = IntervalCollection()
        for element in self._data:
            overlap = interval.overlap(element)
            if overlap is not None:
                intersected.append(overlap)
        return intersected

    def overlap_all(self, *collections: "IntervalCollection") -> "IntervalCollection":
        """Fold pairwise cross-overlaps over the given collections."""
        overlap = self
        for collection in collections:
            overlap = overlap._overlap(collection)
        return overlap

    def _overlap(self, collection: "IntervalCollection") -> "IntervalCollection":
        overlaps = IntervalCollection()
        for interval in self._data:
            for other in collection:
                overlap = interval.overlap(other)
                if overlap is not None:
                    overlaps.append(overlap)
        return overlaps

    def get(self, index: int) -> Interval:
        return self._data[index]

    def append(self, interval: Interval) -> None:
        self._data.append(interval)

    def add_all(self, intervals: Iterable[Interval]) -> None:
        self._data.extend(intervals)

    def remove(self, interval: Interval) -> bool:
        """Remove the first equal element; False if there was none."""
        try:
            self._data.remove(interval)
        except ValueError:
            return False
        return True

    def remove_all(self, intervals: Iterable[Interval]) -> bool:
        """Remove every element equal to any of ``intervals``."""
        doomed = set(intervals)
        kept = [interval for interval in self._data if interval not in doomed]
        changed = len(kept) != len(self._data)
        self._data = kept
        return changed

    def retain_all(self, intervals: Iterable[Interval]) -> bool:
        """Keep only elements equal to one of ``intervals``."""
        wanted = set(intervals)
        kept = [interval for interval in self._data if interval in wanted]
        changed = len(kept) != len(self._data)
        self._data = kept
        return changed

    def clear(self) -> None:
        self._data.clear()

    def contains_all(self, intervals: Iterable[Interval]) -> bool:
        return all(interval in self._data for interval in intervals)

    def is_empty(self) -> bool:
        return not self._data

    def to_list(self) -> list[Interval]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self._data)

    def __getitem__(self, index: int) -> Interval:
        return self._data[index]

    def __contains__(self, item: object) -> bool:
        return item in self._data

    def __sub__(self, other: "Interval | IntervalCollection") -> "IntervalCollection":
        if not isinstance(other, (Interval, IntervalCollection)):
            return NotImplemented
        return self.subtract(other)

    def __and__(self, other: "Interval | IntervalCollection") -> "IntervalCollection":
        if isinstance(other, Interval):
            return self.intersect(other)
        if isinstance(other, IntervalCollection):
            return self.overlap_all(other)
        return NotImplemented

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntervalCollection):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    @override
    def __str__(self) -> str:
        return "[" + ", ".join(str(interval) for interval in self._data) + "]"

    @override
    def __repr__(self) -> str:
        return f"IntervalCollection({self._data!r})"
