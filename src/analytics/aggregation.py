"""
Aggregation Helpers

Grouping, exact summation and stable ranking over in-memory records, plus
RecordIndex for resolving foreign keys without rescanning sequences.
"""

from decimal import Decimal
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    TypeVar,
)

from src.analytics.models import RecordId

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

ZERO = Decimal("0")


class RecordIndex(Generic[T]):
    """
    Id -> record mapping built once per computation.

    get() returns None for an unknown id, so callers branch on an
    unresolved reference explicitly. The first record wins on duplicate ids.
    """

    def __init__(self, records: Iterable[T], key: Callable[[T], RecordId] = lambda r: r.id):
        self._records: Dict[RecordId, T] = {}
        for record in records:
            self._records.setdefault(key(record), record)

    def get(self, record_id: RecordId) -> Optional[T]:
        return self._records.get(record_id)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[T]:
        return iter(self._records.values())


def group_by(records: Iterable[T], key: Callable[[T], K]) -> Dict[K, List[T]]:
    """Group records by key; keys and members keep first-seen order."""
    groups: Dict[K, List[T]] = {}
    for record in records:
        groups.setdefault(key(record), []).append(record)
    return groups


def sum_by(
    records: Iterable[T],
    key: Callable[[T], K],
    value: Callable[[T], Any],
    start: Any = ZERO,
) -> Dict[K, Any]:
    """Sum value(record) per key without any rounding."""
    totals: Dict[K, Any] = {}
    for record in records:
        k = key(record)
        totals[k] = totals.get(k, start) + value(record)
    return totals


def sort_by_metric(
    records: Sequence[T],
    metric: Callable[[T], Any],
    descending: bool = True,
    limit: Optional[int] = None,
) -> List[T]:
    """
    Stable sort by metric, optionally truncated.

    Ties keep their input order in both directions.
    """
    ranked = sorted(records, key=metric, reverse=descending)
    if limit is not None:
        return ranked[:max(limit, 0)]
    return ranked
