"""
Single-pass aggregation over record streams.

An Accumulator bundles four callables: which records take part (`filter`),
what they are grouped by (`key`), the seed value for a new group
(`initialize`) and how a further record is folded into an existing group
(`update`). `accumulate` runs one pass over the source holding only the
distinct groups in memory, then ranks the groups and keeps the first `limit`.

    counts = accumulate(repository.flights(2008),
                        counting(lambda f: f.not_cancelled, lambda f: f.origin),
                        by_value(descending=True),
                        limit=10)
"""

from contextlib import closing, nullcontext
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Iterable, List, NamedTuple, Optional, TypeVar

T = TypeVar('T')
K = TypeVar('K')
V = TypeVar('V')


class Entry(NamedTuple):
    key: Any
    value: Any


@dataclass(frozen=True)
class Accumulator(Generic[T, K, V]):
    filter: Callable[[T], bool]
    key: Callable[[T], K]
    initialize: Callable[[T], V]
    update: Callable[[T, V], V]


@dataclass(frozen=True)
class AverageValue:
    total: float
    count: int

    def add(self, value: float) -> 'AverageValue':
        return AverageValue(self.total + value, self.count + 1)

    @property
    def average(self) -> float:
        return self.total / self.count

    def __float__(self) -> float:
        return self.average


class Ranking(NamedTuple):
    """Sort key over entries plus direction, as passed to sorted()."""
    key: Callable[[Entry], Any]
    reverse: bool = False


def counting(filter: Callable[[T], bool], key: Callable[[T], K]) -> Accumulator[T, K, int]:
    return Accumulator(filter, key, lambda record: 1, lambda record, value: value + 1)


def averaging(filter: Callable[[T], bool],
              key: Callable[[T], K],
              value: Callable[[T], float]) -> Accumulator[T, K, AverageValue]:
    return Accumulator(filter,
                       key,
                       lambda record: AverageValue(value(record), 1),
                       lambda record, current: current.add(value(record)))


def by_value(descending: bool = False) -> Ranking:
    """
    Ranks entries by their numeric value. Ties are broken by the key's text so
    that equal counts always come out in the same order.
    """
    sign = -1 if descending else 1
    return Ranking(lambda entry: (sign * float(entry.value), str(entry.key)))


def by_key(descending: bool = False) -> Ranking:
    return Ranking(lambda entry: entry.key, reverse=descending)


def _scoped(source):
    return closing(source) if hasattr(source, 'close') else nullcontext(source)


def _check_limit(limit: Optional[int]) -> Optional[int]:
    if limit is None or limit == 0:
        return None
    if limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")
    return limit


def accumulate(source: Iterable[T],
               accumulator: Accumulator[T, K, V],
               ranking: Ranking,
               limit: Optional[int] = 0,
               sink: Optional[Callable[[Entry], None]] = None) -> List[Entry]:
    """
    Groups and aggregates a record stream, then ranks and truncates the groups.

    Args:
        source: Records to aggregate. Each is visited exactly once.
        accumulator: Filter, key, seed and fold functions.
        ranking: Order of the emitted entries.
        limit: Number of entries to keep; 0 or None keeps all of them.
        sink: Optional callback receiving each kept entry in ranked order.

    Returns:
        The kept entries in ranked order.
    """
    limit = _check_limit(limit)

    groups: Dict[K, V] = {}
    with _scoped(source) as records:
        for record in records:
            if not accumulator.filter(record):
                continue
            key = accumulator.key(record)
            if key in groups:
                groups[key] = accumulator.update(record, groups[key])
            else:
                groups[key] = accumulator.initialize(record)

    entries = sorted((Entry(k, v) for k, v in groups.items()),
                     key=ranking.key, reverse=ranking.reverse)
    if limit is not None:
        entries = entries[:limit]

    if sink is not None:
        for entry in entries:
            sink(entry)
    return entries


def top_n(source: Iterable[T],
          filter: Callable[[T], bool],
          sort_key: Callable[[T], Any],
          limit: Optional[int] = 0,
          reverse: bool = False) -> List[T]:
    """
    Collects every record passing the filter, sorts them and keeps the first
    `limit`. Unlike `accumulate` nothing is grouped, so the whole filtered
    population is held in memory until the sort.
    """
    limit = _check_limit(limit)

    with _scoped(source) as candidates:
        records = [record for record in candidates if filter(record)]

    records.sort(key=sort_key, reverse=reverse)
    return records if limit is None else records[:limit]
