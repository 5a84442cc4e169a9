from collections import namedtuple

import pytest

from airtraffic.accumulate import (Accumulator, AverageValue, Entry, accumulate, averaging, by_key,
                                   by_value, counting, top_n)
from airtraffic.errors import ClassificationError
from airtraffic.ranges import DISTANCE_RANGES, classify

Leg = namedtuple('Leg', 'origin delay cancelled distance')


def legs(*rows):
    return [Leg(*row) for row in rows]


def test_counting_by_origin():
    records = legs(('A', 0, False, 100), ('A', 0, False, 200), ('B', 0, False, 300))

    entries = accumulate(records,
                         counting(lambda leg: not leg.cancelled, lambda leg: leg.origin),
                         by_value(descending=True))

    assert entries == [Entry('A', 2), Entry('B', 1)]


def test_counts_add_up_to_filtered_records():
    records = legs(*[(origin, 0, index % 3 == 0, 10)
                     for index, origin in enumerate('ABCABCAAD')])
    passing = [leg for leg in records if not leg.cancelled]

    entries = accumulate(records,
                         counting(lambda leg: not leg.cancelled, lambda leg: leg.origin),
                         by_value(descending=True), limit=0)

    assert sum(entry.value for entry in entries) == len(passing)
    assert sorted(entry.key for entry in entries) == sorted({leg.origin for leg in passing})


def test_average_delay():
    records = legs(('X', 10, False, 0), ('X', 20, False, 0), ('X', 30, False, 0), ('Y', 7, False, 0))

    entries = accumulate(records,
                         averaging(lambda leg: True, lambda leg: leg.origin, lambda leg: leg.delay),
                         by_key())

    assert entries[0].key == 'X'
    assert entries[0].value.average == 20.0
    assert entries[0].value == AverageValue(60, 3)
    assert entries[1].value.average == 7.0


def test_average_is_not_truncated():
    value = AverageValue(1, 1).add(2)
    assert value.average == 1.5
    assert float(value) == 1.5


def test_limit_keeps_top_entries():
    records = legs(('A', 0, False, 0), ('A', 0, False, 0), ('A', 0, False, 0),
                   ('B', 0, False, 0), ('B', 0, False, 0), ('C', 0, False, 0))

    entries = accumulate(records, counting(lambda leg: True, lambda leg: leg.origin),
                         by_value(descending=True), limit=2)

    assert entries == [('A', 3), ('B', 2)]


def test_ascending_ranking_breaks_ties_on_key():
    records = legs(('C', 0, False, 0), ('B', 0, False, 0), ('A', 0, False, 0), ('A', 0, False, 0))

    entries = accumulate(records, counting(lambda leg: True, lambda leg: leg.origin), by_value())

    assert [entry.key for entry in entries] == ['B', 'C', 'A']


def test_descending_key_ranking():
    records = legs(('A', 0, False, 0), ('C', 0, False, 0), ('B', 0, False, 0))

    entries = accumulate(records, counting(lambda leg: True, lambda leg: leg.origin),
                         by_key(descending=True))

    assert [entry.key for entry in entries] == ['C', 'B', 'A']


def test_sink_receives_entries_in_order():
    received = []
    records = legs(('A', 0, False, 0), ('B', 0, False, 0), ('B', 0, False, 0))

    returned = accumulate(records, counting(lambda leg: True, lambda leg: leg.origin),
                          by_value(descending=True), sink=received.append)

    assert received == returned == [('B', 2), ('A', 1)]


def test_custom_accumulator_tracks_maximum():
    records = legs(('A', 5, False, 0), ('A', 9, False, 0), ('A', 2, False, 0))
    worst = Accumulator(lambda leg: True,
                        lambda leg: leg.origin,
                        lambda leg: leg.delay,
                        lambda leg, value: max(leg.delay, value))

    assert accumulate(records, worst, by_key()) == [('A', 9)]


def test_negative_limit_is_rejected():
    with pytest.raises(ValueError):
        accumulate([], counting(lambda leg: True, lambda leg: leg.origin), by_key(), limit=-1)


def test_empty_source():
    assert accumulate([], counting(lambda leg: True, lambda leg: leg.origin), by_key()) == []


def test_key_failure_aborts_and_closes_source():
    closed = []

    def source():
        try:
            yield Leg('A', 0, False, 50)
            yield Leg('A', 0, False, 20000)
            yield Leg('A', 0, False, 60)
        finally:
            closed.append(True)

    with pytest.raises(ClassificationError):
        accumulate(source(),
                   counting(lambda leg: True, lambda leg: classify(leg.distance, DISTANCE_RANGES)),
                   by_key())
    assert closed == [True]


def test_top_n_longest_and_shortest_are_disjoint():
    records = legs(*[('A', 0, False, distance) for distance in (500, 100, 900, 300, 700, 200)])
    records.append(Leg('A', 0, True, 5000))

    longest = top_n(records, lambda leg: not leg.cancelled, lambda leg: leg.distance, limit=2, reverse=True)
    shortest = top_n(records, lambda leg: not leg.cancelled, lambda leg: leg.distance, limit=2)

    assert [leg.distance for leg in longest] == [900, 700]
    assert [leg.distance for leg in shortest] == [100, 200]
    assert not set(longest) & set(shortest)


def test_top_n_unlimited_returns_everything_sorted():
    records = legs(('A', 0, False, 3), ('A', 0, False, 1), ('A', 0, False, 2))
    result = top_n(records, lambda leg: True, lambda leg: leg.distance, limit=None)
    assert [leg.distance for leg in result] == [1, 2, 3]


def test_top_n_closes_source():
    closed = []

    def source():
        try:
            yield from legs(('A', 0, False, 3), ('A', 0, False, 1))
        finally:
            closed.append(True)

    top_n(source(), lambda leg: True, lambda leg: leg.distance, limit=1)
    assert closed == [True]
