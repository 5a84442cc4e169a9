import pytest

from airtraffic import carrier_reports as reports


def rows(frame):
    return [tuple(row) for row in frame.itertuples(index=False)]


def test_most_flights_by_carrier(repository):
    frame = reports.report_most_flights_by_carrier(repository, 2008)
    assert rows(frame) == [
        ('AA', 'American Airlines Inc.', 3),
        ('UA', 'United Air Lines Inc.', 3),
        ('WN', 'Southwest Airlines Co.', 1),
    ]


def test_most_cancellations_by_carrier(repository):
    frame = reports.report_most_cancellations_by_carrier(repository, 2008)
    assert rows(frame) == [('AA', 'American Airlines Inc.', 1)]


def test_worst_average_departure_delay_by_carrier(repository):
    frame = reports.report_worst_average_departure_delay_by_carrier(repository, 2008)
    assert list(frame['carrier']) == ['UA', 'AA', 'WN']
    assert list(frame['average_departure_delay']) == [15.0, 10.0, 5.0]


def test_monthly_flights_for_carrier(repository):
    frame = reports.report_monthly_flights_for_carrier(repository, 2008, 'aa')
    assert rows(frame) == [('Jan 2008', 2), ('Feb 2008', 1)]


def test_unknown_carrier(repository):
    with pytest.raises(ValueError, match="Unknown carrier 'ZZ'"):
        reports.report_monthly_flights_for_carrier(repository, 2008, 'ZZ')
