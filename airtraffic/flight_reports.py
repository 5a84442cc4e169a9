import calendar

import pandas as pd

from airtraffic.accumulate import accumulate, averaging, by_key, by_value, counting, top_n
from airtraffic.catalog import report, require_airport
from airtraffic.ranges import DISTANCE_RANGES, classify
from airtraffic.schema import Flight, PairGroup

DEFAULT_LIMIT = 10

# Flights whose date could not be parsed never reach a date-keyed report.


def _not_cancelled(flight: Flight) -> bool:
    return flight.not_cancelled


def _completed(flight: Flight) -> bool:
    return flight.not_cancelled and flight.not_diverted


def _flown_and_dated(flight: Flight) -> bool:
    return flight.not_cancelled and flight.dated


def _cancelled_and_dated(flight: Flight) -> bool:
    return flight.cancelled and flight.dated


def _airport_counts(entries, column: str, value: str = 'flights') -> pd.DataFrame:
    rows = [(entry.key.iata, entry.key.name, entry.value) for entry in entries]
    return pd.DataFrame(rows, columns=[column, 'name', value])


def _airport_averages(entries, column: str, value: str) -> pd.DataFrame:
    rows = [(entry.key.iata, entry.key.name, entry.value.average) for entry in entries]
    return pd.DataFrame(rows, columns=[column, 'name', value])


# --- Totals for one airport or airport pair ---

@report("Total flights from origin")
def report_total_flights_from_origin(repository, year: int, origin: str) -> pd.DataFrame:
    airport = require_airport(repository, origin)
    with repository.flights(year) as flights:
        count = sum(1 for flight in flights if flight.not_cancelled and flight.origin == airport)
    return pd.DataFrame([(airport.iata, airport.name, count)], columns=['origin', 'name', 'flights'])


@report("Total flights to destination")
def report_total_flights_to_destination(repository, year: int, destination: str) -> pd.DataFrame:
    airport = require_airport(repository, destination)
    with repository.flights(year) as flights:
        count = sum(1 for flight in flights if _completed(flight) and flight.destination == airport)
    return pd.DataFrame([(airport.iata, airport.name, count)],
                        columns=['destination', 'name', 'flights'])


@report("Total flights from origin to destination")
def report_total_flights_from_origin_to_destination(repository, year: int, origin: str,
                                                    destination: str) -> pd.DataFrame:
    source = require_airport(repository, origin)
    target = require_airport(repository, destination)
    with repository.flights(year) as flights:
        count = sum(1 for flight in flights
                    if _completed(flight) and flight.origin == source and flight.destination == target)
    return pd.DataFrame([(source.iata, target.iata, count)], columns=['origin', 'destination', 'flights'])


# --- Rankings by airport and route ---

@report("Top flights by origin")
def report_top_flights_by_origin(repository, year: int, limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(_not_cancelled, lambda flight: flight.origin),
                         by_value(descending=True), limit)
    return _airport_counts(entries, 'origin')


@report("Top destinations from origin")
def report_top_destinations_from_origin(repository, year: int, origin: str,
                                        limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    airport = require_airport(repository, origin)
    entries = accumulate(repository.flights(year),
                         counting(lambda flight: flight.not_cancelled and flight.origin == airport,
                                  lambda flight: flight.destination),
                         by_value(descending=True), limit)
    return _airport_counts(entries, 'destination')


@report("Most popular routes")
def report_most_popular_routes(repository, year: int, limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    """
    Counts every flight, cancelled or not, per directional route.
    """
    entries = accumulate(repository.flights(year),
                         counting(lambda flight: True, lambda flight: flight.route),
                         by_value(descending=True), limit)
    return pd.DataFrame([(str(entry.key), entry.value) for entry in entries], columns=['route', 'flights'])


@report("Worst average departure delay by origin")
def report_worst_average_departure_delay_by_origin(repository, year: int,
                                                   limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         averaging(_not_cancelled,
                                   lambda flight: flight.origin,
                                   lambda flight: flight.departure_delay),
                         by_value(descending=True), limit)
    return _airport_averages(entries, 'origin', 'average_departure_delay')


@report("Worst average arrival delay by destination")
def report_worst_average_arrival_delay_by_destination(repository, year: int,
                                                      limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         averaging(_not_cancelled,
                                   lambda flight: flight.destination,
                                   lambda flight: flight.arrival_delay),
                         by_value(descending=True), limit)
    return _airport_averages(entries, 'destination', 'average_arrival_delay')


@report("Most cancelled flights by origin")
def report_most_cancelled_flights_by_origin(repository, year: int,
                                            limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(lambda flight: flight.cancelled, lambda flight: flight.origin),
                         by_value(descending=True), limit)
    return _airport_counts(entries, 'origin', 'cancellations')


@report("Total flights by origin state")
def report_total_flights_by_origin_state(repository, year: int,
                                         limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(_not_cancelled, lambda flight: flight.origin.state),
                         by_value(descending=True), limit)
    return pd.DataFrame(entries, columns=['state', 'flights'])


@report("Total flights by destination state")
def report_total_flights_by_destination_state(repository, year: int,
                                              limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(_not_cancelled, lambda flight: flight.destination.state),
                         by_value(descending=True), limit)
    return pd.DataFrame(entries, columns=['state', 'flights'])


# --- Distance ---

def _flights_by_distance(repository, year: int, limit: int, longest: bool) -> pd.DataFrame:
    flights = top_n(repository.flights(year), _completed,
                    sort_key=lambda flight: flight.distance, limit=limit, reverse=longest)
    rows = [(flight.flight_number, flight.date, flight.carrier.code,
             flight.origin.iata, flight.destination.iata, flight.distance)
            for flight in flights]
    return pd.DataFrame(rows, columns=['flight_number', 'date', 'carrier', 'origin', 'destination', 'distance'])


@report("Longest flights")
def report_longest_flights(repository, year: int, limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    return _flights_by_distance(repository, year, limit, longest=True)


@report("Shortest flights")
def report_shortest_flights(repository, year: int, limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    return _flights_by_distance(repository, year, limit, longest=False)


@report("Total flights by distance range")
def report_total_flights_by_distance_range(repository, year: int, limit: int = 0) -> pd.DataFrame:
    """
    Buckets completed flights into the fixed distance ranges.

    Args:
        repository: Data access.
        year: Flight year.
        limit: Number of ranges to show, 0 for all.

    Returns:
        One row per range seen, in ascending range order.

    Raises:
        ClassificationError: A flight distance is outside every range.
    """
    entries = accumulate(repository.flights(year),
                         counting(_completed, lambda flight: classify(flight.distance, DISTANCE_RANGES)),
                         by_key(), limit)
    return pd.DataFrame([(str(entry.key), entry.value) for entry in entries], columns=['range', 'flights'])


# --- Dates ---

def _cancellations_by_day(repository, year: int, limit: int, most: bool) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(_cancelled_and_dated, lambda flight: flight.date),
                         by_value(descending=most), limit)
    return pd.DataFrame(entries, columns=['date', 'cancellations'])


@report("Days with most cancellations")
def report_days_with_most_cancellations(repository, year: int, limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    return _cancellations_by_day(repository, year, limit, most=True)


@report("Days with least cancellations")
def report_days_with_least_cancellations(repository, year: int, limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    return _cancellations_by_day(repository, year, limit, most=False)


@report("Total monthly flights")
def report_total_monthly_flights(repository, year: int, limit: int = 0) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(_flown_and_dated, lambda flight: flight.year_month),
                         by_key(), limit)
    return pd.DataFrame([(str(entry.key), entry.value) for entry in entries], columns=['month', 'flights'])


@report("Total daily flights")
def report_total_daily_flights(repository, year: int, limit: int = 0) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(_flown_and_dated, lambda flight: flight.date),
                         by_key(), limit)
    return pd.DataFrame(entries, columns=['date', 'flights'])


@report("Total flights by day of week")
def report_total_flights_by_day_of_week(repository, year: int, limit: int = 0) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(_flown_and_dated, lambda flight: flight.date.weekday()),
                         by_key(), limit)
    return pd.DataFrame([(calendar.day_name[entry.key], entry.value) for entry in entries],
                        columns=['day_of_week', 'flights'])


def _flights_by_day(repository, year: int, limit: int, most: bool) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(_flown_and_dated, lambda flight: flight.date),
                         by_value(descending=most), limit)
    return pd.DataFrame(entries, columns=['date', 'flights'])


@report("Most flights by day")
def report_most_flights_by_day(repository, year: int, limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    return _flights_by_day(repository, year, limit, most=True)


@report("Least flights by day")
def report_least_flights_by_day(repository, year: int, limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    return _flights_by_day(repository, year, limit, most=False)


@report("Most flights by origin by day")
def report_most_flights_by_origin_by_day(repository, year: int,
                                         limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(_flown_and_dated, lambda flight: PairGroup(flight.origin, flight.date)),
                         by_value(descending=True), limit)
    rows = [(entry.key.first.iata, entry.key.first.name, entry.key.second, entry.value) for entry in entries]
    return pd.DataFrame(rows, columns=['origin', 'name', 'date', 'flights'])


@report("Most flights by carrier by day")
def report_most_flights_by_carrier_by_day(repository, year: int,
                                          limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(_flown_and_dated, lambda flight: PairGroup(flight.carrier, flight.date)),
                         by_value(descending=True), limit)
    rows = [(entry.key.first.code, entry.key.first.name, entry.key.second, entry.value) for entry in entries]
    return pd.DataFrame(rows, columns=['carrier', 'name', 'date', 'flights'])
