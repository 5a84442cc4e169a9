import pandas as pd

from airtraffic.accumulate import accumulate, averaging, by_key, by_value, counting
from airtraffic.catalog import report, require_carrier

DEFAULT_LIMIT = 10


def _carrier_rows(entries, value=lambda v: v):
    return [(entry.key.code, entry.key.name, value(entry.value)) for entry in entries]


@report("Most flights by carrier")
def report_most_flights_by_carrier(repository, year: int, limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(lambda flight: flight.not_cancelled, lambda flight: flight.carrier),
                         by_value(descending=True), limit)
    return pd.DataFrame(_carrier_rows(entries), columns=['carrier', 'name', 'flights'])


@report("Most cancellations by carrier")
def report_most_cancellations_by_carrier(repository, year: int,
                                         limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(lambda flight: flight.cancelled, lambda flight: flight.carrier),
                         by_value(descending=True), limit)
    return pd.DataFrame(_carrier_rows(entries), columns=['carrier', 'name', 'cancellations'])


@report("Worst average departure delay by carrier")
def report_worst_average_departure_delay_by_carrier(repository, year: int,
                                                    limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         averaging(lambda flight: flight.not_cancelled,
                                   lambda flight: flight.carrier,
                                   lambda flight: flight.departure_delay),
                         by_value(descending=True), limit)
    return pd.DataFrame(_carrier_rows(entries, lambda value: value.average),
                        columns=['carrier', 'name', 'average_departure_delay'])


@report("Monthly flights for carrier")
def report_monthly_flights_for_carrier(repository, year: int, carrier: str) -> pd.DataFrame:
    """
    Counts the flights a single carrier flew in each month. Undated flights
    are left out.
    """
    selected = require_carrier(repository, carrier)
    entries = accumulate(repository.flights(year),
                         counting(lambda flight: flight.not_cancelled and flight.dated
                                  and flight.carrier == selected,
                                  lambda flight: flight.year_month),
                         by_key())
    return pd.DataFrame([(str(month), count) for month, count in entries], columns=['month', 'flights'])
