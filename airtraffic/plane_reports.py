import pandas as pd

from airtraffic.accumulate import accumulate, by_key, by_value, counting
from airtraffic.catalog import report
from airtraffic.ranges import AGE_RANGES, classify
from airtraffic.schema import Flight

DEFAULT_LIMIT = 10
DAYS_PER_YEAR = 365


def _always(record) -> bool:
    return True


def _flown_by_known_plane(flight: Flight) -> bool:
    return flight.not_cancelled and flight.plane is not None


def _counts(entries, column: str, value: str = 'count') -> pd.DataFrame:
    return pd.DataFrame([(str(entry.key), entry.value) for entry in entries], columns=[column, value])


# --- Registry of planes ---

@report("Total planes by manufacturer")
def report_total_planes_by_manufacturer(repository, limit: int = 0) -> pd.DataFrame:
    entries = accumulate(repository.planes(),
                         counting(_always, lambda plane: plane.manufacturer),
                         by_value(descending=True), limit)
    return _counts(entries, 'manufacturer', 'planes')


@report("Total planes by year")
def report_total_planes_by_year(repository, limit: int = 0) -> pd.DataFrame:
    """
    Counts planes per year of manufacture, newest first. Planes with an
    unknown year are left out.
    """
    entries = accumulate(repository.planes(),
                         counting(lambda plane: plane.year > 0, lambda plane: plane.year),
                         by_key(descending=True), limit)
    return pd.DataFrame(entries, columns=['year', 'planes'])


@report("Total planes by aircraft type")
def report_total_planes_by_aircraft_type(repository, limit: int = 0) -> pd.DataFrame:
    entries = accumulate(repository.planes(),
                         counting(_always, lambda plane: plane.aircraft_type),
                         by_value(descending=True), limit)
    return _counts(entries, 'aircraft_type', 'planes')


@report("Total planes by engine type")
def report_total_planes_by_engine_type(repository, limit: int = 0) -> pd.DataFrame:
    entries = accumulate(repository.planes(),
                         counting(_always, lambda plane: plane.engine_type),
                         by_value(descending=True), limit)
    return _counts(entries, 'engine_type', 'planes')


# --- Flights by plane ---

@report("Planes with most cancellations")
def report_planes_with_most_cancellations(repository, year: int,
                                          limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(lambda flight: flight.cancelled and flight.valid_tail_number,
                                  lambda flight: flight.tail_number),
                         by_value(descending=True), limit)
    return pd.DataFrame(entries, columns=['tail_number', 'cancellations'])


@report("Most flights by plane")
def report_most_flights_by_plane(repository, year: int, limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(lambda flight: _flown_by_known_plane(flight) and flight.valid_tail_number,
                                  lambda flight: flight.plane),
                         by_value(descending=True), limit)
    rows = [(plane.tail_number, plane.manufacturer, plane.model_number, count) for plane, count in entries]
    return pd.DataFrame(rows, columns=['tail_number', 'manufacturer', 'model_number', 'flights'])


@report("Most flights by plane model")
def report_most_flights_by_plane_model(repository, year: int,
                                       limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    """
    Ranks plane models by the number of flights they flew.

    Args:
        repository: Data access.
        year: Flight year.
        limit: Number of models to show.

    Returns:
        One row per model with its flight count and the count spread over a
        365 day year.
    """
    entries = accumulate(repository.flights(year),
                         counting(_flown_by_known_plane, lambda flight: flight.plane.model),
                         by_value(descending=True), limit)
    rows = [(model.manufacturer, model.model_number, count, count / DAYS_PER_YEAR)
            for model, count in entries]
    return pd.DataFrame(rows, columns=['manufacturer', 'model_number', 'flights', 'daily_average'])


@report("Total flights by plane manufacturer")
def report_total_flights_by_plane_manufacturer(repository, year: int, limit: int = 0) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(_flown_by_known_plane, lambda flight: flight.plane.manufacturer),
                         by_value(descending=True), limit)
    return _counts(entries, 'manufacturer', 'flights')


@report("Total flights by plane age range")
def report_total_flights_by_plane_age_range(repository, year: int) -> pd.DataFrame:
    """
    Buckets flights by the age of the plane in the year flown. The last row
    holds the total.
    """
    entries = accumulate(repository.flights(year),
                         counting(lambda flight: _flown_by_known_plane(flight) and flight.plane.year > 0,
                                  lambda flight: classify(flight.year - flight.plane.year, AGE_RANGES)),
                         by_key())
    frame = _counts(entries, 'age_range', 'flights')
    total = pd.DataFrame([('Total', int(frame['flights'].sum()))], columns=frame.columns)
    return pd.concat([frame, total], ignore_index=True)


@report("Total flights by aircraft type")
def report_total_flights_by_aircraft_type(repository, year: int, limit: int = 0) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(_flown_by_known_plane, lambda flight: flight.plane.aircraft_type),
                         by_value(descending=True), limit)
    return _counts(entries, 'aircraft_type', 'flights')


@report("Total flights by engine type")
def report_total_flights_by_engine_type(repository, year: int, limit: int = 0) -> pd.DataFrame:
    entries = accumulate(repository.flights(year),
                         counting(_flown_by_known_plane, lambda flight: flight.plane.engine_type),
                         by_value(descending=True), limit)
    return _counts(entries, 'engine_type', 'flights')
