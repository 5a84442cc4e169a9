import numpy as np
import pandas as pd

from airtraffic.accumulate import accumulate, by_value, counting
from airtraffic.catalog import report, require_airport
from airtraffic.geo import UNIT_FACTORS, airport_distance, great_circle_distance

DEFAULT_LIMIT = 10
DEFAULT_RADIUS = 100.0


@report("Airports by state")
def report_airports_by_state(repository, limit: int = 0) -> pd.DataFrame:
    entries = accumulate(repository.airports(),
                         counting(lambda airport: bool(airport.state), lambda airport: airport.state),
                         by_value(descending=True), limit)
    return pd.DataFrame(entries, columns=['state', 'airports'])


@report("Airports by country")
def report_airports_by_country(repository, limit: int = 0) -> pd.DataFrame:
    entries = accumulate(repository.airports(),
                         counting(lambda airport: bool(airport.country), lambda airport: airport.country),
                         by_value(descending=True), limit)
    return pd.DataFrame(entries, columns=['country', 'airports'])


@report("Distance between airports")
def report_distance_between_airports(repository, origin: str, destination: str) -> pd.DataFrame:
    source = require_airport(repository, origin)
    target = require_airport(repository, destination)
    row = [source.iata, target.iata] + [airport_distance(source, target, units) for units in UNIT_FACTORS]
    return pd.DataFrame([row], columns=['origin', 'destination'] + list(UNIT_FACTORS))


@report("Airports near origin")
def report_airports_near_origin(repository, origin: str, radius: float = DEFAULT_RADIUS,
                                limit: int = DEFAULT_LIMIT) -> pd.DataFrame:
    """
    Lists the airports within `radius` statute miles of the origin, nearest
    first. The origin itself is excluded.
    """
    center = require_airport(repository, origin)
    with repository.airports() as airports:
        others = [airport for airport in airports if airport != center]
    if not others:
        return pd.DataFrame(columns=['airport', 'name', 'city', 'state', 'miles'])

    latitudes = np.array([airport.latitude for airport in others])
    longitudes = np.array([airport.longitude for airport in others])
    miles = great_circle_distance(center.latitude, center.longitude, latitudes, longitudes)

    frame = pd.DataFrame({
        'airport': [airport.iata for airport in others],
        'name': [airport.name for airport in others],
        'city': [airport.city for airport in others],
        'state': [airport.state for airport in others],
        'miles': miles,
    })
    frame = frame[frame['miles'] <= radius].sort_values(['miles', 'airport'])
    if limit:
        frame = frame.head(limit)
    return frame.reset_index(drop=True)
