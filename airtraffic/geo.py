import numpy as np

from airtraffic.schema import Airport

STATUTE_MILES_PER_DEGREE = 60 * 1.1515
UNIT_FACTORS = {
    'miles': 1.0,
    'km': 1.609344,
    'nm': 0.8684,
}


def great_circle_distance(lat1, lon1, lat2, lon2, units: str = 'miles'):
    """
    Spherical law of cosines distance between points given in decimal degrees.
    Accepts scalars or numpy arrays.

    Args:
        lat1, lon1: First point(s).
        lat2, lon2: Second point(s).
        units: 'miles' (statute), 'km' or 'nm'.

    Returns:
        The distance(s) in the requested units.
    """
    if units not in UNIT_FACTORS:
        raise ValueError(f"Unknown units '{units}', expected one of {sorted(UNIT_FACTORS)}")

    lat1, lat2 = np.radians(lat1), np.radians(lat2)
    theta = np.radians(np.subtract(lon1, lon2))
    cosine = np.sin(lat1) * np.sin(lat2) + np.cos(lat1) * np.cos(lat2) * np.cos(theta)
    # rounding can push identical points just past 1
    angle = np.degrees(np.arccos(np.clip(cosine, -1.0, 1.0)))
    return angle * STATUTE_MILES_PER_DEGREE * UNIT_FACTORS[units]


def airport_distance(first: Airport, second: Airport, units: str = 'miles') -> float:
    return float(great_circle_distance(first.latitude, first.longitude,
                                       second.latitude, second.longitude, units))
