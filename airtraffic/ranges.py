from dataclasses import dataclass
from typing import Sequence, TypeVar

from airtraffic.errors import ClassificationError


@dataclass(frozen=True, order=True)
class _Range:
    low: int
    high: int

    @classmethod
    def between(cls, low: int, high: int):
        return cls(low, high)

    def contains(self, value: int) -> bool:
        return self.low <= value <= self.high

    def __str__(self) -> str:
        return f"{self.low}-{self.high}"


class FlightDistanceRange(_Range):
    """Inclusive band of flight distances in miles."""


class PlaneAgeRange(_Range):
    """Inclusive band of plane ages in years."""


R = TypeVar('R', bound=_Range)

DISTANCE_RANGES = [
    FlightDistanceRange.between(0, 100),
    FlightDistanceRange.between(101, 250),
    FlightDistanceRange.between(251, 500),
    FlightDistanceRange.between(501, 1000),
    FlightDistanceRange.between(1001, 2500),
    FlightDistanceRange.between(2501, 5000),
    FlightDistanceRange.between(5001, 9999),
]

AGE_RANGES = [
    PlaneAgeRange.between(0, 5),
    PlaneAgeRange.between(6, 10),
    PlaneAgeRange.between(11, 20),
    PlaneAgeRange.between(21, 30),
    PlaneAgeRange.between(31, 40),
    PlaneAgeRange.between(41, 50),
    PlaneAgeRange.between(51, 100),
]


def classify(value: int, ranges: Sequence[R]) -> R:
    """
    Finds the bucket a value belongs to.

    Args:
        value: The value to classify.
        ranges: Ascending, non-overlapping ranges. The order is trusted, not checked.

    Returns:
        The first range containing the value.

    Raises:
        ClassificationError: No range contains the value.
    """
    for candidate in ranges:
        if candidate.contains(value):
            return candidate
    raise ClassificationError(f"No range for value of {value}")
