# airtraffic/schema.py

import calendar
from dataclasses import dataclass, field
import datetime
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

A = TypeVar('A')
B = TypeVar('B')


class _Label(Enum):
    """Enum keyed by the label used in the FAA registry extract."""

    @classmethod
    def _missing_(cls, value: Any):
        return cls('')

    def __str__(self) -> str:
        return self.value or 'Unknown'


class OwnershipType(_Label):
    CORPORATION = 'Corporation'
    FOREIGN_CORPORATION = 'Foreign Corporation'
    INDIVIDUAL = 'Individual'
    PARTNERSHIP = 'Partnership'
    CO_OWNER = 'Co-Owner'
    CO_OWNED = 'Co-Owned'
    UNKNOWN = ''


class AircraftType(_Label):
    BALLOON = 'Balloon'
    FIXED_WING_MULTI_ENGINE = 'Fixed Wing Multi-Engine'
    FIXED_WING_SINGLE_ENGINE = 'Fixed Wing Single-Engine'
    ROTORCRAFT = 'Rotorcraft'
    UNKNOWN = ''


class EngineType(_Label):
    FOUR_CYCLE = '4 Cycle'
    NONE = 'None'
    RECIPROCATING = 'Reciprocating'
    TURBO_FAN = 'Turbo-Fan'
    TURBO_JET = 'Turbo-Jet'
    TURBO_PROP = 'Turbo-Prop'
    TURBO_SHAFT = 'Turbo-Shaft'
    UNKNOWN = ''


@dataclass(frozen=True)
class Airport:
    iata: str
    name: str = field(default='', compare=False)
    city: str = field(default='', compare=False)
    state: str = field(default='', compare=False)
    country: str = field(default='', compare=False)
    latitude: float = field(default=0.0, compare=False)
    longitude: float = field(default=0.0, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'iata', self.iata.strip().upper())

    def __str__(self) -> str:
        return self.iata


@dataclass(frozen=True)
class Carrier:
    code: str
    name: str = field(default='', compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'code', self.code.strip().upper())

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True, order=True)
class PlaneModel:
    manufacturer: str
    model_number: str

    def __str__(self) -> str:
        return f"{self.manufacturer} {self.model_number}"


@dataclass(frozen=True)
class Plane:
    """
    A registered airframe. `year` is 0 and `issue_date` is None when the
    registry has no usable value for them.
    """
    tail_number: str
    ownership_type: OwnershipType = field(default=OwnershipType.UNKNOWN, compare=False)
    manufacturer: str = field(default='', compare=False)
    issue_date: Optional[datetime.date] = field(default=None, compare=False)
    model_number: str = field(default='', compare=False)
    status: str = field(default='', compare=False)
    aircraft_type: AircraftType = field(default=AircraftType.UNKNOWN, compare=False)
    engine_type: EngineType = field(default=EngineType.UNKNOWN, compare=False)
    year: int = field(default=0, compare=False)

    @property
    def model(self) -> PlaneModel:
        return PlaneModel(self.manufacturer, self.model_number)

    def __str__(self) -> str:
        return self.tail_number


@dataclass(frozen=True, order=True)
class YearMonth:
    year: int
    month: int

    def __str__(self) -> str:
        return f"{calendar.month_abbr[self.month]} {self.year}"


@dataclass(frozen=True)
class Route:
    """Directional: ORD-LAX and LAX-ORD are different routes."""
    origin: Airport
    destination: Airport

    def __str__(self) -> str:
        return f"{self.origin.iata}-{self.destination.iata}"


@dataclass(frozen=True)
class PairGroup(Generic[A, B]):
    first: A
    second: B

    def __str__(self) -> str:
        return f"{self.first}\t{self.second}"


@dataclass(frozen=True, eq=False)
class Flight:
    """
    One row of the on-time performance dataset. Times are hhmm integers and
    delays are minutes; any value that could not be parsed is 0. `date` is None
    when the year/month/day columns do not form a valid date.
    """
    year: int
    month: int
    day_of_month: int
    date: Optional[datetime.date]
    carrier: Carrier
    flight_number: str
    tail_number: str
    origin: Airport
    destination: Airport
    scheduled_departure_time: int = 0
    actual_departure_time: int = 0
    scheduled_arrival_time: int = 0
    actual_arrival_time: int = 0
    actual_elapsed_time: int = 0
    scheduled_elapsed_time: int = 0
    air_time: int = 0
    arrival_delay: int = 0
    departure_delay: int = 0
    distance: int = 0
    taxi_in: int = 0
    taxi_out: int = 0
    cancelled: bool = False
    cancellation_code: str = ''
    diverted: bool = False
    carrier_delay: int = 0
    weather_delay: int = 0
    nas_delay: int = 0
    security_delay: int = 0
    late_aircraft_delay: int = 0
    plane: Optional[Plane] = None

    @property
    def not_cancelled(self) -> bool:
        return not self.cancelled

    @property
    def not_diverted(self) -> bool:
        return not self.diverted

    @property
    def dated(self) -> bool:
        return self.date is not None

    @property
    def route(self) -> Route:
        return Route(self.origin, self.destination)

    @property
    def year_month(self) -> Optional[YearMonth]:
        if self.date is None:
            return None
        return YearMonth(self.date.year, self.date.month)

    @property
    def valid_tail_number(self) -> bool:
        tail = self.tail_number.strip()
        return bool(tail) and tail.upper() != 'NA' and tail.strip('0') != ''
