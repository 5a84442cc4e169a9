import os
from dataclasses import dataclass, field
from typing import Dict

from dotenv import load_dotenv

from airtraffic.errors import ConfigurationError

# --- Defaults, relative to the working directory ---
DEFAULT_AIRPORT_PATH = os.path.join('data', 'airports.csv')
DEFAULT_CARRIER_PATH = os.path.join('data', 'carriers.csv')
DEFAULT_PLANE_PATH = os.path.join('data', 'planes.csv')
DEFAULT_FLIGHT_PATHS = {2008: os.path.join('data', 'flights-2008.csv')}


def _default_flight_paths() -> Dict[int, str]:
    return dict(DEFAULT_FLIGHT_PATHS)


@dataclass
class Config:
    airport_path: str = DEFAULT_AIRPORT_PATH
    carrier_path: str = DEFAULT_CARRIER_PATH
    plane_path: str = DEFAULT_PLANE_PATH
    flight_paths: Dict[int, str] = field(default_factory=_default_flight_paths)


def parse_flight_paths(value: str) -> Dict[int, str]:
    """
    Parses a flight file mapping such as "2007=data/2007.csv,2008=data/2008.csv".

    Args:
        value: Comma separated year=path pairs.

    Returns:
        A dict from year to file path.
    """
    paths = {}
    for item in value.split(','):
        item = item.strip()
        if not item:
            continue
        year, sep, path = item.partition('=')
        if not sep or not path.strip():
            raise ConfigurationError(f"Expected year=path, got '{item}'")
        try:
            paths[int(year)] = path.strip()
        except ValueError:
            raise ConfigurationError(f"Invalid year '{year}' in '{item}'") from None
    return paths


def load_config() -> Config:
    """
    Builds the configuration from the environment, reading a .env file first if
    one is present. Anything not set falls back to the defaults under data/.
    """
    load_dotenv()

    config = Config()
    config.airport_path = os.getenv('AIRTRAFFIC_AIRPORTS', config.airport_path)
    config.carrier_path = os.getenv('AIRTRAFFIC_CARRIERS', config.carrier_path)
    config.plane_path = os.getenv('AIRTRAFFIC_PLANES', config.plane_path)

    flights = os.getenv('AIRTRAFFIC_FLIGHTS')
    if flights:
        config.flight_paths = parse_flight_paths(flights)
    return config
