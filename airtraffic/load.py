import io
import os
from functools import cached_property
from typing import Callable, Dict, Iterator, List, Optional

import pandas as pd

from airtraffic.config import Config, load_config
from airtraffic.errors import ConfigurationError, RepositoryError
from airtraffic.schema import (AircraftType, Airport, Carrier, EngineType, Flight,
                               OwnershipType, Plane)

DEFAULT_CHUNK_SIZE = 100_000
ISSUE_DATE_FORMAT = '%m/%d/%Y'
DATA_ENCODING = 'utf-8'

Parser = Callable[[pd.Series], pd.Series]


# --- Column parsers ---
# Each takes the raw text column of a chunk and returns the typed column.
# Values that cannot be parsed become 0 (numbers) or None (dates).

def _text(series: pd.Series) -> pd.Series:
    return series.fillna('').astype(str).str.strip()


def _int(series: pd.Series) -> pd.Series:
    return pd.to_numeric(_text(series), errors='coerce').fillna(0).astype(int)


def _float(series: pd.Series) -> pd.Series:
    return pd.to_numeric(_text(series), errors='coerce').fillna(0.0).astype(float)


def _flag(series: pd.Series) -> pd.Series:
    return _int(series) != 0


def _dates(parsed: pd.Series) -> List:
    return [None if pd.isna(value) else value.date() for value in parsed]


def _issue_date(series: pd.Series) -> pd.Series:
    parsed = pd.to_datetime(_text(series), format=ISSUE_DATE_FORMAT, errors='coerce')
    return pd.Series(_dates(parsed), index=series.index, dtype=object)


def _label(enum_type) -> Parser:
    return lambda series: _text(series).map(lambda value: enum_type(value))


# --- File layouts (one header row each) ---

AIRPORT_PARSERS: Dict[str, Parser] = {
    'iata': _text,
    'name': _text,
    'city': _text,
    'state': _text,
    'country': _text,
    'latitude': _float,
    'longitude': _float,
}

CARRIER_PARSERS: Dict[str, Parser] = {
    'code': _text,
    'name': _text,
}

PLANE_PARSERS: Dict[str, Parser] = {
    'tail_number': _text,
    'ownership_type': _label(OwnershipType),
    'manufacturer': _text,
    'issue_date': _issue_date,
    'model_number': _text,
    'status': _text,
    'aircraft_type': _label(AircraftType),
    'engine_type': _label(EngineType),
    'year': _int,
}

FLIGHT_COLUMNS = [
    'year', 'month', 'day_of_month', 'day_of_week',
    'actual_departure_time', 'scheduled_departure_time',
    'actual_arrival_time', 'scheduled_arrival_time',
    'carrier', 'flight_number', 'tail_number',
    'actual_elapsed_time', 'scheduled_elapsed_time', 'air_time',
    'arrival_delay', 'departure_delay',
    'origin', 'destination', 'distance', 'taxi_in', 'taxi_out',
    'cancelled', 'cancellation_code', 'diverted',
    'carrier_delay', 'weather_delay', 'nas_delay', 'security_delay', 'late_aircraft_delay',
]

# day_of_week is recomputed from the date, so it is not parsed.
FLIGHT_PARSERS: Dict[str, Parser] = {
    'year': _int,
    'month': _int,
    'day_of_month': _int,
    'actual_departure_time': _int,
    'scheduled_departure_time': _int,
    'actual_arrival_time': _int,
    'scheduled_arrival_time': _int,
    'carrier': _text,
    'flight_number': _text,
    'tail_number': _text,
    'actual_elapsed_time': _int,
    'scheduled_elapsed_time': _int,
    'air_time': _int,
    'arrival_delay': _int,
    'departure_delay': _int,
    'origin': _text,
    'destination': _text,
    'distance': _int,
    'taxi_in': _int,
    'taxi_out': _int,
    'cancelled': _flag,
    'cancellation_code': _text,
    'diverted': _flag,
    'carrier_delay': _int,
    'weather_delay': _int,
    'nas_delay': _int,
    'security_delay': _int,
    'late_aircraft_delay': _int,
}


def parse_columns(chunk: pd.DataFrame, parsers: Dict[str, Parser]) -> pd.DataFrame:
    """
    Applies a parse table to a chunk of raw text columns.

    Args:
        chunk: Raw rows, every column read as text.
        parsers: Column name to parse function. Columns not listed are dropped.

    Returns:
        A DataFrame with one typed column per parser.
    """
    return pd.DataFrame({column: parser(chunk[column]) for column, parser in parsers.items()},
                        index=chunk.index)


def _flight_dates(frame: pd.DataFrame) -> List:
    parts = frame[['year', 'month', 'day_of_month']].rename(columns={'day_of_month': 'day'})
    return _dates(pd.to_datetime(parts, errors='coerce'))


class RecordStream:
    """
    Forward-only iterator over the records decoded from a chunked CSV reader.
    The file is closed when the stream is exhausted or `close` is called.
    """

    def __init__(self, reader, decode: Callable[[pd.DataFrame], Iterator]):
        self._reader = reader
        self._records = self._iterate(decode)

    def _iterate(self, decode):
        for chunk in self._reader:
            yield from decode(chunk)
        self._reader.close()

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._records)

    def close(self) -> None:
        self._records.close()
        self._reader.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def _validate_path(path: str) -> str:
    if not os.path.exists(path):
        raise ConfigurationError(f"Invalid path: {path}")
    return path


class Repository:
    """
    Read access to the airport, carrier, plane and per-year flight files.

    Every call to `airports`, `carriers`, `planes` or `flights` opens its file
    again and returns a lazy iterator that holds one chunk of rows at a time.
    Close the iterator (or exhaust it) to release the file. Lookups by code are
    served from maps built on first use and kept for the life of the object.
    """

    def __init__(self, config: Optional[Config] = None, chunksize: int = DEFAULT_CHUNK_SIZE):
        if config is None:
            config = load_config()
        self.chunksize = chunksize

        self.flight_paths: Dict[int, str] = {}
        for year, path in config.flight_paths.items():
            if os.path.exists(path):
                self.flight_paths[year] = path
            else:
                print(f"Warning: invalid path for {year} flight data: {path}")
        if not self.flight_paths:
            raise ConfigurationError("No flight data found")

        self.airport_path = _validate_path(config.airport_path)
        self.carrier_path = _validate_path(config.carrier_path)
        self.plane_path = _validate_path(config.plane_path)

    @property
    def flight_years(self) -> List[int]:
        return sorted(self.flight_paths)

    # --- Record streams ---

    def _open(self, path: str, columns: List[str]):
        # Rows with too many fields are skipped with a ParserWarning, and bytes
        # that are not UTF-8 become U+FFFD.
        try:
            return pd.read_csv(path, header=None, skiprows=1, names=columns, dtype=str,
                               keep_default_na=False, index_col=False, chunksize=self.chunksize,
                               on_bad_lines='warn', encoding=DATA_ENCODING, encoding_errors='replace')
        except OSError as exc:
            raise RepositoryError(f"Could not read {path}: {exc}") from exc

    def _stream(self, path: str, columns: List[str], decode) -> RecordStream:
        return RecordStream(self._open(path, columns), decode)

    def airports(self) -> RecordStream:
        return self._stream(self.airport_path, list(AIRPORT_PARSERS), _decode_airports)

    def carriers(self) -> RecordStream:
        return self._stream(self.carrier_path, list(CARRIER_PARSERS), _decode_carriers)

    def planes(self) -> RecordStream:
        return self._stream(self.plane_path, list(PLANE_PARSERS), _decode_planes)

    def flights(self, year: int) -> RecordStream:
        """
        Streams the flights of one year.

        Args:
            year: A year with a configured flight file.

        Returns:
            A lazy iterator of Flight records in file order.

        Raises:
            ConfigurationError: No flight file is configured for the year.
            RepositoryError: The file could not be opened.
        """
        path = self.flight_paths.get(year)
        if path is None:
            raise ConfigurationError(f"No flight data for year {year}")
        return self._stream(path, FLIGHT_COLUMNS, self._decode_flights)

    def _decode_flights(self, chunk: pd.DataFrame) -> Iterator[Flight]:
        frame = parse_columns(chunk, FLIGHT_PARSERS)
        dates = _flight_dates(frame)
        for record, flight_date in zip(frame.to_dict('records'), dates):
            yield self._flight(record, flight_date)

    def _flight(self, record: dict, flight_date) -> Flight:
        record['date'] = flight_date
        record['carrier'] = self.carrier(record['carrier']) or Carrier(record['carrier'])
        record['origin'] = self.airport(record['origin']) or Airport(record['origin'])
        record['destination'] = self.airport(record['destination']) or Airport(record['destination'])
        record['plane'] = self.plane(record['tail_number'])
        return Flight(**record)

    # --- Lookups ---

    @cached_property
    def _airport_map(self) -> Dict[str, Airport]:
        print(f"Loading airports from {self.airport_path}...")
        with self.airports() as airports:
            return {airport.iata: airport for airport in airports}

    @cached_property
    def _carrier_map(self) -> Dict[str, Carrier]:
        print(f"Loading carriers from {self.carrier_path}...")
        with self.carriers() as carriers:
            return {carrier.code: carrier for carrier in carriers}

    @cached_property
    def _plane_map(self) -> Dict[str, Plane]:
        print(f"Loading planes from {self.plane_path}...")
        with self.planes() as planes:
            return {plane.tail_number.upper(): plane for plane in planes}

    def airport(self, iata: str) -> Optional[Airport]:
        return self._airport_map.get(iata.strip().upper())

    def carrier(self, code: str) -> Optional[Carrier]:
        return self._carrier_map.get(code.strip().upper())

    def plane(self, tail_number: str) -> Optional[Plane]:
        return self._plane_map.get(tail_number.strip().upper())

    def valid_airport(self, iata: str) -> bool:
        return self.airport(iata) is not None

    def valid_carrier(self, code: str) -> bool:
        return self.carrier(code) is not None


# --- Decoders for the lookup files ---

def _decode_airports(chunk: pd.DataFrame) -> Iterator[Airport]:
    for record in parse_columns(chunk, AIRPORT_PARSERS).to_dict('records'):
        yield Airport(**record)


def _decode_carriers(chunk: pd.DataFrame) -> Iterator[Carrier]:
    for record in parse_columns(chunk, CARRIER_PARSERS).to_dict('records'):
        yield Carrier(**record)


def _decode_planes(chunk: pd.DataFrame) -> Iterator[Plane]:
    for record in parse_columns(chunk, PLANE_PARSERS).to_dict('records'):
        yield Plane(**record)


def parse_flight(line: str, repository: Repository) -> Flight:
    """
    Decodes a single raw line of a flight file, resolving its codes through the
    repository lookups.
    """
    chunk = pd.read_csv(io.StringIO(line), header=None, names=FLIGHT_COLUMNS, dtype=str,
                        keep_default_na=False, index_col=False)
    return next(repository._decode_flights(chunk))
