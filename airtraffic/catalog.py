"""
Registry of every report the application can run.

Report functions are registered with the `report` decorator, which records a
one-line description used by the CLI and the dashboard:

    @report("Top flights by origin")
    def report_top_flights_by_origin(repository, year, limit=10):
        ...

A report takes the Repository as its first argument plus any of the named
parameters below and returns a DataFrame whose column order is the display
order.
"""

import importlib
import inspect
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import pandas as pd

from airtraffic.schema import Airport, Carrier

PARAMETERS = ('year', 'limit', 'origin', 'destination', 'carrier', 'radius')
REPORT_MODULES = (
    'airtraffic.flight_reports',
    'airtraffic.plane_reports',
    'airtraffic.airport_reports',
    'airtraffic.carrier_reports',
)

_registry: Dict[str, 'Report'] = {}


@dataclass(frozen=True)
class Report:
    name: str
    description: str
    category: str
    function: Callable[..., pd.DataFrame]

    @property
    def parameters(self) -> List[str]:
        return [name for name in inspect.signature(self.function).parameters if name in PARAMETERS]

    @property
    def required(self) -> List[str]:
        signature = inspect.signature(self.function)
        return [name for name in self.parameters
                if signature.parameters[name].default is inspect.Parameter.empty]

    def run(self, repository, **params) -> pd.DataFrame:
        """
        Runs the report with whichever of `params` it accepts. Parameters that
        are None are treated as not given.
        """
        accepted = {name: value for name, value in params.items()
                    if name in self.parameters and value is not None}
        missing = [name for name in self.required if name not in accepted]
        if missing:
            raise ValueError(f"Report '{self.name}' requires: {', '.join(missing)}")
        return self.function(repository, **accepted)


def report(description: str):
    def register(function: Callable[..., pd.DataFrame]) -> Callable[..., pd.DataFrame]:
        name = function.__name__.removeprefix('report_')
        category = function.__module__.rsplit('.', 1)[-1].removesuffix('_reports')
        _registry[name] = Report(name, description, category, function)
        return function
    return register


def _discover() -> None:
    for module in REPORT_MODULES:
        importlib.import_module(module)


def reports(category: Optional[str] = None) -> List[Report]:
    _discover()
    return [entry for entry in _registry.values() if category is None or entry.category == category]


def get_report(name: str) -> Report:
    _discover()
    try:
        return _registry[name]
    except KeyError:
        raise KeyError(f"Unknown report '{name}'") from None


# --- Parameter resolution shared by the report modules ---

def require_airport(repository, iata: str) -> Airport:
    airport = repository.airport(iata)
    if airport is None:
        raise ValueError(f"Unknown airport '{iata}'")
    return airport


def require_carrier(repository, code: str) -> Carrier:
    carrier = repository.carrier(code)
    if carrier is None:
        raise ValueError(f"Unknown carrier '{code}'")
    return carrier
