# core/models.py
"""
Result types produced by the aggregation layer.
All of them are built fresh per call and never cached.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class PopulationSample:
    year: int
    value: int


@dataclass
class CountryPopulationRecord:
    country: str
    iso_code: str
    samples: List[PopulationSample] = field(default_factory=list)


@dataclass
class CityList:
    country: str
    cities: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CurrencyEntry:
    country: str
    currency_code: str


@dataclass(frozen=True)
class DialCodeEntry:
    country: str
    dial_code: str


@dataclass(frozen=True)
class CombinedEntry:
    country: str
    currency_code: str
    dial_code: str


@dataclass(frozen=True)
class CountryPopulationGrowth:
    country: str
    latest_year: int
    population: int
    growth: int


@dataclass(frozen=True)
class CityPopulationGrowth:
    """Growth figures are None when the API had no series for the city."""

    city: str
    latest_year: Optional[str] = None
    population: Optional[int] = None
    growth: Optional[int] = None
