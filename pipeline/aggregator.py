# pipeline/aggregator.py
"""
Aggregation operations — one logical query each, built on the transport
and the response validator.

None of the operations keep state between calls; the client they talk to
is passed in by the caller.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar

from config import (
    POPULATION_PATH, CITIES_PATH, FLAG_PATH, CURRENCY_PATH,
    DIAL_CODES_PATH, CITY_POPULATION_PATH,
    JOIN_POLICY, DIAL_CODE_SENTINEL, MAX_WORKERS, TOP_CITIES_LIMIT,
)
from core.client import APIClient, build_query
from core.models import (
    PopulationSample, CountryPopulationRecord, CityList,
    CurrencyEntry, DialCodeEntry, CombinedEntry,
    CountryPopulationGrowth, CityPopulationGrowth,
)
from core.errors import MissingFieldError
from core.parser import require_dict, require_list, require_str, require_value, parse_int
from core.validator import validate_response

logger = logging.getLogger("countries.aggregator")

T = TypeVar("T")
R = TypeVar("R")

JOIN_POLICIES = ("drop", "sentinel")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  SHARED HELPERS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def join_by_country(
    currencies: Sequence[CurrencyEntry],
    dial_codes: Sequence[DialCodeEntry],
    policy: str = JOIN_POLICY,
    sentinel: str = DIAL_CODE_SENTINEL,
) -> List[CombinedEntry]:
    """
    Join currency rows with dial codes on exact country-name equality.

    Output follows the order of `currencies`. Under "drop" a currency row
    without a dial code is left out; under "sentinel" it is kept with
    `sentinel` as its dial code. Dial-code rows with no currency are never
    emitted.
    """
    if policy not in JOIN_POLICIES:
        raise ValueError(f"Unknown join policy {policy!r}, expected one of {JOIN_POLICIES}")

    dial_by_country = {entry.country: entry.dial_code for entry in dial_codes}

    combined = []
    for entry in currencies:
        dial_code = dial_by_country.get(entry.country)
        if dial_code is None:
            if policy == "drop":
                continue
            dial_code = sentinel
        combined.append(CombinedEntry(entry.country, entry.currency_code, dial_code))
    return combined


def top_sorted(items: Iterable[str], limit: int = TOP_CITIES_LIMIT) -> List[str]:
    """First `limit` items in case-sensitive lexicographic order."""
    return sorted(items)[:max(limit, 0)]


def growth_of(samples: Sequence[PopulationSample]) -> Optional[int]:
    """Last sample minus first sample, None for an empty series."""
    if not samples:
        return None
    return samples[-1].value - samples[0].value


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  AGGREGATOR
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class CountriesAggregator:
    """
    The eight read operations of the client.

    Usage:
        with APIClient() as client:
            agg = CountriesAggregator(client)
            record = agg.fetch_population("Czech Republic")
    """

    def __init__(
        self,
        client: APIClient,
        join_policy: str = JOIN_POLICY,
        max_workers: int = MAX_WORKERS,
    ):
        if join_policy not in JOIN_POLICIES:
            raise ValueError(f"Unknown join policy {join_policy!r}, expected one of {JOIN_POLICIES}")
        self.client = client
        self.join_policy = join_policy
        self.max_workers = max(1, max_workers)

    # ── single-request operations ──

    def fetch_population(self, country: str) -> CountryPopulationRecord:
        """Yearly population samples, in the order the API returns them."""
        body = self._get(build_query(POPULATION_PATH, country=country))
        data = require_dict(body, "data")
        counts = require_list(data, "populationCounts", "data")

        samples = [
            PopulationSample(
                year=parse_int(require_value(item, "year", f"data.populationCounts[{i}]"), "year"),
                value=parse_int(require_value(item, "value", f"data.populationCounts[{i}]"), "value"),
            )
            for i, item in enumerate(counts)
        ]
        name = data.get("country")
        iso_code = data.get("code") or data.get("iso3") or ""
        return CountryPopulationRecord(
            country=name if isinstance(name, str) and name else country,
            iso_code=str(iso_code),
            samples=samples,
        )

    def fetch_all_cities(self, country: str) -> CityList:
        body = self._get(build_query(CITIES_PATH, country=country))
        data = require_list(body, "data")
        cities = []
        for i, city in enumerate(data):
            if not isinstance(city, str):
                raise MissingFieldError(f"data[{i}]", "string")
            cities.append(city)
        return CityList(country=country, cities=cities)

    def fetch_top3_cities_ascending(self, country: str) -> List[str]:
        return top_sorted(self.fetch_all_cities(country).cities, TOP_CITIES_LIMIT)

    def fetch_flag_url(self, country: str) -> str:
        body = self._post(FLAG_PATH, {"country": country})
        data = require_dict(body, "data")
        return require_str(data, "flag", "data")

    def fetch_currency_table(self) -> List[CurrencyEntry]:
        """All-or-nothing: one malformed record fails the whole table."""
        return self._parse_currencies(self._get(CURRENCY_PATH))

    # ── multi-request operations ──

    def fetch_currency_and_dial_codes(self) -> List[CombinedEntry]:
        currency_body, codes_body = self._map_ordered(self._get, [CURRENCY_PATH, DIAL_CODES_PATH])
        currencies = self._parse_currencies(currency_body)
        dial_codes = self._parse_dial_codes(codes_body)

        combined = join_by_country(currencies, dial_codes, self.join_policy)
        logger.info(
            "Joined %d currency rows with %d dial codes → %d rows (policy=%s)",
            len(currencies), len(dial_codes), len(combined), self.join_policy,
        )
        return combined

    def compare_population_growth(self, countries: Sequence[str]) -> List[CountryPopulationGrowth]:
        """
        Latest population and growth since the first sample, per country.
        Countries with an empty series are skipped.
        """
        records = self._map_ordered(self.fetch_population, list(countries))

        results = []
        for country, record in zip(countries, records):
            if not record.samples:
                logger.info("No population samples for %s, skipping", country)
                continue
            latest = record.samples[-1]
            results.append(
                CountryPopulationGrowth(
                    country=country,
                    latest_year=latest.year,
                    population=latest.value,
                    growth=growth_of(record.samples),
                )
            )
        return results

    def compare_city_population_growth(
        self,
        cities: Sequence[str],
        country: str,
    ) -> List[CityPopulationGrowth]:
        """
        Latest population and growth per city. A city without a population
        series stays in the output with empty figures.
        """
        return self._map_ordered(lambda city: self._city_growth(city, country), list(cities))

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    #  HELPERS
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _get(self, path: str) -> Any:
        return validate_response(self.client.fetch("GET", path))

    def _post(self, path: str, body: Dict[str, Any]) -> Any:
        return validate_response(self.client.fetch("POST", path, body))

    def _city_growth(self, city: str, country: str) -> CityPopulationGrowth:
        body = self._post(CITY_POPULATION_PATH, {"country": country, "city": city})

        data = body.get("data") if isinstance(body, dict) else None
        counts = data.get("populationCounts") if isinstance(data, dict) else None
        if not isinstance(counts, list) or not counts:
            logger.info("No population series for %s, keeping it without figures", city)
            return CityPopulationGrowth(city=city)

        first = counts[0]
        latest = counts[-1]
        path = "data.populationCounts"
        first_value = parse_int(require_value(first, "value", f"{path}[0]"), "value")
        latest_value = parse_int(require_value(latest, "value", f"{path}[{len(counts) - 1}]"), "value")
        latest_year = require_value(latest, "year", f"{path}[{len(counts) - 1}]")

        return CityPopulationGrowth(
            city=city,
            latest_year=str(latest_year),
            population=latest_value,
            growth=latest_value - first_value,
        )

    @staticmethod
    def _parse_currencies(body: Any) -> List[CurrencyEntry]:
        data = require_list(body, "data")
        return [
            CurrencyEntry(
                country=require_str(item, "name", f"data[{i}]"),
                currency_code=require_str(item, "currency", f"data[{i}]"),
            )
            for i, item in enumerate(data)
        ]

    @staticmethod
    def _parse_dial_codes(body: Any) -> List[DialCodeEntry]:
        data = require_list(body, "data")
        return [
            DialCodeEntry(
                country=require_str(item, "name", f"data[{i}]"),
                dial_code=require_str(item, "dial_code", f"data[{i}]"),
            )
            for i, item in enumerate(data)
        ]

    def _map_ordered(self, fn: Callable[[T], R], items: List[T]) -> List[R]:
        """
        Run `fn` over `items` on a thread pool and return results in input
        order. Every call finishes before anything is raised; the first
        failure in input order is the one propagated.
        """
        if not items:
            return []
        if len(items) == 1 or self.max_workers == 1:
            return [fn(item) for item in items]

        results: List[Optional[R]] = [None] * len(items)
        workers = min(self.max_workers, len(items))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(fn, item) for item in items]
            wait(futures)

        for i, future in enumerate(futures):
            error = future.exception()
            if error is not None:
                raise error
            results[i] = future.result()
        return results
