# pipeline/actions.py
"""
ActionConfig — one user-facing query: which operation to run and how to show it.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from config import DEFAULT_COUNTRY, DEFAULT_CITIES, NEIGHBOR_COUNTRIES
from pipeline.aggregator import CountriesAggregator
from pipeline.display import DisplayManager


@dataclass
class ActionOptions:
    """Inputs for an action; defaults come from config."""

    country: str = DEFAULT_COUNTRY
    cities: List[str] = field(default_factory=lambda: list(DEFAULT_CITIES))
    countries: List[str] = field(default_factory=lambda: list(NEIGHBOR_COUNTRIES))


@dataclass
class ActionConfig:
    """
    A single menu entry.

    runner:   fn(aggregator, options) -> result
    renderer: fn(display, result, options) -> None
    """

    name: str
    title: str
    runner: Callable[[CountriesAggregator, ActionOptions], Any]
    renderer: Callable[[DisplayManager, Any, ActionOptions], None]
    exportable: bool = True

    def __post_init__(self):
        if not self.name:
            raise ValueError("Action name cannot be empty")

    def run(self, aggregator: CountriesAggregator, options: Optional[ActionOptions] = None) -> Any:
        return self.runner(aggregator, options or ActionOptions())


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  ACTION REGISTRY
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ActionRegistry:
    """Registry of all available actions, in menu order."""

    _actions: Dict[str, ActionConfig] = {}

    @classmethod
    def register(cls, action: ActionConfig):
        cls._actions[action.name] = action

    @classmethod
    def get(cls, name: str) -> Optional[ActionConfig]:
        return cls._actions.get(name)

    @classmethod
    def list_actions(cls) -> List[str]:
        return list(cls._actions.keys())

    @classmethod
    def all(cls) -> Dict[str, ActionConfig]:
        return cls._actions.copy()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  BUILT-IN ACTIONS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

ActionRegistry.register(ActionConfig(
    name="population",
    title="Country Population",
    runner=lambda agg, opts: agg.fetch_population(opts.country),
    renderer=lambda d, result, opts: d.population(result),
))

ActionRegistry.register(ActionConfig(
    name="cities",
    title="All Cities of a Country",
    runner=lambda agg, opts: agg.fetch_all_cities(opts.country),
    renderer=lambda d, result, opts: d.city_list(result),
))

ActionRegistry.register(ActionConfig(
    name="top3",
    title="Top 3 Cities Ascending",
    runner=lambda agg, opts: agg.fetch_top3_cities_ascending(opts.country),
    renderer=lambda d, result, opts: d.city_list(result, title=f"First cities of {opts.country}"),
))

ActionRegistry.register(ActionConfig(
    name="flag",
    title="Country Flag",
    runner=lambda agg, opts: agg.fetch_flag_url(opts.country),
    renderer=lambda d, result, opts: d.flag(opts.country, result),
    exportable=False,
))

ActionRegistry.register(ActionConfig(
    name="currency",
    title="Countries and Currency",
    runner=lambda agg, opts: agg.fetch_currency_table(),
    renderer=lambda d, result, opts: d.currencies(result),
))

ActionRegistry.register(ActionConfig(
    name="codes",
    title="Countries, Currency and Dial Codes",
    runner=lambda agg, opts: agg.fetch_currency_and_dial_codes(),
    renderer=lambda d, result, opts: d.currencies_and_dial_codes(result),
))

ActionRegistry.register(ActionConfig(
    name="city-growth",
    title="Compare City Populations",
    runner=lambda agg, opts: agg.compare_city_population_growth(opts.cities, opts.country),
    renderer=lambda d, result, opts: d.growth(result, title=f"City populations of {opts.country}"),
))

ActionRegistry.register(ActionConfig(
    name="country-growth",
    title="Compare Country Populations",
    runner=lambda agg, opts: agg.compare_population_growth(opts.countries),
    renderer=lambda d, result, opts: d.growth(result, title="Population comparison"),
))
