# pipeline/__init__.py
from .aggregator import CountriesAggregator, join_by_country
from .actions import ActionConfig, ActionOptions, ActionRegistry
from .display import DisplayManager
from .export import export_csv, to_dataframe
