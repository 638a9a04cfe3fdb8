# pipeline/export.py
"""
CSV export of operation results.
"""

import os
import re
from dataclasses import asdict, is_dataclass
from typing import Any

import pandas as pd

from config import OUTPUT_DIR
from core.models import CityList, CountryPopulationRecord


def to_dataframe(result: Any) -> pd.DataFrame:
    """Turn any operation result into a flat DataFrame."""
    if isinstance(result, CountryPopulationRecord):
        return pd.DataFrame(
            [
                {"country": result.country, "iso_code": result.iso_code, "year": s.year, "population": s.value}
                for s in result.samples
            ],
            columns=["country", "iso_code", "year", "population"],
        )

    if isinstance(result, CityList):
        return pd.DataFrame({"city": result.cities})

    if isinstance(result, str):
        return pd.DataFrame([{"value": result}])

    rows = list(result)
    if not rows:
        return pd.DataFrame()
    if all(isinstance(r, str) for r in rows):
        return pd.DataFrame({"city": rows})
    if all(is_dataclass(r) for r in rows):
        return pd.DataFrame([asdict(r) for r in rows])

    raise TypeError(f"Cannot export result of type {type(result).__name__}")


def export_csv(result: Any, name: str, output_dir: str = OUTPUT_DIR) -> str:
    """Write a result to `<output_dir>/<name>.csv` and return the path."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, f"{safe_filename(name)}.csv")
    to_dataframe(result).to_csv(path, index=False)
    return path


def safe_filename(name: str) -> str:
    cleaned = re.sub(r"[^A-Za-z0-9._-]+", "_", name.strip())
    return cleaned.strip("_") or "result"
