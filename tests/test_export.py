import pandas as pd
import pytest

from core.models import (
    CountryPopulationRecord, PopulationSample, CityList, CombinedEntry, CityPopulationGrowth,
)
from pipeline.export import export_csv, safe_filename, to_dataframe


def test_population_record_to_dataframe():
    record = CountryPopulationRecord("Czech Republic", "CZE", [PopulationSample(2015, 1), PopulationSample(2020, 2)])
    df = to_dataframe(record)
    assert list(df.columns) == ["country", "iso_code", "year", "population"]
    assert df["population"].tolist() == [1, 2]


def test_city_results_to_dataframe():
    assert to_dataframe(CityList("CZ", ["Brno"]))["city"].tolist() == ["Brno"]
    assert to_dataframe(["Adamov", "Brno"])["city"].tolist() == ["Adamov", "Brno"]


def test_dataclass_rows_to_dataframe():
    df = to_dataframe([CityPopulationGrowth("Praha", "2021", 10, 2), CityPopulationGrowth("Brno")])
    assert list(df.columns) == ["city", "latest_year", "population", "growth"]
    assert df.loc[1, "city"] == "Brno"


def test_unexportable_result():
    with pytest.raises(TypeError):
        to_dataframe([object()])


def test_export_csv(tmp_path):
    path = export_csv([CombinedEntry("Czechia", "CZK", "+420")], "codes", output_dir=str(tmp_path))
    df = pd.read_csv(path, dtype=str)
    assert path.endswith("codes.csv")
    assert df.to_dict("records") == [{"country": "Czechia", "currency_code": "CZK", "dial_code": "+420"}]


def test_safe_filename():
    assert safe_filename("Czech Republic") == "Czech_Republic"
    assert safe_filename("  ") == "result"
