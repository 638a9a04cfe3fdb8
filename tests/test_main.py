import pytest
from rich.console import Console

import main
from core.errors import ApiError
from pipeline.actions import ActionOptions, ActionRegistry
from pipeline.aggregator import CountriesAggregator
from pipeline.display import DisplayManager


@pytest.fixture
def display():
    return DisplayManager(console=Console(record=True, width=120, color_system=None))


def test_registry_has_all_actions_in_menu_order():
    assert ActionRegistry.list_actions() == [
        "population", "cities", "top3", "flag",
        "currency", "codes", "city-growth", "country-growth",
    ]


def test_parse_args():
    cmd, flags = main.parse_args(["codes", "--join", "sentinel", "--csv"])
    assert cmd == "codes"
    assert flags == {"--join": "sentinel", "--csv": True}

    assert main.parse_args([]) == (None, {})
    assert main.parse_args(["--help"])[0] == "help"


@pytest.mark.parametrize("argv", [["--bogus"], ["codes", "extra"], ["population", "--country"]])
def test_parse_args_rejects(argv):
    with pytest.raises(ValueError):
        main.parse_args(argv)


def test_build_options():
    options = main.build_options({"--country": " Germany ", "--cities": "Berlin, Hamburg,,", "--countries": "A,B"})
    assert options.country == "Germany"
    assert options.cities == ["Berlin", "Hamburg"]
    assert options.countries == ["A", "B"]

    defaults = main.build_options({})
    assert defaults.country == "Czech Republic"
    assert defaults.cities == ["Praha", "Brno", "Ostrava", "Plzen"]


def test_run_action_renders_result(make_client, display):
    client = make_client({("GET", "cities/q?country=Czech%20Republic"): {"error": False, "data": ["Zlin", "Brno"]}})
    ok = main.run_action(ActionRegistry.get("top3"), CountriesAggregator(client), display, ActionOptions())
    assert ok
    assert "Brno" in display.console.export_text()


def test_run_action_surfaces_error(make_client, display):
    client = make_client({("GET", "currency"): ApiError("service down")})
    ok = main.run_action(ActionRegistry.get("currency"), CountriesAggregator(client), display, ActionOptions())
    assert not ok
    assert "Error: service down" in display.console.export_text()


def test_run_action_writes_csv_and_flag(make_client, display, tmp_path, monkeypatch):
    monkeypatch.setattr(main, "OUTPUT_DIR", str(tmp_path))
    client = make_client({
        ("POST", "flag/images"): {"error": False, "data": {"flag": "https://example.test/cz.svg"}},
    })
    ok = main.run_action(
        ActionRegistry.get("flag"), CountriesAggregator(client), display, ActionOptions(),
        write_csv=True, save_flag=True,
    )
    assert ok
    assert (tmp_path / "flag_Czech_Republic.svg").read_bytes() == b"<svg/>"
    assert "flag_Czech_Republic.svg" in display.console.export_text()
    # flag results are not tabular
    assert not list(tmp_path.glob("*.csv"))


def test_main_rejects_unknown_join(capsys):
    assert main.main(["codes", "--join", "merge"]) == 2


def test_main_list(capsys):
    assert main.main(["list"]) == 0
    assert "country-growth" in capsys.readouterr().out


def test_run_action_reports_unwritable_output(make_client, display, currency_payload, tmp_path, monkeypatch):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    monkeypatch.setattr(main, "OUTPUT_DIR", str(blocker))
    client = make_client({("GET", "currency"): currency_payload})

    ok = main.run_action(
        ActionRegistry.get("currency"), CountriesAggregator(client), display, ActionOptions(),
        write_csv=True,
    )
    assert not ok
    assert "Error: Cannot write output" in display.console.export_text()


def test_run_action_reports_unwritable_flag_dir(make_client, display, tmp_path, monkeypatch):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    monkeypatch.setattr(main, "OUTPUT_DIR", str(blocker))
    client = make_client({
        ("POST", "flag/images"): {"error": False, "data": {"flag": "https://example.test/cz.svg"}},
    })

    ok = main.run_action(
        ActionRegistry.get("flag"), CountriesAggregator(client), display, ActionOptions(),
        save_flag=True,
    )
    assert not ok
    assert "Error: Cannot write output" in display.console.export_text()


def test_action_titles_do_not_name_a_country():
    for action in ActionRegistry.all().values():
        assert "Czech" not in action.title
        assert "CZ" not in action.title.split()


def test_main_help_prints_usage_literally(capsys):
    assert main.main(["help"]) == 0
    out = capsys.readouterr().out
    assert "Usage:" in out
    assert "<action> [options]" in out


def test_main_bad_option_prints_usage(capsys):
    assert main.main(["--bogus"]) == 2
    out = capsys.readouterr().out
    assert "Error: Unknown option --bogus" in out
    assert "--join drop|sentinel" in out
