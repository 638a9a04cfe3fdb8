# pipeline/display.py
"""
Rich CLI display manager — renders operation results as terminal tables.
"""

from typing import List, Dict, Optional, Any, Sequence, Union

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from core.models import (
    CountryPopulationRecord, CityList, CurrencyEntry, CombinedEntry,
    CountryPopulationGrowth, CityPopulationGrowth,
)

MISSING = "—"


def format_population(value: Optional[int]) -> str:
    """1234567 → '1,234,567'."""
    if value is None:
        return MISSING
    return f"{value:,}"


def format_growth(value: Optional[int]) -> str:
    """Signed with thousands separators: +700,000 / -12,345."""
    if value is None:
        return MISSING
    return f"{value:+,}"


class DisplayManager:
    """Terminal output for every action of the client."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.verbose = verbose
        self.console = console or Console()

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    #  BANNERS & HEADERS
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def banner(
        self,
        title: str,
        subtitle: str = "",
        data: Dict[str, str] = None,
        style: str = "blue",
    ):
        """Display a banner with an optional key/value block."""
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Key", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")
        if subtitle:
            table.add_row(Text(subtitle, style="dim"), "")
        for k, v in (data or {}).items():
            table.add_row(Text(str(k)), Text(str(v)))

        self.console.print()
        self.console.print(
            Panel(table, title=Text(title, style="bold"), border_style=style, padding=(1, 2))
        )

    def header(self, text: str, style: str = "bold cyan"):
        self.console.print()
        self.console.rule(f"[{style}]{text}[/{style}]", style=style)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    #  STATUS MESSAGES
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def success(self, message: str):
        self.console.print(Text.assemble(("  ✓ ", "green"), message))

    def error(self, message: str):
        """Errors are shown as plain 'Error: <message>' lines."""
        self.console.print(Text(f"Error: {message}", style="red"))

    def warning(self, message: str):
        self.console.print(Text.assemble(("  ⚠ ", "yellow"), message))

    def usage(self, text: str):
        self.console.print(Text(text))

    def log(self, message: str, style: str = "dim"):
        if not self.verbose:
            return
        self.console.print(f"    [{style}]{message}[/{style}]")

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    #  TABLES
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def table(
        self,
        title: str,
        columns: List[str],
        rows: List[List[Any]],
        show_header: bool = True,
        justify: Optional[List[str]] = None,
    ):
        """Display a table; cell values are printed literally, never as markup."""
        if title:
            self.console.print(Text(title, style="bold"))
        table = Table(
            box=box.SIMPLE_HEAD,
            show_header=show_header,
            header_style="bold magenta",
        )
        for i, col in enumerate(columns):
            table.add_column(col, justify=(justify[i] if justify else "left"))
        for row in rows:
            table.add_row(*[Text(str(c)) for c in row])
        self.console.print(table)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    #  RESULT RENDERERS
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def population(self, record: CountryPopulationRecord):
        title = f"Population of {record.country}"
        if record.iso_code:
            title += f" ({record.iso_code})"
        self.table(
            title,
            ["Year", "Population"],
            [[s.year, format_population(s.value)] for s in record.samples],
            justify=["left", "right"],
        )

    def city_list(self, cities: Union[CityList, Sequence[str]], title: str = ""):
        """Numbered city list."""
        if isinstance(cities, CityList):
            title = title or f"Cities of {cities.country}"
            names = cities.cities
        else:
            names = list(cities)
        self.table(
            title,
            ["No.", "City"],
            [[i, name] for i, name in enumerate(names, start=1)],
            justify=["right", "left"],
        )

    def flag(self, country: str, url: str, saved_to: Optional[str] = None):
        data = {"Country": country, "Flag URL": url}
        if saved_to:
            data["Saved to"] = saved_to
        self.banner(title=f"Flag of {country}", data=data, style="cyan")

    def currencies(self, entries: Sequence[CurrencyEntry]):
        self.table(
            "Countries and Currency",
            ["Country", "Currency"],
            [[e.country, e.currency_code] for e in entries],
        )

    def currencies_and_dial_codes(self, entries: Sequence[CombinedEntry]):
        self.table(
            "Countries, Currency and Dial Codes",
            ["Country", "Currency", "Dial Code"],
            [[e.country, e.currency_code, e.dial_code] for e in entries],
        )

    def growth(
        self,
        rows: Sequence[Union[CountryPopulationGrowth, CityPopulationGrowth]],
        title: str = "",
    ):
        """Population comparison; the first column is Country or City."""
        if not rows:
            self.warning("No population data to compare")
            return

        is_country = isinstance(rows[0], CountryPopulationGrowth)
        name_col = "Country" if is_country else "City"
        body = []
        for r in rows:
            name = r.country if is_country else r.city
            year = MISSING if r.latest_year is None else r.latest_year
            body.append([name, year, format_population(r.population), format_growth(r.growth)])

        self.table(
            title,
            [name_col, "Year", "Population", "Growth"],
            body,
            justify=["left", "left", "right", "right"],
        )

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    #  MENU
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def menu(self, titles: Sequence[str]) -> Optional[int]:
        """
        Show numbered choices and read one.

        Returns:
            Zero-based index of the choice, or None to quit
        """
        self.header("Countries & Cities API Client")
        for i, title in enumerate(titles, start=1):
            self.console.print(Text.assemble("  ", (str(i), "cyan"), ". ", title))
        self.console.print("  [cyan]q[/cyan]. Quit")

        while True:
            choice = self.console.input("\n  Your choice: ").strip().lower()
            if choice in ("q", "quit", "exit"):
                return None
            if choice.isdigit() and 1 <= int(choice) <= len(titles):
                return int(choice) - 1
            self.warning(f"Pick 1-{len(titles)} or q")
