#!/usr/bin/env python3
# main.py

import os
import sys
from typing import Dict, List, Optional, Tuple

from config import OUTPUT_DIR, JOIN_POLICY
from core.client import APIClient
from core.errors import CountriesClientError
from pipeline.actions import ActionConfig, ActionOptions, ActionRegistry
from pipeline.aggregator import CountriesAggregator
from pipeline.display import DisplayManager
from pipeline.export import export_csv, safe_filename
from utils import setup_logger

VALUE_FLAGS = {"--country", "--cities", "--countries", "--join"}
BOOL_FLAGS = {"--csv", "--save-flag", "--verbose"}

USAGE = (
    "Usage:\n"
    "  python main.py                    — interactive menu\n"
    "  python main.py list               — list actions\n"
    "  python main.py <action> [options] — run one action\n"
    "\n"
    "Options:\n"
    "  --country NAME        country to query (default from config)\n"
    "  --cities A,B,...      cities for city-growth\n"
    "  --countries A,B,...   countries for country-growth\n"
    "  --join drop|sentinel  dial-code join policy for codes\n"
    "  --csv                 also write the result to the output directory\n"
    "  --save-flag           download the flag image (flag action)\n"
    "  --verbose             log every request\n"
)


def parse_args(argv: List[str]) -> Tuple[Optional[str], Dict[str, object]]:
    """
    Split argv into a command and its flags.

    Returns:
        (command or None, {flag: value}) — bool flags map to True
    """
    cmd = None
    flags: Dict[str, object] = {}
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in ("-h", "--help"):
            cmd = "help"
        elif arg in BOOL_FLAGS:
            flags[arg] = True
        elif arg in VALUE_FLAGS:
            if i + 1 >= len(argv):
                raise ValueError(f"{arg} needs a value")
            flags[arg] = argv[i + 1]
            i += 1
        elif arg.startswith("--"):
            raise ValueError(f"Unknown option {arg}")
        elif cmd is None:
            cmd = arg.lower()
        else:
            raise ValueError(f"Unexpected argument {arg!r}")
        i += 1
    return cmd, flags


def build_options(flags: Dict[str, object]) -> ActionOptions:
    options = ActionOptions()
    if "--country" in flags:
        options.country = str(flags["--country"]).strip()
    if "--cities" in flags:
        options.cities = _split_list(str(flags["--cities"]))
    if "--countries" in flags:
        options.countries = _split_list(str(flags["--countries"]))
    return options


def _split_list(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def run_action(
    action: ActionConfig,
    aggregator: CountriesAggregator,
    display: DisplayManager,
    options: ActionOptions,
    write_csv: bool = False,
    save_flag: bool = False,
) -> bool:
    """Run one action and render it. Returns False if it failed."""
    try:
        result = action.run(aggregator, options)

        if action.name == "flag" and save_flag:
            path = save_flag_image(aggregator.client, options.country, result)
            display.flag(options.country, result, saved_to=path)
        else:
            action.renderer(display, result, options)

        if write_csv and action.exportable:
            path = export_csv(result, action.name, output_dir=OUTPUT_DIR)
            display.success(f"Saved: {path}")
    except CountriesClientError as e:
        display.error(str(e))
        return False
    except OSError as e:
        # output directory or file not writable
        display.error(f"Cannot write output: {e}")
        return False
    return True


def save_flag_image(client: APIClient, country: str, url: str) -> str:
    content = client.download(url)
    ext = os.path.splitext(url.split("?", 1)[0])[1] or ".svg"
    os.makedirs(OUTPUT_DIR, exist_ok=True)
    path = os.path.join(OUTPUT_DIR, f"flag_{safe_filename(country)}{ext}")
    with open(path, "wb") as f:
        f.write(content)
    return path


def run_list(display: DisplayManager):
    display.table(
        "Actions",
        ["Name", "Title"],
        [[a.name, a.title] for a in ActionRegistry.all().values()],
    )


def run_menu(aggregator: CountriesAggregator, display: DisplayManager, options: ActionOptions):
    """Interactive loop: pick an action, see the result, repeat."""
    actions = list(ActionRegistry.all().values())
    while True:
        idx = display.menu([a.title for a in actions])
        if idx is None:
            return
        run_action(actions[idx], aggregator, display, options)


def main(argv: Optional[List[str]] = None) -> int:
    display = DisplayManager()
    try:
        cmd, flags = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as e:
        display.error(str(e))
        display.usage(USAGE)
        return 2

    verbose = bool(flags.get("--verbose"))
    display.verbose = verbose
    setup_logger("countries", verbose=verbose)

    if cmd == "help":
        display.usage(USAGE)
        return 0
    if cmd == "list":
        run_list(display)
        return 0

    join_policy = str(flags.get("--join", JOIN_POLICY))
    if join_policy not in ("drop", "sentinel"):
        display.error(f"--join must be 'drop' or 'sentinel', got {join_policy!r}")
        return 2

    options = build_options(flags)

    with APIClient() as client:
        aggregator = CountriesAggregator(client, join_policy=join_policy)

        if cmd is None:
            run_menu(aggregator, display, options)
            return 0

        action = ActionRegistry.get(cmd)
        if action is None:
            display.error(f"Unknown action '{cmd}'. Available: {', '.join(ActionRegistry.list_actions())}")
            display.usage(USAGE)
            return 2

        ok = run_action(
            action, aggregator, display, options,
            write_csv=bool(flags.get("--csv")),
            save_flag=bool(flags.get("--save-flag")),
        )
        display.log(f"API calls: {client.api_calls}")
        return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
