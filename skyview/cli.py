"""CLI entry point for the weather view."""

import argparse
import asyncio
import logging

from skyview.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from skyview.config.schema import SkyviewConfig
from skyview.errors import LocationNotFound, SkyviewError
from skyview.reporting.formatters import format_view_json, format_view_text
from skyview.session.controller import WeatherSession

DEFAULT_CONFIG = "configs/default.yaml"
ADVISORY_WAIT_SECONDS = 10.0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="skyview",
        description="Current conditions, hourly and 8-day forecast for one place",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    # show
    show_p = sub.add_parser("show", help="Show the forecast for a place")
    show_p.add_argument("city", help="City name")
    show_p.add_argument("--country", default="", help="Country name")
    show_p.add_argument(
        "--day", type=int, default=0, help="Day index, 0 = today (default)"
    )
    show_p.add_argument("--json", action="store_true", help="Print JSON")
    show_p.add_argument(
        "--no-advice", action="store_true", help="Skip the generated tip"
    )

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "show":
        return _cmd_show(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


async def _show(config: SkyviewConfig, args) -> int:
    if args.no_advice:
        config = config.model_copy(
            update={"advisory": config.advisory.model_copy(update={"enabled": False})}
        )
    session = WeatherSession.from_config(config)
    try:
        await session.search(args.city, args.country)
    except LocationNotFound:
        print(f"Error: {session.state.error}")
        return 1
    except SkyviewError as e:
        print(f"Error: {session.state.error} ({e})")
        return 1

    try:
        session.select_day(args.day)
    except IndexError as e:
        print(f"Error: {e}")
        return 1

    await session.wait_for_advisory(ADVISORY_WAIT_SECONDS)
    view = session.view()
    print(format_view_json(view) if args.json else format_view_text(view))
    return 0


def _cmd_show(config: SkyviewConfig, args) -> int:
    return asyncio.run(_show(config, args))


def _cmd_config(config: SkyviewConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = (part.strip() for part in kv.split("=", 1))
        try:
            new_config = set_config_value(config, key, value)
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key} = {get_config_value(new_config, key)} in {args.config}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1
