"""CLI entry point for the weather destination search engine."""

import argparse
import json
import logging
import sys

from destinations.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from destinations.errors import RequestValidationError
from destinations.models.search import SearchResponse
from destinations.pipeline.factory import build_cache, build_pipeline
from destinations.pipeline.search_pipeline import parse_request
from destinations.reporting.formatters import format_summary_json

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="destinations",
        description="Rank nearby destinations by forecast weather",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # search
    search_p = sub.add_parser("search", help="Run one destination search")
    search_p.add_argument("--lat", type=float, required=True, help="Center latitude")
    search_p.add_argument("--lon", type=float, required=True, help="Center longitude")
    search_p.add_argument("--radius", type=float, required=True, help="Radius in km")
    search_p.add_argument("--start", required=True, help="Start date (YYYY-MM-DD)")
    search_p.add_argument("--end", required=True, help="End date (YYYY-MM-DD)")
    search_p.add_argument("--min-temp", type=float, help="Desired minimum temperature (C)")
    search_p.add_argument("--max-temp", type=float, help="Desired maximum temperature (C)")
    search_p.add_argument(
        "--condition", action="append", default=[],
        help="Desired condition (repeatable): clear, partly_cloudy, cloudy, rain, snow",
    )
    search_p.add_argument(
        "--slot", action="append", default=[],
        help="Time slot (repeatable): morning, afternoon, evening, night",
    )
    search_p.add_argument(
        "--summary", action="store_true", help="Print the run summary as JSON to stderr"
    )

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value and write it to --config")
    set_p.add_argument("keyvalue", help="key=value to set")

    # cache purge
    cache_p = sub.add_parser("cache", help="Cache operations")
    cache_sub = cache_p.add_subparsers(dest="cache_command")
    cache_sub.add_parser("purge", help="Delete expired cache entries")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "search":
        return _cmd_search(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "cache":
        return _cmd_cache(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_search(config, args) -> int:
    payload = {
        "centerLatitude": args.lat,
        "centerLongitude": args.lon,
        "searchRadius": args.radius,
        "startDate": args.start,
        "endDate": args.end,
        "desiredMinTemperature": args.min_temp,
        "desiredMaxTemperature": args.max_temp,
        "desiredConditions": args.condition,
        "timeSlots": args.slot,
    }
    try:
        request = parse_request(payload)
    except RequestValidationError as e:
        print(json.dumps(SearchResponse.failure(e.user_message).to_dict(), indent=2))
        return 1

    pipeline = build_pipeline(config)
    try:
        response, summary = pipeline.run_with_summary(request)
    finally:
        pipeline.close()
    print(json.dumps(response.to_dict(), indent=2))
    if args.summary:
        print(format_summary_json(summary), file=sys.stderr)
    return 0 if response.error is None else 1


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key.strip()} = {get_config_value(new_config, key.strip())}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1


def _cmd_cache(config, args) -> int:
    if args.cache_command != "purge":
        print("Use: cache purge")
        return 1
    cache = build_cache(config)
    try:
        removed = cache.purge_expired()
        remaining = cache.count()
    finally:
        cache.close()
    print(f"Purged {removed} expired cache entries, {remaining} remaining")
    return 0
