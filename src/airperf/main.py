"""AirPerf command line.

Runs a single calculation from a JSON request file, or serves the HTTP API.

Typical usage:
    airperf performance request.json
    airperf weight-balance loading.json --scenario maxFuel --strict
    airperf serve --port 8080
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from airperf import __version__
from airperf.api.handlers import RequestHandler
from airperf.core.config import ConfigError, ConfigLoader, load_settings
from airperf.core.errors import AirPerfError, ValidationError, format_error
from airperf.core.logging_system import LoggingError, get_logger, initialize_logging
from airperf.core.resource_path import get_config_path
from airperf.systems.performance.performance_calculator import PerformanceCalculator
from airperf.systems.performance.table import PerformanceTableLookup, YamlPerformanceTableSource
from airperf.systems.weight_balance.weight_balance_system import Scenario

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(description="AirPerf - performance and weight & balance calculator")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=str,
        help="Settings file (default: config/settings.yaml if present)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    performance = commands.add_parser("performance", help="Compute takeoff or landing distances")
    performance.add_argument("request", type=str, help="JSON request file ('-' for stdin)")

    weight_balance = commands.add_parser("weight-balance", help="Compute the weight and balance sheet")
    weight_balance.add_argument("request", type=str, help="JSON request file ('-' for stdin)")
    weight_balance.add_argument(
        "--scenario",
        choices=[s.value for s in Scenario],
        help="Loading scenario to apply before solving",
    )
    weight_balance.add_argument(
        "--strict",
        action="store_true",
        help="Fail on weight or CG limit violations instead of flagging them",
    )

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, help="Bind address")
    serve.add_argument("--port", type=int, help="Port")

    return parser.parse_args(argv)


def _load_settings(config: str | None) -> ConfigLoader:
    if config is not None:
        return load_settings(config)
    default_path = get_config_path("settings.yaml")
    return load_settings(default_path if default_path.exists() else None)


def _read_request(source: str) -> Any:
    try:
        if source == "-":
            return json.load(sys.stdin)
        with Path(source).open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise ValidationError(f"Cannot read request file {source}: {e}") from e
    except json.JSONDecodeError as e:
        raise ValidationError(f"Request is not valid JSON: {e}") from e


def _handler(settings: ConfigLoader) -> RequestHandler:
    lookup = PerformanceTableLookup(YamlPerformanceTableSource(settings.get("performance.table_path")))
    return RequestHandler(PerformanceCalculator(lookup))


def _print(body: dict[str, Any]) -> None:
    print(json.dumps(body, indent=2))


def run(args: argparse.Namespace, settings: ConfigLoader) -> int:
    """Execute one command.

    Returns:
        Exit code (0 for success).
    """
    if args.command == "serve":
        from airperf.api.server import create_app

        app = create_app(settings)
        app.run(
            host=args.host or settings.get("server.host"),
            port=args.port or settings.get("server.port"),
            debug=settings.get("server.debug", False),
        )
        return 0

    try:
        payload = _read_request(args.request)
    except AirPerfError as e:
        _print(format_error(e))
        return 2

    handler = _handler(settings)
    if args.command == "performance":
        body, status = handler.performance(payload)
    else:
        if isinstance(payload, dict):
            if args.scenario:
                payload["scenario"] = args.scenario
            if args.strict:
                payload["strict"] = True
        body, status = handler.weight_balance(payload)

    _print(body)
    return 0 if status == 200 else 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success).
    """
    args = parse_args(argv)
    try:
        settings = _load_settings(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    try:
        initialize_logging(
            settings.get("logging.config"),
            use_platform_dir=settings.get("logging.use_platform_dir", True),
        )
    except LoggingError as e:
        print(f"Logging error: {e}", file=sys.stderr)
        return 2

    try:
        return run(args, settings)
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Fatal error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
