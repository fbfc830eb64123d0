"""Command-line front door for lazycwlogs.

Parses CLI options, configures logging and loads the AWS profile list.
Then dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import default_log_path, load_app_config, load_presets, load_theme_name
from .errors import ConfigurationError
from .profile import load_profiles
from .runtime import run_app
from .runtime.app import AppOptions
from .ui_theme import available_theme_names

LOG_FORMAT = "%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazycwlogs",
        description="Browse CloudWatch Logs profiles, presets and log groups in the terminal.",
    )
    parser.add_argument("--config", type=Path, default=None, help="AWS shared config file (default: ~/.aws/config).")
    parser.add_argument("--region", default=None, help="AWS region used for every profile.")
    parser.add_argument("--tick-ms", type=_positive_int, default=None, help="Redraw interval in milliseconds.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--debug", action="store_true", help="Show the debug panel and write a debug log.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write log records to this file.")
    return parser


def configure_logging(log_file: Path | None, debug: bool) -> Path | None:
    """Send records to a file, never to the terminal the UI owns.

    Returns the log path in use, or ``None`` when logging is disabled.
    """
    root = logging.getLogger("lazycwlogs")
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    root.propagate = False
    path = log_file if log_file is not None else (default_log_path() if debug else None)
    if path is None:
        root.addHandler(logging.NullHandler())
        return None
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    return path


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the interactive browser.

    Configuration problems abort with a message before the terminal is
    switched into raw mode.
    """
    args = build_parser().parse_args(argv)
    try:
        configure_logging(args.log_file, args.debug)
    except OSError as exc:
        raise SystemExit(f"could not open log file: {exc}") from exc

    try:
        profiles = load_profiles(args.config)
    except ConfigurationError as exc:
        raise SystemExit(str(exc)) from exc

    config = load_app_config(
        tick_seconds=args.tick_ms / 1000.0 if args.tick_ms is not None else None,
        region=args.region,
    )
    options = AppOptions(
        config=config,
        theme_name=args.theme if args.theme is not None else load_theme_name(),
        no_color=args.no_color,
        debug=args.debug,
    )
    run_app(options, profiles, load_presets())
