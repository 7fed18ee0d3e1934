"""Command-line interface for pitchwatch."""

import argparse
import json
import logging
import sys
from pathlib import Path

import jsonschema

from . import __version__
from .config import ConfigError, PitchwatchConfig, get_default_config_path, load_config
from .errors import PitchwatchError
from .report import build_report, replay_feed, write_report_atomically
from .schema import validate_report, validate_report_file

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _resolve_config(config_arg: str | None) -> PitchwatchConfig:
    if config_arg:
        return load_config(Path(config_arg))
    default_path = get_default_config_path()
    if default_path.exists():
        return load_config(default_path)
    return PitchwatchConfig()


def handle_replay_command(args) -> int:
    """Handle the replay subcommand.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    feed_path = Path(args.feed_file)

    try:
        config = _resolve_config(args.config)
        match = replay_feed(feed_path, config)
        report = build_report(match, source=str(feed_path))
        validate_report(report)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1
    except PitchwatchError as e:
        print(f"Error: {e}", file=sys.stderr)
        if "suggested_action" in e.details:
            print(f"Suggestion: {e.details['suggested_action']}", file=sys.stderr)
        return 1
    except jsonschema.ValidationError as e:
        print(f"Validation failed: {e.message}", file=sys.stderr)
        return 1

    if args.out is None:
        print(json.dumps(report, indent=2 if args.pretty else None))
        return 0

    out_dir = Path(args.out)
    out_file = out_dir / (feed_path.stem + ".json")
    write_report_atomically(report, out_file, pretty=args.pretty)

    # Print path for convenience
    print(str(out_file))
    return 0


def handle_validate_command(args) -> int:
    """Handle the validate subcommand."""
    try:
        validate_report_file(args.report_file)
    except FileNotFoundError:
        print(f"Error: Report not found: {args.report_file}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.report_file}: {e}", file=sys.stderr)
        return 1
    except jsonschema.ValidationError as e:
        print(f"Invalid report: {e.message}", file=sys.stderr)
        return 1

    print(f"{args.report_file}: valid")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="pitchwatch",
        description="Ball estimation and match statistics for 3D simulated soccer",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"pitchwatch {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Replay subcommand
    replay_parser = subparsers.add_parser(
        "replay", help="Run a JSON-lines snapshot feed and report match statistics"
    )
    replay_parser.add_argument("feed_file", type=str, help="Path to the .jsonl feed")
    replay_parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a TOML config file (default: ~/.pitchwatch/config.toml if present)",
    )
    replay_parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Directory to write the report into (default: print to stdout)",
    )
    replay_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output",
    )

    # Validate subcommand
    validate_parser = subparsers.add_parser(
        "validate", help="Validate a statistics report against the JSON schema"
    )
    validate_parser.add_argument("report_file", type=str, help="Path to the report JSON")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "replay":
        return handle_replay_command(args)
    elif args.command == "validate":
        return handle_validate_command(args)
    else:
        # No subcommand provided, show help
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
