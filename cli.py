import argparse
from datetime import UTC, datetime
from pathlib import Path

import pandas as pd

from common.model.config import QueryLogConfig
from common.model.constants import (
    DEFAULT_PERCENTILE,
    DEFAULT_TOP,
    ENV_FILE,
    STDIN_SOURCE,
)
from common.model.types import TimeWindow
from common.parse.time import parse_timestamp
from common.support.env import load_env_defaults


def _parse_ts_arg(arg_value: str) -> pd.Timestamp:
    """
    Parses an RFC3339 time bound, e.g. --from 2024-05-01T10:00:00Z
    """
    try:
        return parse_timestamp(arg_value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid time: '{arg_value}'. Accepts RFC3339 format, e.g. "
            f"{datetime.now(UTC).strftime('%Y-%m-%dT%H:%M:%SZ')}"
        ) from None


def _non_negative_int(arg_value: str) -> int:
    try:
        n = int(arg_value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not an integer: '{arg_value}'") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"Must not be negative: {n}")
    return n


def _env_path(argv: list[str] | None) -> Path:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--env-file", default=ENV_FILE)
    known, _ = pre.parse_known_args(argv)
    return Path(known.env_file).expanduser()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="querylog-top",
        description="Rank the worst queries of a JSON-lines query log.",
    )

    parser.add_argument(
        "-f",
        "--file",
        default=STDIN_SOURCE,
        help="Path to the query log file. Pass '-' to read from stdin (default: -)",
    )

    parser.add_argument(
        "--from",
        type=_parse_ts_arg,
        default=None,
        dest="window_from",
        help="Load log entries at or after this time (RFC3339)",
    )

    parser.add_argument(
        "--to",
        type=_parse_ts_arg,
        default=None,
        dest="window_to",
        help="Load log entries at or before this time (RFC3339)",
    )

    parser.add_argument(
        "--top",
        type=_non_negative_int,
        default=DEFAULT_TOP,
        help=f"Number of top queries to display (default: {DEFAULT_TOP})",
    )

    # range is checked by the pipeline so the error matches InvalidRank
    parser.add_argument(
        "-p",
        "--percentile",
        type=int,
        default=DEFAULT_PERCENTILE,
        help=f"Percentile rank (default: {DEFAULT_PERCENTILE})",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        dest="show_version",
        help="Show version and exit",
    )

    parser.add_argument(
        "--plot",
        action="store_true",
        help="Show a chart of the top queries by average execution time",
    )

    parser.add_argument(
        "--env-file",
        default=ENV_FILE,
        help=f"Optional .env file with QUERYLOG_* defaults (default: {ENV_FILE})",
    )

    return parser


def parse_cli_args(argv: list[str] | None = None) -> QueryLogConfig:
    """
    Parses command line arguments, layered over .env defaults, into a
    QueryLogConfig.
    """
    parser = build_parser()

    try:
        env_defaults = load_env_defaults(env_path=_env_path(argv))
    except ValueError as e:
        parser.error(str(e))
    parser.set_defaults(**env_defaults)

    args = parser.parse_args(argv)

    return QueryLogConfig(
        source=str(args.file),
        window=TimeWindow(start=args.window_from, end=args.window_to),
        percentile=int(args.percentile),
        top=int(args.top),
        show_version=bool(args.show_version),
        plot=bool(args.plot),
    )
