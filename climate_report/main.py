"""
Climate report command line entry point.
Summarizes NOAA tab-delimited climate files per state.
"""

import os
import sys
import argparse
import logging
import zoneinfo

from dotenv import load_dotenv

from climate_report.errors import UsageError
from climate_report.logger import config_logger
from climate_report.processor import Processor
from climate_report.report import format_report, summary_frame

load_dotenv(verbose=True, dotenv_path=".env")

PROG = "climate-report"
USAGE = f"Usage: {PROG} tdv_file1 tdv_file2 ... tdv_fileN"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def _env_workers() -> int:
    value = os.getenv("CLIMATE_REPORT_WORKERS", "1")
    try:
        return int(value)
    except ValueError as e:
        raise UsageError(f"CLIMATE_REPORT_WORKERS must be an integer: {value!r}") from e


def get_args(argv: list = None) -> argparse.Namespace:
    """
    Parse command line arguments for the climate report.
        :param argv: Arguments to parse, defaults to sys.argv[1:].
        :return: Parsed arguments.
        :rtype: argparse.Namespace
        :raises UsageError: If no files are given or an option is invalid.
    """
    parser = argparse.ArgumentParser(
        prog=PROG, description="Per-state summary of NOAA climate TDV files"
    )
    parser.add_argument("files", nargs="*", help="Tab-delimited climate files")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files to aggregate concurrently (default: 1)",
    )
    parser.add_argument(
        "--timezone",
        type=str,
        default=None,
        help="IANA timezone used to print timestamps (default: local time)",
    )
    parser.add_argument(
        "--csv", type=str, default=None, help="Also write the summary to a CSV file"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    if not args.files:
        raise UsageError(USAGE)

    if args.workers is None:
        args.workers = _env_workers()

    if args.workers < 1:
        raise UsageError("--workers must be at least 1")

    tz_name = args.timezone or os.getenv("CLIMATE_REPORT_TIMEZONE") or None
    try:
        args.tz = zoneinfo.ZoneInfo(tz_name) if tz_name else None
    except (zoneinfo.ZoneInfoNotFoundError, ValueError) as e:
        raise UsageError(f"Unknown timezone: {tz_name}") from e

    args.debug = args.debug or _env_flag("CLIMATE_REPORT_DEBUG")

    return args


def main(argv: list = None) -> int:
    """Main function to build and print the climate report."""

    try:
        args = get_args(argv)
    except UsageError as e:
        print(e)
        return 1

    config_logger(debug=args.debug)

    processor = Processor(paths=args.files, workers=args.workers)
    table = processor.run()

    sys.stdout.write(format_report(table, args.tz))

    if args.csv:
        try:
            summary_frame(table, args.tz).to_csv(args.csv)
        except OSError as e:
            logging.error("Could not write summary to %s: %s", args.csv, e)
            return 1
        logging.info("Summary written to %s", args.csv)

    return 0


if __name__ == "__main__":
    sys.exit(main())
