"""
Rendering of the per-state climate summary.
"""

import datetime
import zoneinfo

import pandas as pd

from climate_report.aggregator import StateTable
from climate_report.schema import StateStats

NOT_AVAILABLE = "n/a"


def _localize(
    timestamp: datetime.datetime, tz: zoneinfo.ZoneInfo = None
) -> datetime.datetime:
    if timestamp is None:
        return None
    try:
        return timestamp.astimezone(tz)
    except (OverflowError, OSError):
        return None


def format_timestamp(
    timestamp: datetime.datetime, tz: zoneinfo.ZoneInfo = None
) -> str:
    """
    Render a timestamp the way ctime(3) does, e.g. "Mon Aug  3 11:00:00 2015".

    Args:
        timestamp (datetime.datetime): Aware timestamp to render.
        tz (zoneinfo.ZoneInfo, optional): Target timezone. Defaults to the
            system local timezone.

    Returns:
        str: The formatted time, or "n/a" when there is no timestamp or it
            can't be shifted into ``tz``.
    """
    local = _localize(timestamp, tz)
    if local is None:
        return NOT_AVAILABLE

    return local.ctime()


def _isoformat(timestamp: datetime.datetime, tz: zoneinfo.ZoneInfo = None) -> str:
    local = _localize(timestamp, tz)
    return None if local is None else local.isoformat()


def _one_decimal(value: float) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.1f}"


def format_state(stats: StateStats, tz: zoneinfo.ZoneInfo = None) -> str:
    """Render the report block of a single state."""
    if stats.record_count == 0:
        max_temperature = min_temperature = NOT_AVAILABLE
    else:
        max_temperature = _one_decimal(stats.max_temperature)
        min_temperature = _one_decimal(stats.min_temperature)

    lines = [
        f"-- State: {stats.code} --",
        f"Number of Records: {stats.record_count}",
        f"Average Humidity: {_one_decimal(stats.average_humidity)}%",
        f"Average Temperature: {_one_decimal(stats.average_temperature)}F",
        f"Max Temperature: {max_temperature}F",
        f"Max Temperature on: {format_timestamp(stats.max_temperature_at, tz)}",
        f"Min Temperature: {min_temperature}F",
        f"Min Temperature on: {format_timestamp(stats.min_temperature_at, tz)}",
        f"Lightning Strikes: {stats.lightning_count}",
        f"Records with Snow Cover: {stats.snow_count}",
        f"Average Cloud Cover: {_one_decimal(stats.average_cloud_cover)}%",
    ]
    return "\n".join(lines)


def format_report(table: StateTable, tz: zoneinfo.ZoneInfo = None) -> str:
    """
    Render the full text report for every state, in first-seen order.

    Args:
        table (StateTable): The aggregated statistics.
        tz (zoneinfo.ZoneInfo, optional): Timezone for the extrema timestamps.

    Returns:
        str: The report, newline terminated.
    """
    blocks = [f"States found: {' '.join(table.codes())}"]
    blocks.extend(format_state(stats, tz) for stats in table)

    return "\n".join(blocks) + "\n"


def summary_frame(table: StateTable, tz: zoneinfo.ZoneInfo = None) -> pd.DataFrame:
    """
    Build a DataFrame with one row per state, indexed by state code.

    Averages are left unrounded. Timestamps are ISO 8601 strings in ``tz``
    (system local time when not given), so dates outside the pandas
    nanosecond range still fit.

    Args:
        table (StateTable): The aggregated statistics.
        tz (zoneinfo.ZoneInfo, optional): Timezone for the extrema timestamps.

    Returns:
        pd.DataFrame: The per-state summary.
    """
    rows = []
    for stats in table:
        empty = stats.record_count == 0
        rows.append(
            {
                "state": stats.code,
                "records": stats.record_count,
                "avg_humidity": stats.average_humidity,
                "avg_temperature": stats.average_temperature,
                "max_temperature": None if empty else stats.max_temperature,
                "max_temperature_at": _isoformat(stats.max_temperature_at, tz),
                "min_temperature": None if empty else stats.min_temperature,
                "min_temperature_at": _isoformat(stats.min_temperature_at, tz),
                "lightning_strikes": stats.lightning_count,
                "snow_cover_records": stats.snow_count,
                "avg_cloud_cover": stats.average_cloud_cover,
            }
        )

    columns = [
        "state",
        "records",
        "avg_humidity",
        "avg_temperature",
        "max_temperature",
        "max_temperature_at",
        "min_temperature",
        "min_temperature_at",
        "lightning_strikes",
        "snow_cover_records",
        "avg_cloud_cover",
    ]
    return pd.DataFrame(rows, columns=columns).set_index("state")
