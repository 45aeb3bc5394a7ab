"""
Record parser for NOAA tab-delimited (TDV) climate files.

Each line holds nine tab separated fields:

    state, timestamp (ms), geohash, humidity, snow, cloud cover,
    lightning, pressure, surface temperature (Kelvin)
"""

import datetime
import math

from climate_report.errors import MalformedRecordError
from climate_report.schema import Observation

FIELD_COUNT = 9
DELIMITER = "\t"
ENCODING = "utf-8"

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
# a day of margin so any timezone shift stays representable
EARLIEST = EPOCH.replace(year=1, month=1, day=2)
LATEST = EPOCH.replace(year=9999, month=12, day=30, hour=23, minute=59, second=59)


def kelvin_to_fahrenheit(kelvin: float) -> float:
    """
    Convert a temperature from Kelvin to Fahrenheit.

    Args:
        kelvin (float): Temperature in Kelvin.

    Returns:
        float: Temperature in Fahrenheit.
    """
    return kelvin * 1.8 - 459.67


def is_flag_set(value: float) -> bool:
    """
    Whether a snow or lightning field marks the event as present.

    The files encode flags as 0.0 / 1.0; any nonzero value counts.
    """
    return value != 0.0


def _to_float(value: str, name: str) -> float:
    try:
        number = float(value)
    except ValueError as e:
        raise MalformedRecordError(f"not a number: {value!r}", field=name) from e

    if not math.isfinite(number):
        raise MalformedRecordError(f"not a finite number: {value!r}", field=name)

    return number


def _to_timestamp(value: str) -> datetime.datetime:
    try:
        millis = int(value)
    except ValueError as e:
        raise MalformedRecordError(
            f"not an integer timestamp: {value!r}", field="timestamp"
        ) from e

    # truncate toward zero, like C integer division
    seconds = abs(millis) // 1000
    if millis < 0:
        seconds = -seconds

    try:
        timestamp = EPOCH + datetime.timedelta(seconds=seconds)
    except OverflowError as e:
        raise MalformedRecordError(
            f"timestamp out of range: {value!r}", field="timestamp"
        ) from e

    if not EARLIEST <= timestamp <= LATEST:
        raise MalformedRecordError(
            f"timestamp out of range: {value!r}", field="timestamp"
        )

    return timestamp


def decode_line(raw: bytes) -> str:
    """
    Decode a raw line, rejecting bytes that are not valid UTF-8.

    Raises:
        MalformedRecordError: If the line can't be decoded.
    """
    try:
        return raw.decode(ENCODING)
    except UnicodeDecodeError as e:
        raise MalformedRecordError(
            f"invalid {ENCODING} at byte {e.start}: {raw[e.start:e.end]!r}"
        ) from e


def parse_line(line: str) -> Observation:
    """
    Parse one TDV line into an Observation.

    Geohash and pressure are validated positionally but not kept.

    Args:
        line (str): Raw line, with or without its trailing newline.

    Returns:
        Observation: The parsed observation, temperature in Fahrenheit.

    Raises:
        MalformedRecordError: If the line doesn't have exactly nine fields
            or a numeric field can't be converted.
    """
    fields = line.rstrip("\r\n").split(DELIMITER)

    if len(fields) != FIELD_COUNT:
        raise MalformedRecordError(
            f"expected {FIELD_COUNT} fields, got {len(fields)}"
        )

    (
        state,
        timestamp,
        _geohash,
        humidity,
        snow,
        cloud_cover,
        lightning,
        pressure,
        temperature,
    ) = fields

    if not state:
        raise MalformedRecordError("empty state code", field="state")

    observation = Observation(
        state=state,
        timestamp=_to_timestamp(timestamp),
        humidity=_to_float(humidity, "humidity"),
        snow=_to_float(snow, "snow"),
        cloud_cover=_to_float(cloud_cover, "cloud_cover"),
        lightning=_to_float(lightning, "lightning"),
        temperature=kelvin_to_fahrenheit(_to_float(temperature, "temperature")),
    )
    _to_float(pressure, "pressure")

    return observation
