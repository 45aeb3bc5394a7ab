"""Observation Schema"""

import datetime
from dataclasses import dataclass


@dataclass(frozen=True)
class Observation:
    """
    Represents a single climate observation, one line of a TDV file.

    Attributes:
        state (str): State code the observation belongs to (e.g. "TN").
        timestamp (datetime.datetime): Time of the observation, UTC, whole seconds.
        humidity (float): Relative humidity, 0 - 100%.
        snow (float): Snow cover flag, 1.0 when snow is present.
        cloud_cover (float): Cloud cover, 0 - 100%.
        lightning (float): Lightning flag, 1.0 when a strike was recorded.
        temperature (float): Surface temperature in Fahrenheit.
    """

    state: str
    timestamp: datetime.datetime
    humidity: float
    snow: float
    cloud_cover: float
    lightning: float
    temperature: float
