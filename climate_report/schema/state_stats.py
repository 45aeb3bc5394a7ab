"""StateStats Schema"""

import datetime
import math
from dataclasses import dataclass, field

import numpy as np


@dataclass
class StateStats:
    """
    Running statistics for every observation of a single state.

    Sums are kept as numpy.longdouble so tens of thousands of additions
    don't drift. The extrema start at -inf / +inf, the first observation
    always replaces them.

    Attributes:
        code (str): State code, the aggregation key.
        record_count (int): Number of observations folded in.
        humidity_sum (np.longdouble): Sum of humidity values.
        cloud_cover_sum (np.longdouble): Sum of cloud cover values.
        temperature_sum (np.longdouble): Sum of temperatures, Fahrenheit.
        lightning_count (int): Observations with a lightning strike.
        snow_count (int): Observations with snow cover.
        max_temperature (float): Highest temperature seen, Fahrenheit.
        max_temperature_at (datetime.datetime): When max_temperature was observed.
        min_temperature (float): Lowest temperature seen, Fahrenheit.
        min_temperature_at (datetime.datetime): When min_temperature was observed.
    """

    code: str
    record_count: int = 0
    humidity_sum: np.longdouble = field(default_factory=np.longdouble)
    cloud_cover_sum: np.longdouble = field(default_factory=np.longdouble)
    temperature_sum: np.longdouble = field(default_factory=np.longdouble)
    lightning_count: int = 0
    snow_count: int = 0
    max_temperature: float = -math.inf
    max_temperature_at: datetime.datetime = None
    min_temperature: float = math.inf
    min_temperature_at: datetime.datetime = None

    def _average(self, total: np.longdouble) -> float:
        if self.record_count == 0:
            return None
        return float(total / self.record_count)

    @property
    def average_humidity(self) -> float:
        """Mean humidity, or None before any observation was folded."""
        return self._average(self.humidity_sum)

    @property
    def average_cloud_cover(self) -> float:
        """Mean cloud cover, or None before any observation was folded."""
        return self._average(self.cloud_cover_sum)

    @property
    def average_temperature(self) -> float:
        """Mean temperature in Fahrenheit, or None before any observation was folded."""
        return self._average(self.temperature_sum)
