"""
State aggregator: folds observations into per-state running statistics.
"""

import threading
from typing import Iterator, List

from climate_report.parser import is_flag_set
from climate_report.schema import Observation, StateStats


class StateTable:
    """
    Insertion-ordered mapping from state code to StateStats.

    States are kept in the order they were first seen. Lookup-or-create and
    the fold that follows happen under a single lock acquisition, so one
    table can be shared between threads.
    """

    def __init__(self):
        self._states: dict = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, code: str) -> bool:
        return code in self._states

    def __getitem__(self, code: str) -> StateStats:
        return self._states[code]

    def __iter__(self) -> Iterator[StateStats]:
        return iter(self.states())

    def codes(self) -> List[str]:
        """State codes in first-seen order."""
        return list(self._states)

    def states(self) -> List[StateStats]:
        """StateStats entries in first-seen order."""
        return list(self._states.values())

    def _lookup_or_create(self, code: str) -> StateStats:
        stats = self._states.get(code)
        if stats is None:
            stats = StateStats(code=code)
            self._states[code] = stats
        return stats

    def fold(self, observation: Observation) -> StateStats:
        """
        Fold a single observation into the statistics of its state.

        A state seen for the first time gets a fresh StateStats entry,
        appended to the ordering, before the observation is applied.

        Args:
            observation (Observation): The parsed observation.

        Returns:
            StateStats: The updated entry for the observation's state.
        """
        with self._lock:
            stats = self._lookup_or_create(observation.state)

            stats.record_count += 1
            stats.humidity_sum += observation.humidity
            stats.cloud_cover_sum += observation.cloud_cover
            stats.temperature_sum += observation.temperature

            if is_flag_set(observation.lightning):
                stats.lightning_count += 1
            if is_flag_set(observation.snow):
                stats.snow_count += 1

            # strict comparisons: on a tie the earlier observation stays
            if observation.temperature > stats.max_temperature:
                stats.max_temperature = observation.temperature
                stats.max_temperature_at = observation.timestamp
            if observation.temperature < stats.min_temperature:
                stats.min_temperature = observation.temperature
                stats.min_temperature_at = observation.timestamp

            return stats

    def merge(self, other: "StateTable") -> None:
        """
        Merge a partial table into this one.

        States only present in ``other`` are appended in ``other``'s order.
        Extrema are compared strictly, so when both tables hold the same
        extreme value this table's entry (the earlier file) is kept.

        Args:
            other (StateTable): Table built from a later input.
        """
        with self._lock:
            for incoming in other.states():
                if incoming.record_count == 0:
                    continue

                stats = self._lookup_or_create(incoming.code)

                stats.record_count += incoming.record_count
                stats.humidity_sum += incoming.humidity_sum
                stats.cloud_cover_sum += incoming.cloud_cover_sum
                stats.temperature_sum += incoming.temperature_sum
                stats.lightning_count += incoming.lightning_count
                stats.snow_count += incoming.snow_count

                if incoming.max_temperature > stats.max_temperature:
                    stats.max_temperature = incoming.max_temperature
                    stats.max_temperature_at = incoming.max_temperature_at
                if incoming.min_temperature < stats.min_temperature:
                    stats.min_temperature = incoming.min_temperature
                    stats.min_temperature_at = incoming.min_temperature_at
