"""
Test cases for the aggregator.py StateTable class.
"""

import unittest
import datetime
import math
import threading

import numpy as np

from climate_report.aggregator import StateTable
from climate_report.parser import parse_line
from climate_report.schema import Observation, StateStats


def make_observation(
    state="TN",
    seconds=1428300000,
    humidity=50.0,
    snow=0.0,
    cloud_cover=20.0,
    lightning=0.0,
    temperature=60.0,
):
    """Build an Observation with sensible defaults."""
    return Observation(
        state=state,
        timestamp=datetime.datetime.fromtimestamp(seconds, tz=datetime.timezone.utc),
        humidity=humidity,
        snow=snow,
        cloud_cover=cloud_cover,
        lightning=lightning,
        temperature=temperature,
    )


class TestStateStats(unittest.TestCase):
    """Test suite for the StateStats initial values."""

    def test_sentinels(self):
        """A fresh entry starts below / above any real temperature."""
        stats = StateStats(code="TN")
        self.assertEqual(stats.record_count, 0)
        self.assertEqual(stats.max_temperature, -math.inf)
        self.assertEqual(stats.min_temperature, math.inf)
        self.assertIsNone(stats.max_temperature_at)
        self.assertIsNone(stats.min_temperature_at)
        self.assertIsInstance(stats.temperature_sum, np.longdouble)

    def test_averages_without_records(self):
        stats = StateStats(code="TN")
        self.assertIsNone(stats.average_humidity)
        self.assertIsNone(stats.average_temperature)
        self.assertIsNone(stats.average_cloud_cover)


class TestStateTable(unittest.TestCase):
    """Test suite for folding observations into a StateTable."""

    def setUp(self):
        self.table = StateTable()

    def test_fold_sample_line(self):
        """
        Test folding a line from a NOAA export.
        Verifies sums, counts and extrema of the new entry.
        """
        self.table.fold(
            parse_line(
                "CA\t1428300000000\t9prcjqk3yc80\t93.0\t0.0\t100.0\t0.0\t95644.0\t277.58716"
            )
        )

        stats = self.table["CA"]
        expected = 277.58716 * 1.8 - 459.67
        self.assertEqual(stats.record_count, 1)
        self.assertEqual(float(stats.humidity_sum), 93.0)
        self.assertEqual(float(stats.cloud_cover_sum), 100.0)
        self.assertAlmostEqual(float(stats.temperature_sum), expected)
        self.assertEqual(stats.snow_count, 0)
        self.assertEqual(stats.lightning_count, 0)
        self.assertAlmostEqual(stats.max_temperature, expected)
        self.assertAlmostEqual(stats.min_temperature, expected)
        self.assertEqual(stats.max_temperature_at.timestamp(), 1428300000)
        self.assertEqual(stats.min_temperature_at.timestamp(), 1428300000)

    def test_fold_returns_entry(self):
        stats = self.table.fold(make_observation())
        self.assertIs(stats, self.table["TN"])

    def test_record_count_and_averages(self):
        """Test averages are the running sums over the record count."""
        temperatures = [10.0, 15.0, 12.0, 41.5]
        for temperature in temperatures:
            self.table.fold(make_observation(temperature=temperature, humidity=40.0))

        stats = self.table["TN"]
        self.assertEqual(stats.record_count, 4)
        self.assertAlmostEqual(
            stats.average_temperature, sum(temperatures) / len(temperatures)
        )
        self.assertAlmostEqual(
            stats.average_temperature,
            float(stats.temperature_sum / stats.record_count),
        )
        self.assertEqual(stats.average_humidity, 40.0)
        self.assertEqual(stats.average_cloud_cover, 20.0)

    def test_flag_counts(self):
        self.table.fold(make_observation(snow=1.0, lightning=0.0))
        self.table.fold(make_observation(snow=1.0, lightning=1.0))
        self.table.fold(make_observation(snow=0.0, lightning=0.0))

        stats = self.table["TN"]
        self.assertEqual(stats.snow_count, 2)
        self.assertEqual(stats.lightning_count, 1)

    def test_extrema(self):
        """Test max / min and the timestamps that set them."""
        values = [(100, 50.0), (200, -11.1), (300, 110.4), (400, 20.0)]
        for seconds, temperature in values:
            self.table.fold(make_observation(seconds=seconds, temperature=temperature))

        stats = self.table["TN"]
        self.assertEqual(stats.max_temperature, 110.4)
        self.assertEqual(stats.max_temperature_at.timestamp(), 300)
        self.assertEqual(stats.min_temperature, -11.1)
        self.assertEqual(stats.min_temperature_at.timestamp(), 200)
        for _, temperature in values:
            self.assertGreaterEqual(stats.max_temperature, temperature)
            self.assertLessEqual(stats.min_temperature, temperature)

    def test_ties_keep_first_observation(self):
        """On an exact tie the earlier observation's timestamp is kept."""
        self.table.fold(make_observation(seconds=100, temperature=70.0))
        self.table.fold(make_observation(seconds=200, temperature=70.0))

        stats = self.table["TN"]
        self.assertEqual(stats.max_temperature_at.timestamp(), 100)
        self.assertEqual(stats.min_temperature_at.timestamp(), 100)

    def test_extremely_cold_first_reading(self):
        """The first reading always replaces the sentinels, even at absolute zero."""
        self.table.fold(make_observation(temperature=-459.67))
        stats = self.table["TN"]
        self.assertEqual(stats.max_temperature, -459.67)
        self.assertEqual(stats.min_temperature, -459.67)

    def test_first_seen_order(self):
        for state in ["WA", "TN", "WA", "CA", "TN"]:
            self.table.fold(make_observation(state=state))

        self.assertEqual(self.table.codes(), ["WA", "TN", "CA"])
        self.assertEqual([stats.code for stats in self.table], ["WA", "TN", "CA"])
        self.assertEqual(len(self.table), 3)
        self.assertIn("CA", self.table)
        self.assertNotIn("ca", self.table)

    def test_no_capacity_limit(self):
        """More than fifty distinct states are all kept."""
        codes = [f"S{i:03d}" for i in range(120)]
        for code in codes:
            self.table.fold(make_observation(state=code))

        self.assertEqual(self.table.codes(), codes)

    def test_states_are_independent(self):
        self.table.fold(make_observation(state="TN", temperature=30.0, snow=1.0))
        self.table.fold(make_observation(state="WA", temperature=90.0))

        self.assertEqual(self.table["TN"].record_count, 1)
        self.assertEqual(self.table["TN"].snow_count, 1)
        self.assertEqual(self.table["TN"].max_temperature, 30.0)
        self.assertEqual(self.table["WA"].snow_count, 0)
        self.assertEqual(self.table["WA"].min_temperature, 90.0)

    def test_concurrent_folds(self):
        """Test folds from several threads are not lost."""

        def worker(state):
            for i in range(500):
                self.table.fold(make_observation(state=state, temperature=float(i)))

        threads = [
            threading.Thread(target=worker, args=(state,))
            for state in ["TN", "WA", "TN", "WA"]
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(self.table["TN"].record_count, 1000)
        self.assertEqual(self.table["WA"].record_count, 1000)
        self.assertEqual(self.table["TN"].max_temperature, 499.0)

    def test_long_running_sum(self):
        """The wide accumulator stays close to the exact sum."""
        for _ in range(50000):
            self.table.fold(make_observation(humidity=0.1))

        self.assertAlmostEqual(self.table["TN"].average_humidity, 0.1, places=12)


class TestStateTableMerge(unittest.TestCase):
    """Test suite for merging partial tables."""

    def test_merge_combines_statistics(self):
        """
        Test merging two partial tables.
        Verifies sums, counts, extrema and ordering.
        """
        first = StateTable()
        first.fold(make_observation(state="TN", seconds=1, temperature=40.0, humidity=10.0))
        first.fold(make_observation(state="WA", seconds=2, temperature=50.0))

        second = StateTable()
        second.fold(make_observation(state="CA", seconds=3, temperature=80.0))
        second.fold(
            make_observation(
                state="TN", seconds=4, temperature=95.0, humidity=30.0, lightning=1.0
            )
        )

        first.merge(second)

        self.assertEqual(first.codes(), ["TN", "WA", "CA"])
        tn = first["TN"]
        self.assertEqual(tn.record_count, 2)
        self.assertEqual(tn.average_humidity, 20.0)
        self.assertEqual(tn.lightning_count, 1)
        self.assertEqual(tn.max_temperature, 95.0)
        self.assertEqual(tn.max_temperature_at.timestamp(), 4)
        self.assertEqual(tn.min_temperature, 40.0)
        self.assertEqual(tn.min_temperature_at.timestamp(), 1)

    def test_merge_tie_keeps_receiving_table(self):
        """When both tables hold the same extremum, the earlier table wins."""
        first = StateTable()
        first.fold(make_observation(seconds=500, temperature=70.0))
        second = StateTable()
        second.fold(make_observation(seconds=100, temperature=70.0))

        first.merge(second)

        self.assertEqual(first["TN"].max_temperature_at.timestamp(), 500)
        self.assertEqual(first["TN"].min_temperature_at.timestamp(), 500)

    def test_merge_into_empty_table(self):
        partial = StateTable()
        partial.fold(make_observation(state="WA", temperature=12.0))

        table = StateTable()
        table.merge(partial)

        self.assertEqual(table.codes(), ["WA"])
        self.assertEqual(table["WA"].min_temperature, 12.0)
        self.assertIsNot(table["WA"], partial["WA"])


if __name__ == "__main__":
    unittest.main()
