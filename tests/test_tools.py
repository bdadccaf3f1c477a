import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from tools import (
    CounterIdGenerator,
    FixedClock,
    MathTools,
    SystemClock,
    TimeTools,
    UuidIdGenerator,
    WeightConverter,
    make_id_generator,
)


class MathToolsTestCase(unittest.TestCase):
    def test_clamp(self) -> None:
        self.assertEqual(MathTools.clamp(5, 0, 10), 5)
        self.assertEqual(MathTools.clamp(-1, 0, 10), 0)
        self.assertEqual(MathTools.clamp(11, 0, 10), 10)
        with self.assertRaises(ValueError):
            MathTools.clamp(1, 2, 1)

    def test_volume(self) -> None:
        sets = [(10, 100.0), (5, 150.0)]
        self.assertEqual(MathTools.volume(sets), 10 * 100.0 + 5 * 150.0)
        self.assertEqual(MathTools.volume([]), 0.0)

    def test_weight_converter(self) -> None:
        self.assertEqual(WeightConverter.kg_to_lb(100), 220.46)
        self.assertEqual(WeightConverter.lb_to_kg(220.46), 100.0)


class TimeToolsTestCase(unittest.TestCase):
    def test_iso_round_trip(self) -> None:
        dt = TimeTools.parse_timestamp("2024-01-01T12:30:15.250Z")
        self.assertEqual(TimeTools.to_iso(dt), "2024-01-01T12:30:15.250Z")

    def test_parse_naive_as_utc(self) -> None:
        dt = TimeTools.parse_timestamp("2024-01-01T12:00:00")
        self.assertEqual(TimeTools.to_iso(dt), "2024-01-01T12:00:00.000Z")

    def test_minutes_between(self) -> None:
        self.assertEqual(
            TimeTools.minutes_between("2024-01-01T12:00:00Z", "2024-01-01T13:30:00Z"), 90
        )

    def test_format_duration(self) -> None:
        self.assertEqual(TimeTools.format_duration(0), "0h 0m")
        self.assertEqual(TimeTools.format_duration(59.9), "0h 59m")
        self.assertEqual(TimeTools.format_duration(185), "3h 5m")

    def test_system_clock_format(self) -> None:
        now = SystemClock()()
        self.assertTrue(now.endswith("Z"))
        self.assertEqual(len(now), len("2024-01-01T00:00:00.000Z"))

    def test_fixed_clock_steps(self) -> None:
        clock = FixedClock("2024-01-01T00:00:00Z", step_seconds=90)
        self.assertEqual(clock(), "2024-01-01T00:00:00.000Z")
        self.assertEqual(clock(), "2024-01-01T00:01:30.000Z")


class IdGeneratorTestCase(unittest.TestCase):
    def test_counter(self) -> None:
        gen = CounterIdGenerator(start=5, prefix="s")
        self.assertEqual([gen(), gen()], ["s5", "s6"])

    def test_uuid_unique(self) -> None:
        gen = UuidIdGenerator()
        self.assertEqual(len({gen() for _ in range(100)}), 100)

    def test_factory(self) -> None:
        self.assertIsInstance(make_id_generator("uuid"), UuidIdGenerator)
        self.assertIsInstance(make_id_generator("counter"), CounterIdGenerator)
        with self.assertRaises(ValueError):
            make_id_generator("time")


if __name__ == "__main__":
    unittest.main()
