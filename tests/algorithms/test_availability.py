# tests/algorithms/test_availability.py
from datetime import date, datetime, time, timedelta

import pytz
from django.test import SimpleTestCase

from algorithms.availability import (
    AvailabilityResolver,
    ConflictDetector,
    SlotGenerator,
    TimeWindow,
)


def utc(day, hour, minute=0):
    return datetime(2024, 1, day, hour, minute, tzinfo=pytz.UTC)


def window(day_of_week, start, end):
    return {"day_of_week": day_of_week, "start_time": start, "end_time": end}


def session(start, end, deleted_at=None, **extra):
    return {"start_time": start, "end_time": end, "deleted_at": deleted_at, **extra}


class AvailabilityResolverTest(SimpleTestCase):
    """Test cases for weekly window expansion"""

    def test_unknown_timezone(self):
        with self.assertRaises(ValueError):
            AvailabilityResolver("Mars/Olympus_Mons")

    def test_expands_matching_weekdays_only(self):
        resolver = AvailabilityResolver("UTC")

        # 2024-01-08 is a Monday
        intervals = resolver.resolve([window("MON", time(7), time(9))], date(2024, 1, 8), 14)

        self.assertEqual(
            intervals,
            [TimeWindow(utc(8, 7), utc(8, 9)), TimeWindow(utc(15, 7), utc(15, 9))],
        )

    def test_no_windows_means_no_availability(self):
        resolver = AvailabilityResolver("UTC")

        self.assertEqual(resolver.resolve([], date(2024, 1, 8), 7), [])

    def test_same_day_windows_are_merged(self):
        resolver = AvailabilityResolver("UTC")

        intervals = resolver.resolve(
            [window("MON", time(7), time(9)), window("MON", time(8), time(10))],
            date(2024, 1, 8),
            1,
        )

        self.assertEqual(intervals, [TimeWindow(utc(8, 7), utc(8, 10))])

    def test_local_hours_kept_across_dst(self):
        resolver = AvailabilityResolver("America/New_York")

        # DST starts on Sunday 2024-03-10
        intervals = resolver.resolve([window("MON", time(9), time(10))], date(2024, 3, 4), 14)

        self.assertEqual(len(intervals), 2)
        self.assertEqual(intervals[0].start, datetime(2024, 3, 4, 14, 0, tzinfo=pytz.UTC))
        self.assertEqual(intervals[1].start, datetime(2024, 3, 11, 13, 0, tzinfo=pytz.UTC))

    def test_horizon_starts_at_local_midnight(self):
        resolver = AvailabilityResolver("Asia/Tokyo")

        # 2024-01-08 20:00 UTC is already 2024-01-09 in Tokyo
        today, start, end = resolver.horizon(utc(8, 20), 7)

        self.assertEqual(today, date(2024, 1, 9))
        self.assertEqual(start, utc(8, 15))
        self.assertEqual(end - start, timedelta(days=7))


class ConflictDetectorTest(SimpleTestCase):
    """Test cases for conflict detection"""

    def setUp(self):
        self.detector = ConflictDetector()

    def test_finds_overlapping_sessions_in_start_order(self):
        sessions = [
            session(utc(8, 8), utc(8, 9), id="b"),
            session(utc(8, 7), utc(8, 7, 45), id="a"),
            session(utc(8, 10), utc(8, 11), id="c"),
        ]

        conflicts = self.detector.find_conflicts(TimeWindow(utc(8, 7, 30), utc(8, 8, 30)), sessions)

        self.assertEqual([c["id"] for c in conflicts], ["a", "b"])

    def test_touching_sessions_do_not_conflict(self):
        sessions = [session(utc(8, 6), utc(8, 7)), session(utc(8, 8), utc(8, 9))]

        self.assertEqual(
            self.detector.find_conflicts(TimeWindow(utc(8, 7), utc(8, 8)), sessions), []
        )

    def test_deleted_sessions_never_conflict(self):
        sessions = [session(utc(8, 7), utc(8, 8), deleted_at=utc(1, 0))]

        self.assertEqual(
            self.detector.find_conflicts(TimeWindow(utc(8, 7), utc(8, 8)), sessions), []
        )

    def test_prune_availability(self):
        intervals = [TimeWindow(utc(8, 7), utc(8, 9)), TimeWindow(utc(9, 7), utc(9, 9))]
        sessions = [
            session(utc(8, 7, 30), utc(8, 8)),
            session(utc(9, 6), utc(9, 10)),
            session(utc(8, 8, 15), utc(8, 8, 45), deleted_at=utc(1, 0)),
        ]

        free = self.detector.prune_availability(intervals, sessions)

        self.assertEqual(
            free,
            [TimeWindow(utc(8, 7), utc(8, 7, 30)), TimeWindow(utc(8, 8), utc(8, 9))],
        )


class SlotGeneratorTest(SimpleTestCase):
    """Test cases for slot tiling"""

    def test_tiles_by_duration(self):
        slots = SlotGenerator().generate([TimeWindow(utc(8, 7), utc(8, 9))], 30)

        self.assertEqual(
            [slot.start for slot in slots],
            [utc(8, 7), utc(8, 7, 30), utc(8, 8), utc(8, 8, 30)],
        )
        for slot in slots:
            self.assertEqual(slot.duration_minutes, 30)

    def test_remainder_is_dropped(self):
        slots = SlotGenerator().generate([TimeWindow(utc(8, 7), utc(8, 8, 45))], 30)

        self.assertEqual([slot.start for slot in slots], [utc(8, 7), utc(8, 7, 30), utc(8, 8)])

    def test_interval_shorter_than_duration(self):
        self.assertEqual(SlotGenerator().generate([TimeWindow(utc(8, 7), utc(8, 7, 20))], 30), [])

    def test_custom_step(self):
        slots = SlotGenerator(step_minutes=15).generate([TimeWindow(utc(8, 7), utc(8, 8))], 30)

        self.assertEqual(
            [slot.start for slot in slots], [utc(8, 7), utc(8, 7, 15), utc(8, 7, 30)]
        )

    def test_not_before_drops_past_slots(self):
        slots = SlotGenerator().generate(
            [TimeWindow(utc(8, 7), utc(8, 9))], 30, not_before=utc(8, 7, 45)
        )

        self.assertEqual([slot.start for slot in slots], [utc(8, 8), utc(8, 8, 30)])

    def test_invalid_step(self):
        with self.assertRaises(ValueError):
            SlotGenerator(step_minutes=0)
