"""
Interval arithmetic over timezone-aware instants.

Windows are half-open ``[start, end)``: two windows that only touch at an
endpoint do not overlap.
"""

from datetime import datetime
from typing import Iterable, List, Optional


class TimeWindow:
    """Represents a half-open time window with start and end instants."""

    def __init__(self, start: datetime, end: datetime):
        """
        Initialize a time window.

        Args:
            start: Start instant of the window
            end: End instant of the window (must be after start)

        Raises:
            ValueError: If either instant is naive or end is not after start
        """
        if start.utcoffset() is None or end.utcoffset() is None:
            raise ValueError("TimeWindow requires timezone-aware datetimes")
        if end <= start:
            raise ValueError(f"Window end {end} must be after start {start}")
        self.start = start
        self.end = end

    def __repr__(self) -> str:
        return f"TimeWindow({self.start.isoformat()}, {self.end.isoformat()})"

    def __str__(self) -> str:
        return f"{self.start.strftime('%Y-%m-%d %H:%M')} - {self.end.strftime('%H:%M')}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, TimeWindow):
            return NotImplemented
        return self.start == other.start and self.end == other.end

    def __hash__(self) -> int:
        return hash((self.start, self.end))

    @property
    def duration_minutes(self) -> float:
        """Length of the window in minutes."""
        return (self.end - self.start).total_seconds() / 60

    def overlaps(self, other: "TimeWindow") -> bool:
        """
        Check if this window overlaps with another.

        Args:
            other: Another time window

        Returns:
            True if the windows share any instant, False otherwise
        """
        return self.start < other.end and other.start < self.end

    def contains(self, point: datetime) -> bool:
        """Check if the instant falls inside this window."""
        return self.start <= point < self.end

    def contains_window(self, other: "TimeWindow") -> bool:
        """Check if this window fully contains another window."""
        return self.start <= other.start and other.end <= self.end

    def intersect(self, other: "TimeWindow") -> Optional["TimeWindow"]:
        """
        Intersection of two windows.

        Returns:
            The shared window, or None when the windows do not overlap
        """
        if not self.overlaps(other):
            return None
        return TimeWindow(max(self.start, other.start), min(self.end, other.end))

    def subtract(self, occupied: Iterable["TimeWindow"]) -> List["TimeWindow"]:
        """
        Remove occupied windows from this window.

        An occupied window lying strictly inside this one splits it in two.
        Occupied windows that do not overlap are ignored.

        Args:
            occupied: Windows to carve out

        Returns:
            Free sub-windows, sorted by start
        """
        blocking = sorted(
            (window for window in occupied if window.overlaps(self)),
            key=lambda window: (window.start, window.end),
        )

        free = []
        cursor = self.start
        for window in blocking:
            if window.start > cursor:
                free.append(TimeWindow(cursor, window.start))
            if window.end > cursor:
                cursor = window.end
            if cursor >= self.end:
                break

        if cursor < self.end:
            free.append(TimeWindow(cursor, self.end))

        return free

    @staticmethod
    def from_session(session: dict) -> "TimeWindow":
        """Create a TimeWindow from a dictionary with start_time/end_time keys."""
        return TimeWindow(session["start_time"], session["end_time"])


def merge_windows(windows: Iterable[TimeWindow]) -> List[TimeWindow]:
    """
    Merge overlapping or touching windows.

    Args:
        windows: Windows in any order

    Returns:
        Disjoint windows sorted by start
    """
    ordered = sorted(windows, key=lambda window: (window.start, window.end))
    if not ordered:
        return []

    merged = [ordered[0]]
    for window in ordered[1:]:
        last = merged[-1]
        if window.start <= last.end:
            if window.end > last.end:
                merged[-1] = TimeWindow(last.start, window.end)
        else:
            merged.append(window)

    return merged
