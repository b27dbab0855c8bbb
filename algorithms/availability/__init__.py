"""
Availability calculation algorithms.

Key components:
- TimeWindow: Half-open interval arithmetic over timezone-aware instants
- AvailabilityResolver: Expands weekly windows into concrete UTC intervals
- ConflictDetector: Detects overlap with existing sessions and prunes availability
- SlotGenerator: Tiles free intervals into fixed-duration candidate slots
"""

from .availability_resolver import AvailabilityResolver
from .conflict_detector import ConflictDetector
from .slot_generator import SlotGenerator
from .time_window import TimeWindow, merge_windows

__all__ = [
    "AvailabilityResolver",
    "ConflictDetector",
    "SlotGenerator",
    "TimeWindow",
    "merge_windows",
]
