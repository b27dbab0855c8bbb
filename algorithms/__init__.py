"""
Planner Scheduling Algorithms Package.

This package contains the suggestion and conflict-resolution engine that
proposes time slots for new sessions.

The algorithms are organized into the following subpackages:
- availability: Availability expansion, conflict detection and slot generation
- ranking: Pattern detection, slot scoring and suggestion ordering
"""

__version__ = "1.0.0"
