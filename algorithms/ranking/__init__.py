"""
Suggestion ranking algorithms.

Key components:
- PatternDetector: Finds recurring habits in completed sessions
- SlotScorer: Weighted heuristic scoring with human-readable reasons
- SuggestionPaginator: Stable ordering, identifiers and page slicing
"""

from .pattern_detector import PatternDetector
from .slot_scorer import SlotScorer
from .suggestion_paginator import SuggestionPaginator, suggestion_id

__all__ = ["PatternDetector", "SlotScorer", "SuggestionPaginator", "suggestion_id"]
