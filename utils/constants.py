"""
Global constants for the planner backend.

This module defines constants used throughout the application, including
engine limits, scoring weights, time buckets and error messages.
"""

# Session types (code -> label)
SESSION_TYPE_LABELS = {
    "DEEP_WORK": "Deep Work",
    "WORKOUT": "Workout",
    "LANGUAGE": "Language",
    "MEDITATION": "Meditation",
    "CLIENT_MEETING": "Client Meeting",
    "STUDY": "Study",
    "READING": "Reading",
    "OTHER": "Other",
}

SESSION_TYPES = tuple(SESSION_TYPE_LABELS.keys())

# Session types that never form habitual patterns (externally scheduled)
PATTERN_EXCLUDED_TYPES = ("CLIENT_MEETING",)

# Weekday codes in Python's date.weekday() order (0 = Monday)
WEEKDAY_CODES = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")

WEEKDAY_NAMES = {
    "MON": "Monday",
    "TUE": "Tuesday",
    "WED": "Wednesday",
    "THU": "Thursday",
    "FRI": "Friday",
    "SAT": "Saturday",
    "SUN": "Sunday",
}

# Parts of day as [start_hour, end_hour) in local time
PARTS_OF_DAY = (
    ("morning", 5, 12),
    ("afternoon", 12, 17),
    ("evening", 17, 21),
)
NIGHT = "night"

# Session constraints
MIN_PRIORITY = 1
MAX_PRIORITY = 5
DEFAULT_PRIORITY = 3
MAX_TITLE_LENGTH = 256

# Suggestion request limits
DEFAULT_LOOK_AHEAD_DAYS = 14
MIN_LOOK_AHEAD_DAYS = 1
MAX_LOOK_AHEAD_DAYS = 30
MAX_DURATION_MINUTES = 24 * 60
DEFAULT_SUGGESTION_LIMIT = 10
MAX_SUGGESTION_LIMIT = 100

# Spacing between sessions of the same type (hours)
MIN_SESSION_SPACING_HOURS = 2
IDEAL_SPACING_HOURS = 4

# Pattern detection
MIN_PATTERN_FREQUENCY = 2
PATTERN_TIME_ROUNDING_MINUTES = 30
PATTERN_MATCH_WINDOW_MINUTES = 60
RECENCY_HALF_LIFE_DAYS = 30
PATTERN_HISTORY_DAYS = 90
PATTERN_SATURATION = 4.0

# Time-of-day preference inference
MIN_PREFERENCE_SAMPLES = 3
MIN_PREFERENCE_SHARE = 0.5

# "Available soon" threshold for urgency reasons
SOON_DAYS_THRESHOLD = 3

# Scorer sub-ranges (points). They sum to 100.
DEFAULT_SCORING_WEIGHTS = {
    "pattern": 35,
    "spacing": 25,
    "urgency": 25,
    "time_of_day": 15,
}

# A heuristic contributes points and a reason only at or above this value
HEURISTIC_FIRE_THRESHOLD = 5

SUGGESTION_ID_PREFIX = "sug_"
SUGGESTION_ID_LENGTH = 24

# Error messages (for consistent error responses)
ERROR_MESSAGES = {
    "INVALID_INPUT": "The request contains invalid input.",
    "CONFLICT": "The requested time slot conflicts with existing sessions.",
    "UPSTREAM_UNAVAILABLE": "Scheduling data is temporarily unavailable.",
    "NOT_FOUND": "The requested resource was not found.",
}

# Per-user schedule write lock (seconds)
SCHEDULE_LOCK_EXPIRES = 30
SCHEDULE_LOCK_TIMEOUT = 10
