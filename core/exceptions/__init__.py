"""
Planner – centralised custom exceptions.

Import these from `core.exceptions` across the project instead of redefining
ad-hoc `Exception` subclasses in each app.
"""

from __future__ import annotations

from .custom_exceptions import (
    APIException,
    ErrorKind,
    InvalidInputException,
    LockTimeoutException,
    ResourceNotFoundException,
    SchedulingConflictException,
    UpstreamUnavailableException,
)

__all__ = [
    "APIException",
    "ErrorKind",
    "InvalidInputException",
    "LockTimeoutException",
    "ResourceNotFoundException",
    "SchedulingConflictException",
    "UpstreamUnavailableException",
]
