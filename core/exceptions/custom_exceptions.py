"""
Custom exceptions for the planner backend.

Every error the scheduling code raises on purpose carries one of a closed
set of error kinds, so callers branch on ``exc.kind`` rather than on message
text.
"""

from enum import Enum

from django.utils.translation import gettext_lazy as _
from rest_framework import status


class ErrorKind(str, Enum):
    """Closed set of scheduling error kinds"""

    INVALID_INPUT = "INVALID_INPUT"
    CONFLICT = "CONFLICT"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    NOT_FOUND = "NOT_FOUND"


class APIException(Exception):
    """Base exception for all API-related exceptions."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind = None
    default_message = _("An unexpected error occurred.")

    def __init__(self, message=None, status_code=None, errors=None):
        self.message = message or self.default_message
        if status_code:
            self.status_code = status_code
        self.errors = errors
        super().__init__(self.message)

    @property
    def error_code(self):
        return self.kind.value if self.kind else "INTERNAL_SERVER_ERROR"

    def to_dict(self):
        """Convert exception to dictionary representation."""
        error_dict = {
            "error": self.error_code,
            "message": str(self.message),
        }

        if self.errors:
            error_dict["details"] = self.errors

        return error_dict


class InvalidInputException(APIException):
    """Exception raised when request data is invalid."""

    status_code = status.HTTP_400_BAD_REQUEST
    kind = ErrorKind.INVALID_INPUT
    default_message = _("Invalid data provided.")


class ResourceNotFoundException(APIException):
    """Exception raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    kind = ErrorKind.NOT_FOUND
    default_message = _("The requested resource was not found.")


class SchedulingConflictException(APIException):
    """Exception raised when a session overlaps existing sessions."""

    status_code = status.HTTP_409_CONFLICT
    kind = ErrorKind.CONFLICT
    default_message = _("A scheduling conflict was detected.")

    def __init__(self, conflicts, message=None):
        self.conflicts = list(conflicts)
        if message is None:
            message = (
                f"This time slot conflicts with {len(self.conflicts)} existing session(s)"
            )
        super().__init__(message=message, errors={"conflicts": self.conflicts})


class UpstreamUnavailableException(APIException):
    """Exception raised when availability or session data cannot be read."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    kind = ErrorKind.UPSTREAM_UNAVAILABLE
    default_message = _("Scheduling data is temporarily unavailable.")


class LockTimeoutException(UpstreamUnavailableException):
    """Exception raised when a scheduling lock cannot be acquired in time."""

    default_message = _("The schedule is busy. Please try again.")
