"""
Global exception handler for the planner API.

This module provides a custom exception handler for DRF that renders every
error as ``{"error": <code>, "message": <text>, "details": <optional>}``.
"""

import logging
import traceback
from typing import Any, Dict, Optional

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.utils import DatabaseError, IntegrityError
from django.http import Http404
from django.utils.translation import gettext_lazy as _
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from utils.constants import ERROR_MESSAGES

from .custom_exceptions import APIException, ErrorKind

logger = logging.getLogger(__name__)


def get_error_code(exception: Exception) -> str:
    """
    Get standardized error code from exception.

    Args:
        exception: The exception to get code for

    Returns:
        str: Standardized error code
    """
    if isinstance(exception, APIException):
        return exception.error_code
    elif isinstance(exception, (drf_exceptions.ValidationError, drf_exceptions.ParseError)):
        return ErrorKind.INVALID_INPUT.value
    elif isinstance(exception, IntegrityError):
        return ErrorKind.INVALID_INPUT.value
    elif isinstance(exception, (Http404, drf_exceptions.NotFound, ObjectDoesNotExist)):
        return ErrorKind.NOT_FOUND.value
    elif isinstance(exception, DatabaseError):
        return ErrorKind.UPSTREAM_UNAVAILABLE.value
    elif isinstance(
        exception, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)
    ):
        return "UNAUTHORIZED"
    elif isinstance(exception, (drf_exceptions.PermissionDenied, PermissionDenied)):
        return "FORBIDDEN"
    elif isinstance(exception, drf_exceptions.Throttled):
        return "TOO_MANY_REQUESTS"
    elif isinstance(exception, drf_exceptions.MethodNotAllowed):
        return "METHOD_NOT_ALLOWED"
    elif isinstance(exception, drf_exceptions.APIException):
        return "BAD_REQUEST"
    return "INTERNAL_SERVER_ERROR"


def get_error_message(exception: Exception, error_code: str) -> str:
    """
    Get a user-facing message for an exception.

    Args:
        exception: The exception
        error_code: The error code

    Returns:
        str: Error message
    """
    if isinstance(exception, APIException):
        return str(exception.message)

    # DRF exceptions carry a readable string detail
    if hasattr(exception, "detail") and isinstance(exception.detail, str):
        return str(exception.detail)

    if isinstance(exception, IntegrityError):
        return _("The data violates a scheduling constraint.")

    if error_code in ERROR_MESSAGES:
        return ERROR_MESSAGES[error_code]

    return _("An error occurred processing your request.")


def get_error_details(exception: Exception) -> Optional[Any]:
    """
    Get detailed error information from exception.

    Args:
        exception: The exception

    Returns:
        Optional details payload (field errors, conflicting sessions)
    """
    if isinstance(exception, APIException):
        return exception.errors

    # For validation errors, return formatted validation details
    if isinstance(exception, drf_exceptions.ValidationError) and not isinstance(
        exception.detail, str
    ):
        if isinstance(exception.detail, list):
            return {"validation_errors": exception.detail}
        return exception.detail

    return None


def _payload(error_code, error_message, error_details) -> Dict[str, Any]:
    return {
        "error": error_code,
        "message": error_message,
        **({"details": error_details} if error_details is not None else {}),
    }


def exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    Custom exception handler for DRF views.

    Handles both DRF and custom exceptions, providing consistent response format.

    Args:
        exc: The exception
        context: The exception context

    Returns:
        Response: Consistent error response
    """
    # Handle Django ValidationError by converting to DRF ValidationError
    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, "message_dict"):
            exc = drf_exceptions.ValidationError(detail=exc.message_dict)
        else:
            exc = drf_exceptions.ValidationError(detail=exc.messages)

    error_code = get_error_code(exc)
    error_message = get_error_message(exc, error_code)
    error_details = get_error_details(exc)

    if isinstance(exc, APIException):
        status_code = exc.status_code
        response = Response(exc.to_dict(), status=status_code)
    elif isinstance(exc, IntegrityError):
        response = Response(
            _payload(error_code, error_message, error_details),
            status=status.HTTP_400_BAD_REQUEST,
        )
    elif isinstance(exc, ObjectDoesNotExist):
        response = Response(
            _payload(error_code, error_message, error_details),
            status=status.HTTP_404_NOT_FOUND,
        )
    elif isinstance(exc, DatabaseError):
        response = Response(
            _payload(error_code, error_message, error_details),
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    else:
        # Try the default DRF exception handler
        response = drf_exception_handler(exc, context)
        if response is not None:
            response.data = _payload(error_code, error_message, error_details)
        else:
            response = Response(
                _payload(error_code, error_message, error_details),
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "unknown"

    if response.status_code < 500:
        # Less severe errors
        logger.warning(f"Exception in {view_name}: {error_code} - {error_message}")
    else:
        logger.error(
            f"Exception in {view_name}: {error_code} - {error_message}\n"
            f"Traceback: {traceback.format_exc()}"
        )

    return response
