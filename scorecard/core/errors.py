"""
Error Handling Utilities
Provides the engine's error taxonomy and sanitized, user-facing messages.
The mapping and payload helpers are for host processes that catch engine errors.
"""

import logging
from enum import Enum
from typing import Any, Optional

from pydantic import ValidationError

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Error codes for collaborator handling."""

    # Input errors (programmer errors in the calling collaborator)
    INVALID_VARIANCE = "invalid_variance"
    INVALID_SCORE = "invalid_score"
    INVALID_MAX_SCORE = "invalid_max_score"
    INVALID_MONTH = "invalid_month"
    BUSINESS_MISMATCH = "business_mismatch"
    NON_FINITE_VALUE = "non_finite_value"

    # General errors
    VALIDATION_ERROR = "validation_error"
    INTERNAL_ERROR = "internal_error"


# User-friendly error messages
ERROR_MESSAGES = {
    ErrorCode.INVALID_VARIANCE: "A variance percentage was outside the allowed range of -100% to +100%.",
    ErrorCode.INVALID_SCORE: "A score was outside the allowed range for its section.",
    ErrorCode.INVALID_MAX_SCORE: "A maximum score must not be negative.",
    ErrorCode.INVALID_MONTH: "Months must use the YYYY-MM format.",
    ErrorCode.BUSINESS_MISMATCH: "Scorecards from different businesses cannot be compared.",
    ErrorCode.NON_FINITE_VALUE: "Scores and financial figures must be finite numbers.",
    ErrorCode.VALIDATION_ERROR: "Invalid submission data. Please check the figures and try again.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred while scoring. Please try again later.",
}


class ScoringInputError(ValueError):
    """
    Raised when the engine receives malformed or out-of-range input.

    These are never recovered inside the engine: they indicate a bug in the
    caller and must surface in testing rather than reach a stored score.
    """

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.VALIDATION_ERROR):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


def get_error_code_for_exception(exception: Exception) -> ErrorCode:
    """
    Map exception types to error codes.

    Args:
        exception: The exception that occurred

    Returns:
        Error code for the exception
    """
    if isinstance(exception, ScoringInputError):
        return exception.error_code

    if isinstance(exception, ValidationError):
        return ErrorCode.VALIDATION_ERROR

    if isinstance(exception, ValueError):
        return ErrorCode.VALIDATION_ERROR

    return ErrorCode.INTERNAL_ERROR


def sanitize_error_message(
    exception: Exception,
    error_code: Optional[ErrorCode] = None,
    log_details: bool = True,
) -> str:
    """
    Sanitize error message for user-facing responses.

    Logs full exception details internally but returns user-friendly message.

    Args:
        exception: The exception that occurred
        error_code: Error code for categorization (derived from the exception if omitted)
        log_details: Whether to log full exception details

    Returns:
        User-friendly error message
    """
    if error_code is None:
        error_code = get_error_code_for_exception(exception)

    if log_details:
        logger.error(
            "Error [%s]: %s",
            error_code.value,
            str(exception),
            exc_info=exception,
        )

    return ERROR_MESSAGES.get(error_code, ERROR_MESSAGES[ErrorCode.INTERNAL_ERROR])


def create_error_payload(
    error_code: ErrorCode,
    message: Optional[str] = None,
) -> dict[str, Any]:
    """
    Create a standardized error payload for collaborators.

    Args:
        error_code: Error code enum
        message: Optional custom message (uses default if not provided)

    Returns:
        Dictionary with error_code and message
    """
    if message is None:
        message = ERROR_MESSAGES.get(error_code, ERROR_MESSAGES[ErrorCode.INTERNAL_ERROR])

    return {
        "error_code": error_code.value,
        "message": message,
    }
