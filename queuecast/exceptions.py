"""
Custom exceptions for the Queuecast engine.

The engine prefers defined degenerate results over exceptions for numeric
edge cases. The errors below are only raised for malformed unit or period
arguments, which are programmer errors rather than bad user data.
"""

from typing import Any

from django.utils.text import format_lazy
from django.utils.translation import gettext_lazy as _
from rest_framework import status


class QueuecastError(Exception):
    """
    Base exception for all Queuecast exceptions.

    Attributes:
        message: Error message
        detail: Additional error details
        status_code: HTTP status code for API responses
    """

    default_message = _("An error occurred")

    def __init__(
        self,
        message: str = None,
        detail: Any = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ):
        self.message = message if message else self.default_message
        self.detail = detail
        self.status_code = status_code
        super().__init__(self.message)

    def __str__(self):
        return str(self.message)

    def to_dict(self):
        """Convert exception to dictionary representation."""
        error_dict = {
            "message": str(self.message),
            "status_code": self.status_code,
            "code": self.__class__.__name__,
        }

        if self.detail is not None:
            error_dict["detail"] = self.detail

        return error_dict


class InvalidArgumentError(QueuecastError, ValueError):
    """
    Exception for arguments that no calculation can give a meaning to.
    """

    default_message = _("Invalid argument")

    def __init__(
        self,
        message: str = None,
        detail: Any = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ):
        super().__init__(message, detail, status_code)


class UnsupportedTimeUnitError(InvalidArgumentError):
    def __init__(self, unit: Any):
        super().__init__(
            format_lazy(_("Unsupported time unit: {unit}"), unit=unit),
            detail={"unit": str(unit)},
        )


class UnsupportedPeriodError(InvalidArgumentError):
    def __init__(self, period: Any):
        super().__init__(
            format_lazy(_("Unsupported calendar period: {period}"), period=period),
            detail={"period": str(period)},
        )


class UnsupportedDistanceUnitError(InvalidArgumentError):
    def __init__(self, unit: Any):
        super().__init__(
            format_lazy(_("Unsupported distance unit: {unit}"), unit=unit),
            detail={"unit": str(unit)},
        )


class UnsupportedTravelModeError(InvalidArgumentError):
    def __init__(self, mode: Any):
        super().__init__(
            format_lazy(_("Unsupported travel mode: {mode}"), mode=mode),
            detail={"mode": str(mode)},
        )


class UnsupportedQueueStateError(InvalidArgumentError):
    def __init__(self, state: Any):
        super().__init__(
            format_lazy(_("Unsupported queue state: {state}"), state=state),
            detail={"state": str(state)},
        )


__all__ = [
    "QueuecastError",
    "InvalidArgumentError",
    "UnsupportedTimeUnitError",
    "UnsupportedPeriodError",
    "UnsupportedDistanceUnitError",
    "UnsupportedTravelModeError",
    "UnsupportedQueueStateError",
]
