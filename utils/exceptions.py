"""
Custom exception classes for better error handling.
Provides specific error types instead of generic exceptions.
"""

from utils.constants import MESSAGES


class SchedulingError(Exception):
    """Base exception for scheduling operations."""

    code = "scheduling_error"
    user_message = MESSAGES["APPOINTMENT_ERROR"]


class ServiceNotFoundError(SchedulingError):
    """Raised when a referenced service does not exist."""

    code = "service_not_found"
    user_message = MESSAGES["SERVICE_NOT_FOUND"]


class TimeConflictError(SchedulingError):
    """Raised when a proposed appointment overlaps an existing one."""

    code = "time_conflict"
    user_message = MESSAGES["APPOINTMENT_CONFLICT"]


class ValidationError(SchedulingError):
    """Raised when input validation fails."""

    code = "validation_error"
    user_message = MESSAGES["VALIDATION_ERROR"]


class HolidayError(ValidationError):
    """Raised when booking on a date marked as holiday."""

    code = "holiday"
    user_message = MESSAGES["APPOINTMENT_HOLIDAY"]


class NotFoundError(SchedulingError):
    """Base exception for missing records on update/delete."""

    code = "not_found"
    user_message = MESSAGES["NOT_FOUND"]


class AppointmentNotFoundError(NotFoundError):
    """Raised when an appointment is not found."""

    user_message = MESSAGES["APPOINTMENT_NOT_FOUND"]


class ClientNotFoundError(NotFoundError):
    """Raised when a client is not found."""

    pass


class ServiceRecordNotFoundError(NotFoundError):
    """Raised when updating or deleting a service that does not exist."""

    pass


class DatabaseError(Exception):
    """Base exception for database operations."""

    code = "database_error"
