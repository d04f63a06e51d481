"""
Application-wide constants.
Centralizes magic numbers, defaults and user-facing messages.
"""

# Business hours defaults
DEFAULT_BUSINESS_START_HOUR = 8  # 08:00
DEFAULT_BUSINESS_END_HOUR = 18  # 18:00
DEFAULT_SLOT_INTERVAL_MINUTES = 30
SLOT_INTERVALS = (15, 30, 45, 60)

# Reminders
DAY_BEFORE_REMINDER = "day_before"
DAY_BEFORE_REMINDER_HOUR = 9  # Reminder at 09:00 on the previous day
DEFAULT_REMINDER_OFFSET = 30
APPOINTMENT_REMINDER_JOB_PREFIX = "appointment_"
DAILY_MORNING_JOB_ID = "daily_morning_reminder"
DAILY_EVENING_JOB_ID = "daily_evening_reminder"

# Validation limits
MAX_SERVICE_NAME_LENGTH = 100
MAX_CLIENT_NAME_LENGTH = 100
MAX_NOTES_LENGTH = 1000

# Time constants
MINUTES_IN_DAY = 24 * 60

# Error code of a series where dates failed for different reasons
SERIES_FAILED_CODE = "series_failed"

# Settings row key (single salon)
SETTINGS_ROW_ID = "default"

MESSAGES = {
    # Services
    "SERVICE_NOT_FOUND": "Service not found. Choose another service.",
    "SERVICE_NAME_REQUIRED": "Enter the service name",
    "SERVICE_DURATION_REQUIRED": "Enter a positive service duration",
    # Appointments
    "APPOINTMENT_CREATED": "Appointment created successfully!",
    "APPOINTMENT_DELETED": "Appointment cancelled successfully!",
    "APPOINTMENT_ERROR": "Could not process the appointment. Please try again.",
    "APPOINTMENT_CONFLICT": "This time is already taken. Choose another time.",
    "APPOINTMENT_HOLIDAY": "The salon is closed on this date.",
    "APPOINTMENT_NOT_FOUND": "Appointment not found.",
    "ATTENDANCE_UPDATED": "Attendance updated.",
    "SERIES_CREATED": "{created} of {requested} appointment(s) created successfully!",
    "SERIES_FAILED": "Could not create any of the appointments.",
    # Calendar
    "CALENDAR_EVENT_CREATED": "Event added to calendar!",
    # General
    "VALIDATION_ERROR": "Invalid data. Check the fields and try again.",
    "NOT_FOUND": "Item not found.",
}
