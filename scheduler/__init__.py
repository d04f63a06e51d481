"""Task scheduler for reminders and notifications."""

from .reminders import ReminderScheduler, create_reminder_scheduler, reminder_run_time

__all__ = ["ReminderScheduler", "create_reminder_scheduler", "reminder_run_time"]
