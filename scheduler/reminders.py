"""
Scheduler for appointment reminders using APScheduler.

One job per appointment fires before it starts (a fixed number of minutes,
or 09:00 the day before). Optional daily digests list the day's bookings in
the morning and tomorrow's bookings in the evening. Reminders go to the salon
owner's Telegram chat.
"""

import datetime as dt
from typing import Callable, List, Optional

from aiogram import Bot
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.date import DateTrigger

from booking.hooks import ReminderService
from booking.time_math import to_minutes
from config import settings
from db.base import AppointmentStore
from models.appointment import Appointment
from models.settings import BusinessConfiguration, ReminderOffset
from utils.constants import (
    APPOINTMENT_REMINDER_JOB_PREFIX,
    DAILY_EVENING_JOB_ID,
    DAILY_MORNING_JOB_ID,
    DAY_BEFORE_REMINDER,
    DAY_BEFORE_REMINDER_HOUR,
)
from utils.datetime_utils import local_now
from utils.helpers import format_duration
from utils.logging_config import configure_app_logging, setup_logging

logger = setup_logging(name=__name__, log_file="scheduler.log")


def reminder_job_id(appointment_id: str) -> str:
    return f"{APPOINTMENT_REMINDER_JOB_PREFIX}{appointment_id}"


def reminder_run_time(appointment: Appointment, offset: ReminderOffset) -> dt.datetime:
    """
    Local wall-clock time at which the reminder for an appointment fires.

    Args:
        appointment: Appointment to remind about
        offset: Minutes before the start, or "day_before" for 09:00 on the
            previous day
    """
    if offset == DAY_BEFORE_REMINDER:
        return dt.datetime.combine(
            appointment.date - dt.timedelta(days=1), dt.time(hour=DAY_BEFORE_REMINDER_HOUR)
        )
    starts_at = dt.datetime.combine(appointment.date, dt.time()) + dt.timedelta(
        minutes=to_minutes(appointment.start_time)
    )
    return starts_at - dt.timedelta(minutes=int(offset))


def format_reminder(appointment: Appointment) -> str:
    return (
        f"🔔 Reminder: upcoming appointment\n\n"
        f"Client: {appointment.client_name}\n"
        f"Service: {appointment.service_name} "
        f"({format_duration(appointment.service_duration_minutes)})\n"
        f"Time: {appointment.date.strftime('%d.%m.%Y')} "
        f"{appointment.start_time}-{appointment.end_time}"
    )


def format_digest(day: dt.date, appointments: List[Appointment], evening: bool) -> str:
    title = "Tomorrow" if evening else "Today"
    header = f"📅 {title}, {day.strftime('%d.%m.%Y')}"
    if not appointments:
        return f"{header}\n\nNo appointments."
    lines = [
        f"{a.start_time}-{a.end_time} {a.client_name} ({a.service_name})"
        for a in appointments
    ]
    return f"{header}\n\n" + "\n".join(lines)


class ReminderScheduler(ReminderService):
    """
    Reminder delivery backed by an AsyncIOScheduler.

    Usage:
        reminders = ReminderScheduler(bot=bot, owner_chat_id=123, store=store)
        reminders.start()
        await reminders.schedule_for_appointment(appointment, 30)
    """

    def __init__(
        self,
        scheduler: Optional[AsyncIOScheduler] = None,
        bot: Optional[Bot] = None,
        owner_chat_id: Optional[int] = None,
        store: Optional[AppointmentStore] = None,
        now: Optional[Callable[[], dt.datetime]] = None,
    ):
        self.scheduler = scheduler or AsyncIOScheduler(timezone=settings.timezone)
        self.bot = bot
        self.owner_chat_id = owner_chat_id
        self.store = store
        self.now = now or (lambda: local_now(settings.timezone))

    # ========== Appointment reminders ==========

    async def schedule_for_appointment(
        self, appointment: Appointment, offset: ReminderOffset
    ) -> bool:
        """
        Schedule (or reschedule) the reminder for an appointment.

        Returns:
            False if the reminder time has already passed
        """
        run_at = reminder_run_time(appointment, offset)
        if run_at <= self.now():
            logger.debug(f"Reminder time {run_at} already passed for {appointment.id}")
            return False

        self.scheduler.add_job(
            self.send_reminder,
            trigger=DateTrigger(run_date=run_at),
            args=[appointment],
            id=reminder_job_id(appointment.id),
            name=f"Reminder for appointment {appointment.id}",
            replace_existing=True,
        )
        logger.info(f"Reminder for appointment {appointment.id} scheduled at {run_at}")
        return True

    async def cancel_for_appointment(self, appointment_id: str) -> None:
        try:
            self.scheduler.remove_job(reminder_job_id(appointment_id))
            logger.info(f"Reminder for appointment {appointment_id} cancelled")
        except JobLookupError:
            logger.debug(f"No reminder scheduled for appointment {appointment_id}")

    # ========== Daily digests ==========

    def schedule_daily_reminders(self, config: BusinessConfiguration) -> None:
        """
        Add or remove the morning and evening digest jobs.

        The morning digest runs an hour before opening, the evening digest an
        hour after closing.
        """
        reminders = config.reminder_settings
        hours = config.business_hours

        jobs = (
            (
                DAILY_MORNING_JOB_ID,
                reminders.daily_morning_reminder_enabled,
                max(0, hours.start - 1),
                False,
            ),
            (
                DAILY_EVENING_JOB_ID,
                reminders.daily_evening_reminder_enabled,
                min(23, hours.end + 1),
                True,
            ),
        )

        for job_id, enabled, hour, evening in jobs:
            if not enabled:
                self._remove_job(job_id)
                continue
            self.scheduler.add_job(
                self.send_daily_digest,
                trigger=CronTrigger(hour=hour, minute=0),
                kwargs={"evening": evening},
                id=job_id,
                name=f"Daily {'evening' if evening else 'morning'} digest",
                replace_existing=True,
            )
            logger.info(f"Daily digest {job_id} scheduled at {hour:02d}:00")

    async def send_daily_digest(self, evening: bool = False) -> bool:
        """Send today's (morning) or tomorrow's (evening) appointments."""
        if not self.store:
            logger.error("Appointment store not available - cannot send digest")
            return False

        day = self.now().date() + dt.timedelta(days=1 if evening else 0)
        try:
            appointments = await self.store.list_appointments_by_date(day)
        except Exception as e:
            logger.error(f"Failed to load appointments for digest: {e}", exc_info=True)
            return False

        return await self._send(format_digest(day, appointments, evening))

    # ========== Delivery ==========

    async def send_reminder(self, appointment: Appointment) -> bool:
        """
        Send reminder to the salon owner about an upcoming appointment.

        Returns:
            True if sent successfully, False otherwise
        """
        sent = await self._send(format_reminder(appointment))
        if sent:
            logger.info(f"Reminder sent for appointment {appointment.id}")
        return sent

    async def _send(self, text: str) -> bool:
        if not self.bot or not self.owner_chat_id:
            logger.error("Bot instance not available - cannot send reminder")
            return False
        try:
            await self.bot.send_message(self.owner_chat_id, text)
            return True
        except Exception as e:
            logger.error(f"Failed to send message to owner: {e}", exc_info=True)
            return False

    def _remove_job(self, job_id: str) -> None:
        try:
            self.scheduler.remove_job(job_id)
        except JobLookupError:
            pass

    # ========== Lifecycle ==========

    def start(self) -> None:
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Scheduler started")

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")


def create_reminder_scheduler(store: Optional[AppointmentStore] = None) -> ReminderScheduler:
    """
    Build a ReminderScheduler from application settings.

    Without a bot token and owner chat id, jobs are still scheduled but
    delivery is skipped and logged.
    """
    configure_app_logging()
    bot = Bot(token=settings.bot_token) if settings.reminders_enabled else None
    if bot is None:
        logger.warning("BOT_TOKEN or OWNER_TELEGRAM_ID not set - reminders will not be delivered")
    return ReminderScheduler(bot=bot, owner_chat_id=settings.owner_telegram_id, store=store)
