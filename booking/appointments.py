"""
Appointment Scheduler

Validates and commits appointments, single or as a recurring series,
enforcing that no two appointments on the same date overlap. Calendar sync
and reminders run after the commit and can never undo it.
"""

import datetime as dt
import logging
from typing import Callable, List, Optional

from db.base import AppointmentStore, ServiceStore
from models.appointment import Appointment, AppointmentCreate, AttendanceStatus
from models.recurrence import RecurrenceInterval
from models.result import OperationResult, SeriesResult
from models.slot import TimeSlot
from utils.constants import MAX_CLIENT_NAME_LENGTH, MESSAGES, SERIES_FAILED_CODE
from utils.datetime_utils import utc_now
from utils.exceptions import (
    AppointmentNotFoundError,
    DatabaseError,
    HolidayError,
    SchedulingError,
    ServiceNotFoundError,
    TimeConflictError,
    ValidationError,
)
from utils.helpers import generate_id
from utils.validation import sanitize_text

from .conflicts import find_conflicts, has_conflict
from .hooks import CalendarLinker, ConfigProvider, ReminderService
from .recurrence import expand
from .slots import generate_slots
from .time_math import add_minutes

logger = logging.getLogger(__name__)


def _failure(error: SchedulingError) -> OperationResult:
    return OperationResult(success=False, message=error.user_message, error=error.code)


class AppointmentScheduler:
    """
    Orchestrates slot queries and appointment commits.

    Collaborators are injected so the scheduler can run against any store:

        scheduler = AppointmentScheduler(
            appointment_store=store,
            service_store=store,
            config_provider=SettingsService(store),
        )
        result = await scheduler.create_appointment(request)
    """

    def __init__(
        self,
        appointment_store: AppointmentStore,
        service_store: ServiceStore,
        config_provider: ConfigProvider,
        calendar_linker: Optional[CalendarLinker] = None,
        reminder_service: Optional[ReminderService] = None,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ):
        self.appointments = appointment_store
        self.services = service_store
        self.config_provider = config_provider
        self.calendar_linker = calendar_linker
        self.reminder_service = reminder_service
        self.clock = clock

    # ========== Queries ==========

    async def get_available_slots(self, date: dt.date, service_id: str) -> List[TimeSlot]:
        """
        Slot grid of a day for a service, occupied slots included.

        Raises:
            ServiceNotFoundError: If the service does not exist
        """
        service = await self.services.get_service(service_id)
        if service is None:
            raise ServiceNotFoundError(f"Service {service_id} not found")

        config = await self.config_provider.get_business_configuration()
        day_appointments = await self.appointments.list_appointments_by_date(date)
        return generate_slots(date, day_appointments, service.duration_minutes, config)

    async def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        return await self.appointments.get_appointment(appointment_id)

    async def list_appointments(self) -> List[Appointment]:
        return await self.appointments.list_appointments()

    async def list_appointments_by_date(self, date: dt.date) -> List[Appointment]:
        return await self.appointments.list_appointments_by_date(date)

    # ========== Creation ==========

    async def create_appointment(self, request: AppointmentCreate) -> OperationResult:
        """
        Validate and commit a single appointment.

        Returns:
            OperationResult with the created Appointment as data; on failure
            error is one of service_not_found, holiday, validation_error,
            time_conflict.

        Raises:
            DatabaseError: If the store fails
        """
        try:
            appointment = await self._commit(request)
        except SchedulingError as e:
            logger.info(f"Appointment rejected ({e.code}): {e}")
            return _failure(e)

        calendar_synced = await self._after_commit(appointment)

        message = MESSAGES["APPOINTMENT_CREATED"]
        if calendar_synced:
            message = f"{message} {MESSAGES['CALENDAR_EVENT_CREATED']}"
        return OperationResult(success=True, message=message, data=appointment)

    async def create_recurring_series(
        self,
        request: AppointmentCreate,
        interval: RecurrenceInterval,
        count: int,
    ) -> OperationResult:
        """
        Book the anchor date plus count repetitions at the same time.

        Each date is attempted independently and sequentially; failed dates
        are skipped and earlier successes are kept.

        Returns:
            OperationResult with a SeriesResult as data; success is True when
            at least one appointment was created. Dates that hit a storage
            error are skipped like rejected ones. When nothing was created,
            error is the failure code all dates share, or series_failed.
        """
        try:
            follow_ups = expand(request.date, interval, count)
        except ValueError as e:
            return _failure(ValidationError(str(e)))

        group_id = generate_id()
        dates = [request.date] + follow_ups
        created: List[Appointment] = []
        failure_codes = set()

        for date in dates:
            attempt = request.model_copy(update={"date": date, "recurrence_group_id": group_id})
            try:
                result = await self.create_appointment(attempt)
            except DatabaseError as e:
                logger.error(f"Series {group_id}: storage failed for {date}: {e}", exc_info=True)
                failure_codes.add(DatabaseError.code)
                continue

            if result.success:
                created.append(result.data)
            else:
                failure_codes.add(result.error)
                logger.debug(f"Series {group_id}: skipped {date} ({result.error})")

        series = SeriesResult(
            recurrence_group_id=group_id,
            requested_count=len(dates),
            created_count=len(created),
            appointments=created,
        )
        logger.info(
            f"Series {group_id}: {series.created_count}/{series.requested_count} created"
        )

        if not created:
            # A shared cause is reported as is; mixed causes get their own code
            error = failure_codes.pop() if len(failure_codes) == 1 else SERIES_FAILED_CODE
            return OperationResult(
                success=False,
                message=MESSAGES["SERIES_FAILED"],
                data=series,
                error=error,
            )
        return OperationResult(
            success=True,
            message=MESSAGES["SERIES_CREATED"].format(
                created=series.created_count, requested=series.requested_count
            ),
            data=series,
        )

    async def _commit(self, request: AppointmentCreate) -> Appointment:
        client_name = sanitize_text(request.client_name, MAX_CLIENT_NAME_LENGTH)
        if not client_name:
            raise ValidationError("Client name is required")

        service = await self.services.get_service(request.service_id)
        if service is None:
            raise ServiceNotFoundError(f"Service {request.service_id} not found")

        config = await self.config_provider.get_business_configuration()
        if config.is_holiday(request.date):
            raise HolidayError(f"{request.date} is a holiday")

        try:
            end_time = add_minutes(request.start_time, service.duration_minutes)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        # Re-check against current state; the slot list the caller saw may be stale
        day_appointments = await self.appointments.list_appointments_by_date(request.date)
        if has_conflict(request.date, request.start_time, end_time, day_appointments):
            conflicts = find_conflicts(request.date, request.start_time, end_time, day_appointments)
            raise TimeConflictError(
                f"{request.date} {request.start_time}-{end_time} overlaps "
                f"{', '.join(a.id for a in conflicts)}"
            )

        now = utc_now()
        appointment = Appointment(
            id=generate_id(),
            client_name=client_name,
            client_id=request.client_id,
            service_id=service.id,
            service_name=service.name,
            service_duration_minutes=service.duration_minutes,
            date=request.date,
            start_time=request.start_time,
            end_time=end_time,
            recurrence_group_id=request.recurrence_group_id,
            created_at=now,
            updated_at=now,
        )
        created = await self.appointments.insert_appointment(appointment)
        logger.info(
            f"Appointment {created.id} created: {created.date} "
            f"{created.start_time}-{created.end_time} ({created.service_name})"
        )
        return created

    async def _after_commit(self, appointment: Appointment) -> bool:
        """
        Run best-effort side effects for a committed appointment.

        Returns:
            True if the appointment was synced to the external calendar
        """
        calendar_synced = False

        if self.calendar_linker:
            try:
                event_id = await self.calendar_linker.create_event(appointment)
                if event_id:
                    await self.appointments.update_appointment_fields(
                        appointment.id, {"calendar_event_id": event_id}
                    )
                    appointment.calendar_event_id = event_id
                    calendar_synced = True
            except Exception as e:
                logger.warning(
                    f"Calendar sync failed for appointment {appointment.id}: {e}",
                    exc_info=True,
                )

        if self.reminder_service:
            try:
                config = await self.config_provider.get_business_configuration()
                reminders = config.reminder_settings
                if reminders.appointment_reminders_enabled:
                    await self.reminder_service.schedule_for_appointment(
                        appointment, reminders.reminder_offset
                    )
            except Exception as e:
                logger.warning(
                    f"Reminder scheduling failed for appointment {appointment.id}: {e}",
                    exc_info=True,
                )

        return calendar_synced

    # ========== Updates ==========

    async def delete_appointment(self, appointment_id: str) -> OperationResult:
        """
        Delete one appointment. Other members of its recurrence group stay.
        """
        appointment = await self.appointments.get_appointment(appointment_id)
        if appointment is None:
            return _failure(AppointmentNotFoundError(appointment_id))

        if self.calendar_linker and appointment.calendar_event_id:
            try:
                await self.calendar_linker.delete_event(appointment.calendar_event_id)
            except Exception as e:
                logger.warning(
                    f"Failed to delete calendar event {appointment.calendar_event_id}: {e}",
                    exc_info=True,
                )

        if self.reminder_service:
            try:
                await self.reminder_service.cancel_for_appointment(appointment_id)
            except Exception as e:
                logger.warning(
                    f"Failed to cancel reminder for appointment {appointment_id}: {e}",
                    exc_info=True,
                )

        if not await self.appointments.delete_appointment(appointment_id):
            return _failure(AppointmentNotFoundError(appointment_id))

        logger.info(f"Appointment {appointment_id} deleted")
        return OperationResult(success=True, message=MESSAGES["APPOINTMENT_DELETED"])

    async def update_attendance_status(
        self, appointment_id: str, status: AttendanceStatus
    ) -> OperationResult:
        """
        Record whether the client showed up.

        Only allowed once the appointment's date has arrived, and only once:
        confirmed and missed are terminal. Re-applying the recorded status is
        a no-op.
        """
        appointment = await self.appointments.get_appointment(appointment_id)
        if appointment is None:
            return _failure(AppointmentNotFoundError(appointment_id))

        try:
            status = AttendanceStatus(status)
        except ValueError:
            return _failure(ValidationError(f"Unknown attendance status: {status}"))

        if appointment.date > self.clock().date():
            return _failure(
                ValidationError("Attendance can only be recorded once the appointment date arrives")
            )

        if appointment.attendance_status is not None:
            if appointment.attendance_status == status:
                return OperationResult(
                    success=True, message=MESSAGES["ATTENDANCE_UPDATED"], data=appointment
                )
            return _failure(
                ValidationError(
                    f"Attendance already recorded as {appointment.attendance_status.value}"
                )
            )

        updated = await self.appointments.update_appointment_fields(
            appointment_id, {"attendance_status": status, "updated_at": utc_now()}
        )
        if updated is None:
            return _failure(AppointmentNotFoundError(appointment_id))
        return OperationResult(success=True, message=MESSAGES["ATTENDANCE_UPDATED"], data=updated)
