"""In-memory registry of doctor appointment slots.

The registry owns every ``Appointment`` record for the lifetime of the
process. Records are kept in a SQLAlchemy table (in-memory SQLite by
default); callers only ever see the registry operations below.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta
from threading import Lock

from sqlalchemy.orm import Session

from medibook.core.errors import (
    AlreadyBooked,
    DuplicateSlot,
    InvalidInput,
    NotBooked,
    NotFound,
    PastDateTime,
)
from medibook.models.appointment import SLOT_DATETIME_FORMAT, Appointment
from medibook.notifications.notifier import Notifier

logger = logging.getLogger(__name__)

SEARCH_DATE_FORMAT = "%Y-%m-%d"


def is_valid_email(email: str | None) -> bool:
    # Intentionally loose: only checks for '@', '.', and a minimum length.
    return bool(email) and "@" in email and "." in email and len(email) > 5


def parse_slot_datetime(value: str) -> datetime:
    try:
        return datetime.strptime(value.strip(), SLOT_DATETIME_FORMAT)
    except (AttributeError, ValueError) as exc:
        raise InvalidInput(f"Invalid date format {value!r}. Please use YYYY-MM-DD HH:MM.") from exc


def parse_search_date(value: str) -> date:
    try:
        return datetime.strptime(value.strip(), SEARCH_DATE_FORMAT).date()
    except (AttributeError, ValueError) as exc:
        raise InvalidInput(f"Invalid date format {value!r}. Please use YYYY-MM-DD.") from exc


class AppointmentRegistry:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        notifier: Notifier | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._session_factory = session_factory
        self._notifier = notifier
        self._now = now
        # One lock around every operation so create/book/cancel never interleave.
        self._lock = Lock()

    def create_slot(self, doctor_name: str, date_time: datetime | str) -> Appointment:
        normalized_name = (doctor_name or "").strip()
        if not normalized_name:
            raise InvalidInput("Doctor name cannot be empty.")

        if isinstance(date_time, str):
            date_time = parse_slot_datetime(date_time)

        with self._lock, self._session_factory() as db:
            # Past times fail the same way whether or not the doctor already has the slot.
            if date_time < self._now():
                raise PastDateTime("Cannot create an appointment in the past.")

            same_time = db.query(Appointment).filter(Appointment.date_time == date_time).all()
            if any(existing.doctor_name.lower() == normalized_name.lower() for existing in same_time):
                raise DuplicateSlot(
                    f"Slot already exists for Dr. {normalized_name} at {date_time.strftime(SLOT_DATETIME_FORMAT)}."
                )

            appointment = Appointment(doctor_name=normalized_name, date_time=date_time)
            db.add(appointment)
            db.commit()
            db.refresh(appointment)

        logger.info("Added slot %s", appointment)
        return appointment

    def list_all(self) -> list[Appointment]:
        with self._lock, self._session_factory() as db:
            return self._ordered(db).all()

    def list_available(self) -> list[Appointment]:
        with self._lock, self._session_factory() as db:
            return self._ordered(db).filter(Appointment.is_booked.is_(False)).all()

    def list_booked(self) -> list[Appointment]:
        with self._lock, self._session_factory() as db:
            return self._ordered(db).filter(Appointment.is_booked.is_(True)).all()

    def find_by_id(self, appointment_id: int) -> Appointment:
        with self._lock, self._session_factory() as db:
            return self._get_or_raise(db, appointment_id)

    def book(self, appointment_id: int, patient_name: str, patient_email: str) -> Appointment:
        """Book a slot for a patient, then hand the booking to the notifier.

        A notifier failure is logged and never undoes the booking.
        """
        normalized_name = (patient_name or "").strip()
        normalized_email = (patient_email or "").strip()

        with self._lock, self._session_factory() as db:
            appointment = self._get_or_raise(db, appointment_id)

            if appointment.is_booked:
                raise AlreadyBooked(f"Appointment {appointment_id} is already booked.")
            if not normalized_name:
                raise InvalidInput("Patient name cannot be empty.")
            if not is_valid_email(normalized_email):
                raise InvalidInput("Please enter a valid email address.")

            appointment.book(normalized_name, normalized_email)
            db.commit()
            db.refresh(appointment)

        logger.info("Booked appointment %s for %s", appointment.id, appointment.patient_name)
        self._notify(appointment)
        return appointment

    def cancel(self, appointment_id: int) -> Appointment:
        with self._lock, self._session_factory() as db:
            appointment = self._get_or_raise(db, appointment_id)

            if not appointment.is_booked:
                raise NotBooked(f"Appointment {appointment_id} is not booked.")

            appointment.cancel_booking()
            db.commit()
            db.refresh(appointment)

        logger.info("Cancelled booking for appointment %s", appointment.id)
        return appointment

    def search_by_doctor(self, query: str) -> list[Appointment]:
        needle = (query or "").strip().lower()
        with self._lock, self._session_factory() as db:
            return [
                appointment
                for appointment in self._ordered(db).all()
                if needle in appointment.doctor_name.lower()
            ]

    def search_by_date(self, day: date | str) -> list[Appointment]:
        if isinstance(day, str):
            day = parse_search_date(day)
        elif isinstance(day, datetime):
            day = day.date()

        day_start = datetime.combine(day, datetime.min.time())
        day_end = day_start + timedelta(days=1)

        with self._lock, self._session_factory() as db:
            return self._ordered(db).filter(
                Appointment.date_time >= day_start,
                Appointment.date_time < day_end,
            ).all()

    @staticmethod
    def _ordered(db: Session):
        # id follows insertion order, so it is the tie-break for equal times.
        return db.query(Appointment).order_by(Appointment.date_time.asc(), Appointment.id.asc())

    @staticmethod
    def _get_or_raise(db: Session, appointment_id: int) -> Appointment:
        appointment = db.get(Appointment, appointment_id)
        if appointment is None:
            raise NotFound(f"Appointment {appointment_id} not found.")
        return appointment

    def _notify(self, appointment: Appointment) -> bool:
        if self._notifier is None:
            return False

        try:
            delivered = self._notifier.notify(appointment)
        except Exception:
            logger.exception("Notifier failed for appointment %s; booking kept.", appointment.id)
            return False

        if not delivered:
            logger.warning("Notifier reported failure for appointment %s; booking kept.", appointment.id)
        return delivered
