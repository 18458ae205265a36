"""Booking confirmation notifiers.

A notifier receives an appointment right after it was booked and reports
whether the patient was notified. Delivery is simulated: ``ConsoleNotifier``
renders the confirmation email and writes it to the log.
"""

import logging
from typing import Protocol

from medibook.models.appointment import Appointment

logger = logging.getLogger(__name__)

EMAIL_DATETIME_FORMAT = "%A, %B %d, %Y at %H:%M"
SIGNATURE = "MediBook Appointment System"
RULE = "=" * 60


class Notifier(Protocol):
    def notify(self, appointment: Appointment) -> bool:
        ...


def build_confirmation_subject(appointment: Appointment) -> str:
    return f"Appointment Confirmation - Dr. {appointment.doctor_name}"


def build_confirmation_body(appointment: Appointment, from_email: str) -> str:
    when = appointment.date_time.strftime(EMAIL_DATETIME_FORMAT)
    lines = [
        RULE,
        "EMAIL CONFIRMATION SENT".center(60).rstrip(),
        RULE,
        f"From: {from_email}",
        f"To: {appointment.patient_email}",
        f"Subject: {build_confirmation_subject(appointment)}",
        "",
        f"Dear {appointment.patient_name},",
        "",
        "Your appointment has been confirmed!",
        "",
        "APPOINTMENT DETAILS:",
        f"  ID: {appointment.id}",
        f"  Doctor: Dr. {appointment.doctor_name}",
        f"  Date & Time: {when}",
        f"  Patient: {appointment.patient_name}",
        f"  Email: {appointment.patient_email}",
        "",
        "IMPORTANT NOTES:",
        "  - Please arrive 15 minutes before your scheduled time",
        "  - Bring a valid ID and your insurance card",
        "  - To reschedule/cancel, contact us 24 hours in advance",
        "",
        "If you have any questions, please contact our office.",
        "Thank you for choosing our medical services!",
        "",
        "Best regards,",
        SIGNATURE,
        RULE,
    ]
    return "\n".join(lines)


class ConsoleNotifier:
    """Simulates a confirmation email by logging the rendered message."""

    def __init__(self, from_email: str) -> None:
        self.from_email = from_email

    def notify(self, appointment: Appointment) -> bool:
        body = build_confirmation_body(appointment, self.from_email)
        logger.info("\n%s", body)
        logger.info("Confirmation email sent to %s", appointment.patient_email)
        return True


class NullNotifier:
    def notify(self, appointment: Appointment) -> bool:
        return True


def build_notifier(backend: str, from_email: str) -> Notifier:
    normalized = backend.strip().lower()
    if normalized == "console":
        return ConsoleNotifier(from_email)
    if normalized == "none":
        return NullNotifier()
    raise ValueError(f"Unknown notifier backend: {backend!r}")
