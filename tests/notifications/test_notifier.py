import logging
from datetime import datetime

import pytest

from medibook.models.appointment import Appointment
from medibook.notifications.notifier import (
    ConsoleNotifier,
    NullNotifier,
    build_confirmation_body,
    build_confirmation_subject,
    build_notifier,
)


def _booked_appointment() -> Appointment:
    appointment = Appointment(id=3, doctor_name='Smith', date_time=datetime(2030, 1, 1, 9, 0))
    appointment.book('Alice', 'alice@x.com')
    return appointment


def test_confirmation_subject_names_doctor() -> None:
    assert build_confirmation_subject(_booked_appointment()) == 'Appointment Confirmation - Dr. Smith'


def test_confirmation_body_contains_booking_details() -> None:
    body = build_confirmation_body(_booked_appointment(), 'demo@hospital.com')

    assert 'From: demo@hospital.com' in body
    assert 'To: alice@x.com' in body
    assert 'Dear Alice,' in body
    assert 'ID: 3' in body
    assert 'Doctor: Dr. Smith' in body
    assert 'Date & Time: Tuesday, January 01, 2030 at 09:00' in body
    assert 'MediBook Appointment System' in body


def test_console_notifier_logs_confirmation(caplog: pytest.LogCaptureFixture) -> None:
    notifier = ConsoleNotifier('demo@hospital.com')

    with caplog.at_level(logging.INFO, logger='medibook.notifications.notifier'):
        assert notifier.notify(_booked_appointment()) is True

    assert 'Confirmation email sent to alice@x.com' in caplog.text
    assert 'Dear Alice,' in caplog.text


def test_null_notifier_reports_success() -> None:
    assert NullNotifier().notify(_booked_appointment()) is True


@pytest.mark.parametrize(
    ('backend', 'expected_type'),
    [
        ('console', ConsoleNotifier),
        (' Console ', ConsoleNotifier),
        ('none', NullNotifier),
    ],
)
def test_build_notifier_selects_backend(backend: str, expected_type: type) -> None:
    assert isinstance(build_notifier(backend, 'demo@hospital.com'), expected_type)


def test_build_notifier_rejects_unknown_backend() -> None:
    with pytest.raises(ValueError):
        build_notifier('carrier-pigeon', 'demo@hospital.com')
