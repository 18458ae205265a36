from datetime import datetime

from medibook.models.appointment import Appointment, format_slot_datetime


def test_new_appointment_starts_available() -> None:
    appointment = Appointment(doctor_name='Smith', date_time=datetime(2030, 1, 1, 9, 0))

    assert appointment.is_booked is False
    assert appointment.status == 'AVAILABLE'
    assert appointment.patient_name is None
    assert appointment.patient_email is None


def test_book_refuses_second_booking() -> None:
    appointment = Appointment(doctor_name='Smith', date_time=datetime(2030, 1, 1, 9, 0))

    assert appointment.book('Alice', 'alice@x.com') is True
    assert appointment.book('Bob', 'bob@x.com') is False
    assert appointment.patient_name == 'Alice'


def test_cancel_booking_clears_patient() -> None:
    appointment = Appointment(doctor_name='Smith', date_time=datetime(2030, 1, 1, 9, 0))
    appointment.book('Alice', 'alice@x.com')

    appointment.cancel_booking()

    assert appointment.is_booked is False
    assert appointment.patient_name is None
    assert appointment.patient_email is None


def test_string_forms() -> None:
    appointment = Appointment(id=1, doctor_name='Smith', date_time=datetime(2030, 1, 1, 9, 0))

    assert str(appointment) == 'ID: 1 | Doctor: Smith | Time: 2030-01-01 09:00 | Status: AVAILABLE'
    assert appointment.detailed_info() == str(appointment)

    appointment.book('Alice', 'alice@x.com')

    assert appointment.detailed_info() == (
        'ID: 1 | Doctor: Smith | Time: 2030-01-01 09:00 | Status: BOOKED | Patient: Alice'
    )


def test_format_slot_datetime() -> None:
    assert format_slot_datetime(datetime(2030, 12, 31, 23, 5)) == '2030-12-31 23:05'
