"""Appointment model definitions."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from medibook.database import Base

SLOT_DATETIME_FORMAT = "%Y-%m-%d %H:%M"
STATUS_BOOKED = "BOOKED"
STATUS_AVAILABLE = "AVAILABLE"


def format_slot_datetime(value: datetime) -> str:
    return value.strftime(SLOT_DATETIME_FORMAT)


class Appointment(Base):
    """Represents a doctor's appointment slot and its booking, if any."""
    __tablename__ = "appointments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    doctor_name = Column(String, nullable=False, index=True)
    date_time = Column(DateTime, nullable=False, index=True)
    is_booked = Column(Boolean, nullable=False, default=False)
    patient_name = Column(String, nullable=True)
    patient_email = Column(String, nullable=True)

    def __init__(self, doctor_name: str, date_time: datetime, **kwargs) -> None:
        super().__init__(doctor_name=doctor_name, date_time=date_time, **kwargs)
        if self.is_booked is None:
            self.is_booked = False

    @property
    def status(self) -> str:
        return STATUS_BOOKED if self.is_booked else STATUS_AVAILABLE

    def book(self, patient_name: str, patient_email: str) -> bool:
        """Attach a patient to the slot. Returns False if it was already booked."""
        if self.is_booked:
            return False
        self.is_booked = True
        self.patient_name = patient_name
        self.patient_email = patient_email
        return True

    def cancel_booking(self) -> None:
        self.is_booked = False
        self.patient_name = None
        self.patient_email = None

    def detailed_info(self) -> str:
        basic = str(self)
        if self.is_booked and self.patient_name is not None:
            basic += f" | Patient: {self.patient_name}"
        return basic

    def __str__(self) -> str:
        return (
            f"ID: {self.id} | Doctor: {self.doctor_name} | "
            f"Time: {format_slot_datetime(self.date_time)} | Status: {self.status}"
        )
