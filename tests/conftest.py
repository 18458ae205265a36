"""Shared test fixtures."""
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from medibook.database import Base
from medibook.models.appointment import Appointment
from medibook.registry import AppointmentRegistry

FIXED_NOW = datetime(2026, 1, 5, 8, 0)


class RecordingNotifier:
    def __init__(self, result: bool = True, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.notified: list[int] = []

    def notify(self, appointment: Appointment) -> bool:
        self.notified.append(appointment.id)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def session_factory():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[Appointment.__table__])
    try:
        yield sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    finally:
        Base.metadata.drop_all(bind=engine, tables=[Appointment.__table__])
        engine.dispose()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def registry(session_factory, notifier) -> AppointmentRegistry:
    return AppointmentRegistry(session_factory, notifier=notifier, now=lambda: FIXED_NOW)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
