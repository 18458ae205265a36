from collections.abc import Callable
from datetime import datetime
from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel, field_serializer, field_validator
from sqlalchemy.exc import SQLAlchemyError

from medibook.core.errors import (
    AlreadyBooked,
    DuplicateSlot,
    InvalidInput,
    NotBooked,
    NotFound,
    PastDateTime,
    RegistryError,
)
from medibook.models.appointment import format_slot_datetime
from medibook.registry import AppointmentRegistry, parse_slot_datetime

router = APIRouter(tags=['appointments'])

T = TypeVar('T')

ERROR_STATUS_CODES = {
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    PastDateTime: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    DuplicateSlot: status.HTTP_409_CONFLICT,
    AlreadyBooked: status.HTTP_409_CONFLICT,
    NotBooked: status.HTTP_409_CONFLICT,
}


class CreateSlotRequest(BaseModel):
    doctor_name: str
    date_time: datetime

    @field_validator('doctor_name')
    @classmethod
    def validate_doctor_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Doctor name cannot be empty.')
        return normalized

    @field_validator('date_time', mode='before')
    @classmethod
    def validate_date_time(cls, value):
        if isinstance(value, datetime):
            return value
        try:
            return parse_slot_datetime(value)
        except InvalidInput as exc:
            raise ValueError(str(exc)) from exc


class BookAppointmentRequest(BaseModel):
    patient_name: str
    patient_email: str

    @field_validator('patient_name', 'patient_email')
    @classmethod
    def strip_value(cls, value: str) -> str:
        return value.strip()


class AppointmentResponse(BaseModel):
    id: int
    doctor_name: str
    date_time: datetime
    is_booked: bool
    status: str
    patient_name: str | None = None
    patient_email: str | None = None

    class Config:
        from_attributes = True

    @field_serializer('date_time')
    def serialize_date_time(self, value: datetime) -> str:
        return format_slot_datetime(value)


def get_registry(request: Request) -> AppointmentRegistry:
    return request.app.state.registry


def run_registry_operation(operation: Callable[..., T], *args) -> T:
    try:
        return operation(*args)
    except RegistryError as exc:
        raise HTTPException(
            status_code=ERROR_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST),
            detail=str(exc),
        ) from exc
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail='Appointment storage unavailable. Verify DATABASE_URL.',
        ) from exc


@router.post('/slots', response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_slot(data: CreateSlotRequest, registry: AppointmentRegistry = Depends(get_registry)):
    return run_registry_operation(registry.create_slot, data.doctor_name, data.date_time)


@router.get('/', response_model=list[AppointmentResponse])
def list_appointments(registry: AppointmentRegistry = Depends(get_registry)):
    return run_registry_operation(registry.list_all)


@router.get('/available', response_model=list[AppointmentResponse])
def list_available_slots(registry: AppointmentRegistry = Depends(get_registry)):
    return run_registry_operation(registry.list_available)


@router.get('/booked', response_model=list[AppointmentResponse])
def list_booked_appointments(registry: AppointmentRegistry = Depends(get_registry)):
    return run_registry_operation(registry.list_booked)


@router.get('/search/doctor', response_model=list[AppointmentResponse])
def search_by_doctor(
    name: str = Query(default=''),
    registry: AppointmentRegistry = Depends(get_registry),
):
    return run_registry_operation(registry.search_by_doctor, name)


@router.get('/search/date', response_model=list[AppointmentResponse])
def search_by_date(
    date: str = Query(...),
    registry: AppointmentRegistry = Depends(get_registry),
):
    return run_registry_operation(registry.search_by_date, date)


@router.get('/{appointment_id}', response_model=AppointmentResponse)
def get_appointment(appointment_id: int, registry: AppointmentRegistry = Depends(get_registry)):
    return run_registry_operation(registry.find_by_id, appointment_id)


@router.post('/{appointment_id}/book', response_model=AppointmentResponse)
def book_appointment(
    appointment_id: int,
    data: BookAppointmentRequest,
    registry: AppointmentRegistry = Depends(get_registry),
):
    return run_registry_operation(registry.book, appointment_id, data.patient_name, data.patient_email)


@router.post('/{appointment_id}/cancel', response_model=AppointmentResponse)
def cancel_appointment(appointment_id: int, registry: AppointmentRegistry = Depends(get_registry)):
    return run_registry_operation(registry.cancel, appointment_id)
