import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from medibook.core import config
from medibook.database import SessionLocal, ensure_appointment_schema
from medibook.notifications.notifier import build_notifier
from medibook.registry import AppointmentRegistry
from medibook.routes import appointment_routes

logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
config.validate_runtime_config()

app = FastAPI(title='MediBook')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)

app.state.registry = AppointmentRegistry(
    SessionLocal,
    notifier=build_notifier(config.NOTIFIER_BACKEND, config.NOTIFIER_FROM_EMAIL),
)


@app.on_event('startup')
def initialize_database() -> None:
    try:
        ensure_appointment_schema()
    except SQLAlchemyError:
        logger.exception('Appointment storage initialization failed. Check DATABASE_URL.')


@app.get('/')
def root():
    return {'status': 'MediBook Appointment API Running'}


app.include_router(appointment_routes.router, prefix='/appointments')
