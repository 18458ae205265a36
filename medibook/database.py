from threading import Lock

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from medibook.core import config


def create_database_engine(database_url: str, echo: bool = False) -> Engine:
    if database_url.startswith("sqlite"):
        # In-memory SQLite only lives as long as its connection, so every
        # session has to share the same one.
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, echo=echo)


engine = create_database_engine(config.DATABASE_URL, echo=config.DATABASE_ECHO)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_appointment_schema_checked = False


def ensure_appointment_schema() -> None:
    global _appointment_schema_checked

    if _appointment_schema_checked:
        return

    with _schema_lock:
        if _appointment_schema_checked:
            return

        # Imported here so the model registers itself on Base before create_all.
        from medibook.models.appointment import Appointment

        Base.metadata.create_all(bind=engine, tables=[Appointment.__table__])

        _appointment_schema_checked = True
