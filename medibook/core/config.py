import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")
DATABASE_ECHO = _get_bool(os.getenv("DATABASE_ECHO"), default=False)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

NOTIFIER_BACKENDS = ("console", "none")
NOTIFIER_BACKEND = os.getenv("NOTIFIER_BACKEND", "console").strip().lower()
DEFAULT_NOTIFIER_FROM_EMAIL = "demo@hospital.com"
NOTIFIER_FROM_EMAIL = os.getenv("NOTIFIER_FROM_EMAIL", DEFAULT_NOTIFIER_FROM_EMAIL)

CORS_ALLOW_ORIGINS = _get_list(os.getenv("CORS_ALLOW_ORIGINS"), ["http://localhost:4200"])

def validate_runtime_config() -> None:
    if NOTIFIER_BACKEND not in NOTIFIER_BACKENDS:
        raise RuntimeError(
            f"NOTIFIER_BACKEND must be one of {', '.join(NOTIFIER_BACKENDS)}, got {NOTIFIER_BACKEND!r}."
        )
    if APP_ENV.lower() == "production" and NOTIFIER_FROM_EMAIL == DEFAULT_NOTIFIER_FROM_EMAIL:
        raise RuntimeError("NOTIFIER_FROM_EMAIL must be set in production.")
