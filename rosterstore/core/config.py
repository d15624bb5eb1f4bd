import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_float(value: str | None, default: float) -> float:
    if value is None or not value.strip():
        return default
    return float(value)

APP_ENV = os.getenv("APP_ENV", "development")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./rosterstore.db")

# "userId" for the organization-roster variant, "email" for the sign-in variant.
LOGIN_KEY_FIELD = os.getenv("LOGIN_KEY_FIELD", "userId")

AUTH_SIMULATED_LATENCY_SECONDS = _get_float(os.getenv("AUTH_SIMULATED_LATENCY_SECONDS"), default=1.0)

SESSION_REVALIDATE_ON_RESTORE = _get_bool(os.getenv("SESSION_REVALIDATE_ON_RESTORE"), default=False)

TEAM_MIN_MEMBERS = 2
TEAM_MAX_MEMBERS = 4

SUPPORTED_LOGIN_KEY_FIELDS = ("userId", "email")

def validate_runtime_config() -> None:
    if LOGIN_KEY_FIELD not in SUPPORTED_LOGIN_KEY_FIELDS:
        raise RuntimeError(f"LOGIN_KEY_FIELD must be one of {', '.join(SUPPORTED_LOGIN_KEY_FIELDS)}.")
    if AUTH_SIMULATED_LATENCY_SECONDS < 0:
        raise RuntimeError("AUTH_SIMULATED_LATENCY_SECONDS cannot be negative.")
    if APP_ENV.lower() == "production" and DATABASE_URL.startswith("sqlite:///:memory:"):
        raise RuntimeError("An in-memory DATABASE_URL cannot be used in production.")
