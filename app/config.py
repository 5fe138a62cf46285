import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL", "sqlite:///./data/classroom_seats.db"
    )

    # All HTTP routes are mounted under this prefix
    API_PREFIX: str = os.getenv("API_PREFIX", "/api")

    # Occupancy sweeper
    SWEEPER_ENABLED: bool = _as_bool(os.getenv("SWEEPER_ENABLED", "true"))
    SWEEP_INTERVAL_SECONDS: int = int(os.getenv("SWEEP_INTERVAL_SECONDS", "300"))

    # Room A / Room B and a sample class when the database is empty
    SEED_DEMO_DATA: bool = _as_bool(os.getenv("SEED_DEMO_DATA", "true"))

    # JWT configuration
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me-classroom-seats-secret")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
        os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30")
    )

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
