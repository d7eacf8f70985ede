from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# SQLite files live in the project root unless overridden
ROOT_DIR = Path(__file__).resolve().parents[1]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


DOCTOR_DATABASE_URL = os.getenv("DOCTOR_DATABASE_URL", f"sqlite:///{ROOT_DIR / 'doctor_app.sqlite'}")
FRUIT_DATABASE_URL = os.getenv("FRUIT_DATABASE_URL", f"sqlite:///{ROOT_DIR / 'fruit_app.sqlite'}")

SQL_ECHO = _env_bool("SQL_ECHO", False)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SEED_ON_STARTUP = _env_bool("SEED_ON_STARTUP", True)

DOCTOR_API_BASE = os.getenv("DOCTOR_API_BASE", "http://127.0.0.1:8000")
