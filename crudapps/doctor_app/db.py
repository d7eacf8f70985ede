from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase

from crudapps.config import DOCTOR_DATABASE_URL
from crudapps.db import Database

database = Database(DOCTOR_DATABASE_URL)
db_session = database.session


class Base(DeclarativeBase):
    """ORM base for doctors, patients and appointments."""
    pass
