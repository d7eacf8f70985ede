from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase

from crudapps.config import FRUIT_DATABASE_URL
from crudapps.db import Database

database = Database(FRUIT_DATABASE_URL)
db_session = database.session


class Base(DeclarativeBase):
    """ORM base for users, fruits and seasons."""
    pass
