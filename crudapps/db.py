from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from sqlalchemy import DateTime, MetaData, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Mapped, Session, mapped_column, sessionmaker

from crudapps.config import SQL_ECHO
from crudapps.errors import AppError, ConflictError, DatabaseUnavailableError

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    # naive UTC, SQLite DateTime columns do not keep tzinfo
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    """createdAt / updatedAt columns managed by the ORM."""

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


def _enable_sqlite_fks(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str) -> Engine:
    engine = create_engine(
        url,
        echo=SQL_ECHO,  # SQL_ECHO=1 to log every query
        future=True,
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_fks)
    return engine


class Database:
    """
    Engine + session factory of one app.

    Both apps own one instance each; `configure()` re-points it to another URL
    (tests, `--database-url` on the CLI).
    """

    def __init__(self, url: str) -> None:
        self.engine = make_engine(url)
        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            future=True,
            expire_on_commit=False,
        )

    @property
    def url(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)

    def configure(self, url: str) -> None:
        self.engine.dispose()
        self.engine = make_engine(url)
        self.SessionLocal.configure(bind=self.engine)
        logger.info("Database re-bound to %s", self.url)

    def create_all(self, metadata: MetaData) -> None:
        metadata.create_all(bind=self.engine)

    def drop_all(self, metadata: MetaData) -> None:
        metadata.drop_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Unit of work:
        - commit if everything went fine
        - rollback on exceptions, translating driver errors to AppError
        - always close
        """
        session: Session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except AppError:
            session.rollback()
            raise
        except IntegrityError as e:
            session.rollback()
            raise ConflictError("The change conflicts with existing data.", details=str(e.orig)) from e
        except OperationalError as e:
            session.rollback()
            logger.error("Database operation failed: %s", e.orig)
            raise DatabaseUnavailableError("The database is currently unavailable.") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
