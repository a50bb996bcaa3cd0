# bookkeeping/db/session.py
import logging
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # sqlite ignores REFERENCES clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the SQLAlchemy engine and session factory.

    Constructed once by the application, connected on startup and disposed
    on shutdown. Request handlers get sessions through `get_db`.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[Engine] = None
        self._sessionmaker: Optional[sessionmaker] = None

    def connect(self) -> None:
        if self.engine is not None:
            return
        kwargs = {"echo": self.echo, "future": True}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in self.url or self.url in ("sqlite://", "sqlite+pysqlite://"):
                # one shared connection, otherwise every session sees an empty database
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True

        engine = create_engine(self.url, **kwargs)
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception:
            logger.exception("Failed to connect to the database")
            engine.dispose()
            raise

        self.engine = engine
        self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
        logger.info("Successfully connected to the database (%s)", engine.url.render_as_string(hide_password=True))

    def dispose(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self._sessionmaker = None
        logger.info("Successfully disconnected from the database")

    def create_all(self) -> None:
        from bookkeeping.db.base import Base
        from bookkeeping.db import models  # noqa: F401  (registers tables on Base.metadata)

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self._sessionmaker()


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a SQLAlchemy Session.
    Usage:
        db = Depends(get_db)
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
