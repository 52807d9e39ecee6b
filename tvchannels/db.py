from __future__ import annotations

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

log = logging.getLogger(__name__)


def _normalize_database_url(url: str) -> str:
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://") :]
    return url


def _is_memory_sqlite(url: str) -> bool:
    return url in {"sqlite://", "sqlite:///:memory:"} or "mode=memory" in url


def _unicode_lower(value):
    if isinstance(value, str):
        return value.lower()
    return value


def _register_sqlite_functions(dbapi_conn, connection_record) -> None:
    # built-in lower() only folds ASCII; name search relies on it
    dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)


class Database:
    """
    One engine plus session factory for the channel store.

    In-memory SQLite shares a single connection so every session sees the same data.
    """

    def __init__(self, url: str):
        url = _normalize_database_url(url)
        kwargs: dict = {"future": True}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if _is_memory_sqlite(url):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True

        self.url = url
        self.engine = create_engine(url, **kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine, "connect", _register_sqlite_functions)
        self.session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            future=True,
        )

    def init(self) -> None:
        from tvchannels.models import Base

        Base.metadata.create_all(bind=self.engine)
        log.info("Channel store ready (%s)", self.engine.dialect.name)

    def check(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            log.warning("Store health check failed: %s", e)
            return False

    def session(self) -> Generator[Session, None, None]:
        db: Session = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    database: Database | None = getattr(request.app.state, "db", None)
    if database is None:
        raise RuntimeError("Channel store is not configured on this application")
    yield from database.session()
