# apps/api/turnus/db/session.py
from __future__ import annotations

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from turnus.db.base import Base

log = logging.getLogger(__name__)


class Database:
    """Store handle: one engine + session factory, opened at startup, disposed at shutdown."""

    def __init__(self, url: str, echo: bool = False, lock_timeout: float = 30.0):
        self.url = url
        kwargs = {"pool_pre_ping": True, "echo": echo}
        if url.startswith("sqlite"):
            # bulk işlemler thread'ler arasında ayrı session açar
            kwargs["connect_args"] = {"check_same_thread": False, "timeout": lock_timeout}
        self.engine: Engine = create_engine(url, **kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine, "connect", _sqlite_pragmas)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False)

    def open(self) -> None:
        # tüm modeller Base.metadata'ya kaydolsun
        import turnus.models.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        log.info("[db] opened %s", self.engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        self.engine.dispose()
        log.info("[db] closed")

    def session(self) -> Session:
        return self.SessionLocal()


def _sqlite_pragmas(dbapi_connection, connection_record):
    cur = dbapi_connection.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


# FastAPI dependency: DB oturumu aç/kapat
def get_db(request: Request) -> Generator[Session, None, None]:
    db: Session = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()


def get_session_factory(request: Request) -> sessionmaker:
    return request.app.state.db.SessionLocal
