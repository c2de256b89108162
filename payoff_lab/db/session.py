from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from payoff_lab.db.models import Base

DEFAULT_DATABASE_URL = "sqlite:///./payoff_lab.db"

logger = logging.getLogger(__name__)


def get_database_url(database_url: str | None = None) -> str:
    return database_url or os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


def create_engine_from_url(database_url: str | None = None) -> Engine:
    url = get_database_url(database_url)
    connect_args: dict[str, object] = {}
    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool.
        connect_args = {"check_same_thread": False}
    # In-memory SQLite: every session must share the one connection, or each sees an empty DB.
    if url in {"sqlite://", "sqlite:///:memory:"} or ":memory:" in url:
        return create_engine(url, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


@dataclass
class Database:
    engine: Engine
    SessionLocal: sessionmaker

    @classmethod
    def from_url(cls, database_url: str | None = None) -> "Database":
        engine = create_engine_from_url(database_url)
        logger.debug("Run store at %s", engine.url.render_as_string(hide_password=True))
        SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
        return cls(engine=engine, SessionLocal=SessionLocal)

    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine)
