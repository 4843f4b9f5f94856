"""Storage wiring: SQLAlchemy engine + per-request sessions, or in-memory.

Uses a session-per-request pattern for the SQL backend.
"""

from __future__ import annotations

from flask import Flask, current_app, g
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bingo.models.base import Base
from bingo.repositories.base import GameRepository
from bingo.repositories.memory_repository import InMemoryGameRepository
from bingo.repositories.sql_repository import SqlGameRepository


def _enable_sqlite_savepoints(engine: Engine) -> None:
    # pysqlite manages BEGIN itself and breaks SAVEPOINT; let SQLAlchemy emit it.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN")


def create_app_engine(database_url: str) -> Engine:
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        # In-memory SQLite lives inside one connection; share it across sessions.
        if url.database in (None, "", ":memory:"):
            engine = create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                future=True,
            )
        else:
            engine = create_engine(database_url, connect_args={"check_same_thread": False}, future=True)
        _enable_sqlite_savepoints(engine)
        return engine

    return create_engine(database_url, pool_pre_ping=True, future=True)


def get_db_backend() -> str:
    return str(current_app.config.get("DB_BACKEND", "sql")).lower().strip()


def init_db(app: Flask) -> None:
    """Initialize the configured storage backend."""

    backend = str(app.config.get("DB_BACKEND", "sql")).lower().strip()
    if backend == "memory":
        app.extensions["memory_repository"] = InMemoryGameRepository()
        return
    if backend != "sql":
        raise RuntimeError(f"Unsupported DB_BACKEND: {backend}")

    engine = create_app_engine(str(app.config["DATABASE_URL"]))
    session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    # Create tables on startup (production would use migrations).
    Base.metadata.create_all(bind=engine)

    app.extensions["engine"] = engine
    app.extensions["session_factory"] = session_factory

    @app.before_request
    def _open_session() -> None:
        g.db = session_factory()  # type: ignore[attr-defined]

    @app.teardown_request
    def _close_session(exc: BaseException | None) -> None:
        session: Session | None = getattr(g, "db", None)
        if session is None:
            return

        try:
            # Handled AppErrors never reach teardown as exc; a failed request is marked on g.
            if exc is None and not getattr(g, "rollback", False):
                session.commit()
            else:
                session.rollback()
        finally:
            session.close()


def get_session() -> Session:
    """Get the current request's SQLAlchemy session."""

    session: Session | None = getattr(g, "db", None)
    if session is None:
        raise RuntimeError("Database session not initialized")
    return session


def get_repository() -> GameRepository:
    """Repository for the current request, according to DB_BACKEND."""

    if get_db_backend() == "memory":
        return current_app.extensions["memory_repository"]
    return SqlGameRepository(get_session())
