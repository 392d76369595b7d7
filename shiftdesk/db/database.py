from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from shiftdesk.core.config import settings


class Base(DeclarativeBase):
    pass


def _configure_sqlite(engine: Engine) -> None:
    """
    Make SQLite behave like the production store for the engine's purposes:
    foreign keys enforced and every transaction taking the write lock up front,
    so validate-then-commit units never interleave.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # hand transaction control to the "begin" hook below
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            echo=False,
            connect_args={
                "check_same_thread": False,
                "timeout": settings.SQLITE_BUSY_TIMEOUT_SECONDS,
            },
        )
        _configure_sqlite(engine)
        return engine
    return create_engine(url, echo=False, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


engine = create_db_engine(settings.DATABASE_URL)
SessionLocal = create_session_factory(engine)


def create_tables(bind: Engine = engine) -> None:
    """Create all tables (local development without migrations)."""
    import shiftdesk.db.models  # noqa: F401 - registers models with Base.metadata
    Base.metadata.create_all(bind=bind)
