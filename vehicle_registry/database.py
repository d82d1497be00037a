# vehicle_registry/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy with PostgreSQL. All models are auto-imported here
so create_tables() creates every table in one call.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from vehicle_registry.config import settings


def enable_sqlite_foreign_keys(sqlite_engine) -> None:
    """SQLite leaves FK constraints off unless each connection turns them on."""

    @event.listens_for(sqlite_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_engine(url: str):
    """Build an engine for `url`. Pool sizing and timeouts only apply to server databases."""
    if url.startswith("sqlite"):
        sqlite_engine = create_engine(url, connect_args={"check_same_thread": False}, echo=settings.DB_ECHO)
        enable_sqlite_foreign_keys(sqlite_engine)
        return sqlite_engine

    connect_args = {}
    if settings.DB_STATEMENT_TIMEOUT_MS:
        connect_args["options"] = f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"
    if settings.is_production:
        connect_args["sslmode"] = "require"

    return create_engine(
        url,
        pool_pre_ping=True,          # Auto-reconnect if DB connection drops
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        echo=settings.DB_ECHO,
        connect_args=connect_args,
    )


engine = create_db_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency. Yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """
    Creates all DB tables. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from vehicle_registry.models.vehicle import Vehicle          # noqa
    from vehicle_registry.models.driver import Driver            # noqa
    from vehicle_registry.models.vehicle_log import VehicleLog   # noqa

    Base.metadata.create_all(bind=bind or engine)
