"""Database engine configuration."""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from app.core.config import settings


def create_db_engine(url: str | None = None) -> Engine:
    """Create SQLAlchemy engine."""
    resolved_url = url or settings.DATABASE_URL
    if resolved_url.startswith("sqlite"):
        # In-memory SQLite must share one connection across the process
        db_engine = create_engine(
            resolved_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        event.listen(db_engine, "connect", _enable_sqlite_foreign_keys)
        return db_engine

    return create_engine(
        resolved_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
        echo=False,  # Set to True for SQL query logging
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Global engine instance
engine = create_db_engine()
