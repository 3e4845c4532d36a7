"""Engine, session factory and the per-request session dependency."""

from collections.abc import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.core.errors import StoreError


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """SQLite ignores FOREIGN KEY clauses unless each connection turns them on."""

    @event.listens_for(target, "connect")
    def _set_pragma(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, echo: bool = False) -> Engine:
    """Postgres engine with pre-ping, or a thread-shareable SQLite engine for local runs."""
    if url.startswith("sqlite"):
        sqlite_engine = create_engine(
            url, connect_args={"check_same_thread": False}, echo=echo
        )
        enable_sqlite_foreign_keys(sqlite_engine)
        return sqlite_engine
    return create_engine(url, pool_pre_ping=True, echo=echo)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a session for one request; closed (and any open transaction rolled back) afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """SELECT 1 through the session; False when the store is unreachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


def commit(db: Session) -> None:
    """Commit the session; on failure roll back and raise StoreError."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError(str(getattr(e, "orig", None) or e), cause=e) from e
