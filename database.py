from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from config import DATABASE_URL


def engine_connect_args(url: str) -> dict:
    """
    SQLite needs cross-thread access for FastAPI's threadpool.
    PostgreSQL sessions run in UTC so date() on timestamps gives the UTC day.
    """
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    if url.startswith("postgresql"):
        return {"options": "-c timezone=utc"}
    return {}


def build_engine(url: str) -> Engine:
    return create_engine(url, connect_args=engine_connect_args(url), pool_pre_ping=True)


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# SQLite ignores foreign keys (and so ON DELETE CASCADE) unless asked per connection
@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
