from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from contextlib import contextmanager
from tracker.core.config import settings


def build_engine(database_url: str):
    """Create an engine; SQLite needs cross-thread access for the threadpool."""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context(session_factory=None):
    """Context manager for database sessions."""
    db = (session_factory or SessionLocal)()
    try:
        yield db
    finally:
        db.close()
