"""Shared DB helpers for the Streamlit admin app."""

from datetime import datetime

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from shared_lunch.core.config import settings
from shared_lunch.db.base import Base
from shared_lunch.db.migrations import ensure_sqlite_schema

engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if settings.database_url.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base.metadata.create_all(bind=engine)
ensure_sqlite_schema(engine)


def get_session() -> Session:
    return SessionLocal()


def now_string() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M")
