# app/database.py - Database Configuration
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from app.config import settings

logger = logging.getLogger(__name__)

# Database URL loaded from .env via app/config.py
DATABASE_URL = settings.DATABASE_URL

def _create_engine(url: str):
    if str(url).startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url)


engine = _create_engine(DATABASE_URL)

# Session maker
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

# Dependency to get database session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Commit when the block finishes, roll back and re-raise on any error."""
    if not db.in_transaction():
        db.begin()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def init_db(bind: Optional[Engine] = None) -> None:
    """Create the teachers and reviews tables if they do not already exist."""
    from app import models  # noqa: F401 - register models on Base.metadata

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database schema ready")
