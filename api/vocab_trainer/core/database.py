from typing import Optional
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session
from vocab_trainer.core.config import settings
import logging

logger = logging.getLogger(__name__)


def normalize_database_url(url: str) -> str:
    """SQLAlchemy prefers postgresql:// over postgres://"""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def create_db_engine(url: str) -> Engine:
    """Create a database engine with settings suited to the URL's dialect."""
    db_url = normalize_database_url(url)
    logger.info(f"Connecting to database: {db_url[:20]}...")  # Log partial URL for debugging

    if db_url.startswith("sqlite"):
        return create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        db_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


# Only the sql backend needs an engine
engine: Optional[Engine] = (
    create_db_engine(settings.database_url)
    if settings.resolved_backend == "sql"
    else None
)


def get_session():
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session


def init_db(target_engine: Optional[Engine] = None):
    """Initialize database tables."""
    # Import models to register them with SQLModel
    from vocab_trainer.models import models  # noqa: F401

    SQLModel.metadata.create_all(target_engine or engine)
