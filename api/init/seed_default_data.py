"""
Script to create tables and seed the demo set, cards and admin account
into the configured database.
"""
import sys
from sqlmodel import Session
from vocab_trainer.core.config import settings
from vocab_trainer.core import database
from vocab_trainer.services.seed_service import seed_default_data
from vocab_trainer.services.sql_repository import SqlStudyRepository
from vocab_trainer.utils.time_utils import now_ms
import logging

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def seed_database():
    """Create missing tables, then add demo content where none exists."""
    if settings.resolved_backend != "sql":
        raise RuntimeError("DATABASE_URL must be set to seed a database")

    database.init_db()
    with Session(database.engine) as session:
        created = seed_default_data(SqlStudyRepository(session), now=now_ms())

    if not any(created.values()):
        logger.info("Database already has content; nothing to seed")
    return created


if __name__ == "__main__":
    logger.info("Starting database seeding...")
    try:
        seed_database()
        logger.info("Successfully completed!")
    except Exception as e:
        logger.error("Error during seeding: %s", e, exc_info=True)
        sys.exit(1)
