"""Database initialization utilities."""

from catalog.db.base import Base
from catalog.db.session import engine
from catalog.core.logging import configure_logging, get_logger

# Register every mapped table on Base.metadata
import catalog.models  # noqa: F401

logger = get_logger(__name__)


def create_database():
    """Create all database tables."""
    logger.info("creating catalog tables")
    Base.metadata.create_all(bind=engine)
    logger.info("catalog tables created")


def drop_database():
    """Drop all database tables."""
    logger.info("dropping catalog tables")
    Base.metadata.drop_all(bind=engine)
    logger.info("catalog tables dropped")


if __name__ == "__main__":
    configure_logging()
    create_database()
