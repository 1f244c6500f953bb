from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
import logging

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# DATABASE ENGINE
# ------------------------------------------------------------------------------
# Records live only as long as the process: every store gets its own
# in-memory SQLite database shared over a single connection.
MEMORY_DATABASE_URL = "sqlite://"

Base = declarative_base()


def create_memory_engine() -> Engine:
    """Create an engine bound to a private in-memory database."""
    try:
        engine = create_engine(
            MEMORY_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    except Exception as e:
        logger.error(f"❌ Failed to create SQLAlchemy engine: {e}")
        raise

    from string_analyzer.models import string_record  # noqa: F401  ensure models are imported
    Base.metadata.create_all(bind=engine)
    logger.info("✅ In-memory string table created.")
    return engine


# ------------------------------------------------------------------------------
# STORE DEPENDENCY
# ------------------------------------------------------------------------------
def get_store(request: Request):
    """Dependency to provide the application's record store."""
    return request.app.state.store
