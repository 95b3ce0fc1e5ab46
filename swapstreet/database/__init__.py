import logging
from .postgres import Base, AsyncSessionLocal, init_db, close_db, check_db_connection, get_db

logger = logging.getLogger(__name__)


async def init_databases():
    """Initialize the relational store"""
    try:
        await init_db()
        logger.info("All databases initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


async def close_databases():
    """Close all database connections"""
    try:
        await close_db()
        logger.info("All database connections closed")
    except Exception as e:
        logger.error(f"Error closing database connections: {e}")


async def check_database_health():
    """Check health of all database connections"""
    postgres_status = await check_db_connection()

    return {
        "postgres": postgres_status,
        "overall": postgres_status
    }

__all__ = [
    "Base",
    "AsyncSessionLocal",
    "init_databases",
    "close_databases",
    "check_database_health",
    "get_db"
]
