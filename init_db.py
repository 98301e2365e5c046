"""
Run this script once to set up the remote progress tables.
Usage: python init_db.py
"""
import asyncio
import logging
from database import DatabaseManager
from logging_config import setup_logging
from settings import Settings

logger = logging.getLogger("catchgame.init_db")

async def main():
    cfg = Settings()
    setup_logging(cfg.log_level)
    logger.info("🔧 Initializing database with focus_points and catch_sessions tables...")

    if not cfg.db.is_configured:
        logger.error("❌ Database not configured. Please check your .env file.")
        return

    db = DatabaseManager(cfg.db)
    try:
        await db.connect()
        await db.init_schema()
        if db.pool:
            totals = await db.get_totals()
            logger.info("✅ Database setup complete! Current totals: %s", totals)
    finally:
        await db.disconnect()

if __name__ == "__main__":
    asyncio.run(main())
