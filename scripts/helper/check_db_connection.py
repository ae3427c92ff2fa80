#!/usr/bin/env python3
import logging
import sys
from pathlib import Path

from sqlalchemy import text

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent.parent))

from devevents.db import Database, DatabaseConfig, DatabaseError

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def check_connection() -> bool:
    try:
        config = DatabaseConfig()
    except ValueError as e:
        logger.error(str(e))
        return False

    db = Database(config)
    try:
        # Connect, create missing tables and run a simple query
        with db.session() as session:
            result = session.execute(text("SELECT 1")).scalar()
            logger.info("Successfully connected to database")
            logger.info(f"Test query result: {result}")
            return True
    except DatabaseError as e:
        logger.error(f"Failed to connect to database: {e}")
        return False
    finally:
        db.dispose()

if __name__ == "__main__":
    success = check_connection()
    sys.exit(0 if success else 1)
