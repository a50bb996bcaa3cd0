# create_tables.py: run once to create missing tables (development helper)
import logging, sys

from bookkeeping.core.config import settings
from bookkeeping.db.session import Database

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

logger.info("Creating tables in the database (if not exist)...")
database = Database(settings.DATABASE_URL)
try:
    database.connect()
    database.create_all()
    logger.info("Done.")
except Exception:
    logger.exception("Error creating tables:")
    sys.exit(1)
finally:
    database.dispose()
