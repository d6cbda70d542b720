from tortoise import Tortoise
from app.core.config import DB_URL, MENU_ITEM_SEQUENCE, ADDON_SEQUENCE
from app.services.sequence_service import get_sequence_generator
import logging
from logging import INFO

# Set logging level for Tortoise ORM
logging.getLogger('tortoise').setLevel(INFO)
log = logging.getLogger(__name__)

# Define all models modules for the ORM
MODELS_MODULES = [
    "app.models.counter",
    "app.models.menu",
    "app.models.ingredient",
]

async def init_db(db_url: str = DB_URL):
    """Initializes the Tortoise ORM connection, generates schemas and seeds the counters."""
    try:
        await Tortoise.init(
            db_url=db_url,
            modules={"models": MODELS_MODULES},
        )
        # Generate the database schema (create tables)
        await Tortoise.generate_schemas()
        await get_sequence_generator().ensure([MENU_ITEM_SEQUENCE, ADDON_SEQUENCE])
        log.info("Database connection established and schemas generated.")
    except Exception as e:
        log.critical(f"Could not connect to database at {db_url}. Error: {e}")
        # Re-raise to prevent the application from starting without a database
        raise e

async def close_db():
    """Closes all database connections."""
    await Tortoise.close_connections()
    log.info("Database connections closed.")
