from contextlib import asynccontextmanager
from tortoise import Tortoise
from app.core.db import MODELS_MODULES


@asynccontextmanager
async def memory_db():
    """
    Fresh SQLite in-memory database with every model registered.
    Used as `async with memory_db():` inside a test body so the ORM
    connections live in the test's own event loop and context.
    """
    await Tortoise.init(db_url="sqlite://:memory:", modules={"models": MODELS_MODULES})
    await Tortoise.generate_schemas()
    try:
        yield
    finally:
        await Tortoise.close_connections()
