"""
Tortoise ORM configuration for Rashed.

Simple, single-file configuration for all database operations.
"""

from typing import Any, Dict, Optional

from tortoise import Tortoise

from ..config import get_config
from ..logging import get_logger
from ..models import MODEL_MODULES

logger = get_logger("core.database")


def get_database_url() -> str:
    """Get database connection URL from configuration."""
    return get_config().database.url


def get_tortoise_config(db_url: Optional[str] = None) -> Dict[str, Any]:
    """Build the Tortoise configuration dictionary."""
    return {
        "connections": {"default": db_url or get_database_url()},
        "apps": {
            "models": {
                "models": list(MODEL_MODULES),
                "default_connection": "default",
            },
        },
        "use_tz": True,
        "timezone": "UTC",
    }


async def init_tortoise(
    db_url: Optional[str] = None, generate_schemas: Optional[bool] = None
) -> None:
    """
    Initialize Tortoise ORM.

    Args:
        db_url: Connection URL override (tests use ``sqlite://:memory:``)
        generate_schemas: Create missing tables; defaults to configuration
    """
    await Tortoise.init(config=get_tortoise_config(db_url))
    if generate_schemas is None:
        generate_schemas = get_config().database.generate_schemas
    if generate_schemas:
        await Tortoise.generate_schemas(safe=True)
    logger.info("Tortoise ORM initialized", schemas_generated=generate_schemas)


async def close_tortoise() -> None:
    """Close Tortoise ORM connections."""
    await Tortoise.close_connections()
    logger.info("Tortoise ORM connections closed")
