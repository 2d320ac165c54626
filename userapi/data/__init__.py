from typing import Optional

from userapi.config.properties import ConfigurationProperties, get_config
from userapi.data.adapter import SQLAlchemyAdapter
from userapi.data.entity import User, create_user_table
from userapi.data.repository import (
    SQLAlchemyUserRepository,
    UserRepository,
    get_database_adapter,
    set_database_adapter,
)


async def initialize_database(config: Optional[ConfigurationProperties] = None):
    """
    Initialize the database adapter and create the users table.
    Reads configuration from application.yml and sets up the connection.
    """
    config = config or get_config()

    database_url = config.get("database.url")
    if not database_url:
        return None

    database_adapter = SQLAlchemyAdapter()

    await database_adapter.connect(
        database_url,
        echo=config.get_bool("database.echo"),
        pool_size=config.get_int("database.pool.size"),
        max_overflow=config.get_int("database.pool.max_overflow"),
        pool_timeout=config.get_int("database.pool.timeout"),
        pool_recycle=config.get_int("database.pool.recycle"),
        enable_pooling=config.get_bool("database.pool.enabled", True),
    )

    set_database_adapter(database_adapter)
    await database_adapter.create_table_if_not_exists()

    return database_adapter


__all__ = [
    "User",
    "create_user_table",
    "UserRepository",
    "SQLAlchemyUserRepository",
    "SQLAlchemyAdapter",
    "set_database_adapter",
    "get_database_adapter",
    "initialize_database",
]
