import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from app.core.config import Settings, get_settings
from app.db.base import Base
from app.db.session import build_engine
import app.models.domain  # noqa: F401

config = context.config
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def migration_settings() -> Settings:
    """Application settings, with ``sqlalchemy.url`` from the Alembic config taking precedence."""
    settings = get_settings()
    url = config.get_main_option("sqlalchemy.url")
    if url:
        return settings.model_copy(update={"database_url": url})
    return settings


def run_migrations_offline() -> None:
    context.configure(
        url=migration_settings().async_database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = build_engine(migration_settings())
    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
