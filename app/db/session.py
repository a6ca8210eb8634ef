from collections.abc import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.config import Settings, get_settings


def build_engine(settings: Settings) -> AsyncEngine:
    db_url = make_url(settings.async_database_url)
    engine_kwargs = {"pool_pre_ping": True}

    if db_url.get_backend_name() == "sqlite":
        # aiosqlite connections are bound to the event loop that opened them.
        engine_kwargs["poolclass"] = NullPool
    elif db_url.port == 6543:
        # pgbouncer transaction mode cannot hold prepared statements or pooled sessions.
        engine_kwargs["poolclass"] = NullPool
        engine_kwargs["connect_args"] = {
            "statement_cache_size": 0,
            "command_timeout": settings.db_command_timeout,
        }
    else:
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["max_overflow"] = settings.db_max_overflow
        engine_kwargs["connect_args"] = {"command_timeout": settings.db_command_timeout}

    return create_async_engine(db_url.render_as_string(hide_password=False), **engine_kwargs)


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


engine = build_engine(get_settings())
SessionLocal = build_sessionmaker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session
