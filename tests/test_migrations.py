import asyncio

from alembic import command
from alembic.config import Config
from sqlalchemy import UniqueConstraint, inspect
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from app.core.config import BASE_DIR
from app.models.domain import Participant, Round


def upgrade_to_head(url: str) -> None:
    config = Config(str(BASE_DIR / "alembic.ini"), attributes={"configure_logger": False})
    config.set_main_option("script_location", str(BASE_DIR / "alembic"))
    config.set_main_option("sqlalchemy.url", url)
    command.upgrade(config, "head")


def reflect(url: str) -> dict:
    def collect(conn):
        inspector = inspect(conn)
        return {
            "participant_indexes": {idx["name"]: bool(idx["unique"]) for idx in inspector.get_indexes("participants")},
            "participant_uniques": inspector.get_unique_constraints("participants"),
            "round_defaults": {col["name"]: col["default"] for col in inspector.get_columns("rounds")},
        }

    async def scenario():
        engine = create_async_engine(url, poolclass=NullPool)
        try:
            async with engine.connect() as conn:
                return await conn.run_sync(collect)
        finally:
            await engine.dispose()

    return asyncio.run(scenario())


def test_model_keeps_a_single_unique_email_index():
    indexes = {idx.name: idx.unique for idx in Participant.__table__.indexes}
    assert indexes["ix_participants_email"] is True
    assert not [c for c in Participant.__table__.constraints if isinstance(c, UniqueConstraint)]


def test_initial_migration_matches_the_models(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'migrated.db'}"
    upgrade_to_head(url)
    schema = reflect(url)

    assert schema["participant_indexes"] == {"ix_participants_email": True, "ix_participants_language": False}
    assert schema["participant_uniques"] == []
    for column in ("description", "difficulty", "points", "is_active"):
        assert schema["round_defaults"][column] is not None
        assert Round.__table__.c[column].server_default is not None
    assert schema["round_defaults"]["difficulty"] == "'medium'"
