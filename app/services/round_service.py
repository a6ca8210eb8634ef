import json
from pathlib import Path

import structlog
from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import BASE_DIR
from app.core.errors import RoundNotFound
from app.models.domain import Round
from app.repositories.round_repository import RoundRepository
from app.schemas.rounds import RoundSeed

logger = structlog.get_logger(__name__)

_SEED_ADAPTER = TypeAdapter(list[RoundSeed])


class RoundService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = RoundRepository(db)

    async def list_active(self) -> list[dict]:
        rows = await self.repo.list_active()
        return [self.serialize_round(row) for row in rows]

    async def get_active_or_404(self, round_id: int) -> dict:
        row = await self.repo.get_active(round_id)
        if not row:
            raise RoundNotFound()
        return self.serialize_round(row)

    async def get_for_judging(self, round_id: int) -> Round:
        # Submissions are judged against inactive rounds too.
        row = await self.repo.get_by_id(round_id)
        if not row:
            raise RoundNotFound()
        return row

    async def ensure_seed_rounds(self, seed_file: str) -> int:
        if not seed_file:
            return 0
        if await self.repo.count():
            return 0
        path = Path(seed_file)
        if not path.is_absolute():
            path = BASE_DIR / path
        seeds = _SEED_ADAPTER.validate_python(json.loads(path.read_text(encoding="utf-8")))
        await self.repo.add_all([Round(**seed.model_dump()) for seed in seeds])
        await self.db.commit()
        logger.info("rounds_seeded", count=len(seeds), source=str(path))
        return len(seeds)

    def serialize_round(self, row: Round) -> dict:
        return {
            "id": row.id,
            "roundNumber": row.round_number,
            "title": row.title,
            "description": row.description,
            "language": row.language,
            "difficulty": row.difficulty,
            "points": row.points,
            "hint": row.hint,
            "timeLimit": row.time_limit,
        }
