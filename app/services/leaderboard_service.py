import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.constants import MIN_LEADERBOARD_LIMIT
from app.models.domain import LeaderboardEntry
from app.repositories.leaderboard_repository import LeaderboardRepository

logger = structlog.get_logger(__name__)


class LeaderboardService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = LeaderboardRepository(db)
        self.settings = get_settings()

    async def refresh_participant(self, participant_id: int) -> bool:
        """Rebuild one participant's leaderboard row from their submissions.

        Runs in its own transaction. Any failure, including lock or command
        timeouts, is logged and swallowed: the row is a cache over the submissions
        table and the next successful refresh repairs it. Returns whether the row
        was written.
        """
        try:
            await self.repo.lock_participant(participant_id)
            written = await self.repo.upsert_from_submissions(participant_id)
            if not written:
                await self._rollback_quietly()
                return False
            await self.db.commit()
        except Exception as exc:
            await self._rollback_quietly()
            logger.exception("leaderboard_aggregation_failed", participant_id=participant_id, error=str(exc))
            return False
        logger.info("leaderboard_refreshed", participant_id=participant_id)
        return True

    async def ranking(self, language: str | None = None, limit: int | None = None) -> list[dict]:
        rows = await self.repo.ranked(language=language or None, limit=self.clamp_limit(limit))
        return [self.serialize_entry(entry, rank) for entry, rank in rows]

    def clamp_limit(self, limit: int | None) -> int:
        if limit is None:
            return self.settings.leaderboard_default_limit
        return max(MIN_LEADERBOARD_LIMIT, min(int(limit), self.settings.leaderboard_max_limit))

    def serialize_entry(self, row: LeaderboardEntry, rank_position: int) -> dict:
        return {
            "rankPosition": rank_position,
            "participantId": row.participant_id,
            "teamName": row.team_name,
            "participantName": row.participant_name,
            "language": row.language,
            "totalPoints": row.total_points,
            "roundsCompleted": row.rounds_completed,
            "averageTime": float(row.average_time),
            "lastUpdated": row.last_updated,
        }

    async def _rollback_quietly(self) -> None:
        try:
            await self.db.rollback()
        except Exception:
            logger.warning("leaderboard_rollback_failed", exc_info=True)
