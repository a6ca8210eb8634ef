import structlog
from sqlalchemy import Select, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import LEADERBOARD_LOCK_NAMESPACE
from app.models.domain import LeaderboardEntry, Participant, Submission

logger = structlog.get_logger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def advisory_lock_statement(participant_id: int) -> Select:
    return select(func.pg_advisory_xact_lock(LEADERBOARD_LOCK_NAMESPACE, participant_id))


def upsert_statement(participant_id: int, dialect_name: str):
    """Build the ``INSERT ... SELECT ... ON CONFLICT DO UPDATE`` for one participant.

    Returns None when the dialect has no upsert support here.
    """
    insert = _UPSERT_DIALECTS.get(dialect_name)
    if insert is None:
        return None

    aggregate = (
        select(
            Participant.id,
            Participant.team_name,
            Participant.participant_name,
            Participant.language,
            func.coalesce(func.sum(Submission.points_earned), 0),
            func.count(Submission.round_id.distinct()),
            func.coalesce(func.avg(Submission.time_taken), 0),
            func.now(),
        )
        .select_from(Participant)
        .outerjoin(Submission, Submission.participant_id == Participant.id)
        .where(Participant.id == participant_id)
        .group_by(Participant.id, Participant.team_name, Participant.participant_name, Participant.language)
    )
    stmt = insert(LeaderboardEntry).from_select(
        [
            LeaderboardEntry.participant_id,
            LeaderboardEntry.team_name,
            LeaderboardEntry.participant_name,
            LeaderboardEntry.language,
            LeaderboardEntry.total_points,
            LeaderboardEntry.rounds_completed,
            LeaderboardEntry.average_time,
            LeaderboardEntry.last_updated,
        ],
        aggregate,
    )
    return stmt.on_conflict_do_update(
        index_elements=[LeaderboardEntry.participant_id],
        set_={
            "total_points": stmt.excluded.total_points,
            "rounds_completed": stmt.excluded.rounds_completed,
            "average_time": stmt.excluded.average_time,
            "last_updated": stmt.excluded.last_updated,
        },
    )


class LeaderboardRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def dialect_name(self) -> str:
        return self.db.get_bind().dialect.name

    async def lock_participant(self, participant_id: int) -> None:
        """Serialize aggregations of one participant until the current transaction ends.

        Postgres only. SQLite already serializes writers on the database file.
        """
        if self.dialect_name == "postgresql":
            await self.db.execute(advisory_lock_statement(participant_id))

    async def upsert_from_submissions(self, participant_id: int) -> bool:
        """Recompute the participant's row from every submission in one statement.

        Aggregates are overwritten, never incremented, so running this again with
        no new submissions leaves the row unchanged. Returns False without writing
        on an unsupported database.
        """
        stmt = upsert_statement(participant_id, self.dialect_name)
        if stmt is None:
            logger.warning("leaderboard_upsert_unsupported", dialect=self.dialect_name, participant_id=participant_id)
            return False
        await self.db.execute(stmt)
        return True

    async def get_for_participant(self, participant_id: int) -> LeaderboardEntry | None:
        res = await self.db.execute(
            select(LeaderboardEntry)
            .where(LeaderboardEntry.participant_id == participant_id)
            .execution_options(populate_existing=True)
        )
        return res.scalar_one_or_none()

    async def ranked(self, language: str | None, limit: int) -> list[tuple[LeaderboardEntry, int]]:
        rank_position = (
            func.dense_rank()
            .over(order_by=(LeaderboardEntry.total_points.desc(), LeaderboardEntry.average_time.asc()))
            .label("rank_position")
        )
        query = select(LeaderboardEntry, rank_position)
        if language:
            query = query.where(LeaderboardEntry.language == language)
        query = query.order_by(
            LeaderboardEntry.total_points.desc(),
            LeaderboardEntry.average_time.asc(),
            LeaderboardEntry.participant_id.asc(),
        ).limit(limit).execution_options(populate_existing=True)
        res = await self.db.execute(query)
        return [(entry, int(rank)) for entry, rank in res.all()]
