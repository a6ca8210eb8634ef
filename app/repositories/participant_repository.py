from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.domain import Participant, Submission


class ParticipantRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, participant_id: int) -> Participant | None:
        res = await self.db.execute(select(Participant).where(Participant.id == participant_id))
        return res.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Participant | None:
        res = await self.db.execute(select(Participant).where(Participant.email == email))
        return res.scalar_one_or_none()

    async def exists(self, participant_id: int) -> bool:
        res = await self.db.execute(select(Participant.id).where(Participant.id == participant_id))
        return res.scalar_one_or_none() is not None

    async def create(self, row: Participant) -> Participant:
        self.db.add(row)
        await self.db.flush()
        return row

    async def list_recent_first(self) -> list[Participant]:
        res = await self.db.execute(
            select(Participant).order_by(Participant.registration_date.desc(), Participant.id.desc())
        )
        return list(res.scalars().all())

    async def progress(self, participant_id: int):
        res = await self.db.execute(
            select(
                Participant.id,
                Participant.participant_name,
                Participant.team_name,
                Participant.language,
                func.count(Submission.id).label("submissions_count"),
                func.coalesce(func.sum(Submission.points_earned), 0).label("total_points"),
                func.count(case((Submission.is_correct.is_(True), 1))).label("correct_answers"),
                func.avg(Submission.time_taken).label("avg_time"),
            )
            .select_from(Participant)
            .outerjoin(Submission, Submission.participant_id == Participant.id)
            .where(Participant.id == participant_id)
            .group_by(Participant.id, Participant.participant_name, Participant.team_name, Participant.language)
        )
        return res.one_or_none()

    async def count(self) -> int:
        res = await self.db.execute(select(func.count(Participant.id)))
        return int(res.scalar() or 0)

    async def count_by_language(self) -> list[tuple[str, int]]:
        res = await self.db.execute(
            select(Participant.language, func.count(Participant.id))
            .group_by(Participant.language)
            .order_by(Participant.language)
        )
        return [(language, int(count)) for language, count in res.all()]
