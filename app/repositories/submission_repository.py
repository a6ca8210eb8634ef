from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.domain import Submission


class SubmissionRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, row: Submission) -> Submission:
        self.db.add(row)
        await self.db.flush()
        return row

    async def list_for_participant(self, participant_id: int) -> list[Submission]:
        res = await self.db.execute(
            select(Submission)
            .where(Submission.participant_id == participant_id)
            .order_by(Submission.submitted_at, Submission.id)
        )
        return list(res.scalars().all())

    async def count(self) -> int:
        res = await self.db.execute(select(func.count(Submission.id)))
        return int(res.scalar() or 0)

    async def count_correct(self) -> int:
        res = await self.db.execute(select(func.count(Submission.id)).where(Submission.is_correct.is_(True)))
        return int(res.scalar() or 0)
