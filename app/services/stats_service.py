from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.participant_repository import ParticipantRepository
from app.repositories.submission_repository import SubmissionRepository


class StatsService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.participants = ParticipantRepository(db)
        self.submissions = SubmissionRepository(db)

    async def system_stats(self) -> dict:
        return {
            "totalParticipants": await self.participants.count(),
            "totalSubmissions": await self.submissions.count(),
            "correctSubmissions": await self.submissions.count_correct(),
            "languageDistribution": [
                {"language": language, "count": count}
                for language, count in await self.participants.count_by_language()
            ],
        }
