import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import EmailAlreadyRegistered, ParticipantNotFound
from app.models.domain import Participant
from app.repositories.participant_repository import ParticipantRepository

logger = structlog.get_logger(__name__)


class ParticipantService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = ParticipantRepository(db)

    async def register(
        self,
        team_name: str,
        participant_name: str,
        email: str,
        phone: str,
        language: str,
        experience: str,
        team_type: str,
    ) -> Participant:
        normalized = email.strip().lower()
        if await self.repo.get_by_email(normalized):
            raise EmailAlreadyRegistered()

        row = Participant(
            team_name=team_name.strip(),
            participant_name=participant_name.strip(),
            email=normalized,
            phone=phone.strip(),
            language=language.strip(),
            experience=experience.strip(),
            team_type=team_type.strip(),
        )
        try:
            await self.repo.create(row)
            await self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same email.
            await self.db.rollback()
            raise EmailAlreadyRegistered() from exc
        logger.info("participant_registered", participant_id=row.id, language=row.language)
        return row

    async def get_or_404(self, participant_id: int) -> Participant:
        row = await self.repo.get_by_id(participant_id)
        if not row:
            raise ParticipantNotFound()
        return row

    async def list_participants(self) -> list[dict]:
        rows = await self.repo.list_recent_first()
        return [self.serialize_participant(row) for row in rows]

    async def get_participant(self, participant_id: int) -> dict:
        return self.serialize_participant(await self.get_or_404(participant_id))

    async def progress(self, participant_id: int) -> dict:
        row = await self.repo.progress(participant_id)
        if row is None:
            raise ParticipantNotFound()
        return {
            "id": row.id,
            "participantName": row.participant_name,
            "teamName": row.team_name,
            "language": row.language,
            "submissionsCount": int(row.submissions_count),
            "totalPoints": int(row.total_points),
            "correctAnswers": int(row.correct_answers),
            "avgTime": float(row.avg_time) if row.avg_time is not None else None,
        }

    def serialize_participant(self, row: Participant) -> dict:
        return {
            "id": row.id,
            "teamName": row.team_name,
            "participantName": row.participant_name,
            "email": row.email,
            "phone": row.phone,
            "language": row.language,
            "experience": row.experience,
            "teamType": row.team_type,
            "registrationDate": row.registration_date,
        }
