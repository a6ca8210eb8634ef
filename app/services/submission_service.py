import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ParticipantNotFound, ValidationError
from app.models.domain import Submission
from app.repositories.participant_repository import ParticipantRepository
from app.repositories.submission_repository import SubmissionRepository
from app.services.judge_service import judge_answer
from app.services.leaderboard_service import LeaderboardService
from app.services.round_service import RoundService

logger = structlog.get_logger(__name__)


class SubmissionService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = SubmissionRepository(db)
        self.participants = ParticipantRepository(db)
        self.round_service = RoundService(db)
        self.leaderboard_service = LeaderboardService(db)

    async def submit(
        self,
        participant_id: int | None,
        round_id: int | None,
        answer: str | None,
        time_taken: int | None = None,
    ) -> dict:
        """Judge and record one answer, then rebuild the participant's leaderboard row.

        Every call appends a new submission, including repeats for the same round.
        Validation and lookups happen before anything is written. A failed
        leaderboard refresh does not fail the submit.
        """
        if not participant_id or not round_id or not answer:
            raise ValidationError()
        if time_taken is not None and time_taken < 0:
            raise ValidationError("timeTaken must be >= 0")

        round_row = await self.round_service.get_for_judging(round_id)
        if not await self.participants.exists(participant_id):
            raise ParticipantNotFound()

        verdict = judge_answer(round_row.correct_answer, round_row.points, answer)
        row = Submission(
            participant_id=participant_id,
            round_id=round_id,
            answer=answer,
            is_correct=verdict.is_correct,
            points_earned=verdict.points_earned,
            time_taken=time_taken,
        )
        await self.repo.create(row)
        await self.db.commit()
        logger.info(
            "submission_recorded",
            submission_id=row.id,
            participant_id=participant_id,
            round_id=round_id,
            is_correct=verdict.is_correct,
            points_earned=verdict.points_earned,
        )

        await self.leaderboard_service.refresh_participant(participant_id)
        return {
            "isCorrect": verdict.is_correct,
            "pointsEarned": verdict.points_earned,
            "explanation": round_row.explanation,
        }
