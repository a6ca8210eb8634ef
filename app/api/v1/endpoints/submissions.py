from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import db_session
from app.schemas.submissions import SubmitRequest, SubmitResponse
from app.services.submission_service import SubmissionService

router = APIRouter(tags=["submissions"])


@router.post("/submit", response_model=SubmitResponse)
async def submit_answer(payload: SubmitRequest, db: AsyncSession = Depends(db_session)):
    service = SubmissionService(db)
    result = await service.submit(
        participant_id=payload.participantId,
        round_id=payload.roundId,
        answer=payload.answer,
        time_taken=payload.timeTaken,
    )
    return {"success": True, **result}
