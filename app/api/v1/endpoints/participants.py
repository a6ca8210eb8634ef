from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import db_session
from app.schemas.participants import (
    ParticipantListResponse,
    ParticipantResponse,
    ProgressResponse,
    RegisteredParticipantOut,
    RegisterRequest,
    RegisterResponse,
)
from app.services.participant_service import ParticipantService

router = APIRouter(tags=["participants"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: AsyncSession = Depends(db_session)):
    service = ParticipantService(db)
    row = await service.register(
        team_name=payload.teamName,
        participant_name=payload.participantName,
        email=payload.email,
        phone=payload.phone,
        language=payload.language,
        experience=payload.experience,
        team_type=payload.teamType,
    )
    return RegisterResponse(
        participantId=row.id,
        data=RegisteredParticipantOut(
            teamName=row.team_name,
            participantName=row.participant_name,
            email=row.email,
            language=row.language,
        ),
    )


@router.get("/participants", response_model=ParticipantListResponse)
async def list_participants(db: AsyncSession = Depends(db_session)):
    rows = await ParticipantService(db).list_participants()
    return {"success": True, "count": len(rows), "data": rows}


@router.get("/participants/{participant_id}", response_model=ParticipantResponse)
async def get_participant(participant_id: int, db: AsyncSession = Depends(db_session)):
    return {"success": True, "data": await ParticipantService(db).get_participant(participant_id)}


@router.get("/participants/{participant_id}/progress", response_model=ProgressResponse)
async def participant_progress(participant_id: int, db: AsyncSession = Depends(db_session)):
    return {"success": True, "data": await ParticipantService(db).progress(participant_id)}
