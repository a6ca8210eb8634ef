from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import db_session
from app.schemas.rounds import RoundListResponse, RoundResponse
from app.services.round_service import RoundService

router = APIRouter(prefix="/rounds", tags=["rounds"])


@router.get("", response_model=RoundListResponse)
async def list_rounds(db: AsyncSession = Depends(db_session)):
    rows = await RoundService(db).list_active()
    return {"success": True, "count": len(rows), "data": rows}


@router.get("/{round_id}", response_model=RoundResponse)
async def get_round(round_id: int, db: AsyncSession = Depends(db_session)):
    return {"success": True, "data": await RoundService(db).get_active_or_404(round_id)}
