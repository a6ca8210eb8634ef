from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import db_session
from app.schemas.stats import SystemStatsResponse
from app.services.stats_service import StatsService

router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=SystemStatsResponse)
async def system_stats(db: AsyncSession = Depends(db_session)):
    return {"success": True, "data": await StatsService(db).system_stats()}
