from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import db_session
from app.schemas.leaderboard import LeaderboardResponse
from app.services.leaderboard_service import LeaderboardService

router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def leaderboard(
    language: str | None = None,
    limit: int | None = None,
    db: AsyncSession = Depends(db_session),
):
    rows = await LeaderboardService(db).ranking(language=language, limit=limit)
    return {"success": True, "count": len(rows), "data": rows}
