from datetime import datetime

from pydantic import BaseModel


class LeaderboardItem(BaseModel):
    rankPosition: int
    participantId: int
    teamName: str
    participantName: str
    language: str
    totalPoints: int
    roundsCompleted: int
    averageTime: float
    lastUpdated: datetime


class LeaderboardResponse(BaseModel):
    success: bool = True
    count: int
    data: list[LeaderboardItem]
