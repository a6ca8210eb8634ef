from pydantic import BaseModel


class LanguageCount(BaseModel):
    language: str
    count: int


class SystemStatsOut(BaseModel):
    totalParticipants: int
    totalSubmissions: int
    correctSubmissions: int
    languageDistribution: list[LanguageCount]


class SystemStatsResponse(BaseModel):
    success: bool = True
    data: SystemStatsOut
