from pydantic import BaseModel, Field


class SubmitRequest(BaseModel):
    participantId: int = Field(gt=0)
    roundId: int = Field(gt=0)
    answer: str = Field(min_length=1)
    timeTaken: int | None = Field(default=None, ge=0)


class SubmitResponse(BaseModel):
    success: bool = True
    isCorrect: bool
    pointsEarned: int
    explanation: str | None
