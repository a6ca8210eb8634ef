from pydantic import BaseModel, Field


class RoundOut(BaseModel):
    id: int
    roundNumber: int
    title: str
    description: str
    language: str
    difficulty: str
    points: int
    hint: str | None
    timeLimit: int | None


class RoundResponse(BaseModel):
    success: bool = True
    data: RoundOut


class RoundListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[RoundOut]


class RoundSeed(BaseModel):
    round_number: int = Field(ge=1)
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    language: str = Field(min_length=1, max_length=64)
    difficulty: str = "medium"
    points: int = Field(default=10, ge=0)
    hint: str | None = None
    time_limit: int | None = Field(default=None, ge=1)
    correct_answer: str = Field(min_length=1)
    explanation: str | None = None
    is_active: bool = True
