from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    teamName: str = Field(min_length=1, max_length=200)
    participantName: str = Field(min_length=1, max_length=200)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=32)
    language: str = Field(min_length=1, max_length=64)
    experience: str = Field(min_length=1, max_length=64)
    teamType: str = Field(min_length=1, max_length=64)


class RegisteredParticipantOut(BaseModel):
    teamName: str
    participantName: str
    email: str
    language: str


class RegisterResponse(BaseModel):
    success: bool = True
    message: str = "Registration successful!"
    participantId: int
    data: RegisteredParticipantOut


class ParticipantOut(BaseModel):
    id: int
    teamName: str
    participantName: str
    email: str
    phone: str
    language: str
    experience: str
    teamType: str
    registrationDate: datetime


class ParticipantResponse(BaseModel):
    success: bool = True
    data: ParticipantOut


class ParticipantListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[ParticipantOut]


class ProgressOut(BaseModel):
    id: int
    participantName: str
    teamName: str
    language: str
    submissionsCount: int
    totalPoints: int
    correctAnswers: int
    avgTime: float | None


class ProgressResponse(BaseModel):
    success: bool = True
    data: ProgressOut
