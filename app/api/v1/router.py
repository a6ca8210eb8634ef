from fastapi import APIRouter

from app.api.v1.endpoints import health, leaderboard, participants, rounds, stats, submissions

api_router = APIRouter()
api_router.include_router(participants.router)
api_router.include_router(rounds.router)
api_router.include_router(submissions.router)
api_router.include_router(leaderboard.router)
api_router.include_router(stats.router)
api_router.include_router(health.router)
