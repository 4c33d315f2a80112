from fastapi import APIRouter
from . import auth, tasks, sections, notes, preferences, health

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(tasks.router, tags=["tasks"])
api_router.include_router(sections.router, prefix="/sections", tags=["sections"])
api_router.include_router(notes.router, tags=["notes"])
api_router.include_router(preferences.router, tags=["preferences"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
