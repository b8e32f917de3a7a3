from fastapi import APIRouter

from bidmaster.api.v1 import engine, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(engine.router, prefix="/engine", tags=["engine"])
