from fastapi import APIRouter

from app.api.routes import presence
from app.api.routes import profiles

api_router = APIRouter(prefix="/v1")

api_router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
api_router.include_router(presence.router, prefix="/presence", tags=["presence"])
