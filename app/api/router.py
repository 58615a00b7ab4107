"""API router aggregation.

Token routes sit at the root; everything else lives under /api. The
password-reset router is included before the resource router so its fixed
paths are matched first.
"""

from fastapi import APIRouter

from app.api.endpoints import auth, health, lyrics, password_reset, resources

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, tags=["spotify-auth"])
api_router.include_router(lyrics.router, prefix="/api", tags=["lyrics"])
api_router.include_router(
    password_reset.router, prefix="/api/password-reset", tags=["password-reset"]
)
api_router.include_router(resources.router, prefix="/api", tags=["resources"])
