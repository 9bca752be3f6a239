"""Main API router aggregation."""

from fastapi import APIRouter

from label_cms.api.auth import router as auth_router
from label_cms.api.news import router as news_router
from label_cms.api.releases import router as releases_router
from label_cms.api.tracks import router as tracks_router
from label_cms.api.upload import router as upload_router

# Main API router
api_router = APIRouter(prefix="/api")

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(releases_router)
api_router.include_router(tracks_router)
api_router.include_router(news_router)
api_router.include_router(upload_router)
