from fastapi import APIRouter

from imagehost.api.v1.endpoints import health, images

api_router = APIRouter()
api_router.include_router(images.router)
api_router.include_router(health.router)
