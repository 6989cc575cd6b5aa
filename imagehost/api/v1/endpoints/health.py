from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

router = APIRouter(tags=["health"])
REQUEST_COUNTER = Counter("imagehost_api_requests_total", "Total API requests", ["path"])


@router.get("/health/live")
async def health_live():
    REQUEST_COUNTER.labels(path="/health/live").inc()
    return {"status": "ok"}


@router.get("/metrics", response_class=PlainTextResponse)
async def metrics():
    return PlainTextResponse(generate_latest().decode("utf-8"), media_type=CONTENT_TYPE_LATEST)
