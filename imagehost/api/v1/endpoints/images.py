from fastapi import APIRouter, Depends, File, UploadFile
from prometheus_client import Counter

from imagehost.api.deps import get_hosting_config, get_upload_service
from imagehost.integrations.storage.base import ImageFile
from imagehost.schemas.hosting import ImageHostingConfig
from imagehost.schemas.images import UploadImageResponse
from imagehost.services.upload_service import ImageUploadService

router = APIRouter(prefix="/images", tags=["images"])
UPLOAD_COUNTER = Counter("imagehost_uploads_total", "Image upload attempts", ["provider", "outcome"])


@router.post("", response_model=UploadImageResponse)
async def upload_image(
    file: UploadFile = File(...),
    config: ImageHostingConfig = Depends(get_hosting_config),
    service: ImageUploadService = Depends(get_upload_service),
):
    image = ImageFile(
        name=file.filename or "",
        content_type=file.content_type or "",
        content=await file.read(),
    )
    try:
        result = await service.upload(config, image)
    except Exception:
        UPLOAD_COUNTER.labels(provider=config.default_provider.value, outcome="error").inc()
        raise
    UPLOAD_COUNTER.labels(provider=result.provider.value, outcome="ok").inc()
    return UploadImageResponse(provider=result.provider, key=result.key, url=result.url)
