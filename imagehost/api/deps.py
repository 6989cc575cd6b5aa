import json

from fastapi import Form, HTTPException, status

from imagehost.core.config import get_settings
from imagehost.schemas.hosting import ImageHostingConfig, normalize_image_hosting_config
from imagehost.services.upload_service import ImageUploadService


def get_upload_service() -> ImageUploadService:
    return ImageUploadService()


def get_hosting_config(config: str | None = Form(default=None)) -> ImageHostingConfig:
    if not config:
        return get_settings().image_hosting_config()
    try:
        payload = json.loads(config)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="config must be valid JSON") from exc
    return normalize_image_hosting_config(payload)
