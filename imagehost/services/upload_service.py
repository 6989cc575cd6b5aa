import random
from collections.abc import Callable
from datetime import datetime

import structlog

from imagehost.core.constants import ImageHostingProvider
from imagehost.core.errors import ValidationError
from imagehost.integrations.storage.base import ImageFile, ImageUploader, UploadContext, UploadResult
from imagehost.integrations.storage.factory import get_uploader
from imagehost.integrations.storage.keys import build_object_key
from imagehost.schemas.hosting import ImageHostingConfig

UNNAMED_FILE = "unnamed-image"


class ImageUploadService:
    """Routes a pasted image to the configured default image host."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        uploader_factory: Callable[[ImageHostingProvider], ImageUploader] = get_uploader,
        clock: Callable[[], datetime] | None = None,
        rng: random.Random | None = None,
    ):
        self.logger = logger or structlog.get_logger()
        self.uploader_factory = uploader_factory
        self.clock = clock
        self.rng = rng

    async def upload(self, config: ImageHostingConfig, file: ImageFile) -> UploadResult:
        try:
            if not file.content_type.startswith("image/"):
                raise ValidationError("unsupported file type")

            now = self.clock() if self.clock else None
            context = UploadContext(
                config=config,
                file=file,
                object_key=build_object_key(file, now=now, rng=self.rng),
            )
            uploader = self.uploader_factory(config.default_provider)
            result = await uploader.upload(context)
        except Exception as exc:
            self.logger.error(
                "image_upload_failed",
                provider=str(config.default_provider),
                file_name=file.name or UNNAMED_FILE,
                file_type=file.content_type,
                error=repr(exc),
            )
            raise

        self.logger.info("image_uploaded", provider=str(result.provider), key=result.key, url=result.url)
        return result


async def upload_image_to_default_hosting(config: ImageHostingConfig, file: ImageFile) -> UploadResult:
    return await ImageUploadService().upload(config, file)
