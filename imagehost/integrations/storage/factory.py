from collections.abc import Callable

from imagehost.core.constants import ImageHostingProvider
from imagehost.core.errors import ConfigError
from imagehost.integrations.storage.base import ImageUploader
from imagehost.integrations.storage.oss import AliyunOssUploader
from imagehost.integrations.storage.r2 import CloudflareR2Uploader

UPLOADERS: dict[ImageHostingProvider, Callable[[], ImageUploader]] = {
    ImageHostingProvider.CLOUDFLARE_R2: CloudflareR2Uploader,
    ImageHostingProvider.ALIYUN_OSS: AliyunOssUploader,
}


def get_uploader(provider: ImageHostingProvider | str) -> ImageUploader:
    try:
        key = ImageHostingProvider(provider)
    except ValueError as exc:
        raise ConfigError(f"Unknown image hosting provider: {provider}") from exc
    return UPLOADERS[key]()
