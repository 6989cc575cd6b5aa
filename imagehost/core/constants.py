from enum import StrEnum


class ImageHostingProvider(StrEnum):
    CLOUDFLARE_R2 = "cloudflare-r2"
    ALIYUN_OSS = "aliyun-oss"


DEFAULT_PROVIDER = ImageHostingProvider.CLOUDFLARE_R2

OBJECT_KEY_PREFIX = "plaindoc"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_EXTENSION = "png"

MIME_TO_EXTENSION = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
    "image/bmp": "bmp",
    "image/tiff": "tif",
}

R2_STORAGE_DOMAIN = "r2.cloudflarestorage.com"
R2_REGION = "auto"

OSS_ENDPOINT_SUFFIX = "aliyuncs.com"
OSS_AUTH_SCHEME = "OSS"
