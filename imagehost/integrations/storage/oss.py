import re
from collections.abc import Callable
from datetime import UTC, datetime
from urllib.parse import SplitResult, urlsplit

import httpx
import structlog

from imagehost.core.constants import (
    DEFAULT_CONTENT_TYPE,
    OSS_AUTH_SCHEME,
    OSS_ENDPOINT_SUFFIX,
    ImageHostingProvider,
)
from imagehost.core.errors import ConfigError, UploadError
from imagehost.integrations.storage.base import UploadContext, UploadResult
from imagehost.integrations.storage.keys import encode_object_key
from imagehost.integrations.storage.signing import (
    HmacSha1Signer,
    build_oss_string_to_sign,
    format_http_date,
)
from imagehost.integrations.storage.urls import resolve_public_url
from imagehost.schemas.hosting import AliyunOssConfig

logger = structlog.get_logger()

SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
DEFAULT_PORTS = {"http": 80, "https": 443}


def resolve_oss_endpoint_url(endpoint: str, region: str) -> SplitResult:
    normalized = endpoint.strip()
    if normalized:
        return urlsplit(normalized if SCHEME_RE.match(normalized) else f"https://{normalized}")
    if not region.strip():
        raise ConfigError("Aliyun OSS requires an endpoint or a region")
    return urlsplit(f"https://{region.strip()}.{OSS_ENDPOINT_SUFFIX}")


def resolve_oss_upload_base_url(endpoint_url: SplitResult, bucket: str) -> str:
    scheme = (endpoint_url.scheme or "https").lower()
    hostname = endpoint_url.hostname or ""
    port = endpoint_url.port
    port_part = f":{port}" if port and DEFAULT_PORTS.get(scheme) != port else ""
    host = hostname if hostname.startswith(f"{bucket}.") else f"{bucket}.{hostname}"
    return f"{scheme}://{host}{port_part}"


class AliyunOssUploader:
    provider = ImageHostingProvider.ALIYUN_OSS

    def __init__(
        self,
        signer: HmacSha1Signer | None = None,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._signer = signer
        self._http_client = http_client
        self._clock = clock or (lambda: datetime.now(UTC))

    @staticmethod
    def _validate(config: AliyunOssConfig) -> None:
        if not (config.access_key_id and config.access_key_secret and config.bucket):
            raise ConfigError("Aliyun OSS config is incomplete; check access key, secret and bucket")
        if not (config.endpoint.strip() or config.region.strip()):
            raise ConfigError("Aliyun OSS requires an endpoint or a region")

    async def _put(self, url: str, headers: dict[str, str], body: bytes) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.put(url, headers=headers, content=body)
        async with httpx.AsyncClient(timeout=None) as client:
            return await client.put(url, headers=headers, content=body)

    async def upload(self, context: UploadContext) -> UploadResult:
        config = context.config.aliyun_oss
        self._validate(config)
        signer = self._signer or HmacSha1Signer()

        endpoint_url = resolve_oss_endpoint_url(config.endpoint, config.region)
        upload_base_url = resolve_oss_upload_base_url(endpoint_url, config.bucket)
        upload_url = f"{upload_base_url}/{encode_object_key(context.object_key)}"

        date = format_http_date(self._clock())
        content_type = context.file.content_type or DEFAULT_CONTENT_TYPE
        string_to_sign = build_oss_string_to_sign(content_type, date, config.bucket, context.object_key)
        signature = signer.sign(config.access_key_secret, string_to_sign)

        body = await context.file.read()
        response = await self._put(
            upload_url,
            headers={
                "Content-Type": content_type,
                "Date": date,
                "Authorization": f"{OSS_AUTH_SCHEME} {config.access_key_id}:{signature}",
            },
            body=body,
        )
        if not response.is_success:
            raise UploadError(self.provider, response.status_code, response.text)

        logger.info("oss_object_stored", bucket=config.bucket, key=context.object_key, size=len(body))
        return UploadResult(
            provider=self.provider,
            key=context.object_key,
            url=resolve_public_url(config.public_base_url, context.object_key, upload_base_url),
        )
