import asyncio

import boto3
import structlog
from botocore.config import Config

from imagehost.core.constants import DEFAULT_CONTENT_TYPE, R2_REGION, R2_STORAGE_DOMAIN, ImageHostingProvider
from imagehost.core.errors import ConfigError
from imagehost.integrations.storage.base import UploadContext, UploadResult
from imagehost.integrations.storage.urls import resolve_public_url
from imagehost.schemas.hosting import CloudflareR2Config

logger = structlog.get_logger()


def r2_endpoint(account_id: str) -> str:
    return f"https://{account_id}.{R2_STORAGE_DOMAIN}"


class CloudflareR2Uploader:
    provider = ImageHostingProvider.CLOUDFLARE_R2

    @staticmethod
    def _validate(config: CloudflareR2Config) -> None:
        if not (config.account_id and config.access_key_id and config.secret_access_key and config.bucket):
            raise ConfigError(
                "Cloudflare R2 config is incomplete; check account ID, access key, secret and bucket"
            )

    @staticmethod
    def _client(config: CloudflareR2Config, endpoint: str):
        return boto3.client(
            "s3",
            endpoint_url=endpoint,
            region_name=R2_REGION,
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key,
            config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
        )

    async def upload(self, context: UploadContext) -> UploadResult:
        config = context.config.cloudflare_r2
        self._validate(config)

        endpoint = r2_endpoint(config.account_id)
        client = self._client(config, endpoint)

        # A materialised body keeps botocore on the fixed-length PUT path.
        body = bytes(await context.file.read())
        await asyncio.to_thread(
            client.put_object,
            Bucket=config.bucket,
            Key=context.object_key,
            Body=body,
            ContentType=context.file.content_type or DEFAULT_CONTENT_TYPE,
        )
        logger.info("r2_object_stored", bucket=config.bucket, key=context.object_key, size=len(body))

        # A custom public domain is bound to the bucket root, so only the key is appended.
        if config.public_base_url.strip():
            url = resolve_public_url(config.public_base_url, context.object_key, endpoint)
        else:
            url = resolve_public_url("", f"{config.bucket}/{context.object_key}", endpoint)
        return UploadResult(provider=self.provider, key=context.object_key, url=url)
