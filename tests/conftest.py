import pytest

from imagehost.core.constants import ImageHostingProvider
from imagehost.integrations.storage.base import ImageFile
from imagehost.schemas.hosting import AliyunOssConfig, CloudflareR2Config, ImageHostingConfig


@pytest.fixture
def png_file() -> ImageFile:
    return ImageFile(name="pasted.png", content_type="image/png", content=b"\x89PNG\r\n\x1a\nfake")


@pytest.fixture
def r2_config() -> ImageHostingConfig:
    return ImageHostingConfig(
        default_provider=ImageHostingProvider.CLOUDFLARE_R2,
        cloudflare_r2=CloudflareR2Config(
            account_id="acc123",
            access_key_id="r2-key",
            secret_access_key="r2-secret",
            bucket="docs",
        ),
    )


@pytest.fixture
def oss_config() -> ImageHostingConfig:
    return ImageHostingConfig(
        default_provider=ImageHostingProvider.ALIYUN_OSS,
        aliyun_oss=AliyunOssConfig(
            region="oss-cn-hangzhou",
            access_key_id="oss-key",
            access_key_secret="oss-secret",
            bucket="docs-bucket",
        ),
    )
