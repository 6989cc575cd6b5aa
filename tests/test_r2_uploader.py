import asyncio
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from imagehost.core.constants import ImageHostingProvider
from imagehost.core.errors import ConfigError
from imagehost.integrations.storage.base import ImageFile, UploadContext
from imagehost.integrations.storage.r2 import CloudflareR2Uploader
from imagehost.schemas.hosting import CloudflareR2Config

KEY = "plaindoc/2024/01/01/1704067200000-abc12345.png"


def test_upload_puts_materialised_body(r2_config, png_file):
    client = MagicMock()
    with patch("imagehost.integrations.storage.r2.boto3.client", return_value=client) as make_client:
        result = asyncio.run(CloudflareR2Uploader().upload(UploadContext(r2_config, png_file, KEY)))

    kwargs = make_client.call_args.kwargs
    assert make_client.call_args.args == ("s3",)
    assert kwargs["endpoint_url"] == "https://acc123.r2.cloudflarestorage.com"
    assert kwargs["region_name"] == "auto"
    assert kwargs["aws_access_key_id"] == "r2-key"
    assert kwargs["aws_secret_access_key"] == "r2-secret"

    client.put_object.assert_called_once_with(
        Bucket="docs",
        Key=KEY,
        Body=png_file.content,
        ContentType="image/png",
    )
    assert isinstance(client.put_object.call_args.kwargs["Body"], bytes)
    assert result.provider == ImageHostingProvider.CLOUDFLARE_R2
    assert result.key == KEY
    assert result.url == f"https://acc123.r2.cloudflarestorage.com/docs/{KEY}"


def test_public_base_url_maps_to_bucket_root(r2_config, png_file):
    config = r2_config.model_copy(
        update={"cloudflare_r2": r2_config.cloudflare_r2.model_copy(update={"public_base_url": "https://img.example/"})}
    )
    with patch("imagehost.integrations.storage.r2.boto3.client", return_value=MagicMock()):
        result = asyncio.run(CloudflareR2Uploader().upload(UploadContext(config, png_file, KEY)))

    assert result.url == f"https://img.example/{KEY}"


def test_empty_content_type_defaults_to_octet_stream(r2_config, png_file):
    client = MagicMock()
    file = ImageFile(name="blob", content_type="", content=b"data")
    with patch("imagehost.integrations.storage.r2.boto3.client", return_value=client):
        asyncio.run(CloudflareR2Uploader().upload(UploadContext(r2_config, file, KEY)))

    assert client.put_object.call_args.kwargs["ContentType"] == "application/octet-stream"


@pytest.mark.parametrize("field", ["account_id", "access_key_id", "secret_access_key", "bucket"])
def test_missing_credential_raises_before_request(r2_config, png_file, field):
    config = r2_config.model_copy(update={"cloudflare_r2": r2_config.cloudflare_r2.model_copy(update={field: ""})})
    with patch("imagehost.integrations.storage.r2.boto3.client") as make_client:
        with pytest.raises(ConfigError):
            asyncio.run(CloudflareR2Uploader().upload(UploadContext(config, png_file, KEY)))

    make_client.assert_not_called()


def test_client_errors_propagate_unchanged(r2_config, png_file):
    boom = RuntimeError("AccessDenied")
    client = MagicMock()
    client.put_object.side_effect = boom
    with patch("imagehost.integrations.storage.r2.boto3.client", return_value=client):
        with pytest.raises(RuntimeError) as exc_info:
            asyncio.run(CloudflareR2Uploader().upload(UploadContext(r2_config, png_file, KEY)))

    assert exc_info.value is boom


def test_config_model_is_frozen():
    config = CloudflareR2Config(bucket="docs")
    with pytest.raises(PydanticValidationError):
        config.bucket = "other"
