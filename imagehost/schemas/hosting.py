from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from imagehost.core.constants import DEFAULT_PROVIDER, ImageHostingProvider


class _HostingModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class CloudflareR2Config(_HostingModel):
    account_id: str = ""
    access_key_id: str = ""
    secret_access_key: str = ""
    bucket: str = ""
    public_base_url: str = ""


class AliyunOssConfig(_HostingModel):
    region: str = ""
    access_key_id: str = ""
    access_key_secret: str = ""
    bucket: str = ""
    endpoint: str = ""
    public_base_url: str = ""


class ImageHostingConfig(_HostingModel):
    # Pasted images are uploaded to this provider automatically.
    default_provider: ImageHostingProvider = DEFAULT_PROVIDER
    cloudflare_r2: CloudflareR2Config = CloudflareR2Config()
    aliyun_oss: AliyunOssConfig = AliyunOssConfig()


DEFAULT_IMAGE_HOSTING_CONFIG = ImageHostingConfig()

_PROVIDER_VALUES = {item.value for item in ImageHostingProvider}


def _as_mapping(value: Any) -> Mapping[str, Any] | None:
    if isinstance(value, Mapping):
        return value
    return None


def _read_string(record: Mapping[str, Any] | None, key: str) -> str:
    if record is None:
        return ""
    value = record.get(key)
    return value if isinstance(value, str) else ""


def _read_section(record: Mapping[str, Any] | None, model: type[_HostingModel]) -> dict[str, str]:
    return {
        field.alias or name: _read_string(record, field.alias or name)
        for name, field in model.model_fields.items()
    }


def _resolve_provider(root: Mapping[str, Any] | None) -> ImageHostingProvider:
    if root is None:
        return DEFAULT_PROVIDER
    # Older payloads stored the selector as activeProvider.
    for key in ("defaultProvider", "activeProvider"):
        candidate = root.get(key)
        if isinstance(candidate, str) and candidate in _PROVIDER_VALUES:
            return ImageHostingProvider(candidate)
    return DEFAULT_PROVIDER


def normalize_image_hosting_config(raw: Any) -> ImageHostingConfig:
    """Coerce an untyped settings payload into an ImageHostingConfig.

    Unknown or non-string fields become empty strings and an unset or
    unrecognised provider selector falls back to Cloudflare R2.
    """
    root = _as_mapping(raw)
    return ImageHostingConfig(
        default_provider=_resolve_provider(root),
        cloudflare_r2=CloudflareR2Config.model_validate(
            _read_section(_as_mapping(root.get("cloudflareR2")) if root else None, CloudflareR2Config)
        ),
        aliyun_oss=AliyunOssConfig.model_validate(
            _read_section(_as_mapping(root.get("aliyunOss")) if root else None, AliyunOssConfig)
        ),
    )
