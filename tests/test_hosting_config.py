from imagehost.core.config import Settings
from imagehost.core.constants import ImageHostingProvider
from imagehost.schemas.hosting import DEFAULT_IMAGE_HOSTING_CONFIG, normalize_image_hosting_config


def test_non_mapping_input_yields_defaults():
    for raw in (None, "text", 42, ["cloudflare-r2"]):
        assert normalize_image_hosting_config(raw) == DEFAULT_IMAGE_HOSTING_CONFIG


def test_default_provider_is_cloudflare_r2():
    config = normalize_image_hosting_config({})
    assert config.default_provider == ImageHostingProvider.CLOUDFLARE_R2
    assert config.cloudflare_r2.bucket == ""
    assert config.aliyun_oss.endpoint == ""


def test_legacy_active_provider_is_honoured():
    config = normalize_image_hosting_config({"activeProvider": "aliyun-oss"})
    assert config.default_provider == ImageHostingProvider.ALIYUN_OSS


def test_default_provider_takes_precedence_over_legacy_field():
    config = normalize_image_hosting_config({"defaultProvider": "cloudflare-r2", "activeProvider": "aliyun-oss"})
    assert config.default_provider == ImageHostingProvider.CLOUDFLARE_R2


def test_unknown_provider_falls_back():
    config = normalize_image_hosting_config({"defaultProvider": "imgur", "activeProvider": 3})
    assert config.default_provider == ImageHostingProvider.CLOUDFLARE_R2


def test_fields_are_coerced_to_strings():
    config = normalize_image_hosting_config(
        {
            "defaultProvider": "aliyun-oss",
            "cloudflareR2": {"accountId": "acc", "bucket": 12, "extra": "ignored"},
            "aliyunOss": {"accessKeySecret": "s", "region": None, "publicBaseUrl": "https://img.example"},
        }
    )
    assert config.cloudflare_r2.account_id == "acc"
    assert config.cloudflare_r2.bucket == ""
    assert config.aliyun_oss.access_key_secret == "s"
    assert config.aliyun_oss.region == ""
    assert config.aliyun_oss.public_base_url == "https://img.example"


def test_config_serialises_with_camel_case_aliases():
    payload = normalize_image_hosting_config({"cloudflareR2": {"accountId": "acc"}}).model_dump(
        by_alias=True, mode="json"
    )
    assert payload["defaultProvider"] == "cloudflare-r2"
    assert payload["cloudflareR2"]["accountId"] == "acc"
    assert set(payload["aliyunOss"]) == {
        "region",
        "accessKeyId",
        "accessKeySecret",
        "bucket",
        "endpoint",
        "publicBaseUrl",
    }


def test_settings_build_server_side_config():
    settings = Settings(
        _env_file=None,
        image_hosting_default_provider="aliyun-oss",
        oss_bucket="docs-bucket",
        oss_region="oss-cn-shanghai",
        r2_account_id="acc",
    )
    config = settings.image_hosting_config()
    assert config.default_provider == ImageHostingProvider.ALIYUN_OSS
    assert config.aliyun_oss.bucket == "docs-bucket"
    assert config.aliyun_oss.region == "oss-cn-shanghai"
    assert config.cloudflare_r2.account_id == "acc"
