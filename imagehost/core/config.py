from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from imagehost.schemas.hosting import ImageHostingConfig, normalize_image_hosting_config

BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: Literal["dev", "staging", "prod"] = "dev"
    app_name: str = "PlainDoc Image Hosting"
    api_prefix: str = "/api/v1"
    debug: bool = False
    cors_allow_origins: str = "http://localhost:5173,http://localhost:3000"
    log_level: str = "INFO"

    # Server-side hosting config, used when a request carries none.
    image_hosting_default_provider: str = ""

    r2_account_id: str = ""
    r2_access_key_id: str = ""
    r2_secret_access_key: str = ""
    r2_bucket: str = ""
    r2_public_base_url: str = ""

    oss_region: str = ""
    oss_access_key_id: str = ""
    oss_access_key_secret: str = ""
    oss_bucket: str = ""
    oss_endpoint: str = ""
    oss_public_base_url: str = ""

    def image_hosting_config(self) -> ImageHostingConfig:
        return normalize_image_hosting_config(
            {
                "defaultProvider": self.image_hosting_default_provider,
                "cloudflareR2": {
                    "accountId": self.r2_account_id,
                    "accessKeyId": self.r2_access_key_id,
                    "secretAccessKey": self.r2_secret_access_key,
                    "bucket": self.r2_bucket,
                    "publicBaseUrl": self.r2_public_base_url,
                },
                "aliyunOss": {
                    "region": self.oss_region,
                    "accessKeyId": self.oss_access_key_id,
                    "accessKeySecret": self.oss_access_key_secret,
                    "bucket": self.oss_bucket,
                    "endpoint": self.oss_endpoint,
                    "publicBaseUrl": self.oss_public_base_url,
                },
            }
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
