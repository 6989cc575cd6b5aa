from dataclasses import dataclass
from typing import Protocol

from imagehost.core.constants import ImageHostingProvider
from imagehost.schemas.hosting import ImageHostingConfig


@dataclass(frozen=True)
class ImageFile:
    name: str
    content_type: str
    content: bytes

    async def read(self) -> bytes:
        return self.content


@dataclass(frozen=True)
class UploadContext:
    config: ImageHostingConfig
    file: ImageFile
    object_key: str


@dataclass(frozen=True)
class UploadResult:
    provider: ImageHostingProvider
    key: str
    url: str


class ImageUploader(Protocol):
    provider: ImageHostingProvider

    async def upload(self, context: UploadContext) -> UploadResult:
        ...
