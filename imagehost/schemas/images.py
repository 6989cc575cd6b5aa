from pydantic import BaseModel

from imagehost.core.constants import ImageHostingProvider


class UploadImageResponse(BaseModel):
    provider: ImageHostingProvider
    key: str
    url: str


class ErrorDetail(BaseModel):
    code: str
    message: str
