from enum import StrEnum


class ErrorCode(StrEnum):
    VALIDATION_FAILED = "VALIDATION_FAILED"
    CONFIG_INCOMPLETE = "CONFIG_INCOMPLETE"
    UNSUPPORTED_ENVIRONMENT = "UNSUPPORTED_ENVIRONMENT"
    UPLOAD_FAILED = "UPLOAD_FAILED"


class ImageHostingError(Exception):
    code: ErrorCode = ErrorCode.UPLOAD_FAILED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ImageHostingError):
    code = ErrorCode.VALIDATION_FAILED


class ConfigError(ImageHostingError):
    code = ErrorCode.CONFIG_INCOMPLETE


class UnsupportedEnvironmentError(ImageHostingError):
    code = ErrorCode.UNSUPPORTED_ENVIRONMENT


class UploadError(ImageHostingError):
    """Non-2xx response from a storage backend."""

    code = ErrorCode.UPLOAD_FAILED

    def __init__(self, provider: str, status: int, body: str) -> None:
        self.provider = provider
        self.status = status
        self.body = body
        super().__init__(f"{provider} upload failed ({status}): {body or 'unknown error'}")
