import base64
import hashlib
import hmac
from datetime import UTC, datetime
from email.utils import format_datetime

from imagehost.core.errors import UnsupportedEnvironmentError


class HmacSha1Signer:
    """Signs OSS string-to-sign payloads with HMAC-SHA1."""

    algorithm = "sha1"

    def __init__(self) -> None:
        if self.algorithm not in hashlib.algorithms_available:
            raise UnsupportedEnvironmentError("HMAC-SHA1 is not available; cannot sign OSS uploads")

    def sign(self, secret: str, payload: str) -> str:
        digest = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha1).digest()
        return base64.b64encode(digest).decode("ascii")


def format_http_date(now: datetime | None = None) -> str:
    moment = (now or datetime.now(UTC)).astimezone(UTC)
    return format_datetime(moment, usegmt=True)


def build_oss_string_to_sign(content_type: str, date: str, bucket: str, object_key: str) -> str:
    # The resource is the decoded key even though the request path is percent-encoded.
    return f"PUT\n\n{content_type}\n{date}\n/{bucket}/{object_key}"
