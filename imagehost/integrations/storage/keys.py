import random
import re
import string
from datetime import datetime
from urllib.parse import quote

from imagehost.core.constants import DEFAULT_EXTENSION, MIME_TO_EXTENSION, OBJECT_KEY_PREFIX
from imagehost.integrations.storage.base import ImageFile

EXTENSION_RE = re.compile(r"\.([a-zA-Z0-9]+)$")
SUFFIX_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 8

# Characters encodeURIComponent leaves untouched besides alphanumerics and "-_.~".
_SEGMENT_SAFE = "!'()*"


def resolve_file_extension(file: ImageFile) -> str:
    match = EXTENSION_RE.search(file.name or "")
    if match:
        return match.group(1).lower()
    return MIME_TO_EXTENSION.get(file.content_type, DEFAULT_EXTENSION)


def random_suffix(rng: random.Random | None = None) -> str:
    source = rng or random
    return "".join(source.choices(SUFFIX_ALPHABET, k=SUFFIX_LENGTH))


def build_object_key(
    file: ImageFile,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> str:
    """Build a date-partitioned object key such as
    ``plaindoc/2024/01/31/1706659200000-k3v9x0qa.png``.

    The date folders follow the local calendar day of ``now``.
    """
    moment = now or datetime.now().astimezone()
    unix_millis = int(moment.timestamp() * 1000)
    extension = resolve_file_extension(file)
    return (
        f"{OBJECT_KEY_PREFIX}/{moment.year:04d}/{moment.month:02d}/{moment.day:02d}/"
        f"{unix_millis}-{random_suffix(rng)}.{extension}"
    )


def encode_object_key(object_key: str) -> str:
    return "/".join(quote(segment, safe=_SEGMENT_SAFE) for segment in object_key.split("/"))
