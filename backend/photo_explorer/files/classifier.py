"""Upload whitelist: decides whether an uploaded part is a storable image."""
import logging
from typing import Optional

from .errors import UnsupportedFileTypeError
from .paths import file_extension
from .schemas import SUPPORTED_EXTENSIONS

logger = logging.getLogger(__name__)

IMAGE_PREFIX = "image/"
VIDEO_PREFIX = "video/"


def is_supported(content_type: Optional[str], filename: str) -> bool:
    """Return True if the declared content type and extension are both allowed.

    Rules, in order:
    - the content type must start with ``image/`` (None never does)
    - it must not start with ``video/``
    - the extension must be one of jpg, jpeg, png, gif, webp
    """
    content_type = content_type or ""
    extension = file_extension(filename)

    if not content_type.startswith(IMAGE_PREFIX):
        logger.error("File type not supported: %s (content type %r)", extension, content_type)
        return False
    if content_type.startswith(VIDEO_PREFIX):
        logger.error("File type not supported: %s (content type %r)", extension, content_type)
        return False
    if extension not in SUPPORTED_EXTENSIONS:
        logger.error("File type not supported: %s", extension)
        return False
    return True


def ensure_supported(content_type: Optional[str], filename: str) -> None:
    """Raise UnsupportedFileTypeError unless :func:`is_supported` accepts the upload."""
    if not is_supported(content_type, filename):
        raise UnsupportedFileTypeError("File type not supported")
