"""Pydantic schemas and constants for the file explorer.

This module defines:
- FileExplorerResponse: one stored file as listed by GET /file/explorer
- UploadResponse: body returned after a successful upload
- SUPPORTED_EXTENSIONS / MEDIA_TYPES: the image whitelist and its content types

Records are serialised with camelCase keys (``fileName``, ``thumbnailFileName``)
to stay compatible with existing explorer clients.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Extensions accepted for upload (compared case-sensitively)
SUPPORTED_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp"})

# Marker inserted before the extension of every thumbnail file
THUMBNAIL_MARKER = ".thumbnail"

DEFAULT_MEDIA_TYPE = "application/octet-stream"

# Content type served inline for each known extension
MEDIA_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}

# Dimensions are not extracted from image data; listings carry this placeholder.
PLACEHOLDER_DIMENSION = "0"


def media_type_for(extension: str) -> str:
    """Return the content type to serve inline for a file extension.

    Examples:
        >>> media_type_for("jpg")
        'image/jpeg'
        >>> media_type_for("txt")
        'application/octet-stream'
    """
    return MEDIA_TYPES.get(extension, DEFAULT_MEDIA_TYPE)


class UploadStatus(str, Enum):
    SUCCESS = "SUCCESS"


class UploadResponse(BaseModel):
    """Response after a successful upload and thumbnail generation."""
    status: UploadStatus = Field(UploadStatus.SUCCESS, description="Upload outcome")


class FileExplorerResponse(BaseModel):
    """A stored original as listed by the explorer.

    Thumbnails never appear as records of their own; ``thumbnail_file_name``
    is derived from the original's name. ``image_height`` and ``image_width``
    are placeholders and always ``"0"``.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_name: str = Field(..., description="Filename within the upload root")
    file_extensions: str = Field(..., description="Text after the last '.'")
    thumbnail_file_name: str = Field(..., description="Derived thumbnail filename")
    file_size: int = Field(..., description="File size in bytes")
    image_height: str = Field(PLACEHOLDER_DIMENSION, description="Placeholder, not measured")
    image_width: str = Field(PLACEHOLDER_DIMENSION, description="Placeholder, not measured")
