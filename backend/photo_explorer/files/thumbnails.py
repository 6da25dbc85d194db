"""Thumbnail generation with Pillow.

Thumbnails are written next to their original as ``<name>.thumbnail.<ext>``,
re-encoded in the original's format. Everything here is blocking and is
meant to run on the storage worker pool, never on the event loop.
"""
import logging
from pathlib import Path

from PIL import Image, ImageOps

from .errors import MissingOriginalError

logger = logging.getLogger(__name__)

# Pillow save() rejects alpha/palette images for these formats
_RGB_ONLY_FORMATS = {"JPEG"}


def format_for(path: Path) -> str:
    """Pillow format name for a path's extension, e.g. ``.jpg`` → ``JPEG``."""
    image_format = Image.registered_extensions().get(path.suffix.lower())
    if image_format is None:
        raise ValueError(f"No image format registered for extension {path.suffix!r}")
    return image_format


def create_thumbnail(original: Path, target: Path, size: int = 100) -> Path:
    """Write a thumbnail of *original* to *target*, fitting in size×size.

    The image is scaled up or down until it touches the box, keeping its
    aspect ratio, so a 40x30 original yields a 100x75 thumbnail. EXIF
    orientation is applied before resizing.

    Raises:
        MissingOriginalError: *original* does not exist.
        PIL.UnidentifiedImageError: *original* is not a decodable image.
    """
    if not original.exists():
        logger.error("Original file does not exist: %s", original)
        raise MissingOriginalError(f"Original file does not exist: {original.name}")

    image_format = format_for(target)
    logger.info("Creating thumbnail for %s at %s", original.name, target)

    with Image.open(original) as img:
        thumb = ImageOps.exif_transpose(img)
        thumb = ImageOps.contain(thumb, (size, size), Image.LANCZOS)
        if image_format in _RGB_ONLY_FORMATS and thumb.mode not in ("RGB", "L"):
            thumb = thumb.convert("RGB")
        thumb.save(target, format=image_format)

    return target
