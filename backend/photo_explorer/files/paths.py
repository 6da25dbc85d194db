"""Filename → path mapping for the flat upload directory."""
from pathlib import Path
from typing import Union

from .errors import InvalidFileNameError
from .schemas import THUMBNAIL_MARKER


def file_extension(filename: str) -> str:
    """Text after the last '.', or '' when the name has none."""
    _, dot, ext = filename.rpartition(".")
    return ext if dot else ""


def thumbnail_name(filename: str) -> str:
    """``cat.jpg`` → ``cat.thumbnail.jpg``."""
    stem, dot, ext = filename.rpartition(".")
    if not dot:
        return f"{filename}{THUMBNAIL_MARKER}"
    return f"{stem}{THUMBNAIL_MARKER}.{ext}"


def is_thumbnail(filename: str) -> bool:
    return THUMBNAIL_MARKER in filename


class StoragePaths:
    """Resolves logical filenames to absolute paths under the upload root.

    Only plain names are accepted: anything with a path separator, or the
    special names ``.`` and ``..``, raises InvalidFileNameError.
    """

    def __init__(self, root: Union[str, Path]) -> None:
        self._root = Path(root).expanduser().resolve()

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, filename: str) -> Path:
        if (
            not filename
            or filename in (".", "..")
            or "/" in filename
            or "\\" in filename
            or "\x00" in filename
        ):
            raise InvalidFileNameError(f"Invalid file name: {filename!r}")
        return self._root / filename

    def thumbnail_path(self, filename: str) -> Path:
        return self.resolve(thumbnail_name(filename))

    def ensure_root(self) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
