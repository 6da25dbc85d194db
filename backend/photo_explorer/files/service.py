"""File storage service for Photo Explorer.

Handles persisting uploads, thumbnail generation, directory listing and
locating stored files for serving. Files live flat in the configured upload root:
    <upload_path>/<name>.<ext>
    <upload_path>/<name>.thumbnail.<ext>

All blocking work (disk I/O, image decode/resize/encode) runs on a bounded
thread pool owned by the service so request coroutines never block the
event loop. There is no locking between requests: two uploads of the same
name race and the last writer wins, for the original and its thumbnail.

A module-level singleton is initialised in ``photo_explorer/main.py`` from config.
"""
import asyncio
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from photo_explorer.config import StorageSettings

from .classifier import ensure_supported
from .errors import (
    FileTooLargeError,
    InvalidFileNameError,
    StoredFileNotFoundError,
)
from .paths import StoragePaths, file_extension, is_thumbnail, thumbnail_name
from .schemas import FileExplorerResponse
from .thumbnails import create_thumbnail

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_service: Optional["FileStorageService"] = None


def get_storage_service() -> Optional["FileStorageService"]:
    """Return the global FileStorageService, or None if not yet initialised."""
    return _service


def set_storage_service(service: Optional["FileStorageService"]) -> None:
    """Set (or clear) the global FileStorageService instance."""
    global _service
    _service = service


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class FileStorageService:
    """Stores uploaded images and their thumbnails under one directory.

    Args:
        settings: Storage settings; ``upload_path`` is the upload root.
        executor: Worker pool for blocking work. When omitted the service
            creates one with ``settings.worker_threads`` threads and shuts
            it down in :meth:`close`.
    """

    def __init__(
        self,
        settings: StorageSettings,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self._settings = settings
        self._paths = StoragePaths(settings.upload_path)
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=settings.worker_threads,
            thread_name_prefix="photo-explorer-io",
        )
        self._paths.ensure_root()
        logger.info(
            "[FileStorageService] Initialized with upload_path=%s workers=%d",
            self._paths.root,
            settings.worker_threads,
        )

    @property
    def paths(self) -> StoragePaths:
        return self._paths

    @property
    def settings(self) -> StorageSettings:
        return self._settings

    def close(self) -> None:
        """Shut down the worker pool if this service created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    async def _run(self, func: Callable[..., T], *args) -> T:
        return await asyncio.get_event_loop().run_in_executor(
            self._executor, lambda: func(*args)
        )

    # -----------------------------------------------------------------------
    # Upload pipeline
    # -----------------------------------------------------------------------

    async def save_upload(
        self,
        filename: str,
        content_type: Optional[str],
        content: bytes,
    ) -> FileExplorerResponse:
        """Validate, persist and thumbnail an uploaded image.

        Steps run strictly in order; a failure stops the pipeline and leaves
        whatever already reached disk in place.

        Args:
            filename: Name to store the file under (also the public name).
            content_type: Content type declared by the client for the part.
            content: File content as bytes.

        Returns:
            The explorer record of the stored original.

        Raises:
            UnsupportedFileTypeError: Content type or extension not allowed.
            InvalidFileNameError: Name is not a plain filename.
            FileTooLargeError: Content exceeds ``max_upload_bytes``.
            MissingOriginalError: Original disappeared before thumbnailing.
            OSError: Writing the original or thumbnail failed.
        """
        logger.info(
            "Received file: %s (%d bytes, type %s)", filename, len(content), content_type
        )
        ensure_supported(content_type, filename)
        target = self._paths.resolve(filename)

        size_bytes = len(content)
        if size_bytes > self._settings.max_upload_bytes:
            raise FileTooLargeError(
                f"File size ({size_bytes} bytes) exceeds limit "
                f"({self._settings.max_upload_bytes} bytes)"
            )

        logger.info("Uploading file to disk: %s", target)
        try:
            await self._run(target.write_bytes, content)
        except OSError as exc:
            logger.error("Failed to write %s: %s", target, exc)
            raise

        thumbnail = self._paths.thumbnail_path(filename)
        await self._run(
            create_thumbnail, target, thumbnail, self._settings.thumbnail_size
        )
        logger.info("Saved file: %s with thumbnail %s", target.name, thumbnail.name)

        return await self._run(self._describe, target)

    # -----------------------------------------------------------------------
    # Listing
    # -----------------------------------------------------------------------

    async def list_files(self) -> List[FileExplorerResponse]:
        """List stored originals (never thumbnails) under the upload root."""
        return await self._run(self._scan)

    def _scan(self) -> List[FileExplorerResponse]:
        root = self._paths.root
        if not root.is_dir():
            return []

        max_depth = self._settings.explorer_max_depth
        found: List[Path] = []
        for dirpath, dirnames, filenames in os.walk(root):
            depth = len(Path(dirpath).relative_to(root).parts)
            if depth + 1 >= max_depth:
                dirnames[:] = []
            for name in filenames:
                path = Path(dirpath) / name
                if is_thumbnail(name) or not path.is_file():
                    continue
                found.append(path)

        found.sort(key=lambda p: p.relative_to(root).as_posix())
        return [self._describe(path) for path in found]

    @staticmethod
    def _describe(path: Path) -> FileExplorerResponse:
        name = path.name
        return FileExplorerResponse(
            file_name=name,
            file_extensions=file_extension(name),
            thumbnail_file_name=thumbnail_name(name),
            file_size=path.stat().st_size,
        )

    # -----------------------------------------------------------------------
    # Reading
    # -----------------------------------------------------------------------

    async def locate_file(self, filename: str) -> Path:
        """Return the path of a stored file (original or thumbnail).

        Raises:
            StoredFileNotFoundError: No regular file with that name exists.
        """
        try:
            path = self._paths.resolve(filename)
        except InvalidFileNameError as exc:
            raise StoredFileNotFoundError(str(exc)) from exc

        if not await self._run(path.is_file):
            logger.error("File not found: %s", path)
            raise StoredFileNotFoundError(f"File not found: {filename}")
        return path
