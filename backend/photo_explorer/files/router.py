"""FastAPI router for the file explorer endpoints.

Endpoints:
    POST /file/upload                Upload an image and generate its thumbnail
    GET  /file/explorer              List stored originals
    GET  /file/view/{file_name}      Serve a stored file inline
    GET  /file/download/{file_name}  Serve a stored file as an attachment
"""
import logging
from pathlib import Path
from typing import List

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import FileResponse

from .errors import (
    FileTooLargeError,
    InvalidFileNameError,
    MissingOriginalError,
    StoredFileNotFoundError,
    UnsupportedFileTypeError,
)
from .paths import file_extension
from .schemas import (
    DEFAULT_MEDIA_TYPE,
    FileExplorerResponse,
    UploadResponse,
    media_type_for,
)
from .service import FileStorageService, get_storage_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/file", tags=["files"])


def _service() -> FileStorageService:
    service = get_storage_service()
    if service is None:
        logger.warning("[files] Storage service not configured, returning 503")
        raise HTTPException(status_code=503, detail="File storage not configured")
    return service


@router.post("/upload", response_model=UploadResponse)
async def upload_file(file: UploadFile = File(...)) -> UploadResponse:
    """Upload an image file.

    Only jpg, jpeg, png, gif and webp files declared as ``image/*`` are
    accepted. The file is stored under its own name (replacing any previous
    file of that name) and a thumbnail is written next to it.

    Args:
        file: The multipart ``file`` field.

    Returns:
        ``{"status": "SUCCESS"}``

    Raises:
        HTTPException 400: Unsupported file type or invalid file name
        HTTPException 413: File exceeds the configured size limit
        HTTPException 500: Writing the file or its thumbnail failed
    """
    service = _service()
    filename = file.filename or "unnamed"
    content = await file.read()

    try:
        await service.save_upload(
            filename=filename,
            content_type=file.content_type,
            content=content,
        )
    except UnsupportedFileTypeError as e:
        raise HTTPException(status_code=400, detail="unsupported file type") from e
    except InvalidFileNameError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except FileTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e)) from e
    except MissingOriginalError as e:
        logger.error("Thumbnail failed for %s: %s", filename, e)
        raise HTTPException(status_code=500, detail=str(e)) from e
    except Exception as e:
        logger.error(f"File upload failed: {e}")
        raise HTTPException(status_code=500, detail=f"Upload failed: {str(e)}") from e

    return UploadResponse()


@router.get("/explorer", response_model=List[FileExplorerResponse])
async def file_explorer() -> List[FileExplorerResponse]:
    """List every stored original with its derived thumbnail name."""
    return await _service().list_files()


async def _locate_or_404(file_name: str) -> Path:
    try:
        return await _service().locate_file(file_name)
    except StoredFileNotFoundError as e:
        raise HTTPException(status_code=404, detail="File not found") from e


@router.get("/view/{file_name}")
async def view_file(file_name: str) -> FileResponse:
    """Serve a stored file inline with a content type matching its extension.

    Raises:
        HTTPException 404: If file not found
    """
    logger.info("Viewing file: %s", file_name)
    path = await _locate_or_404(file_name)
    return FileResponse(
        path,
        media_type=media_type_for(file_extension(file_name)),
        filename=file_name,
        content_disposition_type="inline",
    )


@router.get("/download/{file_name}")
async def download_file(file_name: str) -> FileResponse:
    """Serve a stored file as an ``application/octet-stream`` attachment.

    Raises:
        HTTPException 404: If file not found
    """
    logger.info("Downloading file: %s", file_name)
    path = await _locate_or_404(file_name)
    return FileResponse(
        path,
        media_type=DEFAULT_MEDIA_TYPE,
        filename=file_name,
        content_disposition_type="attachment",
    )
