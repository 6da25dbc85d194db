"""Shared test fixtures and configuration for backend tests."""
import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from photo_explorer.config import StorageSettings
from photo_explorer.files.service import (
    FileStorageService,
    get_storage_service,
    set_storage_service,
)
from photo_explorer.main import app


def make_image_bytes(image_format: str, size=(300, 200), mode: str = "RGB") -> bytes:
    """Encode a solid-colour image in memory, e.g. make_image_bytes("PNG")."""
    colors = {"RGB": (200, 40, 40), "RGBA": (200, 40, 40, 128), "L": 200, "P": 1}
    img = Image.new(mode, size, colors[mode])
    buffer = io.BytesIO()
    img.save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture
def upload_dir(tmp_path):
    """Empty upload root for one test."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def storage_service(upload_dir):
    """A FileStorageService rooted at the per-test upload directory."""
    service = FileStorageService(StorageSettings(upload_path=str(upload_dir)))
    yield service
    service.close()


@pytest.fixture
def api_client(storage_service):
    """Provide a TestClient whose file endpoints use the per-test service."""
    original = get_storage_service()
    set_storage_service(storage_service)
    yield TestClient(app)
    set_storage_service(original)
