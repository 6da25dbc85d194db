"""Tests for filename → path mapping."""
import pytest

from photo_explorer.files.errors import InvalidFileNameError
from photo_explorer.files.paths import (
    StoragePaths,
    file_extension,
    is_thumbnail,
    thumbnail_name,
)


def test_file_extension_is_text_after_last_dot():
    assert file_extension("cat.jpg") == "jpg"
    assert file_extension("my.holiday.photo.png") == "png"
    assert file_extension("README") == ""


def test_thumbnail_name_inserts_marker_before_extension():
    assert thumbnail_name("cat.jpg") == "cat.thumbnail.jpg"
    assert thumbnail_name("my.holiday.webp") == "my.holiday.thumbnail.webp"


def test_thumbnail_name_without_extension_appends_marker():
    assert thumbnail_name("README") == "README.thumbnail"


def test_is_thumbnail_matches_marker_anywhere():
    assert is_thumbnail("cat.thumbnail.jpg")
    assert is_thumbnail("odd.thumbnails.png")
    assert not is_thumbnail("cat.jpg")


class TestStoragePaths:
    def test_resolve_joins_root_and_name(self, tmp_path):
        paths = StoragePaths(tmp_path)
        assert paths.resolve("cat.jpg") == tmp_path.resolve() / "cat.jpg"

    def test_thumbnail_path(self, tmp_path):
        paths = StoragePaths(tmp_path)
        assert paths.thumbnail_path("cat.jpg") == tmp_path.resolve() / "cat.thumbnail.jpg"

    @pytest.mark.parametrize("name", [
        "",
        ".",
        "..",
        "../escape.jpg",
        "nested/cat.jpg",
        "..\\escape.jpg",
        "/etc/passwd",
    ])
    def test_resolve_rejects_anything_but_plain_names(self, tmp_path, name):
        with pytest.raises(InvalidFileNameError):
            StoragePaths(tmp_path).resolve(name)

    def test_ensure_root_creates_missing_directory(self, tmp_path):
        root = tmp_path / "a" / "b"
        StoragePaths(root).ensure_root()
        assert root.is_dir()
