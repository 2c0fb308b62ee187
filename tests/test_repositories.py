"""Tests for the filesystem repositories."""

import pytest

from photo_upload.repository.image_repository import ImageRepository
from photo_upload.repository.location_log_repository import LocationLogRepository


def test_ensure_upload_dir_creates_nested_dirs(tmp_path):
    repo = ImageRepository(tmp_path / "a" / "b" / "uploads")
    repo.ensure_upload_dir()
    repo.ensure_upload_dir()
    assert (tmp_path / "a" / "b" / "uploads").is_dir()


def test_save_never_overwrites(tmp_path):
    repo = ImageRepository(tmp_path)
    path = repo.save("photo.png", b"\x89PNG")
    assert path.read_bytes() == b"\x89PNG"
    with pytest.raises(FileExistsError):
        repo.save("photo.png", b"other")
    assert path.read_bytes() == b"\x89PNG"


def test_log_append_keeps_previous_lines(tmp_path):
    repo = LocationLogRepository(tmp_path / "location_log.txt")
    repo.append("first\n")
    repo.append("second\n")
    assert (tmp_path / "location_log.txt").read_text(encoding="utf-8") == "first\nsecond\n"
