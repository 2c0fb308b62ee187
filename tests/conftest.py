"""Pytest configuration and fixtures."""

import base64

import pytest
from fastapi.testclient import TestClient

from photo_upload.config import load_settings
from photo_upload.main import create_app

# 1x1 の透過 PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)
PNG_B64 = base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir):
    return load_settings(upload_dir=upload_dir)


@pytest.fixture
def app(upload_dir):
    return create_app(upload_dir=upload_dir)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def log_path(upload_dir):
    return upload_dir / "location_log.txt"
