"""Tests for request body parsing."""

import pytest
from pydantic import ValidationError

from photo_upload.errors import BadRequest
from photo_upload.request.upload_request import UploadRequest, parse_upload_request
from photo_upload.response import upload_response
from photo_upload.usecase import upload_usecase


def test_parse_minimal_body():
    req = parse_upload_request(b'{"imageData": "QUJD"}')
    assert req.image_data == "QUJD"
    assert req.latitude is None
    assert req.longitude is None
    assert req.accuracy is None


def test_parse_keeps_location_values_as_sent():
    req = parse_upload_request(
        b'{"imageData": "QUJD", "latitude": "40.0", "longitude": -73.25, "accuracy": 10, "extra": 1}'
    )
    assert req.latitude == "40.0"
    assert isinstance(req.latitude, str)
    assert req.longitude == -73.25
    assert req.accuracy == 10
    assert isinstance(req.accuracy, int)


@pytest.mark.parametrize(
    "raw",
    [b"{", b"null", b'{"imageData": ""}', b'{"imageData": ["QUJD"]}', b'{"imageData": "QUJD", "accuracy": 1e400}'],
)
def test_parse_rejects_invalid_body(raw):
    with pytest.raises(BadRequest) as exc:
        parse_upload_request(raw)
    assert exc.value.status_code == 400
    assert exc.value.message == "Invalid JSON or missing imageData"


def test_image_data_only_accepted_under_wire_name():
    with pytest.raises(ValidationError):
        UploadRequest(image_data="QUJD")


def test_location_alias_shared_with_usecase():
    assert upload_usecase.LocationValue is upload_response.LocationValue
