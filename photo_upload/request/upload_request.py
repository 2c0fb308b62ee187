import json
from typing import Annotated, Optional, Union

from pydantic import AllowInfNan, BaseModel, ConfigDict, Field, StrictInt, StrictStr, Strict, ValidationError

from photo_upload.errors import BadRequest, INVALID_REQUEST_MESSAGE

# 位置情報は数値でも文字列でも受け付け、受け取った値のまま返す（NaN / Infinity は不可）
StrictLocationValue = Optional[Union[StrictInt, Annotated[float, Strict(), AllowInfNan(False)], StrictStr]]


class UploadRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    image_data: StrictStr = Field(..., alias="imageData", min_length=1)
    latitude: StrictLocationValue = None
    longitude: StrictLocationValue = None
    accuracy: StrictLocationValue = None


def parse_upload_request(raw: bytes) -> UploadRequest:
    """Parse a raw request body into an UploadRequest, raising BadRequest on any problem."""
    try:
        body = json.loads(raw)
    except ValueError:
        raise BadRequest(INVALID_REQUEST_MESSAGE)
    if not isinstance(body, dict):
        raise BadRequest(INVALID_REQUEST_MESSAGE)

    try:
        return UploadRequest.model_validate(body)
    except ValidationError:
        raise BadRequest(INVALID_REQUEST_MESSAGE)
