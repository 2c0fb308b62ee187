from typing import Optional, Union

from pydantic import BaseModel

LocationValue = Optional[Union[int, float, str]]


class UploadResponse(BaseModel):
    success: bool = True
    message: str = "Image saved successfully"
    filepath: str
    latitude: LocationValue = None
    longitude: LocationValue = None
    accuracy: LocationValue = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
