from fastapi import HTTPException, status


class UploadError(HTTPException):
    """Base error for the upload endpoint; rendered as {success: false, message}."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(status_code=self.status_code, detail=message)
        self.message = message


class MethodNotAllowed(UploadError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED


class BadRequest(UploadError):
    status_code = status.HTTP_400_BAD_REQUEST


class InternalError(UploadError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


METHOD_NOT_ALLOWED_MESSAGE = "Only POST method allowed"
INVALID_REQUEST_MESSAGE = "Invalid JSON or missing imageData"
DECODE_FAILED_MESSAGE = "Failed to decode image data"
CREATE_DIR_FAILED_MESSAGE = "Failed to create uploads directory"
FILENAME_FAILED_MESSAGE = "Failed to generate image filename"
SAVE_FAILED_MESSAGE = "Failed to save image file"
