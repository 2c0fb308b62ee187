import os
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from photo_upload.config import UploadSettings, load_settings
from photo_upload.errors import UploadError, MethodNotAllowed, METHOD_NOT_ALLOWED_MESSAGE
from photo_upload.logging_utils import logger
from photo_upload.request.upload_request import parse_upload_request
from photo_upload.response.upload_response import ErrorResponse, UploadResponse
from photo_upload.usecase.upload_usecase import UploadUsecase

UPLOAD_PATH = "/save_photo"
LEGACY_UPLOAD_PATH = "/save_photo.php"

# POST 以外も受けて 405 を JSON で返すため、全メソッドをルーティングする
ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def read_body(request: Request) -> bytes:
    return await request.body()


def get_settings(request: Request) -> UploadSettings:
    return request.app.state.settings


def save_photo(
    request: Request,
    raw: bytes = Depends(read_body),
    settings: UploadSettings = Depends(get_settings),
) -> UploadResponse:
    """Receive a base64 image with optional location and store it under the upload directory."""
    if request.method != "POST":
        raise MethodNotAllowed(METHOD_NOT_ALLOWED_MESSAGE)
    payload = parse_upload_request(raw)
    return UploadUsecase(settings).execute(payload)


async def upload_error_handler(request: Request, exc: UploadError) -> JSONResponse:
    logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=exc.message).model_dump(),
    )


# ルーティングされないメソッド（TRACE や独自メソッド）も同じ 405 ボディで返す
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405 and request.url.path in (UPLOAD_PATH, LEGACY_UPLOAD_PATH):
        return await upload_error_handler(request, MethodNotAllowed(METHOD_NOT_ALLOWED_MESSAGE))
    return await http_exception_handler(request, exc)


def create_app(
    upload_dir: Optional[os.PathLike] = None,
    public_prefix: Optional[str] = None,
    log_filename: Optional[str] = None,
    map_link_prefix: Optional[str] = None,
) -> FastAPI:
    app = FastAPI(title="Photo Upload API")
    app.state.settings = load_settings(
        upload_dir=upload_dir,
        public_prefix=public_prefix,
        log_filename=log_filename,
        map_link_prefix=map_link_prefix,
    )

    app.add_exception_handler(UploadError, upload_error_handler)
    app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)
    app.add_api_route(UPLOAD_PATH, save_photo, methods=ROUTED_METHODS, response_model=UploadResponse)
    app.add_api_route(
        LEGACY_UPLOAD_PATH,
        save_photo,
        methods=ROUTED_METHODS,
        response_model=UploadResponse,
        include_in_schema=False,
    )

    # アプリごとにレジストリを分けて /metrics を公開
    Instrumentator(registry=CollectorRegistry()).instrument(app).expose(app)
    return app


app = create_app()
