# usecase/upload_usecase.py
import base64
import binascii
import re
import secrets
from datetime import datetime
from typing import Callable, Optional

from photo_upload.config import UploadSettings
from photo_upload.errors import (
    BadRequest,
    InternalError,
    CREATE_DIR_FAILED_MESSAGE,
    DECODE_FAILED_MESSAGE,
    FILENAME_FAILED_MESSAGE,
    SAVE_FAILED_MESSAGE,
)
from photo_upload.logging_utils import log_duration, logger
from photo_upload.repository.image_repository import ImageRepository
from photo_upload.repository.location_log_repository import LocationLogRepository
from photo_upload.request.upload_request import UploadRequest
from photo_upload.response.upload_response import LocationValue, UploadResponse

DATA_URI_MARKER = "base64,"
SUFFIX_HEX_CHARS = 8
MAX_NAME_ATTEMPTS = 5
NULL_MARKER = "NULL"

_ascii_whitespace = re.compile(r"[ \t\r\n\f\v]+")


def strip_data_uri(image_data: str) -> str:
    # "data:image/png;base64," のようなヘッダがあれば最初の "base64," までを取り除く
    _, marker, payload = image_data.partition(DATA_URI_MARKER)
    return payload if marker else image_data


def decode_image(payload: str) -> bytes:
    """Strictly decode a base64 payload.

    ASCII whitespace is dropped first so line-wrapped input is accepted; any
    other character outside the base64 alphabet or bad padding raises
    BadRequest. An empty payload decodes to an empty image.
    """
    compact = _ascii_whitespace.sub("", payload)
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError):
        raise BadRequest(DECODE_FAILED_MESSAGE)


# None と空文字のみ未指定扱い（0 や空白文字列は値あり）
def is_present(value: LocationValue) -> bool:
    return value is not None and value != ""


def format_value(value: LocationValue) -> str:
    return NULL_MARKER if value is None else str(value)


def build_map_link(prefix: str, latitude: LocationValue, longitude: LocationValue) -> Optional[str]:
    if is_present(latitude) and is_present(longitude):
        return f"{prefix}{latitude},{longitude}"
    return None


def format_log_line(
    now: datetime,
    filename: str,
    latitude: LocationValue,
    longitude: LocationValue,
    accuracy: LocationValue,
    map_link: Optional[str],
) -> str:
    return (
        f"[{now.strftime('%Y-%m-%d %H:%M:%S')}] file={filename} "
        f"lat={format_value(latitude)} lng={format_value(longitude)} "
        f"acc={format_value(accuracy)} map={format_value(map_link)}\n"
    )


class UploadUsecase:
    def __init__(
        self,
        settings: UploadSettings,
        clock: Callable[[], datetime] = datetime.now,
        token_hex: Callable[[int], str] = secrets.token_hex,
    ):
        self.settings = settings
        self.clock = clock
        self.token_hex = token_hex
        self.image_repository = ImageRepository(settings.upload_dir)
        self.location_log_repository = LocationLogRepository(settings.log_path)

    # photo_<YYYYMMDD_HHMMSS>_<8桁の16進乱数>.png
    def build_filename(self, now: datetime) -> str:
        try:
            suffix = self.token_hex(SUFFIX_HEX_CHARS // 2)
        except (NotImplementedError, OSError) as e:
            logger.error("secure random source unavailable: %s", e)
            raise InternalError(FILENAME_FAILED_MESSAGE)
        if not isinstance(suffix, str) or len(suffix) != SUFFIX_HEX_CHARS:
            logger.error("secure random source returned an unexpected value: %r", suffix)
            raise InternalError(FILENAME_FAILED_MESSAGE)
        return f"photo_{now.strftime('%Y%m%d_%H%M%S')}_{suffix}.png"

    def _save_image(self, now: datetime, data: bytes) -> str:
        for _ in range(MAX_NAME_ATTEMPTS):
            filename = self.build_filename(now)
            try:
                self.image_repository.save(filename, data)
            except FileExistsError:
                # 同名ファイルがある場合は乱数を引き直す（上書きはしない）
                logger.warning("filename collision, retrying: %s", filename)
                continue
            except OSError as e:
                logger.error("failed to save image %s: %s", filename, e)
                raise InternalError(SAVE_FAILED_MESSAGE)
            return filename
        logger.error("gave up after %d filename collisions", MAX_NAME_ATTEMPTS)
        raise InternalError(SAVE_FAILED_MESSAGE)

    def _append_log(self, line: str) -> None:
        # ログ追記は best-effort。失敗してもレスポンスには反映しない
        try:
            self.location_log_repository.append(line)
        except OSError as e:
            logger.warning("failed to append location log %s: %s", self.settings.log_path, e)

    def execute(self, req: UploadRequest) -> UploadResponse:
        with log_duration("upload.decode"):
            data = decode_image(strip_data_uri(req.image_data))

        try:
            self.image_repository.ensure_upload_dir()
        except OSError as e:
            logger.error("failed to create upload dir %s: %s", self.settings.upload_dir, e)
            raise InternalError(CREATE_DIR_FAILED_MESSAGE)

        now = self.clock()
        with log_duration("upload.save_image"):
            filename = self._save_image(now, data)

        map_link = build_map_link(self.settings.map_link_prefix, req.latitude, req.longitude)
        with log_duration("upload.append_log"):
            self._append_log(
                format_log_line(now, filename, req.latitude, req.longitude, req.accuracy, map_link)
            )

        logger.info("saved %s (%d bytes) map=%s", filename, len(data), format_value(map_link))

        prefix = self.settings.public_prefix.rstrip("/")
        return UploadResponse(
            filepath=f"{prefix}/{filename}" if prefix else filename,
            latitude=req.latitude,
            longitude=req.longitude,
            accuracy=req.accuracy,
        )
