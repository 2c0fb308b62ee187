# config.py
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
UPLOAD_PUBLIC_PREFIX = os.getenv("UPLOAD_PUBLIC_PREFIX", "uploads")
LOCATION_LOG_FILENAME = os.getenv("LOCATION_LOG_FILENAME", "location_log.txt")
MAP_LINK_PREFIX = os.getenv("MAP_LINK_PREFIX", "https://www.google.com/maps?q=")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))


@dataclass(frozen=True)
class UploadSettings:
    upload_dir: Path
    public_prefix: str = UPLOAD_PUBLIC_PREFIX
    log_filename: str = LOCATION_LOG_FILENAME
    map_link_prefix: str = MAP_LINK_PREFIX

    @property
    def log_path(self) -> Path:
        return self.upload_dir / self.log_filename


def load_settings(
    upload_dir: Optional[os.PathLike] = None,
    public_prefix: Optional[str] = None,
    log_filename: Optional[str] = None,
    map_link_prefix: Optional[str] = None,
) -> UploadSettings:
    # 引数で渡されたものを優先し、無ければ環境変数の値を使う
    return UploadSettings(
        upload_dir=Path(upload_dir if upload_dir is not None else UPLOAD_DIR),
        public_prefix=public_prefix if public_prefix is not None else UPLOAD_PUBLIC_PREFIX,
        log_filename=log_filename if log_filename is not None else LOCATION_LOG_FILENAME,
        map_link_prefix=map_link_prefix if map_link_prefix is not None else MAP_LINK_PREFIX,
    )
