from pathlib import Path


class ImageRepository:
    """Stores decoded images as files under the upload directory."""

    def __init__(self, upload_dir: Path):
        self.upload_dir = upload_dir

    # 保存先ディレクトリが無ければ再帰的に作成する
    def ensure_upload_dir(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    # filename で画像を保存する。既存ファイルは上書きせず FileExistsError
    def save(self, filename: str, data: bytes) -> Path:
        path = self.upload_dir / filename
        with open(path, "xb") as f:
            f.write(data)
        return path
