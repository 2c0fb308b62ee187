from pathlib import Path


class LocationLogRepository:
    """Append-only text log of stored images and their locations."""

    def __init__(self, log_path: Path):
        self.log_path = log_path

    # 1行を追記のみで書き込む（切り詰め・書き換えはしない）
    def append(self, line: str) -> None:
        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(line)
