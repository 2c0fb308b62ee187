import logging
import sys
import time
from contextlib import contextmanager


SERVER_START_TS = time.perf_counter()

logger = logging.getLogger("photo_upload.app")
logger.setLevel(logging.INFO)
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
logger.propagate = False


@contextmanager
def log_duration(name: str):
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        since_start = int(time.perf_counter() - SERVER_START_TS)
        # name の処理時間（起動からの経過秒も併記）
        logger.info("processed_time_%s: %.5f (since_start=%d)", name, elapsed, since_start)
