import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


def _int_env(name: str, default: int, minimum: int, maximum: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer, using %d", name, raw, default)
        return default

    if value < minimum or (maximum is not None and value > maximum):
        clamped = max(minimum, value if maximum is None else min(maximum, value))
        logger.warning("%s=%d is out of range, using %d", name, value, clamped)
        return clamped
    return value


SECRET_KEY = os.getenv("QUEUE_SECRET_KEY", "dev-secret-key")

# rh で使う取り出しバッファの大きさ（終端を含む）
BUFSIZE = _int_env("QUEUE_BUFSIZE", 1024, minimum=1)

# 確保失敗の確率（%）
FAIL_PROBABILITY = _int_env("QUEUE_FAIL_PROBABILITY", 0, minimum=0, maximum=100)

HISTORY_LIMIT = _int_env("QUEUE_HISTORY_LIMIT", 50, minimum=1)
