"""
face_features/api/middleware/logging.py
請求/回應日誌中介軟體與日誌設定
"""

import logging
import time
from typing import Optional
from fastapi import Request

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# 第三方套件只保留警告以上
NOISY_LOGGERS = ("multipart", "urllib3", "httpx", "absl")


async def logging_middleware(request: Request, call_next):
    """
    記錄每個請求的方法、路徑、狀態碼與處理時間

    處理時間同時寫入 X-Process-Time 回應標頭
    """
    start_time = time.perf_counter()
    client_host = request.client.host if request.client else "unknown"

    logger.info(f"→ {request.method} {request.url.path} from {client_host}")

    try:
        response = await call_next(request)
    except Exception as exc:
        process_time = time.perf_counter() - start_time
        logger.error(
            f"✗ {request.method} {request.url.path} "
            f"failed in {process_time:.3f}s: {type(exc).__name__}: {exc}"
        )
        # 交給錯誤處理中介軟體
        raise

    process_time = time.perf_counter() - start_time
    logger.info(
        f"← {request.method} {request.url.path} "
        f"[{response.status_code}] in {process_time:.3f}s"
    )
    response.headers["X-Process-Time"] = f"{process_time:.3f}"
    return response


def setup_logging(log_level: str = "INFO", log_format: Optional[str] = None):
    """
    設定應用程式日誌（API 與 CLI 共用）

    Args:
        log_level: 日誌等級（DEBUG, INFO, WARNING, ERROR, CRITICAL）
        log_format: 自訂日誌格式（None 使用預設）
    """
    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"未知的日誌等級: {log_level}")

    logging.basicConfig(
        level=level,
        format=log_format or DEFAULT_LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
