"""
face_features/api/middleware/error_handler.py
統一錯誤處理中介軟體
"""

import logging
from datetime import datetime
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from face_features.core.errors import (
    DetectionError,
    FeatureError,
    NormalizationError,
    PreconditionError,
    ShapeError,
)

logger = logging.getLogger(__name__)

# 核心錯誤對應的 HTTP 狀態碼
FEATURE_ERROR_STATUS = {
    PreconditionError: status.HTTP_400_BAD_REQUEST,
    ShapeError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NormalizationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def _error_content(error: str, error_type: str, details=None) -> dict:
    return {
        "success": False,
        "error": error,
        "error_type": error_type,
        "details": details,
        "timestamp": datetime.now().isoformat()
    }


def _feature_error_details(exc: FeatureError):
    if isinstance(exc, ShapeError):
        return {"expected": exc.expected, "actual": exc.actual}
    if isinstance(exc, NormalizationError):
        return {"norm_factor": exc.norm_factor}
    return None


async def error_handler_middleware(request: Request, call_next):
    """
    全域錯誤處理中介軟體

    捕獲所有未處理的異常，轉換為統一的錯誤回應格式
    """
    try:
        response = await call_next(request)
        return response

    except Exception as exc:
        # 記錄詳細錯誤資訊
        logger.error(
            f"未處理的異常: {type(exc).__name__}: {str(exc)}",
            exc_info=True
        )

        # 回傳統一格式的錯誤回應
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_content(
                "伺服器內部錯誤",
                type(exc).__name__,
                {"message": str(exc), "path": str(request.url.path)}
            )
        )


def setup_exception_handlers(app):
    """
    設定特定異常處理器

    Args:
        app: FastAPI 應用實例
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """處理請求驗證錯誤（Pydantic）"""
        errors = exc.errors()

        logger.warning(
            f"請求驗證失敗: {request.url.path}\n"
            f"錯誤: {errors}"
        )

        # 格式化錯誤訊息
        error_messages = []
        for error in errors:
            field = " -> ".join(str(x) for x in error["loc"])
            message = error["msg"]
            error_messages.append(f"{field}: {message}")

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_content(
                "請求資料驗證失敗",
                "ValidationError",
                {"errors": error_messages}
            )
        )

    @app.exception_handler(ValidationError)
    async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
        """處理 Pydantic 驗證錯誤"""
        logger.warning(f"Pydantic 驗證失敗: {exc}")

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_content(
                "資料驗證失敗",
                "ValidationError",
                {"errors": [str(e["msg"]) for e in exc.errors()]}
            )
        )

    @app.exception_handler(FeatureError)
    async def feature_error_handler(request: Request, exc: FeatureError):
        """處理特徵計算錯誤（尺寸、形狀、正規化）"""
        status_code = FEATURE_ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.warning(f"特徵計算失敗 [{type(exc).__name__}]: {exc}")

        return JSONResponse(
            status_code=status_code,
            content=_error_content(str(exc), type(exc).__name__, _feature_error_details(exc))
        )

    @app.exception_handler(DetectionError)
    async def detection_error_handler(request: Request, exc: DetectionError):
        """處理特徵點偵測錯誤"""
        logger.warning(f"偵測失敗: {exc}")

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_content(str(exc), "DetectionError")
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        """處理值錯誤（通常是業務邏輯錯誤）"""
        logger.error(f"值錯誤: {exc}", exc_info=True)

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_content(str(exc), "ValueError")
        )

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(request: Request, exc: RuntimeError):
        """處理執行時錯誤"""
        logger.error(f"執行時錯誤: {exc}", exc_info=True)

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_content("執行時錯誤", "RuntimeError", {"message": str(exc)})
        )
