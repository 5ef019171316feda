"""
app.py
FastAPI 主程式 - 臉部表情幾何特徵 API
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from face_features import __version__
from face_features.core import APIConfig
from face_features.api.services import FeatureService
from face_features.api.routers import api_router, features, health
from face_features.api.middleware import (
    logging_middleware,
    error_handler_middleware,
    setup_exception_handlers,
    setup_logging
)

logger = logging.getLogger(__name__)

# ==================== 配置 ====================

class Config:
    """應用程式配置"""

    # API 資訊
    API_TITLE = "臉部表情幾何特徵 API"
    API_VERSION = __version__
    API_DESCRIPTION = """
    ## 功能
    由 MediaPipe FaceMesh 的 468 個特徵點計算表情強度的幾何代理特徵：
    - F1 外唇面積、F2 嘴角活動量
    - F3 雙眼內輪廓面積、F4 眉毛活動量
    - F5 臉部面積、F7 臉部質心

    ## 輸入
    - `/features/landmarks`: 特徵點 JSON 與影像尺寸
    - `/features/image`: 單張人臉影像（JPG, PNG, BMP, TIFF）
    """

    # 影像偵測（需要 mediapipe）
    ENABLE_DETECTOR = os.getenv("FACE_FEATURES_ENABLE_DETECTOR", "1") != "0"
    MAX_UPLOAD_MB = int(os.getenv("FACE_FEATURES_MAX_UPLOAD_MB", "20"))

    # 日誌配置
    LOG_LEVEL = os.getenv("FACE_FEATURES_LOG_LEVEL", "INFO")

    # CORS 配置
    ALLOW_ORIGINS = ["*"]  # 生產環境應限制來源
    ALLOW_METHODS = ["GET", "POST"]
    ALLOW_HEADERS = ["*"]


# ==================== 全域變數 ====================

# 特徵服務實例（啟動時初始化）
feature_service: Optional[FeatureService] = None


# ==================== 生命週期管理 ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    應用程式生命週期管理

    啟動時：載入偵測器和服務
    關閉時：釋放 MediaPipe 資源
    """
    global feature_service

    logger.info("=" * 70)
    logger.info("🚀 啟動臉部表情幾何特徵 API")
    logger.info("=" * 70)

    try:
        config = APIConfig(
            enable_detector=Config.ENABLE_DETECTOR,
            max_upload_mb=Config.MAX_UPLOAD_MB,
        )
        feature_service = FeatureService.from_config(config)
        logger.info("✓ 服務初始化完成")
    except Exception as e:
        logger.error(f"✗ 服務初始化失敗: {e}")
        raise

    logger.info(f"API 文檔: http://localhost:8000/docs")
    logger.info("=" * 70)

    yield

    logger.info("關閉 API 服務...")
    feature_service.close()
    feature_service = None


# ==================== 依賴注入 ====================

def get_feature_service() -> FeatureService:
    """
    取得特徵服務實例（依賴注入）

    這個函數會覆寫 routers 中的同名函數
    """
    if feature_service is None:
        raise RuntimeError("FeatureService 尚未初始化")
    return feature_service


# ==================== FastAPI 應用 ====================

setup_logging(log_level=Config.LOG_LEVEL)

app = FastAPI(
    title=Config.API_TITLE,
    version=Config.API_VERSION,
    description=Config.API_DESCRIPTION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=Config.ALLOW_METHODS,
    allow_headers=Config.ALLOW_HEADERS,
)

# 註冊中介軟體（順序很重要：先日誌，後錯誤處理）
app.add_middleware(BaseHTTPMiddleware, dispatch=logging_middleware)
app.add_middleware(BaseHTTPMiddleware, dispatch=error_handler_middleware)

setup_exception_handlers(app)

# 覆寫路由中的依賴注入
app.dependency_overrides[features.get_feature_service] = get_feature_service
app.dependency_overrides[health.get_feature_service] = get_feature_service

app.include_router(api_router)

# ==================== 主程式入口 ====================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # 開發模式：自動重載
        log_level=Config.LOG_LEVEL.lower()
    )
