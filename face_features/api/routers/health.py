"""
face_features/api/routers/health.py
健康檢查與資訊路由
"""

import logging
from datetime import datetime
from fastapi import APIRouter, Depends
from typing import Dict

from face_features import __version__
from face_features.api.schemas import HealthResponse
from face_features.api.services import FeatureService
from face_features.core import FEATURE_CODES, NTOTAL_LANDMARKS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

API_VERSION = __version__


def get_feature_service() -> FeatureService:
    """依賴注入：取得特徵服務實例（由主程式提供）"""
    raise NotImplementedError("FeatureService 未設定")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="健康檢查",
    description="檢查 API 服務狀態和偵測器載入情況"
)
async def health_check(
    service: FeatureService = Depends(get_feature_service)
) -> HealthResponse:
    """
    健康檢查端點

    **回傳資訊：**
    - status: healthy（全部可用）/ degraded（影像偵測停用）
    - version: API 版本
    - components: 各元件狀態
    """
    components = {
        "extractor": service.extractor is not None,
        "detector": service.detector is not None,
        "visualizer": service.visualizer is not None,
    }
    status = "healthy" if all(components.values()) else "degraded"

    logger.info(f"健康檢查: {status}")

    return HealthResponse(
        status=status,
        version=API_VERSION,
        components=components,
        timestamp=datetime.now()
    )


@router.get(
    "/",
    summary="API 資訊",
    description="取得 API 基本資訊和使用說明"
)
async def root() -> Dict:
    """API 根路徑"""
    return {
        "name": "臉部表情幾何特徵 API",
        "version": API_VERSION,
        "description": "由 MediaPipe FaceMesh 特徵點計算面積與距離特徵",
        "endpoints": {
            "landmarks": {
                "method": "POST",
                "path": "/features/landmarks",
                "description": "由特徵點計算特徵"
            },
            "image": {
                "method": "POST",
                "path": "/features/image",
                "description": "由影像偵測特徵點並計算特徵"
            },
            "health": {
                "method": "GET",
                "path": "/health",
                "description": "健康檢查"
            },
            "docs": {
                "method": "GET",
                "path": "/docs",
                "description": "Swagger 互動式文檔"
            }
        },
        "features": FEATURE_CODES,
        "requirements": {
            "landmarks": f"{NTOTAL_LANDMARKS} 個正規化座標 (x, y, z)",
            "images": [".jpg", ".jpeg", ".png", ".bmp", ".tiff"]
        }
    }
