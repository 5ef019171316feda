"""
face_features/api/routers/features.py
特徵提取路由
"""

import logging
from pathlib import Path
from fastapi import APIRouter, File, UploadFile, Form, HTTPException, Depends
from typing import Annotated

from face_features.api.schemas import LandmarkPayload, FeatureResponse, ErrorResponse
from face_features.api.services import FeatureService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/features", tags=["features"])


def get_feature_service() -> FeatureService:
    """依賴注入：取得特徵服務實例（由主程式提供）"""
    # 這個函數會在 app.py 中被覆寫
    raise NotImplementedError("FeatureService 未設定")


ERROR_RESPONSES = {
    400: {
        "description": "前置條件錯誤（影像尺寸等）",
        "model": ErrorResponse
    },
    422: {
        "description": "特徵點形狀錯誤、正規化失敗或偵測不到人臉",
        "model": ErrorResponse
    },
    500: {
        "description": "伺服器錯誤",
        "model": ErrorResponse
    }
}


@router.post(
    "/landmarks",
    response_model=FeatureResponse,
    summary="由特徵點計算幾何特徵",
    description="輸入 468 個正規化特徵點與影像尺寸，回傳 F1..F7 幾何特徵",
    responses=ERROR_RESPONSES
)
async def features_from_landmarks(
    payload: LandmarkPayload,
    service: FeatureService = Depends(get_feature_service)
) -> FeatureResponse:
    """
    由特徵點計算幾何特徵

    **回傳結果：**
    - features: 各特徵名稱與數值
    - codes: F1..F7 編號
    - norm_factor: 尺度正規化因子
    """
    logger.info(f"收到特徵點請求: {len(payload.landmarks)} 點, {payload.width}x{payload.height}")
    return service.analyze_landmarks(payload)


@router.post(
    "/image",
    response_model=FeatureResponse,
    summary="由影像計算幾何特徵",
    description="上傳單張人臉影像，偵測特徵點後回傳幾何特徵",
    responses=ERROR_RESPONSES
)
async def features_from_image(
    file: Annotated[UploadFile, File(description="人臉影像（JPG, PNG, BMP, TIFF）")],
    mark: Annotated[bool, Form(description="是否回傳輪廓標記圖片")] = False,
    service: FeatureService = Depends(get_feature_service)
) -> FeatureResponse:
    """
    由單張影像計算幾何特徵

    **輸入要求：**
    - 單張正面人臉影像
    - 支援格式：.jpg, .jpeg, .png, .bmp, .tiff
    """
    logger.info(f"收到影像請求: {file.filename}")

    # 驗證檔案格式
    supported_formats = service.config.supported_image_exts
    file_ext = Path(file.filename or "").suffix.lower()

    if file_ext not in supported_formats:
        error_msg = f"不支援的檔案格式: {file_ext}，支援格式: {', '.join(supported_formats)}"
        logger.warning(error_msg)
        raise HTTPException(status_code=400, detail=error_msg)

    # 驗證檔案大小
    file_content = await file.read()

    if len(file_content) > service.config.max_upload_bytes:
        error_msg = (
            f"檔案大小超過限制（{len(file_content) / 1024 / 1024:.1f}MB > "
            f"{service.config.max_upload_mb}MB）"
        )
        logger.warning(error_msg)
        raise HTTPException(status_code=400, detail=error_msg)

    result = service.analyze_image(file_content, mark=mark)
    logger.info(f"特徵計算完成: {file.filename}")
    return result
