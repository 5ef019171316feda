"""
API 回應資料模型
"""
from pydantic import BaseModel, Field
from typing import Dict, Optional
from datetime import datetime


class FeatureValues(BaseModel):
    """幾何特徵值"""

    mouth_outer_area: float = Field(..., description="F1 外唇輪廓面積（像素平方）")
    mouth_corner_activity: float = Field(..., description="F2 嘴角距離總和 / 正規化因子")
    eye_inner_area: float = Field(..., description="F3 雙眼內輪廓面積（像素平方）")
    eyebrow_activity: float = Field(..., description="F4 眉毛距離總和 / 正規化因子")
    face_area: float = Field(..., description="F5 臉部外輪廓面積（像素平方）")
    face_center_of_mass: float = Field(..., description="F7 臉部質心向量長度（像素）")


class FeatureResponse(BaseModel):
    """特徵提取結果回應"""

    success: bool = Field(
        ...,
        description="提取是否成功"
    )

    error: Optional[str] = Field(
        None,
        description="錯誤訊息（如果失敗）"
    )

    features: Optional[FeatureValues] = Field(
        None,
        description="幾何特徵"
    )

    codes: Optional[Dict[str, float]] = Field(
        None,
        description="以 F1..F7 編號表示的特徵"
    )

    norm_factor: Optional[float] = Field(
        None,
        gt=0.0,
        description="尺度正規化因子"
    )

    # 標記圖片
    marked_figure: Optional[str] = Field(
        None,
        description="Base64 編碼的輪廓標記圖片"
    )

    # 元資料
    processing_time: Optional[float] = Field(
        None,
        description="處理時間（秒）"
    )

    timestamp: Optional[datetime] = Field(
        None,
        description="分析時間"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "error": None,
                "features": {
                    "mouth_outer_area": 3012.5,
                    "mouth_corner_activity": 0.83,
                    "eye_inner_area": 1420.0,
                    "eyebrow_activity": 2.61,
                    "face_area": 61840.0,
                    "face_center_of_mass": 402.7
                },
                "codes": {"F1": 3012.5, "F2": 0.83, "F3": 1420.0, "F4": 2.61, "F5": 61840.0, "F7": 402.7},
                "norm_factor": 512.3,
                "marked_figure": None,
                "processing_time": 0.004,
                "timestamp": "2025-10-14T12:34:56"
            }
        }


class ErrorResponse(BaseModel):
    """錯誤回應（統一格式）"""

    success: bool = Field(
        False,
        description="永遠是 False"
    )

    error: str = Field(
        ...,
        description="錯誤訊息"
    )

    error_type: Optional[str] = Field(
        None,
        description="錯誤類型（ShapeError, PreconditionError, NormalizationError 等）"
    )

    details: Optional[dict] = Field(
        None,
        description="詳細錯誤資訊"
    )

    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="錯誤發生時間"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "error": "特徵點數量錯誤: 收到 467 個，預期 468 個",
                "error_type": "ShapeError",
                "details": {
                    "expected": 468,
                    "actual": 467
                },
                "timestamp": "2025-10-14T12:34:56"
            }
        }


class HealthResponse(BaseModel):
    """健康檢查回應"""

    status: str = Field(
        ...,
        description="服務狀態 (healthy/degraded)"
    )

    version: str = Field(
        ...,
        description="API 版本"
    )

    components: dict = Field(
        ...,
        description="各元件載入狀態"
    )

    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="檢查時間"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "components": {
                    "extractor": True,
                    "detector": True
                },
                "timestamp": "2025-10-14T12:34:56"
            }
        }
