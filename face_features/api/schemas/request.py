"""
API 請求資料模型
"""
from pydantic import BaseModel, Field
from typing import List


class LandmarkPoint(BaseModel):
    """單一正規化特徵點"""

    x: float = Field(..., description="正規化 x 座標（相對於影像寬度）")
    y: float = Field(..., description="正規化 y 座標（相對於影像高度）")
    z: float = Field(0.0, description="正規化深度（目前未使用）")


class LandmarkPayload(BaseModel):
    """特徵點輸入"""

    width: int = Field(
        ...,
        gt=0,
        description="影像寬度（像素）"
    )

    height: int = Field(
        ...,
        gt=0,
        description="影像高度（像素）"
    )

    # 點數在核心檢查（ShapeError），這裡不限制長度
    landmarks: List[LandmarkPoint] = Field(
        ...,
        description="MediaPipe FaceMesh 的 468 個特徵點"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "width": 640,
                "height": 480,
                "landmarks": [
                    {"x": 0.5, "y": 0.42, "z": -0.03},
                    {"x": 0.5, "y": 0.47, "z": -0.06}
                ]
            }
        }
