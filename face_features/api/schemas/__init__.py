"""
API 資料模型
"""
from .request import LandmarkPoint, LandmarkPayload
from .response import (
    FeatureValues,
    FeatureResponse,
    ErrorResponse,
    HealthResponse
)

__all__ = [
    "LandmarkPoint",
    "LandmarkPayload",
    "FeatureValues",
    "FeatureResponse",
    "ErrorResponse",
    "HealthResponse",
]
