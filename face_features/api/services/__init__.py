"""
face_features/api/services
API 業務邏輯服務
"""

from .visualizer import FeatureVisualizer
from .feature_service import FeatureService

__all__ = [
    "FeatureVisualizer",
    "FeatureService",
]
