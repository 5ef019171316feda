"""
核心模組
提供 API 和 CLI 共用的幾何特徵計算

特徵點偵測（MediaPipe）在 face_features.core.detector，需要時再匯入。
"""

from .config import AnalyzerConfig, DetectorConfig, APIConfig, NTOTAL_LANDMARKS
from .errors import (
    FeatureError,
    PreconditionError,
    ShapeError,
    NormalizationError,
    DetectionError,
)
from .analyzer_base import AnalysisInput, GenericAnalyzer, compute_normalization_factor
from .eye import EyeAnalyzer
from .mouth import MouthAnalyzer
from .face import FaceAnalyzer
from .extractor import ANALYZERS, FEATURE_CODES, FeatureExtractor, FeatureSet

__all__ = [
    "AnalyzerConfig",
    "DetectorConfig",
    "APIConfig",
    "NTOTAL_LANDMARKS",
    "FeatureError",
    "PreconditionError",
    "ShapeError",
    "NormalizationError",
    "DetectionError",
    "AnalysisInput",
    "GenericAnalyzer",
    "compute_normalization_factor",
    "EyeAnalyzer",
    "MouthAnalyzer",
    "FaceAnalyzer",
    "ANALYZERS",
    "FEATURE_CODES",
    "FeatureExtractor",
    "FeatureSet",
]

__version__ = "1.0.0"
