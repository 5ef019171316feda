"""
face_features/core/extractor.py
API 與 CLI 共用的特徵提取流程
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import numpy as np

from .analyzer_base import GenericAnalyzer
from .config import AnalyzerConfig
from .errors import DetectionError
from .eye import EyeAnalyzer
from .face import FaceAnalyzer
from .mouth import MouthAnalyzer

logger = logging.getLogger(__name__)

# 固定的分析器集合
ANALYZERS = {
    "mouth": MouthAnalyzer,
    "face": FaceAnalyzer,
    "eye": EyeAnalyzer,
}

# 特徵編號（F6 從未定義）
FEATURE_CODES = {
    "F1": "mouth_outer_area",
    "F2": "mouth_corner_activity",
    "F3": "eye_inner_area",
    "F4": "eyebrow_activity",
    "F5": "face_area",
    "F7": "face_center_of_mass",
}


@dataclass
class FeatureSet:
    """單張影像的全部特徵"""

    mouth_outer_area: float
    mouth_corner_activity: float
    eye_inner_area: float
    eyebrow_activity: float
    face_area: float
    face_center_of_mass: float
    norm_factor: float
    width: int
    height: int

    def to_dict(self) -> Dict[str, float]:
        """只回傳特徵值"""
        values = asdict(self)
        return {name: values[name] for name in FEATURE_CODES.values()}

    def as_codes(self) -> Dict[str, float]:
        """以 F1..F7 編號回傳"""
        values = asdict(self)
        return {code: values[name] for code, name in FEATURE_CODES.items()}


class FeatureExtractor:
    """
    幾何特徵提取器

    每次提取都建立新的分析器，實例之間不共享可變狀態。
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None, detector=None):
        """
        初始化特徵提取器

        Args:
            config: 分析器配置
            detector: LandmarkDetector（可選，extract_from_image 需要）
        """
        self.config = config or AnalyzerConfig()
        self.detector = detector

    def build_analyzers(self, width: int, height: int) -> Dict[str, GenericAnalyzer]:
        """建立已設定尺寸的分析器"""
        return {
            name: analyzer_cls(width, height, config=self.config)
            for name, analyzer_cls in ANALYZERS.items()
        }

    def extract(self, landmarks: Any, width: int, height: int) -> FeatureSet:
        """
        由特徵點提取全部特徵

        Args:
            landmarks: 468 個正規化特徵點
            width: 影像寬度
            height: 影像高度

        Returns:
            FeatureSet
        """
        analyzers = self.build_analyzers(width, height)

        metrics: Dict[str, float] = {}
        for name, analyzer in analyzers.items():
            analyzer.set_landmarks(landmarks)
            metrics.update(analyzer.metrics)

        features = FeatureSet(
            norm_factor=analyzers["eye"].norm_factor,
            width=int(width),
            height=int(height),
            **metrics,
        )
        logger.debug(f"特徵提取完成: {features.as_codes()}")
        return features

    def extract_from_image(self, image: np.ndarray) -> FeatureSet:
        """
        由 BGR 影像偵測特徵點後提取特徵

        Raises:
            DetectionError: 未設定偵測器或偵測不到人臉
        """
        if self.detector is None:
            raise DetectionError("未設定特徵點偵測器，無法從影像提取特徵")

        face = self.detector.detect(image)
        return self.extract(face.landmarks, face.width, face.height)
