"""
face_features/core/face.py
整臉特徵
"""

from typing import Dict

from .analyzer_base import AnalysisInput, GenericAnalyzer
from .geometry import build_contour, center_of_mass, norm, polygon_area, scale_to_pixels
from .landmarks import FACE_OVAL_LMARKS


class FaceAnalyzer(GenericAnalyzer):
    """
    整臉分析器

    特徵：
    - face_area: 臉部外輪廓面積（像素平方）
    - face_center_of_mass: 全部特徵點像素質心的向量長度（像素）
    """

    METRICS = ("face_area", "face_center_of_mass")

    def compute_metrics(self, analysis_input: AnalysisInput) -> Dict[str, float]:
        contour = build_contour(
            analysis_input.landmarks,
            FACE_OVAL_LMARKS,
            analysis_input.width,
            analysis_input.height,
        )
        points = scale_to_pixels(
            analysis_input.landmarks, analysis_input.width, analysis_input.height
        )
        return {
            "face_area": polygon_area(contour),
            "face_center_of_mass": norm(center_of_mass(points)),
        }

    @property
    def face_area(self) -> float:
        return self.get_metric("face_area")

    @property
    def face_center_of_mass(self) -> float:
        return self.get_metric("face_center_of_mass")
