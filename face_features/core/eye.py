"""
face_features/core/eye.py
眼睛與眉毛特徵
"""

from typing import Dict

from .analyzer_base import AnalysisInput, GenericAnalyzer
from .geometry import build_contour, distance_sum, polygon_area
from .landmarks import (
    ANCHOR_LANDMARKS,
    EYE_BROW_LEFT_UPPER,
    EYE_BROW_RIGHT_UPPER,
    EYE_LEFT_INNER_LMARKS,
    EYE_RIGHT_INNER_LMARKS,
)


class EyeAnalyzer(GenericAnalyzer):
    """
    眼睛分析器

    特徵：
    - eye_inner_area: 左右眼內輪廓面積總和（像素平方，不正規化）
    - eyebrow_activity: 錨點到兩側眉毛上緣的距離總和 / 正規化因子
    """

    METRICS = ("eye_inner_area", "eyebrow_activity")

    def compute_metrics(self, analysis_input: AnalysisInput) -> Dict[str, float]:
        return {
            "eye_inner_area": self.eyes_contours_area(analysis_input),
            "eyebrow_activity": self.eyebrow_activity_from(analysis_input),
        }

    @staticmethod
    def eyes_contours_area(analysis_input: AnalysisInput) -> float:
        """左右眼內輪廓面積總和"""
        right_contour = build_contour(
            analysis_input.landmarks,
            EYE_RIGHT_INNER_LMARKS,
            analysis_input.width,
            analysis_input.height,
        )
        left_contour = build_contour(
            analysis_input.landmarks,
            EYE_LEFT_INNER_LMARKS,
            analysis_input.width,
            analysis_input.height,
        )
        return polygon_area(right_contour) + polygon_area(left_contour)

    @staticmethod
    def eyebrow_activity_from(analysis_input: AnalysisInput) -> float:
        """
        眉毛活動量

        眉毛上揚或皺眉時，眉毛與鼻樑錨點的距離隨之改變；
        除以正規化因子後可跨影像尺寸比較。
        """
        anchors = analysis_input.pixels(ANCHOR_LANDMARKS)
        eyebrows = analysis_input.pixels(EYE_BROW_RIGHT_UPPER + EYE_BROW_LEFT_UPPER)
        return distance_sum(anchors, eyebrows) / analysis_input.norm_factor

    @property
    def eye_inner_area(self) -> float:
        return self.get_metric("eye_inner_area")

    @property
    def eyebrow_activity(self) -> float:
        return self.get_metric("eyebrow_activity")
