"""
face_features/core/mouth.py
嘴巴特徵
"""

from typing import Dict

from .analyzer_base import AnalysisInput, GenericAnalyzer
from .geometry import build_contour, distance_sum, polygon_area
from .landmarks import ANCHOR_LANDMARKS, MOUTH_CORNER_LMARKS, MOUTH_OUTER_LMARKS


class MouthAnalyzer(GenericAnalyzer):
    """
    嘴巴分析器

    特徵：
    - mouth_outer_area: 外唇輪廓面積（像素平方，不正規化）
    - mouth_corner_activity: 錨點到兩側嘴角的距離總和 / 正規化因子
    """

    METRICS = ("mouth_outer_area", "mouth_corner_activity")

    def compute_metrics(self, analysis_input: AnalysisInput) -> Dict[str, float]:
        contour = build_contour(
            analysis_input.landmarks,
            MOUTH_OUTER_LMARKS,
            analysis_input.width,
            analysis_input.height,
        )

        anchors = analysis_input.pixels(ANCHOR_LANDMARKS)
        corners = analysis_input.pixels(MOUTH_CORNER_LMARKS)

        return {
            "mouth_outer_area": polygon_area(contour),
            "mouth_corner_activity": distance_sum(anchors, corners) / analysis_input.norm_factor,
        }

    @property
    def mouth_outer_area(self) -> float:
        return self.get_metric("mouth_outer_area")

    @property
    def mouth_corner_activity(self) -> float:
        return self.get_metric("mouth_corner_activity")
