"""
face_features/api/services/visualizer.py
特徵輪廓標記圖片生成服務
"""

import logging
import base64
from typing import Dict, Tuple
import cv2
import numpy as np

from face_features.core.geometry import build_contour, to_pixel
from face_features.core.landmarks import (
    ANCHOR_LANDMARKS,
    EYE_BROW_LEFT_UPPER,
    EYE_BROW_RIGHT_UPPER,
    EYE_LEFT_INNER_LMARKS,
    EYE_RIGHT_INNER_LMARKS,
    FACE_OVAL_LMARKS,
    MOUTH_CORNER_LMARKS,
    MOUTH_OUTER_LMARKS,
)

logger = logging.getLogger(__name__)


class FeatureVisualizer:
    """特徵輪廓標記器"""

    # 輪廓顏色（BGR）
    CONTOUR_COLORS: Dict[str, Tuple[Tuple[int, ...], Tuple[int, int, int]]] = {
        "face_oval": (FACE_OVAL_LMARKS, (255, 255, 0)),
        "eye_right_inner": (EYE_RIGHT_INNER_LMARKS, (0, 255, 0)),
        "eye_left_inner": (EYE_LEFT_INNER_LMARKS, (0, 255, 0)),
        "mouth_outer": (MOUTH_OUTER_LMARKS, (255, 0, 255)),
    }

    # 距離特徵使用的點
    POINT_COLORS = (
        (ANCHOR_LANDMARKS, (0, 0, 255)),
        (EYE_BROW_RIGHT_UPPER + EYE_BROW_LEFT_UPPER, (0, 165, 255)),
        (MOUTH_CORNER_LMARKS, (0, 165, 255)),
    )

    def draw(self, image: np.ndarray, landmarks: np.ndarray) -> np.ndarray:
        """
        在圖片上畫出分析器使用的輪廓與錨點

        Args:
            image: 原始圖片（BGR 格式）
            landmarks: (468, 3) 正規化特徵點

        Returns:
            標記後的新圖片
        """
        marked = image.copy()
        h, w = marked.shape[:2]

        for indices, color in self.CONTOUR_COLORS.values():
            contour = build_contour(landmarks, indices, w, h)
            cv2.polylines(marked, [contour.reshape(-1, 1, 2)], True, color, 1)

        for indices, color in self.POINT_COLORS:
            for idx in indices:
                cv2.circle(marked, to_pixel(landmarks[idx], w, h), 2, color, -1)

        return marked

    def generate_marked_image(self, image: np.ndarray, landmarks: np.ndarray) -> str:
        """
        生成 Base64 標記圖片

        Args:
            image: 原始圖片（BGR 格式）
            landmarks: (468, 3) 正規化特徵點

        Returns:
            Base64 編碼的標記圖片（含 data URI prefix）
        """
        marked_image = self.draw(image, landmarks)
        base64_str = self._encode_base64(marked_image)
        logger.info("✓ 標記圖片生成成功")
        return base64_str

    def _encode_base64(self, image: np.ndarray) -> str:
        """
        將圖片編碼為 base64

        Args:
            image: 圖片（BGR 格式）

        Returns:
            Base64 編碼字串（含 data URI prefix）
        """
        ok, buffer = cv2.imencode('.jpg', image)
        if not ok:
            raise RuntimeError("JPEG 編碼失敗")

        img_base64 = base64.b64encode(buffer).decode('utf-8')

        return f"data:image/jpeg;base64,{img_base64}"
