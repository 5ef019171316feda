"""
face_features/core/landmarks.py
MediaPipe FaceMesh 特徵點索引表與輸入轉換
"""

import logging
from typing import Any, Dict, Tuple

import numpy as np

from .config import NTOTAL_LANDMARKS
from .errors import ShapeError

logger = logging.getLogger(__name__)


# ========== 錨點（正規化用，順序無關） ==========

# 鼻樑到鼻尖，表情變化時位置最穩定
ANCHOR_LANDMARKS: Tuple[int, ...] = (1, 4, 5, 195, 197, 6)

# ========== 眼睛輪廓（順序即多邊形走向） ==========

EYE_RIGHT_INNER_LMARKS: Tuple[int, ...] = (
    33, 7, 163, 144, 145, 153, 154, 155,
    133, 173, 157, 158, 159, 160, 161, 246,
)

EYE_LEFT_INNER_LMARKS: Tuple[int, ...] = (
    263, 249, 390, 373, 374, 380, 381, 382,
    362, 398, 384, 385, 386, 387, 388, 466,
)

# ========== 眉毛上緣（距離總和用，順序無關） ==========

EYE_BROW_RIGHT_UPPER: Tuple[int, ...] = (70, 63, 105, 66, 107)
EYE_BROW_LEFT_UPPER: Tuple[int, ...] = (300, 293, 334, 296, 336)

# ========== 嘴巴 ==========

MOUTH_OUTER_LMARKS: Tuple[int, ...] = (
    61, 146, 91, 181, 84, 17, 314, 405, 321, 375,
    291, 409, 270, 269, 267, 0, 37, 39, 40, 185,
)

MOUTH_CORNER_LMARKS: Tuple[int, ...] = (61, 291)

# ========== 臉部外輪廓 ==========

FACE_OVAL_LMARKS: Tuple[int, ...] = (
    10, 338, 297, 332, 284, 251, 389, 356, 454, 323, 361, 288,
    397, 365, 379, 378, 400, 377, 152, 148, 176, 149, 150, 136,
    172, 58, 132, 93, 234, 127, 162, 21, 54, 103, 67, 109,
)

INDEX_TABLES: Dict[str, Tuple[int, ...]] = {
    "anchor": ANCHOR_LANDMARKS,
    "eye_right_inner": EYE_RIGHT_INNER_LMARKS,
    "eye_left_inner": EYE_LEFT_INNER_LMARKS,
    "eyebrow_right_upper": EYE_BROW_RIGHT_UPPER,
    "eyebrow_left_upper": EYE_BROW_LEFT_UPPER,
    "mouth_outer": MOUTH_OUTER_LMARKS,
    "mouth_corner": MOUTH_CORNER_LMARKS,
    "face_oval": FACE_OVAL_LMARKS,
}

CONTOUR_TABLES = ("eye_right_inner", "eye_left_inner", "mouth_outer", "face_oval")


# ========== 輸入轉換 ==========

def _point_from(item: Any) -> Tuple[float, float, float]:
    """單一特徵點轉為 (x, y, z)"""
    try:
        if isinstance(item, dict):
            return float(item["x"]), float(item["y"]), float(item.get("z", 0.0))
        if hasattr(item, "x") and hasattr(item, "y"):
            return float(item.x), float(item.y), float(getattr(item, "z", 0.0))
        values = [float(v) for v in item]
    except (KeyError, TypeError, ValueError) as e:
        raise ShapeError(f"無法解析特徵點: {item!r}") from e
    if len(values) == 2:
        values.append(0.0)
    if len(values) != 3:
        raise ShapeError(f"特徵點需為 2 或 3 個座標，收到 {len(values)} 個")
    return values[0], values[1], values[2]


def to_landmark_array(landmarks: Any, n_landmarks: int = NTOTAL_LANDMARKS) -> np.ndarray:
    """
    將各種特徵點格式統一轉為唯讀的 (n_landmarks, 3) 陣列

    支援 numpy 陣列、(x, y[, z]) 序列、含 x/y/z 鍵的字典、
    具 .x/.y/.z 屬性的物件，以及 MediaPipe NormalizedLandmarkList。

    Args:
        landmarks: 特徵點資料
        n_landmarks: 預期點數

    Returns:
        float64 陣列，形狀 (n_landmarks, 3)
    """
    if landmarks is None:
        raise ShapeError("特徵點為 None", expected=n_landmarks, actual=None)

    # MediaPipe NormalizedLandmarkList
    if hasattr(landmarks, "landmark"):
        landmarks = list(landmarks.landmark)

    if isinstance(landmarks, np.ndarray):
        array = np.array(landmarks, dtype=np.float64)
        if array.ndim != 2 or array.shape[1] not in (2, 3):
            raise ShapeError(
                f"特徵點陣列形狀錯誤: {array.shape}，預期 ({n_landmarks}, 3)",
                expected=(n_landmarks, 3),
                actual=array.shape,
            )
        if array.shape[1] == 2:
            array = np.hstack([array, np.zeros((array.shape[0], 1))])
    else:
        if not isinstance(landmarks, (list, tuple)):
            try:
                landmarks = list(landmarks)
            except TypeError as e:
                raise ShapeError(
                    f"特徵點格式無法辨識: {type(landmarks).__name__}", expected=n_landmarks
                ) from e
        array = np.array([_point_from(item) for item in landmarks], dtype=np.float64)
        array = array.reshape(-1, 3)

    if array.shape[0] != n_landmarks:
        raise ShapeError(
            f"特徵點數量錯誤: 收到 {array.shape[0]} 個，預期 {n_landmarks} 個",
            expected=n_landmarks,
            actual=array.shape[0],
        )

    if not np.isfinite(array).all():
        raise ShapeError("特徵點含有 NaN 或無限值", expected=n_landmarks, actual=array.shape[0])

    array.setflags(write=False)
    return array
