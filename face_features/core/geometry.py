"""
face_features/core/geometry.py
幾何基本運算：距離、向量長度、座標轉換、多邊形面積
"""

from typing import Sequence, Tuple

import cv2
import numpy as np

from .errors import PreconditionError


def _check_dimensions(width: int, height: int):
    if width <= 0 or height <= 0:
        raise PreconditionError(f"影像尺寸必須為正值: width={width}, height={height}")


def distance(p1: Sequence[float], p2: Sequence[float]) -> float:
    """兩個 2D 點的歐氏距離"""
    return float(np.hypot(p1[0] - p2[0], p1[1] - p2[1]))


def norm(p: Sequence[float]) -> float:
    """2D 點視為原點出發向量的長度"""
    return float(np.hypot(p[0], p[1]))


def to_pixel(landmark: Sequence[float], width: int, height: int) -> Tuple[int, int]:
    """
    將正規化特徵點轉為像素格點座標（截斷取整，忽略 z）

    Args:
        landmark: 正規化座標 (x, y[, z])
        width: 影像寬度（像素）
        height: 影像高度（像素）

    Returns:
        (x, y) 像素座標
    """
    _check_dimensions(width, height)
    return int(landmark[0] * width), int(landmark[1] * height)


def scale_to_pixels(landmarks: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    將正規化座標放大到像素尺度，不截斷

    距離總和類特徵使用浮點座標，放大影像時距離與正規化因子等比例變化。

    Args:
        landmarks: (N, 2) 或 (N, 3) 正規化座標
        width: 影像寬度
        height: 影像高度

    Returns:
        (N, 2) 浮點像素座標
    """
    _check_dimensions(width, height)
    points = np.asarray(landmarks, dtype=np.float64)[:, :2]
    return points * np.array([width, height], dtype=np.float64)


def polygon_area(points) -> float:
    """
    多邊形面積（鞋帶公式，透過 cv2.contourArea）

    少於 3 點或共線、重複點時回傳 0.0。

    Args:
        points: 依序排列的 2D 點

    Returns:
        非負面積
    """
    pts = np.array(points, dtype=np.float64).reshape(-1, 2)
    if pts.shape[0] < 3:
        return 0.0
    # 平移到第一點附近再轉 float32，大座標才不會失去精度
    pts -= pts[0]
    contour = np.ascontiguousarray(pts, dtype=np.float32)
    return float(abs(cv2.contourArea(contour)))


def build_contour(
    landmarks: np.ndarray, indices: Sequence[int], width: int, height: int
) -> np.ndarray:
    """
    依索引表建立像素座標輪廓，每次呼叫都產生新的陣列

    Args:
        landmarks: (468, 3) 正規化特徵點
        indices: 有順序的輪廓索引
        width: 影像寬度
        height: 影像高度

    Returns:
        (N, 2) int32 輪廓
    """
    contour = np.empty((len(indices), 2), dtype=np.int32)
    for i, idx in enumerate(indices):
        contour[i] = to_pixel(landmarks[idx], width, height)
    return contour


def center_of_mass(points: np.ndarray) -> np.ndarray:
    """點集合的無權重平均位置"""
    points = np.asarray(points, dtype=np.float64)
    if points.shape[0] == 0:
        raise PreconditionError("無法計算空點集合的質心")
    return points[:, :2].mean(axis=0)


def distance_sum(sources: np.ndarray, targets: np.ndarray) -> float:
    """
    兩組點之間所有配對的距離總和

    Args:
        sources: (M, 2) 點
        targets: (K, 2) 點

    Returns:
        M*K 個距離的總和
    """
    sources = np.asarray(sources, dtype=np.float64)[:, None, :2]
    targets = np.asarray(targets, dtype=np.float64)[None, :, :2]
    return float(np.linalg.norm(sources - targets, axis=-1).sum())
