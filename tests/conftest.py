from __future__ import annotations

import numpy as np
import pytest

from face_features.core.landmarks import (
    ANCHOR_LANDMARKS,
    EYE_LEFT_INNER_LMARKS,
    EYE_RIGHT_INNER_LMARKS,
)

N_LANDMARKS = 468

# 10x10 像素正方形周長上的位置，每邊含角點共 4 點
SQUARE_PERIMETER = (0, 2, 5, 7, 10, 12, 15, 17, 20, 22, 25, 27, 30, 32, 35, 37)


def _perimeter_point(t: int) -> tuple[int, int]:
    if t < 10:
        return t, 0
    if t < 20:
        return 10, t - 10
    if t < 30:
        return 30 - t, 10
    return 0, 40 - t


def make_landmarks(seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    landmarks = rng.uniform(0.2, 0.8, size=(N_LANDMARKS, 3))
    landmarks[:, 2] = rng.uniform(-0.1, 0.1, size=N_LANDMARKS)
    return landmarks


@pytest.fixture
def landmarks() -> np.ndarray:
    return make_landmarks(0)


@pytest.fixture
def other_landmarks() -> np.ndarray:
    return make_landmarks(1)


@pytest.fixture
def coincident_anchor_landmarks() -> np.ndarray:
    landmarks = make_landmarks(2)
    landmarks[list(ANCHOR_LANDMARKS), :2] = 0.5
    return landmarks


@pytest.fixture
def square_eye_landmarks() -> np.ndarray:
    """右眼內輪廓為 10x10 正方形（64x64 影像），左眼縮成一點"""
    landmarks = make_landmarks(3)
    size = 64
    for idx, t in zip(EYE_RIGHT_INNER_LMARKS, SQUARE_PERIMETER):
        x, y = _perimeter_point(t)
        landmarks[idx, 0] = x / size
        landmarks[idx, 1] = y / size
    for idx in EYE_LEFT_INNER_LMARKS:
        landmarks[idx, :2] = 32 / size
    return landmarks


@pytest.fixture
def landmark_dicts(landmarks) -> list[dict]:
    return [{"x": float(x), "y": float(y), "z": float(z)} for x, y, z in landmarks]
