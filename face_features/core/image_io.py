"""
face_features/core/image_io.py
影像讀取與解碼
"""

from pathlib import Path
from typing import Union

import cv2
import numpy as np

from .errors import DetectionError


def load_image(path: Union[str, Path]) -> np.ndarray:
    """讀取 BGR 影像"""
    path = Path(path)
    image = cv2.imread(str(path))
    if image is None:
        raise DetectionError(f"無法讀取影像: {path}")
    return image


def decode_image(data: bytes) -> np.ndarray:
    """將上傳的位元組解碼為 BGR 影像"""
    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR) if buffer.size else None
    if image is None:
        raise DetectionError("無法解碼影像資料")
    return image
