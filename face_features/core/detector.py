"""
face_features/core/detector.py
MediaPipe FaceMesh 特徵點偵測
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import cv2
import mediapipe as mp
import numpy as np

from .config import DetectorConfig
from .errors import DetectionError
from .image_io import load_image
from .landmarks import to_landmark_array

logger = logging.getLogger(__name__)


@dataclass
class DetectedFace:
    """單張臉部偵測結果"""

    landmarks: np.ndarray  # (468, 3) 正規化座標
    width: int
    height: int
    path: Optional[Path] = None


class LandmarkDetector:
    """單張影像的臉部特徵點偵測器"""

    def __init__(self, config: Optional[DetectorConfig] = None):
        """
        初始化偵測器

        Args:
            config: 偵測配置
        """
        self.config = config or DetectorConfig()

        # refine_landmarks=False 才會是 468 點（開啟會多出 10 個虹膜點）
        self.mp_face_mesh = mp.solutions.face_mesh
        self.face_mesh = self.mp_face_mesh.FaceMesh(
            static_image_mode=self.config.static_image_mode,
            max_num_faces=self.config.max_num_faces,
            refine_landmarks=False,
            min_detection_confidence=self.config.detection_confidence,
        )
        logger.info("✓ MediaPipe FaceMesh 初始化完成")

    def __enter__(self):
        """Context manager 進入"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager 離開，釋放資源"""
        self.close()

    def close(self):
        if self.face_mesh:
            self.face_mesh.close()
            self.face_mesh = None

    def detect(self, image: np.ndarray, path: Optional[Path] = None) -> DetectedFace:
        """
        偵測第一張臉的特徵點

        Args:
            image: BGR 影像
            path: 原始檔案路徑（可選，僅供記錄）

        Returns:
            DetectedFace

        Raises:
            DetectionError: 影像無效或未偵測到人臉
        """
        if self.face_mesh is None:
            raise DetectionError("偵測器已關閉")
        if image is None or image.ndim != 3 or image.size == 0:
            raise DetectionError("輸入影像無效")

        height, width = image.shape[:2]

        rgb_image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        results = self.face_mesh.process(rgb_image)

        if not results.multi_face_landmarks:
            raise DetectionError("未偵測到人臉")

        landmarks = to_landmark_array(results.multi_face_landmarks[0])
        logger.debug(f"偵測到 {landmarks.shape[0]} 個特徵點 ({width}x{height})")

        return DetectedFace(landmarks=landmarks, width=width, height=height, path=path)

    def detect_file(self, path: Union[str, Path]) -> DetectedFace:
        """讀取影像檔並偵測"""
        path = Path(path)
        return self.detect(load_image(path), path=path)
