"""
face_features/api/services/feature_service.py
主特徵服務：特徵點 → 幾何特徵
"""

import logging
import time
from datetime import datetime
from typing import Optional

from face_features.api.schemas import FeatureResponse, FeatureValues, LandmarkPayload
from face_features.api.services.visualizer import FeatureVisualizer
from face_features.core import APIConfig, DetectionError, FeatureExtractor, FeatureSet
from face_features.core.image_io import decode_image

logger = logging.getLogger(__name__)


class FeatureService:
    """主特徵服務"""

    def __init__(self, config: Optional[APIConfig] = None, detector=None):
        """
        初始化特徵服務

        Args:
            config: API 配置
            detector: LandmarkDetector（None 時影像端點不可用）
        """
        self.config = config or APIConfig()
        self.detector = detector
        self.extractor = FeatureExtractor(self.config.analyzer, detector=detector)
        self.visualizer = FeatureVisualizer()

        logger.info("=" * 60)
        logger.info("特徵服務初始化完成")
        logger.info(f"影像偵測: {'啟用' if detector is not None else '停用'}")
        logger.info("=" * 60)

    @classmethod
    def from_config(cls, config: APIConfig) -> "FeatureService":
        """依配置建立服務，需要時載入 MediaPipe 偵測器"""
        detector = None
        if config.enable_detector:
            from face_features.core.detector import LandmarkDetector

            detector = LandmarkDetector(config.detector)
        return cls(config, detector=detector)

    def close(self):
        """釋放偵測器資源"""
        if self.detector is not None:
            self.detector.close()

    # ========== 特徵提取 ==========

    def analyze_landmarks(self, payload: LandmarkPayload) -> FeatureResponse:
        """
        由特徵點計算特徵

        核心錯誤（ShapeError 等）直接往上拋，交給例外處理器轉成錯誤回應。

        Args:
            payload: 特徵點與影像尺寸

        Returns:
            特徵結果
        """
        start_time = time.time()

        features = self.extractor.extract(payload.landmarks, payload.width, payload.height)

        processing_time = time.time() - start_time
        logger.info(f"✓ 特徵計算完成 ({payload.width}x{payload.height}) in {processing_time:.3f}s")
        return self._build_response(features, processing_time)

    def analyze_image(self, data: bytes, mark: bool = False) -> FeatureResponse:
        """
        由上傳影像偵測特徵點並計算特徵

        Args:
            data: 影像位元組
            mark: 是否附上標記圖片

        Returns:
            特徵結果

        Raises:
            DetectionError: 偵測器未啟用、影像無法解碼或偵測不到人臉
        """
        start_time = time.time()

        if self.detector is None:
            raise DetectionError("影像偵測未啟用")

        logger.info("\n[1/3] 解碼影像...")
        image = decode_image(data)

        logger.info("\n[2/3] 偵測特徵點...")
        face = self.detector.detect(image)

        logger.info("\n[3/3] 計算特徵...")
        features = self.extractor.extract(face.landmarks, face.width, face.height)

        marked_figure = None
        if mark:
            marked_figure = self.visualizer.generate_marked_image(image, face.landmarks)

        processing_time = time.time() - start_time
        logger.info(f"總處理時間: {processing_time:.2f} 秒")
        return self._build_response(features, processing_time, marked_figure)

    def _build_response(
        self,
        features: FeatureSet,
        processing_time: float,
        marked_figure: Optional[str] = None,
    ) -> FeatureResponse:
        return FeatureResponse(
            success=True,
            error=None,
            features=FeatureValues(**features.to_dict()),
            codes=features.as_codes(),
            norm_factor=features.norm_factor,
            marked_figure=marked_figure,
            processing_time=processing_time,
            timestamp=datetime.now(),
        )
