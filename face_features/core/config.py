"""
核心配置
"""

from dataclasses import dataclass, field
from typing import List

from .errors import PreconditionError

# MediaPipe FaceMesh 特徵點總數（不含虹膜）
NTOTAL_LANDMARKS = 468


@dataclass
class AnalyzerConfig:
    """分析器共用配置"""

    # ========== 輸入形狀 ==========
    n_landmarks: int = NTOTAL_LANDMARKS  # 每張影像的特徵點數量

    # ========== 正規化參數 ==========
    norm_epsilon: float = 1e-6  # 正規化因子下限，小於等於此值視為退化

    def __post_init__(self):
        """初始化後檢查"""
        if self.n_landmarks <= 0:
            raise PreconditionError(f"n_landmarks 必須為正值: {self.n_landmarks}")
        if self.norm_epsilon <= 0:
            raise PreconditionError(f"norm_epsilon 必須為正值: {self.norm_epsilon}")


@dataclass
class DetectorConfig:
    """特徵點偵測配置"""

    detection_confidence: float = 0.5  # MediaPipe 偵測信心度閾值
    static_image_mode: bool = True  # 單張影像模式
    max_num_faces: int = 1  # 只取一張臉

    def __post_init__(self):
        if not 0.0 <= self.detection_confidence <= 1.0:
            raise PreconditionError(
                f"detection_confidence 必須介於 0 與 1: {self.detection_confidence}"
            )


@dataclass
class APIConfig:
    """API 配置"""

    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    detector: DetectorConfig = field(default_factory=DetectorConfig)

    enable_detector: bool = True  # 是否載入 MediaPipe（影像上傳端點需要）
    max_upload_mb: int = 20  # 上傳影像大小上限
    supported_image_exts: List[str] = field(
        default_factory=lambda: [".jpg", ".jpeg", ".png", ".bmp", ".tiff"]
    )

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024
