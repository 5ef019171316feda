"""
face_features/core/analyzer_base.py
分析器共用生命週期與尺度正規化
"""

import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from .config import AnalyzerConfig
from .errors import NormalizationError, PreconditionError
from .geometry import distance, scale_to_pixels
from .landmarks import ANCHOR_LANDMARKS, to_landmark_array

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisInput:
    """單張影像的計算輸入（不可變）"""

    landmarks: np.ndarray  # (468, 3) 正規化座標
    width: int
    height: int
    norm_factor: float

    def pixels(self, indices: Sequence[int]) -> np.ndarray:
        """取出指定索引的浮點像素座標"""
        return scale_to_pixels(self.landmarks[list(indices)], self.width, self.height)


def compute_normalization_factor(
    landmarks: np.ndarray,
    width: int,
    height: int,
    anchors: Sequence[int] = ANCHOR_LANDMARKS,
    epsilon: float = 1e-6,
) -> float:
    """
    計算尺度正規化因子

    錨點兩兩之間像素距離的總和；與錨點順序無關，
    影像等比例放大時因子也等比例放大。

    Args:
        landmarks: (468, 3) 正規化特徵點
        width: 影像寬度
        height: 影像高度
        anchors: 錨點索引
        epsilon: 退化判斷下限

    Returns:
        正規化因子 (> epsilon)

    Raises:
        NormalizationError: 錨點重合
    """
    points = scale_to_pixels(landmarks[list(anchors)], width, height)

    norm_factor = 0.0
    for a, b in itertools.combinations(range(len(points)), 2):
        norm_factor += distance(points[a], points[b])

    if not norm_factor > epsilon:
        raise NormalizationError(
            f"正規化因子退化: {norm_factor:.3g} <= {epsilon:.3g}（錨點重合）",
            norm_factor=norm_factor,
        )
    return norm_factor


class GenericAnalyzer(ABC):
    """
    分析器基底

    持有影像尺寸、目前的特徵點與正規化因子，以及最近一次計算的特徵值。
    子類別只需宣告 METRICS 並實作 compute_metrics。

    狀態：未初始化 → 已設定尺寸 → 特徵已就緒
    """

    # 子類別宣告的特徵名稱
    METRICS: Tuple[str, ...] = ()

    def __init__(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        landmarks: Any = None,
        config: Optional[AnalyzerConfig] = None,
    ):
        """
        初始化分析器

        Args:
            width: 影像寬度（可選）
            height: 影像高度（可選）
            landmarks: 特徵點（可選，需同時提供尺寸）
            config: 分析器配置
        """
        self.config = config or AnalyzerConfig()

        self._width: Optional[int] = None
        self._height: Optional[int] = None
        self._input: Optional[AnalysisInput] = None
        self._metrics: Dict[str, float] = {}

        if width is not None or height is not None:
            self.initialize(width, height, landmarks)
        elif landmarks is not None:
            raise PreconditionError("提供特徵點時必須同時提供影像尺寸")

    def __repr__(self):
        state = "ready" if self.is_ready else (
            "dimensions_set" if self._width is not None else "uninitialized"
        )
        return f"{type(self).__name__}(width={self._width}, height={self._height}, state={state})"

    # ========== 生命週期 ==========

    def initialize(self, width: int, height: int, landmarks: Any = None):
        """
        設定影像尺寸，若提供特徵點則立即計算

        Args:
            width: 影像寬度（像素）
            height: 影像高度（像素）
            landmarks: 特徵點（可選）

        Raises:
            PreconditionError: 尺寸未提供或非正值
        """
        if width is None or height is None:
            raise PreconditionError(f"影像尺寸必須為正值: width={width}, height={height}")
        # 先取整數像素再檢查，0.5 之類的尺寸會截成 0
        width, height = int(width), int(height)
        if width <= 0 or height <= 0:
            raise PreconditionError(f"影像尺寸必須為正值: width={width}, height={height}")

        if landmarks is None and self._input is not None:
            # 已有特徵點時以新尺寸重算，特徵維持就緒
            landmarks = self._input.landmarks

        if landmarks is not None:
            self._commit(self._build(landmarks, width, height))
            return

        self._width = width
        self._height = height

    def set_landmarks(self, landmarks: Any):
        """
        更換特徵點，重新計算正規化因子與所有特徵

        失敗時不改動任何既有狀態。

        Raises:
            PreconditionError: 尚未設定影像尺寸
            ShapeError: 特徵點數量錯誤
            NormalizationError: 錨點重合
        """
        if self._width is None or self._height is None:
            raise PreconditionError("尚未設定影像尺寸，請先呼叫 initialize()")
        self._commit(self._build(landmarks, self._width, self._height))

    def _build(self, landmarks: Any, width: int, height: int) -> Tuple[AnalysisInput, Dict[str, float]]:
        """計算新狀態但不寫入"""
        array = to_landmark_array(landmarks, self.config.n_landmarks)
        norm_factor = compute_normalization_factor(
            array, width, height, epsilon=self.config.norm_epsilon
        )
        analysis_input = AnalysisInput(
            landmarks=array, width=width, height=height, norm_factor=norm_factor
        )

        metrics = dict(self.compute_metrics(analysis_input))
        missing = set(self.METRICS) - set(metrics)
        if missing:
            raise RuntimeError(
                f"{type(self).__name__}.compute_metrics 缺少特徵: {sorted(missing)}"
            )
        return analysis_input, metrics

    def _commit(self, state: Tuple[AnalysisInput, Dict[str, float]]):
        analysis_input, metrics = state
        self._width = analysis_input.width
        self._height = analysis_input.height
        self._input = analysis_input
        self._metrics = metrics
        logger.debug(
            f"{type(self).__name__} 更新完成: norm_factor={analysis_input.norm_factor:.3f}, "
            + ", ".join(f"{k}={v:.3f}" for k, v in metrics.items())
        )

    # ========== 正規化 ==========

    def compute_normalization_factor(self) -> float:
        """以目前特徵點重新計算正規化因子"""
        analysis_input = self._require_input()
        return compute_normalization_factor(
            analysis_input.landmarks,
            analysis_input.width,
            analysis_input.height,
            epsilon=self.config.norm_epsilon,
        )

    # ========== 子類別實作 ==========

    @abstractmethod
    def compute_metrics(self, analysis_input: AnalysisInput) -> Dict[str, float]:
        """
        由輸入計算此分析器宣告的全部特徵

        必須是純函式：不可依賴先前的快取狀態。
        """

    # ========== 存取 ==========

    @property
    def width(self) -> Optional[int]:
        return self._width

    @property
    def height(self) -> Optional[int]:
        return self._height

    @property
    def is_ready(self) -> bool:
        return self._input is not None

    @property
    def landmarks(self) -> np.ndarray:
        return self._require_input().landmarks

    @property
    def norm_factor(self) -> float:
        return self._require_input().norm_factor

    @property
    def metrics(self) -> Dict[str, float]:
        """所有特徵值的副本"""
        self._require_input()
        return dict(self._metrics)

    def get_metric(self, name: str) -> float:
        """
        讀取單一特徵

        Raises:
            PreconditionError: 尚未成功設定特徵點
            KeyError: 此分析器沒有該特徵
        """
        self._require_input()
        if name not in self._metrics:
            raise KeyError(f"{type(self).__name__} 沒有特徵 '{name}'，可用: {list(self.METRICS)}")
        return self._metrics[name]

    def _require_input(self) -> AnalysisInput:
        if self._input is None:
            raise PreconditionError(
                f"{type(self).__name__} 尚未計算特徵，請先呼叫 set_landmarks()"
            )
        return self._input
