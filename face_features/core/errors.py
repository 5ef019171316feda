"""
face_features/core/errors.py
特徵計算錯誤類型
"""


class FeatureError(ValueError):
    """特徵計算錯誤的共同基底"""


class PreconditionError(FeatureError):
    """前置條件不成立：影像尺寸未設定或非正值、特徵點尚未設定就讀取特徵"""


class ShapeError(FeatureError):
    """特徵點數量或形狀與預期不符"""

    def __init__(self, message: str, expected=None, actual=None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NormalizationError(FeatureError):
    """正規化因子退化（錨點重合）"""

    def __init__(self, message: str, norm_factor: float = 0.0):
        super().__init__(message)
        self.norm_factor = norm_factor


class DetectionError(RuntimeError):
    """影像無法讀取或偵測不到人臉"""
