"""
face_features
由臉部特徵點計算表情幾何特徵
"""

__version__ = "1.0.0"
