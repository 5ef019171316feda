"""
face_features/cli.py
單張影像特徵提取

用法:
    face-features --input_image_path path/to/image.jpg
"""

import argparse
import logging
import sys
from typing import List, Optional

from face_features.api.middleware.logging import setup_logging
from face_features.core import DetectorConfig, DetectionError, FeatureError, FeatureExtractor
from face_features.core.detector import LandmarkDetector

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="face-features",
        description="由單張人臉影像計算表情幾何特徵 (F1..F7)",
    )
    parser.add_argument("--input_image_path", required=True, help="影像路徑")
    parser.add_argument(
        "--detection_confidence", type=float, default=0.5, help="MediaPipe 偵測信心度閾值"
    )
    parser.add_argument("--log-level", default="WARNING", help="日誌等級")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level)

    try:
        config = DetectorConfig(detection_confidence=args.detection_confidence)
        with LandmarkDetector(config) as detector:
            face = detector.detect_file(args.input_image_path)
        features = FeatureExtractor().extract(face.landmarks, face.width, face.height)
    except (DetectionError, FeatureError) as e:
        logger.error(f"特徵提取失敗: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for code, value in features.as_codes().items():
        print(f"{code}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
