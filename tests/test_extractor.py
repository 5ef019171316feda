"""
FeatureExtractor tests.
"""
from types import SimpleNamespace

import pytest

from face_features.core import (
    DetectionError,
    EyeAnalyzer,
    FaceAnalyzer,
    FeatureExtractor,
    MouthAnalyzer,
    ShapeError,
)


class FakeDetector:
    def __init__(self, landmarks, width=640, height=480):
        self.face = SimpleNamespace(landmarks=landmarks, width=width, height=height)
        self.calls = 0

    def detect(self, image):
        self.calls += 1
        return self.face


class TestFeatureExtractor:

    def test_codes_follow_driver_order(self, landmarks):
        features = FeatureExtractor().extract(landmarks, 640, 480)
        assert list(features.as_codes()) == ["F1", "F2", "F3", "F4", "F5", "F7"]

    def test_values_match_analyzers(self, landmarks):
        features = FeatureExtractor().extract(landmarks, 640, 480)

        eye = EyeAnalyzer(640, 480, landmarks)
        mouth = MouthAnalyzer(640, 480, landmarks)
        face = FaceAnalyzer(640, 480, landmarks)

        codes = features.as_codes()
        assert codes["F1"] == mouth.mouth_outer_area
        assert codes["F2"] == mouth.mouth_corner_activity
        assert codes["F3"] == eye.eye_inner_area
        assert codes["F4"] == eye.eyebrow_activity
        assert codes["F5"] == face.face_area
        assert codes["F7"] == face.face_center_of_mass
        assert features.norm_factor == eye.norm_factor

    def test_to_dict_has_only_features(self, landmarks):
        values = FeatureExtractor().extract(landmarks, 640, 480).to_dict()
        assert "norm_factor" not in values
        assert len(values) == 6

    def test_accepts_dict_payload(self, landmarks, landmark_dicts):
        extractor = FeatureExtractor()
        assert extractor.extract(landmark_dicts, 640, 480) == extractor.extract(landmarks, 640, 480)

    def test_shape_error_propagates(self, landmarks):
        with pytest.raises(ShapeError):
            FeatureExtractor().extract(landmarks[:400], 640, 480)

    def test_image_without_detector(self):
        with pytest.raises(DetectionError):
            FeatureExtractor().extract_from_image(object())

    def test_image_with_detector(self, landmarks):
        detector = FakeDetector(landmarks)
        extractor = FeatureExtractor(detector=detector)

        features = extractor.extract_from_image(object())

        assert detector.calls == 1
        assert features == FeatureExtractor().extract(landmarks, 640, 480)
