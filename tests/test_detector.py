"""
Image loading and MediaPipe detector tests.
"""
import cv2
import numpy as np
import pytest

from face_features.core import DetectionError
from face_features.core.image_io import decode_image, load_image


def test_decode_image_roundtrip():
    ok, buffer = cv2.imencode(".png", np.full((20, 30, 3), 200, dtype=np.uint8))
    assert ok
    assert decode_image(buffer.tobytes()).shape == (20, 30, 3)


@pytest.mark.parametrize("data", [b"", b"garbage"])
def test_decode_image_invalid(data):
    with pytest.raises(DetectionError):
        decode_image(data)


def test_load_image_missing(tmp_path):
    with pytest.raises(DetectionError):
        load_image(tmp_path / "missing.jpg")


def test_load_image(tmp_path):
    path = tmp_path / "blank.png"
    cv2.imwrite(str(path), np.zeros((10, 12, 3), dtype=np.uint8))
    assert load_image(path).shape == (10, 12, 3)


class TestLandmarkDetector:

    @pytest.fixture
    def detector(self):
        mp = pytest.importorskip("mediapipe")
        if not hasattr(mp, "solutions"):
            pytest.skip("mediapipe build without the solutions API")
        from face_features.core.detector import LandmarkDetector

        with LandmarkDetector() as detector:
            yield detector

    def test_blank_image_has_no_face(self, detector):
        with pytest.raises(DetectionError):
            detector.detect(np.zeros((240, 320, 3), dtype=np.uint8))

    def test_invalid_image(self, detector):
        with pytest.raises(DetectionError):
            detector.detect(np.zeros((240, 320), dtype=np.uint8))

    def test_closed_detector(self, detector):
        detector.close()
        with pytest.raises(DetectionError):
            detector.detect(np.zeros((240, 320, 3), dtype=np.uint8))
