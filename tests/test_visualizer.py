import base64

import cv2
import numpy as np

from face_features.api.services import FeatureVisualizer


def test_draw_returns_marked_copy(landmarks):
    image = np.zeros((240, 320, 3), dtype=np.uint8)

    marked = FeatureVisualizer().draw(image, landmarks)

    assert marked.shape == image.shape
    assert marked.any()
    assert not image.any()


def test_marked_image_is_decodable_jpeg(landmarks):
    image = np.zeros((240, 320, 3), dtype=np.uint8)

    data_uri = FeatureVisualizer().generate_marked_image(image, landmarks)

    prefix = "data:image/jpeg;base64,"
    assert data_uri.startswith(prefix)
    raw = np.frombuffer(base64.b64decode(data_uri[len(prefix):]), dtype=np.uint8)
    decoded = cv2.imdecode(raw, cv2.IMREAD_COLOR)
    assert decoded.shape == (240, 320, 3)
