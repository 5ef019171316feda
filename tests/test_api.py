"""
HTTP API tests (no MediaPipe needed: the lifespan is not run and the
detector is replaced by a fake).
"""
from types import SimpleNamespace

import cv2
import numpy as np
import pytest
from fastapi.testclient import TestClient

import app as app_module
from face_features.api.routers import features, health
from face_features.api.services import FeatureService
from face_features.core import APIConfig


class FakeDetector:
    def __init__(self, landmarks):
        self.landmarks = landmarks

    def detect(self, image):
        height, width = image.shape[:2]
        return SimpleNamespace(landmarks=self.landmarks, width=width, height=height)

    def close(self):
        pass


def _client(service: FeatureService) -> TestClient:
    app = app_module.app
    app.dependency_overrides[features.get_feature_service] = lambda: service
    app.dependency_overrides[health.get_feature_service] = lambda: service
    return TestClient(app)


@pytest.fixture
def client():
    service = FeatureService(APIConfig(enable_detector=False))
    yield _client(service)
    app_module.app.dependency_overrides[features.get_feature_service] = app_module.get_feature_service
    app_module.app.dependency_overrides[health.get_feature_service] = app_module.get_feature_service


@pytest.fixture
def detector_client(landmarks):
    service = FeatureService(APIConfig(enable_detector=False), detector=FakeDetector(landmarks))
    yield _client(service)
    app_module.app.dependency_overrides[features.get_feature_service] = app_module.get_feature_service
    app_module.app.dependency_overrides[health.get_feature_service] = app_module.get_feature_service


def _png_bytes(width=128, height=96) -> bytes:
    ok, buffer = cv2.imencode(".png", np.full((height, width, 3), 127, dtype=np.uint8))
    assert ok
    return buffer.tobytes()


class TestLandmarkEndpoint:

    def test_valid_payload(self, client, landmark_dicts):
        response = client.post(
            "/features/landmarks",
            json={"width": 640, "height": 480, "landmarks": landmark_dicts},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert set(body["codes"]) == {"F1", "F2", "F3", "F4", "F5", "F7"}
        assert body["codes"]["F4"] == pytest.approx(body["features"]["eyebrow_activity"])
        assert body["norm_factor"] > 0
        assert "X-Process-Time" in response.headers

    def test_short_landmark_list(self, client, landmark_dicts):
        response = client.post(
            "/features/landmarks",
            json={"width": 640, "height": 480, "landmarks": landmark_dicts[:467]},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["error_type"] == "ShapeError"
        assert body["details"] == {"expected": 468, "actual": 467}

    def test_non_positive_width(self, client, landmark_dicts):
        response = client.post(
            "/features/landmarks",
            json={"width": 0, "height": 480, "landmarks": landmark_dicts},
        )

        assert response.status_code == 422
        assert response.json()["error_type"] == "ValidationError"

    def test_coincident_anchors(self, client, coincident_anchor_landmarks):
        points = [{"x": x, "y": y, "z": z} for x, y, z in coincident_anchor_landmarks.tolist()]
        response = client.post(
            "/features/landmarks",
            json={"width": 640, "height": 480, "landmarks": points},
        )

        assert response.status_code == 422
        assert response.json()["error_type"] == "NormalizationError"


class TestImageEndpoint:

    def test_detector_disabled(self, client):
        response = client.post(
            "/features/image",
            files={"file": ("face.png", _png_bytes(), "image/png")},
        )

        assert response.status_code == 422
        assert response.json()["error_type"] == "DetectionError"

    def test_unsupported_extension(self, detector_client):
        response = detector_client.post(
            "/features/image",
            files={"file": ("face.txt", b"hello", "text/plain")},
        )
        assert response.status_code == 400

    def test_undecodable_image(self, detector_client):
        response = detector_client.post(
            "/features/image",
            files={"file": ("face.png", b"not an image", "image/png")},
        )

        assert response.status_code == 422
        assert response.json()["error_type"] == "DetectionError"

    def test_features_with_marked_figure(self, detector_client):
        response = detector_client.post(
            "/features/image",
            files={"file": ("face.png", _png_bytes(), "image/png")},
            data={"mark": "true"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["marked_figure"].startswith("data:image/jpeg;base64,")
        assert set(body["codes"]) == {"F1", "F2", "F3", "F4", "F5", "F7"}


class TestHealth:

    def test_degraded_without_detector(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "degraded"
        assert body["components"]["detector"] is False

    def test_healthy_with_detector(self, detector_client):
        assert detector_client.get("/health").json()["status"] == "healthy"

    def test_root(self, client):
        body = client.get("/").json()
        assert body["features"]["F3"] == "eye_inner_area"
