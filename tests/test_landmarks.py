"""
Landmark index tables and input conversion tests.
"""
from types import SimpleNamespace

import numpy as np
import pytest

from face_features.core.errors import ShapeError
from face_features.core.landmarks import (
    CONTOUR_TABLES,
    EYE_LEFT_INNER_LMARKS,
    EYE_RIGHT_INNER_LMARKS,
    INDEX_TABLES,
    to_landmark_array,
)


class TestIndexTables:

    @pytest.mark.parametrize("name", sorted(INDEX_TABLES))
    def test_indices_in_range(self, name):
        assert all(0 <= idx <= 467 for idx in INDEX_TABLES[name])

    @pytest.mark.parametrize("name", CONTOUR_TABLES)
    def test_contours_have_at_least_three_distinct_points(self, name):
        table = INDEX_TABLES[name]
        assert len(table) >= 3
        assert len(set(table)) == len(table)

    def test_eye_contours_are_paired(self):
        assert len(EYE_RIGHT_INNER_LMARKS) == len(EYE_LEFT_INNER_LMARKS)

    def test_tables_are_immutable(self):
        assert all(isinstance(table, tuple) for table in INDEX_TABLES.values())


class TestToLandmarkArray:

    def test_from_array(self, landmarks):
        array = to_landmark_array(landmarks)
        assert array.shape == (468, 3)
        assert np.array_equal(array, landmarks)
        assert array is not landmarks

    def test_result_is_read_only(self, landmarks):
        array = to_landmark_array(landmarks)
        with pytest.raises(ValueError):
            array[0, 0] = 1.0

    def test_caller_array_not_frozen(self, landmarks):
        to_landmark_array(landmarks)
        landmarks[0, 0] = 0.1
        assert landmarks[0, 0] == 0.1

    def test_two_columns_are_padded(self, landmarks):
        array = to_landmark_array(landmarks[:, :2])
        assert array.shape == (468, 3)
        assert np.all(array[:, 2] == 0.0)

    def test_from_dicts(self, landmarks, landmark_dicts):
        assert np.allclose(to_landmark_array(landmark_dicts), landmarks)

    def test_dict_without_z(self, landmarks):
        points = [{"x": x, "y": y} for x, y, _ in landmarks]
        array = to_landmark_array(points)
        assert np.allclose(array[:, :2], landmarks[:, :2])
        assert np.all(array[:, 2] == 0.0)

    def test_from_mediapipe_like_list(self, landmarks):
        landmark_list = SimpleNamespace(
            landmark=[SimpleNamespace(x=x, y=y, z=z) for x, y, z in landmarks]
        )
        assert np.allclose(to_landmark_array(landmark_list), landmarks)

    @pytest.mark.parametrize("count", [0, 467, 469, 478])
    def test_wrong_count(self, count):
        with pytest.raises(ShapeError) as exc_info:
            to_landmark_array(np.full((count, 3), 0.5))
        assert exc_info.value.expected == 468
        assert exc_info.value.actual == count

    def test_wrong_columns(self):
        with pytest.raises(ShapeError):
            to_landmark_array(np.full((468, 4), 0.5))

    def test_none(self):
        with pytest.raises(ShapeError):
            to_landmark_array(None)

    def test_nan_rejected(self, landmarks):
        landmarks[10, 1] = np.nan
        with pytest.raises(ShapeError):
            to_landmark_array(landmarks)

    def test_custom_count(self):
        array = to_landmark_array(np.full((68, 2), 0.5), n_landmarks=68)
        assert array.shape == (68, 3)

    @pytest.mark.parametrize("malformed", [
        [0.5] * 468 * 3,
        [("a", "b")] * 468,
        [{"y": 0.5}] * 468,
        [(0.5, None)] * 468,
        42,
    ])
    def test_malformed_points_raise_shape_error(self, malformed):
        with pytest.raises(ShapeError):
            to_landmark_array(malformed)
