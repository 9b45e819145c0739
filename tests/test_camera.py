import dataclasses

import numpy as np
import pytest

from stereoslam.camera import CameraModel


def test_from_k_and_baseline_reads_intrinsics():
    k = np.array([[458.654, 0.0, 367.215], [0.0, 457.296, 248.375], [0.0, 0.0, 1.0]])
    cam = CameraModel.from_k_and_baseline(k, 0.11)
    assert cam.fx == 458.654
    assert cam.fy == 457.296
    assert cam.cx == 367.215
    assert cam.cy == 248.375
    assert cam.baseline == 0.11


def test_from_k_accepts_nested_lists():
    cam = CameraModel.from_k_and_baseline([[500, 0, 320], [0, 510, 240], [0, 0, 1]], 0.2)
    assert (cam.fx, cam.fy, cam.cx, cam.cy) == (500.0, 510.0, 320.0, 240.0)


def test_from_k_rejects_wrong_shape():
    with pytest.raises(ValueError):
        CameraModel.from_k_and_baseline([[1.0, 2.0], [3.0, 4.0]], 0.1)


def test_camera_is_immutable():
    cam = CameraModel.from_k_and_baseline([[500, 0, 320], [0, 500, 240], [0, 0, 1]], 0.1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        cam.fx = 1.0
    assert cam.fx == 500.0