import numpy as np
import pytest

from stereoslam.motion_model import MotionModel, Pose

RZ90 = np.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])


def test_identity_leaves_point_unchanged():
    p = np.array([1.5, -2.0, 3.0])
    assert np.allclose(Pose.identity().transform_point(p), p)


def test_inverse_compose_is_identity():
    pose = Pose(RZ90, [1.0, 2.0, 3.0])
    result = pose.compose(pose.inverse())
    assert np.allclose(result.rotation, np.eye(3))
    assert np.allclose(result.translation, np.zeros(3))


def test_inverse_round_trip_point():
    pose = Pose(RZ90, [0.5, -1.0, 2.0])
    p = np.array([3.0, 4.0, 5.0])
    assert np.allclose(pose.inverse().transform_point(pose.transform_point(p)), p)


def test_compose_applies_right_operand_first():
    a = Pose(RZ90, [1.0, 0.0, 0.0])
    b = Pose(np.eye(3), [0.0, 2.0, -1.0])
    p = np.array([1.0, 1.0, 1.0])
    assert np.allclose(a.compose(b).transform_point(p), a.transform_point(b.transform_point(p)))


def test_bad_shapes_raise():
    with pytest.raises(ValueError):
        Pose(np.eye(2), np.zeros(3))
    with pytest.raises(ValueError):
        Pose(np.eye(3), np.zeros(2))


def test_predict_without_observation():
    assert MotionModel().predict() is None


def test_single_observation_predicts_same_pose():
    model = MotionModel()
    pose = Pose(RZ90, [1.0, 2.0, 3.0])
    model.update(pose)
    predicted = model.predict()
    assert np.allclose(predicted.rotation, pose.rotation)
    assert np.allclose(predicted.translation, pose.translation)


def test_constant_translation_velocity():
    model = MotionModel()
    first = Pose(np.eye(3), [0.0, 0.0, 0.0])
    second = Pose(np.eye(3), [1.0, 0.5, 0.0])
    model.update(first)
    model.update(second)
    predicted = model.predict()
    step = second.translation - first.translation
    assert np.allclose(predicted.translation - second.translation, step)


def test_constant_rotation_velocity():
    model = MotionModel()
    model.update(Pose.identity())
    model.update(Pose(RZ90, np.zeros(3)))
    predicted = model.predict()
    assert np.allclose(predicted.rotation, np.diag([-1.0, -1.0, 1.0]))


def test_reset_forgets_state():
    model = MotionModel()
    model.update(Pose.identity())
    model.update(Pose(RZ90, [1.0, 0.0, 0.0]))
    model.reset()
    assert model.predict() is None
    pose = Pose(np.eye(3), [4.0, 5.0, 6.0])
    model.update(pose)
    assert np.allclose(model.predict().translation, pose.translation)
    assert np.allclose(model.predict().rotation, np.eye(3))