import math

import pytest

from pica3d.quaternion import (
    FVec,
    fvec3,
    fvec4,
    quat,
    quat_cross_fvec3,
    quat_from_axis_angle,
    quat_from_pitch_yaw_roll,
    quat_identity,
    quat_look_at,
    quat_multiply,
    quat_pow,
    quat_rotate,
    quat_rotate_x,
    quat_rotate_y,
    quat_rotate_z,
)


def assert_close(a, b, tol=1e-9):
    assert list(a) == pytest.approx(list(b), abs=tol)


SAMPLE = quat_from_axis_angle(fvec3(1.0, 2.0, 3.0), 0.7)


def test_vector_arithmetic():
    a = fvec4(1.0, 2.0, 3.0, 4.0)
    b = fvec4(0.5, 0.5, 0.5, 0.5)
    assert a + b - b == a
    assert a * 2.0 == a + a
    assert 2.0 * a == a * 2.0
    assert a.dot4(a) == a.magnitude4() ** 2
    assert a.dot3(b) == pytest.approx(3.0)


def test_cross_is_orthogonal():
    a = fvec3(1.0, 2.0, 3.0)
    b = fvec3(-4.0, 0.5, 2.0)
    c = a.cross(b)
    assert c.dot3(a) == pytest.approx(0.0)
    assert c.dot3(b) == pytest.approx(0.0)
    assert c.w == 0.0
    assert fvec3(1, 0, 0).cross(fvec3(0, 1, 0)) == fvec3(0, 0, 1)


def test_normalize():
    v = fvec4(3.0, 4.0, 12.0, 5.0)
    assert v.normalize4().magnitude4() == pytest.approx(1.0)
    n3 = v.normalize3()
    assert n3.magnitude3() == pytest.approx(1.0)
    assert n3.w == 0.0


def test_normalize_zero_raises():
    with pytest.raises(ValueError):
        fvec3(0.0, 0.0, 0.0).normalize3()
    with pytest.raises(ValueError):
        FVec().normalize4()


def test_quaternion_component_names():
    q = quat(1.0, 2.0, 3.0, 4.0)
    assert (q.i, q.j, q.k, q.r) == (q.x, q.y, q.z, q.w)
    assert q.r == 4.0


def test_identity_is_neutral():
    assert_close(quat_multiply(quat_identity(), SAMPLE), SAMPLE)
    assert_close(quat_multiply(SAMPLE, quat_identity()), SAMPLE)


def test_hamilton_units():
    i = quat(1.0, 0.0, 0.0, 0.0)
    j = quat(0.0, 1.0, 0.0, 0.0)
    assert quat_multiply(i, j) == quat(0.0, 0.0, 1.0, 0.0)
    assert quat_multiply(i, i) == quat(0.0, 0.0, 0.0, -1.0)


def test_pow_zero_is_identity():
    assert quat_pow(SAMPLE, 0.0) == quat_identity()


def test_pow_one_and_two():
    assert_close(quat_pow(SAMPLE, 1.0), SAMPLE)
    assert_close(quat_pow(SAMPLE, 2.0), quat_multiply(SAMPLE, SAMPLE))


def test_pow_half_squares_back():
    half = quat_pow(SAMPLE, 0.5)
    assert_close(quat_multiply(half, half), SAMPLE)


def test_pow_of_real_quaternion():
    assert quat_pow(quat(0.0, 0.0, 0.0, 4.0), 0.5) == quat(0.0, 0.0, 0.0, 2.0)


@pytest.mark.parametrize("right_side", [True, False])
@pytest.mark.parametrize(
    "axis,fn",
    [
        (fvec3(1.0, 0.0, 0.0), quat_rotate_x),
        (fvec3(0.0, 1.0, 0.0), quat_rotate_y),
        (fvec3(0.0, 0.0, 1.0), quat_rotate_z),
    ],
)
def test_axis_rotations_match_general_rotate(axis, fn, right_side):
    expected = quat_rotate(SAMPLE, axis, 1.1, right_side)
    assert_close(fn(SAMPLE, 1.1, right_side), expected)


@pytest.mark.parametrize("right_side", [True, False])
def test_rotate_identity_equals_axis_angle(right_side):
    axis = fvec3(0.3, -1.0, 2.0)
    assert_close(
        quat_rotate(quat_identity(), axis, 0.9, right_side),
        quat_from_axis_angle(axis, 0.9),
    )


def test_axis_angle_is_unit():
    assert SAMPLE.magnitude4() == pytest.approx(1.0)


def test_cross_fvec3_rotates_x_to_y():
    q = quat_from_axis_angle(fvec3(0.0, 0.0, 1.0), math.pi / 2)
    assert_close(quat_cross_fvec3(q, fvec3(1.0, 0.0, 0.0)), fvec3(0.0, 1.0, 0.0))


def test_cross_fvec3_preserves_length():
    v = fvec3(2.0, -3.0, 0.5)
    assert quat_cross_fvec3(SAMPLE, v).magnitude3() == pytest.approx(v.magnitude3())


@pytest.mark.parametrize("right_side", [True, False])
def test_pitch_only_matches_x_axis(right_side):
    assert_close(
        quat_from_pitch_yaw_roll(0.8, 0.0, 0.0, right_side),
        quat_from_axis_angle(fvec3(1.0, 0.0, 0.0), 0.8),
    )


@pytest.mark.parametrize("right_side", [True, False])
def test_yaw_only_matches_y_axis(right_side):
    assert_close(
        quat_from_pitch_yaw_roll(0.0, 0.8, 0.0, right_side),
        quat_from_axis_angle(fvec3(0.0, 1.0, 0.0), 0.8),
    )


def test_look_at_same_direction_is_identity():
    q = quat_look_at(
        fvec3(0.0, 0.0, 0.0), fvec3(0.0, 0.0, 5.0), fvec3(0.0, 0.0, 1.0), fvec3(0.0, 1.0, 0.0)
    )
    assert q == quat_identity()


def test_look_at_opposite_direction_turns_around_up():
    up = fvec3(0.0, 1.0, 0.0)
    q = quat_look_at(fvec3(0.0, 0.0, 0.0), fvec3(0.0, 0.0, -5.0), fvec3(0.0, 0.0, 1.0), up)
    assert q == quat_from_axis_angle(up, math.pi)


def test_look_at_points_forward_at_target():
    source = fvec3(1.0, 1.0, 1.0)
    target = fvec3(4.0, -2.0, 3.0)
    forward = fvec3(0.0, 0.0, 1.0)
    q = quat_look_at(source, target, forward, fvec3(0.0, 1.0, 0.0))
    assert_close(quat_cross_fvec3(q, forward), (target - source).normalize3())