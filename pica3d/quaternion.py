"""Four-component vectors and quaternion operations.

A quaternion is stored in an :class:`FVec`: the imaginary parts ``i``, ``j``
and ``k`` live in ``x``, ``y`` and ``z`` and the real part ``r`` in ``w``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

FLT_EPSILON = 2.0**-23


@dataclass(frozen=True)
class FVec:
    """An immutable vector of four floats, also used as a quaternion."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    @property
    def i(self) -> float:
        return self.x

    @property
    def j(self) -> float:
        return self.y

    @property
    def k(self) -> float:
        return self.z

    @property
    def r(self) -> float:
        return self.w

    def __iter__(self):
        yield from (self.x, self.y, self.z, self.w)

    def __add__(self, other: FVec) -> FVec:
        if not isinstance(other, FVec):
            return NotImplemented
        return FVec(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: FVec) -> FVec:
        if not isinstance(other, FVec):
            return NotImplemented
        return FVec(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __mul__(self, scalar: float) -> FVec:
        if isinstance(scalar, FVec):
            return NotImplemented
        return FVec(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    __rmul__ = __mul__

    def dot3(self, other: FVec) -> float:
        """Dot product of the first three components."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def dot4(self, other: FVec) -> float:
        """Dot product of all four components."""
        return self.dot3(other) + self.w * other.w

    def cross(self, other: FVec) -> FVec:
        """Three-component cross product; ``w`` of the result is zero."""
        return fvec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude3(self) -> float:
        return math.sqrt(self.dot3(self))

    def magnitude4(self) -> float:
        return math.sqrt(self.dot4(self))

    def normalize3(self) -> FVec:
        """Unit vector of the first three components; ``w`` becomes zero."""
        m = self.magnitude3()
        if m == 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return fvec3(self.x / m, self.y / m, self.z / m)

    def normalize4(self) -> FVec:
        """Unit vector over all four components."""
        m = self.magnitude4()
        if m == 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return FVec(self.x / m, self.y / m, self.z / m, self.w / m)


def fvec3(x: float, y: float, z: float) -> FVec:
    """A three-component vector (``w`` is zero)."""
    return FVec(x, y, z, 0.0)


def fvec4(x: float, y: float, z: float, w: float) -> FVec:
    return FVec(x, y, z, w)


def quat(i: float, j: float, k: float, r: float) -> FVec:
    """A quaternion with imaginary parts ``i, j, k`` and real part ``r``."""
    return FVec(i, j, k, r)


def quat_identity() -> FVec:
    return quat(0.0, 0.0, 0.0, 1.0)


def quat_multiply(lhs: FVec, rhs: FVec) -> FVec:
    """Hamilton product ``lhs * rhs``."""
    i = lhs.r * rhs.i + lhs.i * rhs.r + lhs.j * rhs.k - lhs.k * rhs.j
    j = lhs.r * rhs.j + lhs.j * rhs.r + lhs.k * rhs.i - lhs.i * rhs.k
    k = lhs.r * rhs.k + lhs.k * rhs.r + lhs.i * rhs.j - lhs.j * rhs.i
    r = lhs.r * rhs.r - lhs.i * rhs.i - lhs.j * rhs.j - lhs.k * rhs.k
    return quat(i, j, k, r)


def _real_pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except ValueError:
        return math.nan


def quat_pow(q: FVec, p: float) -> FVec:
    """Raise ``q`` to the real power ``p``."""
    if -FLT_EPSILON < p < FLT_EPSILON:
        return quat_identity()

    mag = q.magnitude4()
    ratio = q.r / mag

    if 1.0 - FLT_EPSILON < abs(ratio) < 1.0 + FLT_EPSILON:
        return quat(0.0, 0.0, 0.0, _real_pow(q.r, p))

    angle = math.acos(ratio)
    new_angle = angle * p
    div = math.sin(new_angle) / math.sin(angle)
    scale = _real_pow(mag, p - 1.0)
    return quat(
        q.i * div * scale,
        q.j * div * scale,
        q.k * div * scale,
        math.cos(new_angle) * mag * scale,
    )


def quat_rotate(q: FVec, axis: FVec, r: float, right_side: bool) -> FVec:
    """Rotate ``q`` by angle ``r`` around ``axis``."""
    half = r / 2.0
    s = math.sin(half)
    axis = axis.normalize3()
    tmp = quat(axis.x * s, axis.y * s, axis.z * s, math.cos(half))
    if right_side:
        return quat_multiply(tmp, q)
    return quat_multiply(q, tmp)


def quat_rotate_x(q: FVec, r: float, right_side: bool) -> FVec:
    c = math.cos(r / 2.0)
    s = math.sin(r / 2.0)
    if right_side:
        return quat(q.r * s + q.i * c, q.j * c - q.k * s, q.k * c + q.j * s, q.r * c - q.i * s)
    return quat(q.r * s + q.i * c, q.j * c + q.k * s, q.k * c - q.j * s, q.r * c - q.i * s)


def quat_rotate_y(q: FVec, r: float, right_side: bool) -> FVec:
    c = math.cos(r / 2.0)
    s = math.sin(r / 2.0)
    if right_side:
        return quat(q.i * c + q.k * s, q.r * s + q.j * c, q.k * c - q.i * s, q.r * c - q.j * s)
    return quat(q.i * c - q.k * s, q.r * s + q.j * c, q.k * c + q.i * s, q.r * c - q.j * s)


def quat_rotate_z(q: FVec, r: float, right_side: bool) -> FVec:
    c = math.cos(r / 2.0)
    s = math.sin(r / 2.0)
    if right_side:
        return quat(q.i * c - q.j * s, q.j * c + q.i * s, q.r * s + q.k * c, q.r * c - q.k * s)
    return quat(q.i * c + q.j * s, q.j * c - q.i * s, q.r * s + q.k * c, q.r * c - q.k * s)


def quat_from_axis_angle(axis: FVec, angle: float) -> FVec:
    """Quaternion for a rotation of ``angle`` radians around ``axis``."""
    half = angle / 2.0
    scale = math.sin(half)
    axis = axis.normalize4()
    return quat(axis.x * scale, axis.y * scale, axis.z * scale, math.cos(half))


def quat_from_pitch_yaw_roll(pitch: float, yaw: float, roll: float, right_side: bool) -> FVec:
    pc, ps = math.cos(pitch / 2.0), math.sin(pitch / 2.0)
    yc, ys = math.cos(yaw / 2.0), math.sin(yaw / 2.0)
    rc, rs = math.cos(roll / 2.0), math.sin(roll / 2.0)

    if right_side:
        return quat(
            ps * yc * rc - pc * ys * rs,
            pc * ys * rc + ps * yc * rs,
            pc * yc * rs - ps * ys * rc,
            pc * yc * rc + ps * ys * rs,
        )
    return quat(
        ps * yc * rc + pc * ys * rs,
        pc * ys * rc - ps * yc * rs,
        pc * yc * rs + ps * ys * rc,
        pc * yc * rc - ps * ys * rs,
    )


def quat_look_at(source: FVec, target: FVec, forward_vector: FVec, up_vector: FVec) -> FVec:
    """Rotation turning ``forward_vector`` to point from ``source`` at ``target``."""
    forward = (target - source).normalize3()
    dot = forward_vector.dot3(forward)

    if dot + 1.0 < 0.0001:
        return quat_from_axis_angle(up_vector, math.pi)
    if dot - 1.0 > -0.0001:
        return quat_identity()

    rotation_angle = math.acos(dot)
    rotation_axis = forward_vector.cross(forward)
    return quat_from_axis_angle(rotation_axis, rotation_angle)


def quat_cross_fvec3(q: FVec, v: FVec) -> FVec:
    """Rotate the three-component vector ``v`` by the unit quaternion ``q``."""
    qv = fvec3(q.i, q.j, q.k)
    uv = qv.cross(v)
    uuv = qv.cross(uv)
    uv = uv * (2.0 * q.r)
    uuv = uuv * 2.0
    total = uv + uuv
    return fvec3(v.x + total.x, v.y + total.y, v.z + total.z)