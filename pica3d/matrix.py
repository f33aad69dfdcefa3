"""Row-major 4x4 float matrices for the PICA200 pipeline.

Projection matrices map depth into the fixed clip range ``[-1, 0]`` that the
GPU requires, and the ``*_tilt`` variants are additionally rotated a quarter
turn to account for the sideways-mounted screens.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from .quaternion import FLT_EPSILON, FVec, fvec3, fvec4, quat

_SIZE = 4


def _det3(m: list[list[float]]) -> float:
    return (
        m[0][0] * (m[1][1] * m[2][2] - m[1][2] * m[2][1])
        - m[0][1] * (m[1][0] * m[2][2] - m[1][2] * m[2][0])
        + m[0][2] * (m[1][0] * m[2][1] - m[1][1] * m[2][0])
    )


class Matrix:
    """A mutable 4x4 matrix stored as four rows of ``x, y, z, w`` columns.

    The transforming methods modify the matrix in place and return it, so
    calls can be chained.
    """

    __hash__ = None  # mutable

    def __init__(self, rows: Iterable[Iterable[float]] | None = None) -> None:
        if rows is None:
            self.rows = [[0.0] * _SIZE for _ in range(_SIZE)]
            return
        parsed = [[float(value) for value in row] for row in rows]
        if len(parsed) != _SIZE or any(len(row) != _SIZE for row in parsed):
            raise ValueError("a matrix needs four rows of four values")
        self.rows = parsed

    # ------------------------------------------------------------------
    # Construction

    @classmethod
    def identity(cls) -> Matrix:
        return cls([[1.0 if r == c else 0.0 for c in range(_SIZE)] for r in range(_SIZE)])

    @classmethod
    def zeros(cls) -> Matrix:
        return cls()

    @classmethod
    def from_quat(cls, q: FVec) -> Matrix:
        """Rotation matrix for the unit quaternion ``q``."""
        ii, ij, ik = q.i * q.i, q.i * q.j, q.i * q.k
        jj, jk, kk = q.j * q.j, q.j * q.k, q.k * q.k
        ri, rj, rk = q.r * q.i, q.r * q.j, q.r * q.k
        return cls(
            [
                [1.0 - 2.0 * (jj + kk), 2.0 * (ij - rk), 2.0 * (ik + rj), 0.0],
                [2.0 * (ij + rk), 1.0 - 2.0 * (ii + kk), 2.0 * (jk - ri), 0.0],
                [2.0 * (ik - rj), 2.0 * (jk + ri), 1.0 - 2.0 * (ii + jj), 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )

    @classmethod
    def look_at(
        cls,
        camera_position: FVec,
        camera_target: FVec,
        camera_up: FVec,
        left_handed: bool = False,
    ) -> Matrix:
        """View matrix looking from ``camera_position`` towards ``camera_target``."""
        if left_handed:
            zaxis = (camera_target - camera_position).normalize3()
        else:
            zaxis = (camera_position - camera_target).normalize3()
        xaxis = camera_up.cross(zaxis).normalize3()
        yaxis = zaxis.cross(xaxis)
        return cls(
            [
                [axis.x, axis.y, axis.z, -axis.dot3(camera_position)]
                for axis in (xaxis, yaxis, zaxis)
            ]
            + [[0.0, 0.0, 0.0, 1.0]]
        )

    @staticmethod
    def _ortho_depth(m: Matrix, near: float, far: float, left_handed: bool) -> None:
        m.rows[2][2] = 1.0 / (far - near) if left_handed else 1.0 / (near - far)
        m.rows[2][3] = 0.5 * (near + far) / (near - far) - 0.5
        m.rows[3][3] = 1.0

    @classmethod
    def ortho(
        cls,
        left: float,
        right: float,
        bottom: float,
        top: float,
        near: float,
        far: float,
        left_handed: bool = False,
    ) -> Matrix:
        """Orthographic projection with depth mapped to ``[-1, 0]``."""
        m = cls.zeros()
        m.rows[0][0] = 2.0 / (right - left)
        m.rows[0][3] = (left + right) / (left - right)
        m.rows[1][1] = 2.0 / (top - bottom)
        m.rows[1][3] = (bottom + top) / (bottom - top)
        cls._ortho_depth(m, near, far, left_handed)
        return m

    @classmethod
    def ortho_tilt(
        cls,
        left: float,
        right: float,
        bottom: float,
        top: float,
        near: float,
        far: float,
        left_handed: bool = False,
    ) -> Matrix:
        """Orthographic projection rotated a quarter turn around Z."""
        m = cls.zeros()
        m.rows[0][1] = 2.0 / (top - bottom)
        m.rows[0][3] = (bottom + top) / (bottom - top)
        m.rows[1][0] = 2.0 / (left - right)
        m.rows[1][3] = (left + right) / (right - left)
        cls._ortho_depth(m, near, far, left_handed)
        return m

    @staticmethod
    def _persp_depth(m: Matrix, near: float, far: float, left_handed: bool) -> None:
        m.rows[2][3] = far * near / (near - far)
        m.rows[3][2] = 1.0 if left_handed else -1.0
        m.rows[2][2] = -m.rows[3][2] * near / (near - far)

    @classmethod
    def persp(
        cls, fovy: float, aspect: float, near: float, far: float, left_handed: bool = False
    ) -> Matrix:
        """Perspective projection with depth mapped to ``[-1, 0]``."""
        fovy_tan = math.tan(fovy / 2.0)
        m = cls.zeros()
        m.rows[0][0] = 1.0 / (aspect * fovy_tan)
        m.rows[1][1] = 1.0 / fovy_tan
        cls._persp_depth(m, near, far, left_handed)
        return m

    @classmethod
    def persp_tilt(
        cls, fovx: float, invaspect: float, near: float, far: float, left_handed: bool = False
    ) -> Matrix:
        """Perspective projection for the sideways screens.

        ``fovx`` and ``invaspect`` are the horizontal field of view and the
        height-to-width ratio.
        """
        fovx_tan = math.tan(fovx / 2.0)
        m = cls.zeros()
        m.rows[0][1] = 1.0 / fovx_tan
        m.rows[1][0] = -1.0 / (fovx_tan * invaspect)
        cls._persp_depth(m, near, far, left_handed)
        return m

    @classmethod
    def persp_stereo(
        cls,
        fovy: float,
        aspect: float,
        near: float,
        far: float,
        iod: float,
        screen: float,
        left_handed: bool = False,
    ) -> Matrix:
        """Perspective projection for one eye of a stereo pair."""
        fovy_tan = math.tan(fovy / 2.0)
        fovy_tan_aspect = fovy_tan * aspect
        shift = iod / (2.0 * screen)
        m = cls.zeros()
        m.rows[0][0] = 1.0 / fovy_tan_aspect
        m.rows[0][3] = -iod / 2.0
        m.rows[1][1] = 1.0 / fovy_tan
        cls._persp_depth(m, near, far, left_handed)
        m.rows[0][2] = m.rows[3][2] * shift / fovy_tan_aspect
        return m

    @classmethod
    def persp_stereo_tilt(
        cls,
        fovx: float,
        invaspect: float,
        near: float,
        far: float,
        iod: float,
        screen: float,
        left_handed: bool = False,
    ) -> Matrix:
        """Stereo perspective projection for the sideways screens."""
        fovx_tan = math.tan(fovx / 2.0)
        fovx_tan_invaspect = fovx_tan * invaspect
        shift = iod / (2.0 * screen)
        m = cls.zeros()
        m.rows[0][1] = 1.0 / fovx_tan
        m.rows[1][0] = -1.0 / fovx_tan_invaspect
        m.rows[1][3] = iod / 2.0
        cls._persp_depth(m, near, far, left_handed)
        m.rows[1][2] = -m.rows[3][2] * shift / fovx_tan_invaspect
        return m

    # ------------------------------------------------------------------
    # Access

    def copy(self) -> Matrix:
        return Matrix(self.rows)

    def flat(self) -> list[float]:
        """The sixteen elements in row-major order."""
        return [value for row in self.rows for value in row]

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return self.rows[row][col]

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        row, col = index
        self.rows[row][col] = float(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.rows == other.rows

    def __repr__(self) -> str:
        return f"Matrix({self.rows!r})"

    # ------------------------------------------------------------------
    # Products

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        columns = list(zip(*other.rows))
        return Matrix(
            [[sum(a * b for a, b in zip(row, col)) for col in columns] for row in self.rows]
        )

    def multiply_fvec3(self, v: FVec) -> FVec:
        """Multiply the upper 3x3 part by a three-component vector."""
        x, y, z = (FVec(*row).dot3(v) for row in self.rows[:3])
        return fvec3(x, y, z)

    def multiply_fvec4(self, v: FVec) -> FVec:
        x, y, z, w = (FVec(*row).dot4(v) for row in self.rows)
        return fvec4(x, y, z, w)

    # ------------------------------------------------------------------
    # In-place transforms

    def inverse(self) -> float:
        """Invert in place and return the determinant of the original matrix.

        Raises ``ValueError`` and leaves the matrix untouched if it is singular.
        """
        m = self.rows

        def cofactor(r: int, c: int) -> float:
            minor = [[v for j, v in enumerate(row) if j != c] for i, row in enumerate(m) if i != r]
            return (-1.0) ** (r + c) * _det3(minor)

        cofactors = [[cofactor(r, c) for c in range(_SIZE)] for r in range(_SIZE)]
        det = sum(m[0][c] * cofactors[0][c] for c in range(_SIZE))
        if abs(det) < FLT_EPSILON:
            raise ValueError("matrix is singular")
        self.rows = [[cofactors[c][r] / det for c in range(_SIZE)] for r in range(_SIZE)]
        return det

    def transpose(self) -> Matrix:
        self.rows = [list(col) for col in zip(*self.rows)]
        return self

    def translate(self, x: float, y: float, z: float, right_side: bool = True) -> Matrix:
        """Apply a translation, after (``right_side``) or before the current transform."""
        offsets = (x, y, z)
        if right_side:
            v = fvec4(x, y, z, 1.0)
            for row in self.rows:
                row[3] = FVec(*row).dot4(v)
        else:
            last = self.rows[3]
            for row, offset in zip(self.rows[:3], offsets):
                row[:] = [a + b * offset for a, b in zip(row, last)]
        return self

    def scale(self, x: float, y: float, z: float) -> Matrix:
        for row in self.rows:
            row[0] *= x
            row[1] *= y
            row[2] *= z
        return self

    def rotate(self, axis: FVec, angle: float, right_side: bool = True) -> Matrix:
        """Rotate by ``angle`` radians around ``axis``."""
        s = math.sin(angle)
        c = math.cos(angle)
        t = 1.0 - c
        axis = axis.normalize3()
        x, y, z = axis.x, axis.y, axis.z
        om = [
            [t * x * x + c, t * y * x - s * z, t * z * x + s * y],
            [t * x * y + s * z, t * y * y + c, t * z * y - s * x],
            [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
        ]

        if right_side:
            for row in self.rows:
                head = row[:3]
                row[:3] = [sum(head[k] * om[k][col] for k in range(3)) for col in range(3)]
        else:
            top = self.rows[:3]
            new_rows = [
                [sum(top[k][col] * om_row[k] for k in range(3)) for col in range(_SIZE)]
                for om_row in om
            ]
            self.rows[:3] = new_rows
        return self

    def _rotate_rows(self, a: int, b: int, cos_a: float, sin_a: float) -> None:
        # rows a, b <- (a*c - b*s, b*c + a*s)
        ra, rb = self.rows[a], self.rows[b]
        self.rows[a] = [p * cos_a - q * sin_a for p, q in zip(ra, rb)]
        self.rows[b] = [q * cos_a + p * sin_a for p, q in zip(ra, rb)]

    def _rotate_columns(self, a: int, b: int, cos_a: float, sin_a: float) -> None:
        # columns a, b <- (a*c + b*s, b*c - a*s)
        for row in self.rows:
            p, q = row[a], row[b]
            row[a] = p * cos_a + q * sin_a
            row[b] = q * cos_a - p * sin_a

    def rotate_x(self, angle: float, right_side: bool = True) -> Matrix:
        c, s = math.cos(angle), math.sin(angle)
        if right_side:
            self._rotate_columns(1, 2, c, s)
        else:
            self._rotate_rows(1, 2, c, s)
        return self

    def rotate_y(self, angle: float, right_side: bool = True) -> Matrix:
        c, s = math.cos(angle), math.sin(angle)
        if right_side:
            self._rotate_columns(2, 0, c, s)
        else:
            self._rotate_rows(2, 0, c, s)
        return self

    def rotate_z(self, angle: float, right_side: bool = True) -> Matrix:
        c, s = math.cos(angle), math.sin(angle)
        if right_side:
            self._rotate_columns(0, 1, c, s)
        else:
            self._rotate_rows(0, 1, c, s)
        return self

    # ------------------------------------------------------------------
    # Conversion

    def to_quat(self) -> FVec:
        """Unit quaternion for the rotation held in the upper 3x3 part."""
        m = self.rows
        dx, dy, dz, dw = m[0][0], m[1][1], m[2][2], 1.0

        if dz <= 0.0:
            if dx >= dy:
                q = quat(
                    dw + dx - dy - dz,
                    m[1][0] + m[0][1],
                    m[2][0] + m[0][2],
                    m[2][1] - m[1][2],
                )
            else:
                q = quat(
                    m[1][0] + m[0][1],
                    dw - dx + dy - dz,
                    m[2][1] + m[1][2],
                    m[0][2] - m[2][0],
                )
        elif -dx >= dy:
            q = quat(
                m[2][0] + m[0][2],
                m[2][1] + m[1][2],
                dw - dx - dy + dz,
                m[1][0] - m[0][1],
            )
        else:
            q = quat(
                m[2][1] - m[1][2],
                m[0][2] - m[2][0],
                m[1][0] - m[0][1],
                dw + dx + dy + dz,
            )
        return q.normalize4()