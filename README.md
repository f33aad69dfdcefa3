# pica3d

Maths and texture helpers for a PICA200-style 3D pipeline. The projection
matrices map depth into the fixed range `[-1, 0]` that the PICA needs. The
`*_tilt` variants also turn the image a quarter turn to suit sideways screens.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## What is inside

### `pica3d.quaternion`

- `FVec` is an immutable vector of four floats (`x`, `y`, `z`, `w`). It also
  serves as a quaternion, with `i`, `j`, `k` mapped to `x`, `y`, `z` and the
  real part `r` mapped to `w`.
  - It supports `+`, `-`, multiplication by a scalar, and iteration.
  - Its methods are `dot3`, `dot4`, `cross`, `magnitude3`, `magnitude4`,
    `normalize3` and `normalize4`.
  - The normalizers raise `ValueError` for a zero-length vector.
- The constructors are `fvec3` (with `w` set to zero), `fvec4`, `quat` and
  `quat_identity`.
- The quaternion operations are:
  - `quat_multiply`, the Hamilton product.
  - `quat_pow`.
  - `quat_rotate`, `quat_rotate_x`, `quat_rotate_y` and `quat_rotate_z`.
  - `quat_from_axis_angle` and `quat_from_pitch_yaw_roll`.
  - `quat_look_at`.
  - `quat_cross_fvec3`, which rotates a vector by a quaternion.

### `pica3d.matrix`

`Matrix` is a mutable 4x4 row-major matrix. `Matrix()` gives all zeros.
`Matrix(rows)` takes four rows of four numbers. You can index it with
`m[row, col]`.

- The constructors are `identity`, `zeros`, `from_quat` and `look_at`.
- The projection constructors are `ortho`, `ortho_tilt`, `persp`,
  `persp_tilt`, `persp_stereo` and `persp_stereo_tilt`.
- `copy` returns a new matrix. `flat` returns the sixteen elements in row
  order. `==` compares two matrices element by element.
- `a @ b` returns the matrix product. `multiply_fvec3` multiplies the upper
  3x3 part by a vector, and `multiply_fvec4` multiplies the whole matrix by a
  vector.
- These transforms change the matrix in place and return it, so calls can be
  chained: `transpose`, `translate`, `scale`, `rotate`, `rotate_x`,
  `rotate_y` and `rotate_z`.
  - `right_side=True` applies the transform after the current one.
  - `right_side=False` applies it before.
- `inverse` inverts the matrix in place and returns the determinant of the
  original. If the matrix is singular it raises `ValueError` and leaves the
  matrix unchanged.
- `to_quat` returns the unit quaternion for the rotation held in the matrix.

### `pica3d.mtxstack`

`MtxStack` is a stack of matrices, at most `MTXSTACK_SIZE` (8) deep. It
starts with one identity matrix.

- `push` copies the top matrix and returns the copy. It raises `IndexError`
  when the stack is full.
- `pop` returns the matrix below the top one. It raises `IndexError` when only
  the base matrix is left.
- `current` returns the top matrix.
- `depth` gives the number of matrices pushed above the base one.
- `bind(unif_type, unif_pos, unif_len)` records a uniform slot. Passing
  `unif_pos=None` unbinds the stack.
- `update(upload)` calls `upload(unif_type, unif_pos, matrix, unif_len)` when
  the stack is bound and has changed. It returns whether an upload happened.

### `pica3d.proctex`

- `proctex_lut_from_array(values)` turns 129 samples, clamped to `[0, 1]`,
  into 128 entries. Each entry holds a 12-bit level and the 12-bit difference
  to the next level.
- `ProcTexColorLut` holds a 256-entry `color` table and its `diff` table.
  - `write(colors, offset)` stores 32-bit colours and computes their
    per-channel halved differences.
  - It raises `ValueError` for an empty list, for values that do not fit in
    32 bits, or for colours that do not fit in the table.

### `pica3d.texture`

- `TexColor` lists the texture colour formats.
- `bits_per_pixel(fmt)` gives the bits per pixel of a format.
- `check_tex_size(size)` is true for powers of two from 8 to 1024.
- `tex_calc_total_size(size, max_level)` gives the byte size of a base level
  together with its mipmaps.
- `downscale_rgba8` halves four tiled 8x8 blocks of 32-bit pixels into one
  block. `downscale_rgb8` does the same for blocks of 3-byte pixels.
- `generate_mipmap(data, width, height, fmt, max_level)` returns a
  `bytearray` in which the mipmap levels that follow the base level have been
  filled in. Only RGBA8 and RGB8 are downscaled. Other formats come back
  unchanged.

### `pica3d.tex3ds`

- `parse(data)` reads a Tex3DS texture from bytes. `read(stream)` reads one
  from a binary stream.
- Both return a `Tex3DSTexture`, which holds:
  - `width`, `height`, `format`, `mipmap_levels` and `type` (a
    `TextureType`).
  - `subtextures`, a tuple of `SubTexture`. The coordinates of each
    `SubTexture` are fractions of the texture size.
  - `payload`, the bytes that follow the header and table.
- `level_size` and `image_size` give the expected sizes of the image data.
- `subtexture(index)` raises `IndexError` when the index is out of range.
- Truncated data or an unknown format raises `Tex3DSError`, which is a
  subclass of `ValueError`.

## What it does not do

The package only computes values; it talks to no GPU. It does not:

- build or submit command buffers,
- manage render targets or frames,
- allocate texture memory,
- upload data.

`MtxStack.update` leaves the upload to the callback you give it. A Tex3DS
payload is returned as raw bytes. The package neither decompresses it nor
loads it into a texture.

## Example

```python
import math

from pica3d.matrix import Matrix
from pica3d.quaternion import fvec4

projection = Matrix.persp_tilt(math.radians(60), 400 / 240, 1.0, 10.0, False)

model_view = Matrix.identity()
model_view.translate(0.0, 0.0, -2.0, True).rotate_y(math.radians(30), True)

clip = (projection @ model_view).multiply_fvec4(fvec4(0.5, 0.5, 0.5, 1.0))
```