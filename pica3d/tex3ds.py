"""Reader for Tex3DS texture files.

A file starts with a packed header and a table of subtextures; the image
data that follows is kept as the texture's payload.
"""

from __future__ import annotations

import io
import struct
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO

from .texture import TexColor, bits_per_pixel, tex_calc_total_size

_HEADER = struct.Struct("<HBBB")
_SUBTEXTURE = struct.Struct("<6H")
_COORD_SCALE = 1024.0
_CUBE_FACES = 6


class Tex3DSError(ValueError):
    """Raised when Tex3DS data is truncated or invalid."""


class TextureType(IntEnum):
    TEXTURE_2D = 0
    CUBE_MAP = 1


@dataclass(frozen=True)
class SubTexture:
    """A region of the texture, with coordinates as fractions of its size."""

    width: int
    height: int
    left: float
    top: float
    right: float
    bottom: float


@dataclass(frozen=True)
class Tex3DSTexture:
    width: int
    height: int
    format: TexColor
    mipmap_levels: int
    type: TextureType
    subtextures: tuple[SubTexture, ...]
    payload: bytes = b""

    @property
    def level_size(self) -> int:
        """Bytes in the base level of one face."""
        return bits_per_pixel(self.format) * self.width * self.height // 8

    @property
    def image_size(self) -> int:
        """Bytes of image data including mipmaps and all cube faces."""
        size = tex_calc_total_size(self.level_size, self.mipmap_levels)
        if self.type == TextureType.CUBE_MAP:
            size *= _CUBE_FACES
        return size

    def subtexture(self, index: int) -> SubTexture:
        if 0 <= index < len(self.subtextures):
            return self.subtextures[index]
        raise IndexError(f"subtexture index {index} out of range")


def _read_exact(read: Callable[[int], bytes], size: int, what: str) -> bytes:
    chunk = read(size) or b""
    if len(chunk) != size:
        raise Tex3DSError(f"truncated {what}")
    return chunk


def read(stream: BinaryIO) -> Tex3DSTexture:
    """Read a Tex3DS texture from a binary stream; the rest is the payload."""
    count, dims, fmt, levels = _HEADER.unpack(_read_exact(stream.read, _HEADER.size, "header"))
    try:
        color = TexColor(fmt)
    except ValueError:
        raise Tex3DSError(f"unknown texture format {fmt:#x}") from None

    subtextures = []
    for _ in range(count):
        w, h, left, top, right, bottom = _SUBTEXTURE.unpack(
            _read_exact(stream.read, _SUBTEXTURE.size, "subtexture table")
        )
        subtextures.append(
            SubTexture(
                w,
                h,
                left / _COORD_SCALE,
                top / _COORD_SCALE,
                right / _COORD_SCALE,
                bottom / _COORD_SCALE,
            )
        )

    return Tex3DSTexture(
        width=1 << ((dims & 7) + 3),
        height=1 << (((dims >> 3) & 7) + 3),
        format=color,
        mipmap_levels=levels,
        type=TextureType((dims >> 6) & 1),
        subtextures=tuple(subtextures),
        payload=bytes(stream.read() or b""),
    )


def parse(data: bytes) -> Tex3DSTexture:
    """Parse a Tex3DS texture held in memory."""
    return read(io.BytesIO(bytes(data)))