"""Texture formats, size rules and CPU mipmap generation."""

from __future__ import annotations

import struct
from collections.abc import Callable, Sequence
from enum import IntEnum


class TexColor(IntEnum):
    """Texture color formats understood by the GPU."""

    RGBA8 = 0x0
    RGB8 = 0x1
    RGBA5551 = 0x2
    RGB565 = 0x3
    RGBA4 = 0x4
    LA8 = 0x5
    HILO8 = 0x6
    L8 = 0x7
    A8 = 0x8
    LA4 = 0x9
    L4 = 0xA
    A4 = 0xB
    ETC1 = 0xC
    ETC1A4 = 0xD


_BITS_PER_PIXEL = {
    TexColor.RGBA8: 32,
    TexColor.RGB8: 24,
    TexColor.RGBA5551: 16,
    TexColor.RGB565: 16,
    TexColor.RGBA4: 16,
    TexColor.LA8: 16,
    TexColor.HILO8: 16,
    TexColor.L8: 8,
    TexColor.A8: 8,
    TexColor.LA4: 8,
    TexColor.ETC1A4: 8,
    TexColor.L4: 4,
    TexColor.A4: 4,
    TexColor.ETC1: 4,
}

_BLOCK_PIXELS = 64
_RGBA8_BLOCK = struct.Struct(f"<{_BLOCK_PIXELS}I")


def bits_per_pixel(fmt: int) -> int:
    """Bits per pixel of a texture format."""
    try:
        color = TexColor(fmt)
    except ValueError:
        raise ValueError(f"unknown texture format {fmt!r}") from None
    return _BITS_PER_PIXEL[color]


def check_tex_size(size: int) -> bool:
    """Whether ``size`` is a valid texture dimension: a power of two in 8..1024."""
    return 8 <= size <= 1024 and size & (size - 1) == 0


def tex_calc_total_size(size: int, max_level: int) -> int:
    """Bytes for a base level of ``size`` bytes plus ``max_level`` mipmaps."""
    if max_level < 0:
        raise ValueError("max_level must not be negative")
    return sum(size >> (2 * level) for level in range(max_level + 1))


def _check_blocks(blocks: Sequence, length: int) -> list:
    blocks = list(blocks)
    if len(blocks) != 4 or any(len(block) != length for block in blocks):
        raise ValueError(f"expected four blocks of {length} elements")
    return blocks


def _quad(blocks: list, index: int, width: int):
    start = width * ((index << 2) & 0x3F)
    return blocks[index >> 4][start : start + 4 * width]


def downscale_rgba8(blocks: Sequence[Sequence[int]]) -> list[int]:
    """Halve four tiled 8x8 RGBA8 blocks (32-bit pixels) into one block."""
    blocks = _check_blocks(blocks, _BLOCK_PIXELS)
    out = []
    for index in range(_BLOCK_PIXELS):
        quad = _quad(blocks, index, 1)
        pixel = 0
        for shift in (0, 8, 16, 24):
            pixel |= (sum((p >> shift) & 0xFF for p in quad) >> 2) << shift
        out.append(pixel)
    return out


def downscale_rgb8(blocks: Sequence[bytes]) -> bytes:
    """Halve four tiled 8x8 RGB8 blocks (3 bytes per pixel) into one block."""
    blocks = _check_blocks([bytes(b) for b in blocks], 3 * _BLOCK_PIXELS)
    out = bytearray()
    for index in range(_BLOCK_PIXELS):
        quad = _quad(blocks, index, 3)
        out.extend(sum(quad[channel::3]) >> 2 for channel in range(3))
    return bytes(out)


def _downscale_rgba8_bytes(blocks: list[bytes]) -> bytes:
    pixels = downscale_rgba8([_RGBA8_BLOCK.unpack(bytes(b)) for b in blocks])
    return _RGBA8_BLOCK.pack(*pixels)


_DOWNSCALERS: dict[TexColor, Callable[[list[bytes]], bytes]] = {
    TexColor.RGBA8: _downscale_rgba8_bytes,
    TexColor.RGB8: downscale_rgb8,
}


def generate_mipmap(
    data: bytes, width: int, height: int, fmt: int, max_level: int
) -> bytearray:
    """Fill the mipmap levels of a tiled texture from its base level.

    ``data`` holds the base level followed by room for ``max_level`` mipmaps.
    Only RGBA8 and RGB8 are downscaled; other formats are returned unchanged.
    """
    color = TexColor(fmt) if fmt in TexColor._value2member_map_ else None
    bpp = bits_per_pixel(fmt)
    if not (check_tex_size(width) and check_tex_size(height)):
        raise ValueError(f"invalid texture size {width}x{height}")
    level_size = bpp * width * height // 8
    if len(data) < tex_calc_total_size(level_size, max_level):
        raise ValueError("texture data is too short for its mipmap levels")

    out = bytearray(data)
    downscale = _DOWNSCALERS.get(color)
    if downscale is None:
        return out

    block_size = _BLOCK_PIXELS * bpp // 8
    src_off = 0
    src_w, src_h = width, height
    for _ in range(max_level):
        dst_off = src_off + level_size
        dst_w, dst_h = src_w >> 1, src_h >> 1
        src_stride, dst_stride = src_w // 8, dst_w // 8

        def block(bx: int, by: int) -> bytes:
            start = src_off + block_size * (bx + by * src_stride)
            return bytes(out[start : start + block_size])

        for j in range(dst_h // 8):
            for i in range(dst_stride):
                sources = [
                    block(2 * i, 2 * j),
                    block(2 * i + 1, 2 * j),
                    block(2 * i, 2 * j + 1),
                    block(2 * i + 1, 2 * j + 1),
                ]
                pos = dst_off + block_size * (i + j * dst_stride)
                out[pos : pos + block_size] = downscale(sources)

        level_size >>= 2
        src_off = dst_off
        src_w, src_h = dst_w, dst_h
    return out