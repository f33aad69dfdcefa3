import io
import struct

import pytest

from pica3d.tex3ds import SubTexture, Tex3DSError, TextureType, parse, read
from pica3d.texture import TexColor


def _header(count, w_log2, h_log2, tex_type, fmt, levels):
    bits = w_log2 | (h_log2 << 3) | (tex_type << 6)
    return struct.pack("<HBBB", count, bits, fmt, levels)


def _subtex(width, height, left, top, right, bottom):
    return struct.pack("<6H", width, height, left, top, right, bottom)


def _sample(payload=b"\x01\x02\x03"):
    return (
        _header(2, 0, 7, 0, int(TexColor.RGBA8), 0)
        + _subtex(8, 8, 0, 1024, 1024, 0)
        + _subtex(4, 4, 512, 1024, 1024, 512)
        + payload
    )


def test_parse_header_fields():
    tex = parse(_sample())
    assert tex.width == 8
    assert tex.height == 1024
    assert tex.format is TexColor.RGBA8
    assert tex.type is TextureType.TEXTURE_2D
    assert tex.mipmap_levels == 0
    assert len(tex.subtextures) == 2


def test_parse_subtextures():
    tex = parse(_sample())
    assert tex.subtexture(0) == SubTexture(8, 8, 0.0, 1.0, 1.0, 0.0)
    assert tex.subtexture(1).left == 0.5
    assert tex.subtexture(1).bottom == tex.subtexture(1).left


def test_subtexture_out_of_range():
    tex = parse(_sample())
    with pytest.raises(IndexError):
        tex.subtexture(2)
    with pytest.raises(IndexError):
        tex.subtexture(-1)


def test_payload_preserved():
    payload = bytes(range(40))
    assert parse(_sample(payload)).payload == payload


def test_read_stream_matches_parse():
    data = _sample()
    assert read(io.BytesIO(data)) == parse(data)


def test_cube_map_image_size_is_six_faces():
    flat = parse(_header(0, 3, 3, 0, int(TexColor.RGB565), 2))
    cube = parse(_header(0, 3, 3, 1, int(TexColor.RGB565), 2))
    assert cube.type is TextureType.CUBE_MAP
    assert cube.image_size == 6 * flat.image_size


def test_truncated_header_raises():
    with pytest.raises(Tex3DSError):
        parse(b"\x01\x00\x00")


def test_truncated_subtexture_table_raises():
    data = _header(2, 0, 0, 0, 0, 0) + _subtex(8, 8, 0, 0, 0, 0)
    with pytest.raises(Tex3DSError):
        parse(data)


def test_unknown_format_raises():
    with pytest.raises(Tex3DSError):
        parse(_header(0, 0, 0, 0, 0x20, 0))