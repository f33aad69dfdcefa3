import pytest

from pica3d.texture import (
    TexColor,
    bits_per_pixel,
    check_tex_size,
    downscale_rgb8,
    downscale_rgba8,
    generate_mipmap,
    tex_calc_total_size,
)


def test_bits_per_pixel_known_formats():
    assert bits_per_pixel(TexColor.RGBA8) == 32
    assert bits_per_pixel(TexColor.ETC1) == 4
    assert bits_per_pixel(0) == bits_per_pixel(TexColor.RGBA8)


def test_bits_per_pixel_unknown_raises():
    with pytest.raises(ValueError):
        bits_per_pixel(0x20)


@pytest.mark.parametrize("size", [8, 16, 256, 1024])
def test_valid_sizes(size):
    assert check_tex_size(size) is True


@pytest.mark.parametrize("size", [0, 4, 24, 100, 2048])
def test_invalid_sizes(size):
    assert check_tex_size(size) is False


def test_total_size():
    assert tex_calc_total_size(4096, 0) == 4096
    assert tex_calc_total_size(64, 2) == 84
    assert tex_calc_total_size(4096, 3) > tex_calc_total_size(4096, 2)
    with pytest.raises(ValueError):
        tex_calc_total_size(64, -1)


def test_downscale_rgba8_keeps_block_colors_in_quarters():
    colors = [0x11223344, 0x55667788, 0x99AABBCC, 0xDDEEFF00]
    result = downscale_rgba8([[c] * 64 for c in colors])
    for quarter, color in enumerate(colors):
        assert result[16 * quarter : 16 * (quarter + 1)] == [color] * 16


def test_downscale_rgba8_averages_groups():
    block = [0x00000000, 0x00000000, 0x02020202, 0x02020202] * 16
    assert downscale_rgba8([block] * 4) == [0x01010101] * 64


def test_downscale_wrong_shape_raises():
    with pytest.raises(ValueError):
        downscale_rgba8([[0] * 64] * 3)


def test_downscale_rgb8_uniform():
    block = bytes([7, 8, 9]) * 64
    assert downscale_rgb8([block] * 4) == block


def test_generate_mipmap_rgba8_uniform():
    base = bytes([10, 20, 30, 40]) * 256
    total = tex_calc_total_size(len(base), 1)
    data = base + bytes(total - len(base))
    result = generate_mipmap(data, 16, 16, TexColor.RGBA8, 1)
    assert len(result) == total
    assert bytes(result[: len(base)]) == base
    assert bytes(result[len(base) :]) == bytes([10, 20, 30, 40]) * 64


def test_generate_mipmap_rgb8_uniform():
    base = bytes([1, 2, 3]) * 256
    total = tex_calc_total_size(len(base), 1)
    result = generate_mipmap(base + bytes(total - len(base)), 16, 16, TexColor.RGB8, 1)
    assert bytes(result[len(base) :]) == bytes([1, 2, 3]) * 64


def test_generate_mipmap_other_format_unchanged():
    data = bytes(range(256)) * 3
    result = generate_mipmap(data, 16, 16, TexColor.RGBA4, 1)
    assert bytes(result) == data


def test_generate_mipmap_errors():
    with pytest.raises(ValueError):
        generate_mipmap(bytes(1024), 16, 16, TexColor.RGBA8, 1)
    with pytest.raises(ValueError):
        generate_mipmap(bytes(4096), 12, 16, TexColor.RGBA8, 0)