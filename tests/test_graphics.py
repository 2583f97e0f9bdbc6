import pytest

from hobbyos.graphics import (
    DESKTOP_BG_COLOR,
    BGRResv8BitPerColorPixelWriter,
    FrameBufferConfig,
    PixelColor,
    PixelFormat,
    PixelWriter,
    Rectangle,
    RGBResv8BitPerColorPixelWriter,
    Vector2D,
    draw_desktop,
    draw_rectangle,
    element_max,
    element_min,
    fill_rectangle,
    make_pixel_writer,
    to_color,
)


class RecordingWriter(PixelWriter):
    def __init__(self, w, h):
        self.w = w
        self.h = h
        self.pixels = {}

    def write(self, pos, color):
        self.pixels[(pos.x, pos.y)] = color

    def width(self):
        return self.w

    def height(self):
        return self.h


def make_config(fmt, w=4, h=3):
    return FrameBufferConfig(
        horizontal_resolution=w,
        vertical_resolution=h,
        pixel_format=fmt,
        frame_buffer=bytearray(4 * w * h),
        pixels_per_scan_line=w,
    )


def test_to_color_roundtrip():
    c = DESKTOP_BG_COLOR
    value = (c.r << 16) | (c.g << 8) | c.b
    assert to_color(value) == c


def test_to_color_ignores_high_bits():
    assert to_color(0xFF000000 | 0x123456) == to_color(0x123456)


def test_vector_arithmetic():
    a = Vector2D(3, 7)
    b = Vector2D(10, -2)
    assert a + b - b == a
    assert (a - a) == Vector2D(0, 0)


def test_element_min_max():
    a = Vector2D(1, 9)
    b = Vector2D(5, 2)
    assert element_max(a, b) == Vector2D(5, 9)
    assert element_min(a, b) == Vector2D(1, 2)


def test_rectangle_intersection_overlap():
    a = Rectangle(Vector2D(0, 0), Vector2D(10, 10))
    b = Rectangle(Vector2D(5, 5), Vector2D(10, 10))
    assert (a & b) == Rectangle(Vector2D(5, 5), Vector2D(5, 5))
    assert (a & b) == (b & a)


def test_rectangle_intersection_contained():
    outer = Rectangle(Vector2D(0, 0), Vector2D(100, 100))
    inner = Rectangle(Vector2D(10, 20), Vector2D(5, 6))
    assert (outer & inner) == inner


def test_rectangle_intersection_disjoint():
    a = Rectangle(Vector2D(0, 0), Vector2D(2, 2))
    b = Rectangle(Vector2D(50, 50), Vector2D(2, 2))
    assert (a & b) == Rectangle(Vector2D(0, 0), Vector2D(0, 0))


def test_rgb_writer_byte_order():
    config = make_config(PixelFormat.RGB_RESV_8BIT_PER_COLOR)
    writer = RGBResv8BitPerColorPixelWriter(config)
    color = PixelColor(10, 20, 30)
    pos = Vector2D(2, 1)
    writer.write(pos, color)
    off = writer.pixel_offset(pos)
    assert config.frame_buffer[off : off + 3] == bytes([color.r, color.g, color.b])


def test_bgr_writer_byte_order():
    config = make_config(PixelFormat.BGR_RESV_8BIT_PER_COLOR)
    writer = BGRResv8BitPerColorPixelWriter(config)
    color = PixelColor(10, 20, 30)
    pos = Vector2D(3, 2)
    writer.write(pos, color)
    off = writer.pixel_offset(pos)
    assert config.frame_buffer[off : off + 3] == bytes([color.b, color.g, color.r])


def test_pixel_offset_uses_scan_line():
    config = make_config(PixelFormat.RGB_RESV_8BIT_PER_COLOR, w=4, h=3)
    config.pixels_per_scan_line = 8
    writer = make_pixel_writer(config)
    assert writer.pixel_offset(Vector2D(1, 2)) == 4 * (8 * 2 + 1)


def test_make_pixel_writer_kinds():
    rgb = make_pixel_writer(make_config(PixelFormat.RGB_RESV_8BIT_PER_COLOR))
    bgr = make_pixel_writer(make_config(PixelFormat.BGR_RESV_8BIT_PER_COLOR))
    assert isinstance(rgb, RGBResv8BitPerColorPixelWriter)
    assert isinstance(bgr, BGRResv8BitPerColorPixelWriter)
    assert rgb.width() == 4 and rgb.height() == 3


def test_make_pixel_writer_unknown_format():
    config = make_config(PixelFormat.RGB_RESV_8BIT_PER_COLOR)
    config.pixel_format = 42
    with pytest.raises(ValueError):
        make_pixel_writer(config)


def test_fill_rectangle_clips():
    w = RecordingWriter(10, 10)
    fill_rectangle(w, Vector2D(8, 8), Vector2D(5, 5), PixelColor(1, 2, 3))
    assert set(w.pixels) == {(x, y) for x in (8, 9) for y in (8, 9)}


def test_fill_rectangle_full():
    w = RecordingWriter(20, 20)
    fill_rectangle(w, Vector2D(2, 3), Vector2D(4, 5), PixelColor(1, 2, 3))
    assert len(w.pixels) == 4 * 5
    assert all(c == PixelColor(1, 2, 3) for c in w.pixels.values())


def test_draw_rectangle_outline_only():
    w = RecordingWriter(20, 20)
    draw_rectangle(w, Vector2D(1, 1), Vector2D(5, 4), PixelColor(9, 9, 9))
    assert len(w.pixels) == 2 * 5 + 2 * (4 - 2)
    assert (3, 2) not in w.pixels
    assert (1, 1) in w.pixels and (5, 4) in w.pixels


def test_draw_rectangle_skips_when_out_of_bounds():
    w = RecordingWriter(10, 10)
    draw_rectangle(w, Vector2D(5, 5), Vector2D(5, 2), PixelColor(9, 9, 9))
    assert w.pixels == {}


def test_draw_desktop_colors():
    w = RecordingWriter(200, 100)
    draw_desktop(w)
    assert w.pixels[(0, 0)] == DESKTOP_BG_COLOR
    assert w.pixels[(199, 99)] == PixelColor(1, 8, 17)
    assert len(w.pixels) == 200 * 100