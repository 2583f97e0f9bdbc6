"""Off-screen frame buffers with copy and scroll operations."""

from __future__ import annotations

import dataclasses

from hobbyos.graphics import (
    FrameBufferConfig,
    FrameBufferWriter,
    PixelFormat,
    Rectangle,
    Vector2D,
    make_pixel_writer,
)


class UnknownPixelFormatError(ValueError):
    """Raised for a pixel format that no frame buffer supports."""


def bytes_per_pixel(pixel_format) -> int:
    """Number of bytes one pixel occupies in the given format."""
    try:
        PixelFormat(pixel_format)
    except ValueError:
        raise UnknownPixelFormatError(f"unknown pixel format: {pixel_format!r}") from None
    return 4


def _screen_size(config: FrameBufferConfig) -> Vector2D:
    return Vector2D(config.horizontal_resolution, config.vertical_resolution)


class FrameBuffer:
    """A frame buffer, either wrapping existing memory or owning its own."""

    def __init__(self, config: FrameBufferConfig) -> None:
        self._config = dataclasses.replace(config)
        bpp = bytes_per_pixel(self._config.pixel_format)
        if self._config.frame_buffer is None:
            self._config.frame_buffer = bytearray(
                bpp
                * self._config.horizontal_resolution
                * self._config.vertical_resolution
            )
            self._config.pixels_per_scan_line = self._config.horizontal_resolution
        try:
            self._writer = make_pixel_writer(self._config)
        except ValueError as exc:
            raise UnknownPixelFormatError(str(exc)) from None

    @property
    def writer(self) -> FrameBufferWriter:
        """The pixel writer drawing into this buffer."""
        return self._writer

    @property
    def config(self) -> FrameBufferConfig:
        """The configuration describing this buffer."""
        return self._config

    def _offset(self, pos: Vector2D) -> int:
        bpp = bytes_per_pixel(self._config.pixel_format)
        return bpp * (self._config.pixels_per_scan_line * pos.y + pos.x)

    def _scan_line_bytes(self) -> int:
        return bytes_per_pixel(self._config.pixel_format) * self._config.pixels_per_scan_line

    def copy(self, dst_pos: Vector2D, src: FrameBuffer, src_area: Rectangle) -> None:
        """Copy ``src_area`` of ``src`` to ``dst_pos``, clipped to both buffers."""
        if self._config.pixel_format != src._config.pixel_format:
            raise UnknownPixelFormatError("pixel formats of the buffers differ")
        bpp = bytes_per_pixel(self._config.pixel_format)

        src_area_shifted = Rectangle(dst_pos, src_area.size)
        src_outline = Rectangle(dst_pos - src_area.pos, _screen_size(src._config))
        dst_outline = Rectangle(Vector2D(0, 0), _screen_size(self._config))
        copy_area = dst_outline & src_outline & src_area_shifted
        src_start = copy_area.pos - (dst_pos - src_area.pos)

        row_bytes = bpp * copy_area.size.x
        if row_bytes <= 0:
            return
        dst_buf = self._config.frame_buffer
        src_buf = src._config.frame_buffer
        dst_off = self._offset(copy_area.pos)
        src_off = src._offset(src_start)
        for _ in range(copy_area.size.y):
            dst_buf[dst_off : dst_off + row_bytes] = src_buf[src_off : src_off + row_bytes]
            dst_off += self._scan_line_bytes()
            src_off += src._scan_line_bytes()

    def move(self, dst_pos: Vector2D, src: Rectangle) -> None:
        """Move the area ``src`` within this buffer so it starts at ``dst_pos``."""
        bpp = bytes_per_pixel(self._config.pixel_format)
        stride = self._scan_line_bytes()
        row_bytes = bpp * src.size.x
        if row_bytes <= 0 or src.size.y <= 0:
            return
        buf = self._config.frame_buffer

        if dst_pos.y <= src.pos.y:
            dst_off = self._offset(dst_pos)
            src_off = self._offset(src.pos)
            step = stride
        else:
            last = Vector2D(0, src.size.y - 1)
            dst_off = self._offset(dst_pos + last)
            src_off = self._offset(src.pos + last)
            step = -stride

        for _ in range(src.size.y):
            buf[dst_off : dst_off + row_bytes] = buf[src_off : src_off + row_bytes]
            dst_off += step
            src_off += step