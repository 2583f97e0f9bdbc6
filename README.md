# hobbyos

The parts of a small hobby operating system, written as plain Python. Use them
to study how a kernel handles pixels, fonts, FAT volumes and ACPI tables, or to
run its userland text tools.

Everything works on in-memory data:

- A frame buffer is a `bytearray`.
- A FAT volume is a disk image held as bytes.
- ACPI tables are read from a memory image that you pass in.

Nothing talks to real hardware.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Kernel modules

- `hobbyos.graphics`: drawing primitives.
  - `PixelColor`, `Vector2D` and `Rectangle`. On rectangles, `&` gives the intersection.
  - `to_color`, `element_max` and `element_min`.
  - RGB and BGR pixel writers, made with `make_pixel_writer`.
  - `draw_rectangle`, `fill_rectangle` and `draw_desktop`.
- `hobbyos.frame_buffer`: `FrameBuffer`.
  - `copy` copies from one buffer to another, clipped to both.
  - `move` moves an area within one buffer.
  - An unsupported pixel format raises `UnknownPixelFormatError`.
- `hobbyos.font`: text drawing.
  - A bitmap `Font` of 8×16 glyphs.
  - UTF-8 helpers: `count_utf8_size`, `convert_utf8_to32` and `is_hankaku`.
  - `write_ascii`, `write_unicode` and `write_string`.
- `hobbyos.file`: the `FileDescriptor` interface, with `print_to_fd` and `read_delim`.
- `hobbyos.fat`: `FatVolume`, a FAT32 volume kept in a byte image.
  - `find_file` looks up a path.
  - `create_file` creates a file.
  - Cluster chains are allocated as files grow.
  - `FatFileDescriptor` reads and writes files.
  - Failures raise `FatError`.
- `hobbyos.acpi`: ACPI tables.
  - Parses and checks `RSDP`, `DescriptionHeader` and `FADT`.
  - `find_fadt` finds the FADT through the XSDT.
  - `wait_milliseconds` busy-waits on a PM timer read through a callback.
  - Invalid or missing tables raise `AcpiError`.
- `hobbyos.logger`: a `Logger` that passes messages to a sink, filtered by `LogLevel`.
- `hobbyos.console`: an 80×25 text `Console` that scrolls when it reaches the bottom row.
- `hobbyos.keyboard`: `keycode_to_ascii` and `make_key_event` turn USB HID keycodes and `Modifier` bits into characters and `KeyEvent` values.

## Applications as libraries

- `hobbyos.editor_text`: text handling for the editor.
  - UTF-8 line decoding that keeps bytes it cannot decode.
  - `load_file` and `save_file`.
  - Cell layout with tab handling: `layout_line` and `get_char_range`.
  - `dialog_hit_check` for the save dialog.
- `hobbyos.editor`: an `Editor` model.
  - `key` and `click` move the cursor and edit the text.
  - Ctrl-S is reported as a save request.
- `hobbyos.cube`: a rotating cube.
  - `rotate_cube` rotates it.
  - `project` projects it onto the screen.
  - `drawing_order` picks the faces that are drawn.
  - `scanline_spans` fills a face.
- `hobbyos.blocks`: a block-breaking game, `BlocksGame`. `step` advances it one frame.
- `hobbyos.mine`: a `Minesweeper` board.
  - `place_mines` places the mines and `detect_mouse` finds the cell under the mouse.
  - Opening a cell with no neighbouring mines also opens its neighbours.

## Command-line tools

Each tool reads standard input when you give no file.

Convert hex to binary, or dump binary as hex with `-r`:

```
hobbyos-hex2bin [-s SIZE] [-l] [-r] [FILE]
```

`SIZE` is 1, 2, 4 or 8 bytes. `-l` treats the binary as little-endian. `-h` prints help.

Sort lines by byte value:

```
hobbyos-sort [FILE]
```

Copy a file:

```
hobbyos-cp SRC DEST
```

Print the lines that match a regular expression. When output goes to a terminal, the match is highlighted:

```
hobbyos-grep PATTERN [FILE]
```

Page through text, 10 lines per page by default. `-N` sets the page size:

```
hobbyos-more [-N] [FILE]
```

## What this package does not do

- **No display.** The editor, cube, block game and minesweeper are models only. Nothing opens a window or draws them on screen.
- **No scalable fonts.** Characters outside ASCII are drawn as two `?` cells.
- **No other tools.** There is no reverse Polish calculator, Mandelbrot renderer or read-only text viewer.