"""Translation of USB HID key codes into characters and key events."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Modifier(enum.IntFlag):
    """Bits of the HID modifier byte."""

    L_CONTROL = 0b00000001
    L_SHIFT = 0b00000010
    L_ALT = 0b00000100
    L_GUI = 0b00001000
    R_CONTROL = 0b00010000
    R_SHIFT = 0b00100000
    R_ALT = 0b01000000
    R_GUI = 0b10000000


_KEYPAD = (
    "\0\0\0\0/*-+"
    "\n1234567"
    "890.\\\0\0="
)

_KEYCODE_MAP = (
    "\0\0\0\0abcd"
    "efghijkl"
    "mnopqrst"
    "uvwxyz12"
    "34567890"
    "\n\b\b\t -=["
    "]\\#;'`,."
    "/" + "\0" * 7
    + "\0" * 16
    + _KEYPAD
    + "\0" * 32
    + "\0\\"
).ljust(256, "\0")

_KEYCODE_MAP_SHIFTED = (
    "\0\0\0\0ABCD"
    "EFGHIJKL"
    "MNOPQRST"
    "UVWXYZ!@"
    "#$%^&*()"
    "\n\b\b\t _+{"
    "}|~:\"~<>"
    "?" + "\0" * 7
    + "\0" * 16
    + _KEYPAD
    + "\0" * 32
    + "\0|"
).ljust(256, "\0")


def keycode_to_ascii(modifier: int, keycode: int) -> str:
    """The character for ``keycode`` under ``modifier``, or "" if there is none."""
    shift = bool(modifier & (Modifier.L_SHIFT | Modifier.R_SHIFT))
    table = _KEYCODE_MAP_SHIFTED if shift else _KEYCODE_MAP
    ch = table[keycode & 0xFF]
    return "" if ch == "\0" else ch


@dataclass(frozen=True)
class KeyEvent:
    """A key press or release together with the character it produces."""

    modifier: int
    keycode: int
    ascii: str
    press: bool


def make_key_event(modifier: int, keycode: int, press: bool) -> KeyEvent:
    """Build the event that a key report produces."""
    return KeyEvent(modifier, keycode, keycode_to_ascii(modifier, keycode), bool(press))