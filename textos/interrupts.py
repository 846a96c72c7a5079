"""Keyboard and mouse input handling for the text screen."""

from __future__ import annotations

from enum import IntEnum

from .vga import Writer

PIC_1_OFFSET = 32
PIC_2_OFFSET = PIC_1_OFFSET + 8

_MOUSE_PACKET_SIZE = 4
_MOUSE_SYNC_BIT = 0x08


class InterruptIndex(IntEnum):
    Timer = PIC_1_OFFSET
    Keyboard = PIC_1_OFFSET + 1
    Mouse = PIC_2_OFFSET + 4


class InputHandler:
    """Feeds decoded keys and raw mouse bytes into a writer."""

    def __init__(self, writer: Writer) -> None:
        self.writer = writer
        self.enter_pressed = False
        self._packet = [0] * _MOUSE_PACKET_SIZE
        self._index = 0

    def key(self, character: str) -> None:
        """Handle one decoded character from the keyboard."""
        if len(character) != 1:
            raise ValueError(f"expected a single character, got {character!r}")
        if character == "\x08":
            self.writer.backspace()
        elif character in "\n\r":
            self.writer.write_byte(ord("\n"))
            self.enter_pressed = True
        else:
            self.writer.write_byte(ord(character) & 0xFF)

    def backspace_key(self) -> None:
        self.writer.backspace()

    def mouse_byte(self, data: int) -> None:
        """Collect one byte of a four-byte mouse packet and act on the wheel."""
        if self._index == 0 and not data & _MOUSE_SYNC_BIT:
            return
        self._packet[self._index] = data & 0xFF
        self._index += 1
        if self._index < _MOUSE_PACKET_SIZE:
            return
        wheel = self._packet[3]
        if wheel >= 0x80:
            wheel -= 0x100
        if wheel == -1:
            self.writer.scroll_up()
            self.writer.plus_write_row()
        elif wheel == 1:
            self.writer.scroll_down()
            self.writer.minus_write_row()
        self._index = 0

    def take_enter(self) -> bool:
        """Whether Enter was pressed since the last call; clears the flag."""
        pressed, self.enter_pressed = self.enter_pressed, False
        return pressed