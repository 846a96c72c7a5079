"""Text-mode screen: an 80x25 character grid with scrollback and an input line buffer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

BUFFER_HEIGHT = 25
BUFFER_WIDTH = 80
INPUT_BUFFER_SIZE = 100
HISTORY_LINES = 100

PLACEHOLDER_BYTE = 0xFE
_PLACEHOLDER_GLYPH = "\u25a0"


class Color(IntEnum):
    Black = 0
    Blue = 1
    Green = 2
    Cyan = 3
    Red = 4
    Magenta = 5
    Brown = 6
    LightGray = 7
    DarkGray = 8
    LightBlue = 9
    LightGreen = 10
    LightCyan = 11
    LightRed = 12
    Pink = 13
    Yellow = 14
    White = 15


def color_code(foreground: Color, background: Color) -> int:
    """Pack a foreground and background colour into one attribute byte."""
    return (int(background) << 4) | int(foreground)


@dataclass(frozen=True)
class ScreenChar:
    ascii_character: int
    color_code: int

    @property
    def glyph(self) -> str:
        if 0x20 <= self.ascii_character <= 0x7E:
            return chr(self.ascii_character)
        if self.ascii_character == PLACEHOLDER_BYTE:
            return _PLACEHOLDER_GLYPH
        return "?"


Line = tuple[ScreenChar, ...]


class LineHistory:
    """Bounded stack of screen lines; the oldest line is dropped when full."""

    def __init__(self, max_lines: int = HISTORY_LINES) -> None:
        self.max_lines = max_lines
        self._lines: list[Line] = []

    def __len__(self) -> int:
        return len(self._lines)

    def push_line(self, line) -> None:
        if len(self._lines) >= self.max_lines:
            del self._lines[0]
        self._lines.append(tuple(line))

    def pop_line(self) -> Line | None:
        """Remove and return the newest line, or None when empty."""
        return self._lines.pop() if self._lines else None

    def is_empty(self) -> bool:
        return not self._lines

    def clear(self) -> None:
        self._lines.clear()


class InputBuffer:
    """Fixed-capacity record of the bytes typed since the last clear."""

    def __init__(self, capacity: int = INPUT_BUFFER_SIZE) -> None:
        self.capacity = capacity
        self._data = bytearray()

    def __len__(self) -> int:
        return len(self._data)

    def push_byte(self, byte: int) -> None:
        if len(self._data) < self.capacity:
            self._data.append(byte)

    def backspace(self) -> None:
        if self._data:
            del self._data[-1]

    def clear(self) -> None:
        self._data.clear()

    def as_str(self) -> str:
        """The contents as text, or an empty string if they are not valid UTF-8."""
        try:
            return self._data.decode("utf-8")
        except UnicodeDecodeError:
            return ""


class Writer:
    """Writes text to the character grid and records typed input."""

    def __init__(self) -> None:
        self.column_position = 0
        self.row_position = 0
        self.color = color_code(Color.White, Color.Black)
        blank = self._blank()
        self.chars: list[list[ScreenChar]] = [
            [blank] * BUFFER_WIDTH for _ in range(BUFFER_HEIGHT)
        ]
        self.input = InputBuffer()
        self.up_buffer = LineHistory(HISTORY_LINES)
        self.down_buffer = LineHistory(HISTORY_LINES)
        self.write_row = 0

    def _blank(self) -> ScreenChar:
        return ScreenChar(ord(" "), self.color)

    def set_color(self, foreground: Color, background: Color) -> None:
        self.color = color_code(foreground, background)

    def plus_write_row(self) -> None:
        self.write_row += 1

    def minus_write_row(self) -> None:
        self.write_row -= 1

    def check_write_row(self) -> None:
        """Scroll until the write row lies inside the visible screen."""
        while self.write_row <= 1:
            self.scroll_up()
            self.write_row += 1
        while self.write_row >= BUFFER_HEIGHT:
            self.scroll_down()
            self.write_row -= 1

    def _put(self, byte: int) -> None:
        self.check_write_row()
        if self.column_position >= BUFFER_WIDTH:
            self.new_line()
        self.chars[self.write_row][self.column_position] = ScreenChar(byte, self.color)
        self.column_position += 1
        self.input.push_byte(byte)

    def write_byte(self, byte: int) -> None:
        if byte == ord("\n"):
            self.check_write_row()
            self.new_line()
            self.input.push_byte(byte)
        elif 0x20 <= byte <= 0x7E:
            self._put(byte)
        else:
            self._put(PLACEHOLDER_BYTE)

    def scroll_up(self) -> None:
        """Shift the screen down one row, pulling a line back from above."""
        self.up_buffer.push_line(self.chars[-1])
        self.chars[1:] = self.chars[:-1]
        self._clear_row(0)
        if self.row_position < BUFFER_HEIGHT - 1:
            self.row_position += 1
        line = self.down_buffer.pop_line()
        if line is not None:
            self.chars[0] = list(line)
        else:
            self._clear_row(0)

    def scroll_down(self) -> None:
        """Shift the screen up one row, pulling a line back from below."""
        self.down_buffer.push_line(self.chars[0])
        self.chars[:-1] = self.chars[1:]
        self._clear_row(BUFFER_HEIGHT - 1)
        self.row_position = BUFFER_HEIGHT - 1
        line = self.up_buffer.pop_line()
        if line is not None:
            self.chars[-1] = list(line)
        else:
            self._clear_row(BUFFER_HEIGHT - 1)

    def new_line(self) -> None:
        self.down_buffer.push_line(self.chars[0])
        self.column_position = 0
        self.write_row += 1
        # A negative row counts as past the bottom, as an unsigned index would.
        if self.write_row < 0 or self.write_row >= BUFFER_HEIGHT:
            self.chars[:-1] = self.chars[1:]
            self._clear_row(BUFFER_HEIGHT - 1)
            self.write_row = BUFFER_HEIGHT - 1

    def _clear_row(self, row: int) -> None:
        self.chars[row] = [self._blank()] * BUFFER_WIDTH

    def write_string(self, s: str) -> None:
        for byte in s.encode("utf-8"):
            if 0x20 <= byte <= 0x7E or byte == ord("\n"):
                self.write_byte(byte)
            else:
                self.write_byte(PLACEHOLDER_BYTE)

    def clear_screen(self) -> None:
        self.check_write_row()
        for row in range(BUFFER_HEIGHT):
            self._clear_row(row)
        self.column_position = 0
        self.row_position = 0
        self.input.clear()
        self.up_buffer.clear()
        self.down_buffer.clear()
        self.write_row = 1

    def backspace(self) -> None:
        self.check_write_row()
        if self.column_position == 0 and self.write_row == 0:
            return
        if self.column_position == 0:
            self.write_row -= 1
            self.column_position = BUFFER_WIDTH - 1
        else:
            self.column_position -= 1
        self.chars[self.write_row][self.column_position] = self._blank()
        self.input.backspace()

    def get_buffer(self) -> str:
        return self.input.as_str()

    def buffer_copy(self, limit: int = 256) -> bytes:
        """At most ``limit`` bytes of the recorded input."""
        return self.get_buffer().encode("utf-8")[:limit]

    def buffer_clear(self) -> None:
        self.input.clear()

    def print(self, text: str) -> None:
        self.write_string(text)

    def println(self, text: str = "") -> None:
        self.write_string(f"{text}\n")

    def print_colored(self, text: str, foreground: Color, background: Color) -> None:
        self.set_color(foreground, background)
        try:
            self.write_string(text)
        finally:
            self.set_color(Color.White, Color.Black)

    def println_colored(self, text: str, foreground: Color, background: Color) -> None:
        self.print_colored(f"{text}\n", foreground, background)

    def char_at(self, row: int, col: int) -> ScreenChar:
        if not (0 <= row < BUFFER_HEIGHT and 0 <= col < BUFFER_WIDTH):
            raise IndexError(f"position ({row}, {col}) is off screen")
        return self.chars[row][col]

    def row_text(self, row: int) -> str:
        """Text of one row with trailing blanks removed."""
        if not 0 <= row < BUFFER_HEIGHT:
            raise IndexError(f"row {row} is off screen")
        return "".join(ch.glyph for ch in self.chars[row]).rstrip(" ")

    def screen_text(self) -> str:
        return "\n".join(self.row_text(row) for row in range(BUFFER_HEIGHT))