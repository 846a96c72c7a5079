"""System-call dispatch for writing to the screen."""

from __future__ import annotations

from .vga import PLACEHOLDER_BYTE, Writer

SYSCALL_WRITE = 1


def sys_write(writer: Writer, fd: int, data: bytes) -> int:
    """Write ``data`` to the screen and return the number of bytes taken."""
    for byte in data:
        if byte == ord("\n"):
            writer.new_line()
        elif 0x20 <= byte <= 0x7E:
            writer.write_byte(byte)
        else:
            writer.write_byte(PLACEHOLDER_BYTE)
    return len(data)


def syscall_dispatcher(writer: Writer, syscall_number: int, fd: int, data: bytes) -> int:
    """Run the numbered system call; unknown numbers return 0."""
    if syscall_number == SYSCALL_WRITE:
        return sys_write(writer, fd, data)
    return 0