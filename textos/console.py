"""Boot the text system and drive its shell from lines of input."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Iterator

from .shell import PowerOff, Restart, Shell
from .vga import Color, Writer


def boot(writer: Writer) -> None:
    """Draw the start-up banner."""
    writer.println_colored("\n        Hello!", Color.LightCyan, Color.Black)
    writer.print("    It's a test OS in ")
    writer.print_colored("text mode", Color.Magenta, Color.Black)
    writer.println(".")
    writer.print("    Write ")
    writer.print_colored("help", Color.Green, Color.Black)
    writer.println(" to see available commands.")


def run(shell: Shell, lines: Iterable[str]) -> None:
    """Show the first prompt, then type each line into the shell and run it."""
    writer = shell.writer
    writer.print_colored("\n", Color.Magenta, Color.Black)
    shell.prompt()
    writer.buffer_clear()
    for line in lines:
        for character in line:
            shell.input.key(character)
        shell.input.key("\n")
        shell.poll()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="textos", description="Run the text-mode shell."
    )
    parser.add_argument(
        "script", nargs="?", help="file of commands to run instead of standard input"
    )
    args = parser.parse_args(argv)

    writer = Writer()

    def show() -> None:
        sys.stdout.write(writer.screen_text() + "\n")

    def interactive() -> Iterator[str]:
        while True:
            show()
            line = sys.stdin.readline()
            if not line:
                return
            yield line.rstrip("\r\n")

    if args.script:
        with open(args.script, encoding="utf-8") as handle:
            pending: Iterator[str] = iter(handle.read().splitlines())
    else:
        pending = interactive()

    while True:
        boot(writer)
        shell = Shell(writer)
        try:
            run(shell, pending)
        except Restart:
            writer = Writer()
            continue
        except PowerOff:
            pass
        show()
        return 0