"""Command shell over the in-memory file system, drawing on the text screen."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from .interrupts import InputHandler
from .ramfs import Directory, File, FsError
from .vga import Color, Writer

_INPUT_LIMIT = 256

_HELP = (
    ("help", "show this help"),
    ("clear", "clear screen"),
    ("off", "off system"),
    ("restart", "restart system"),
    ("mkdir", "create directory"),
    ("touch", "create file"),
    ("ls", "show directory and files"),
    ("cd", "change directory"),
    ("rm", "remove file"),
    ("rmdir", "remove directory"),
    ("write", "write data in file"),
    ("open", "take data from file"),
    ("time", "show time and date"),
)

_GREETINGS = ("hi", "hello", "hi!", "hello!")


class PowerOff(Exception):
    """The system was asked to switch off."""


class Restart(Exception):
    """The system was asked to restart."""


class Shell:
    """Reads typed commands from the input buffer and runs them."""

    def __init__(
        self,
        writer: Writer,
        input_handler: InputHandler | None = None,
        root: Directory | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.writer = writer
        self.input = input_handler if input_handler is not None else InputHandler(writer)
        self.root = root if root is not None else Directory()
        self.dir_stack: list[Directory] = [self.root]
        self.clock = clock if clock is not None else datetime.now
        self._handlers: dict[str, Callable[[list[str]], None]] = {
            "help": self._help,
            "clear": self._clear,
            "off": self._off,
            "restart": self._restart,
            "time": self._time,
            "mkdir": self._mkdir,
            "touch": self._touch,
            "ls": self._ls,
            "cd": self._cd,
            "rm": self._rm,
            "rmdir": self._rmdir,
            "write": self._write,
            "open": self._open,
        }
        for greeting in _GREETINGS:
            self._handlers[greeting] = self._greet

    @property
    def current_dir(self) -> Directory:
        return self.dir_stack[-1]

    def _error(self, text: str) -> None:
        self.writer.println_colored(text, Color.Red, Color.Black)

    def _usage(self, text: str) -> None:
        self.writer.println_colored(text, Color.Green, Color.Black)

    def execute_command(self, command: str) -> None:
        """Run one command line."""
        parts = command.split()
        if not parts:
            return
        cmd, args = parts[0], parts[1:]
        handler = self._handlers.get(cmd)
        if handler is not None:
            handler(args)
            return
        self._error(f"Unknown command: {command}")
        self.writer.print("Use ")
        self.writer.print_colored("help", Color.Green, Color.Black)
        self.writer.println(" to see available commands")

    def _help(self, args: list[str]) -> None:
        self.writer.println("Available commands:")
        for name, description in _HELP:
            self.writer.print_colored(f"  {name}", Color.Green, Color.Black)
            self.writer.println(f" - {description}")

    def _clear(self, args: list[str]) -> None:
        self.writer.clear_screen()

    def _off(self, args: list[str]) -> None:
        raise PowerOff()

    def _restart(self, args: list[str]) -> None:
        raise Restart()

    def _time(self, args: list[str]) -> None:
        now = self.clock()
        self.writer.println(f"{now.hour:02d}:{now.minute:02d}")
        self.writer.println(f"{now.day:02d}.{now.month:02d}.{now.year % 100:02d}")

    def _mkdir(self, args: list[str]) -> None:
        if not args:
            self._usage("Usage: mkdir <name>")
            return
        try:
            self.current_dir.add_entry(args[0], Directory())
        except FsError as exc:
            self._error(f"Error creating directory: {exc}")

    def _touch(self, args: list[str]) -> None:
        if not args:
            self._usage("Usage: touch <name>")
            return
        try:
            self.current_dir.add_entry(args[0], File())
        except FsError as exc:
            self._error(f"Error creating file: {exc}")

    def _ls(self, args: list[str]) -> None:
        for name, node in self.current_dir.items():
            kind = "dir" if isinstance(node, Directory) else "file"
            self.writer.println(f"{name}  [{kind}]")

    def _cd(self, args: list[str]) -> None:
        if not args:
            self._usage("Usage: cd <dir>")
            return
        target = args[0]
        if target == "..":
            if len(self.dir_stack) > 1:
                self.dir_stack.pop()
            else:
                self._error("Already at root directory")
            return
        node = self.current_dir.get_entry(target)
        if node is None:
            self._error(f"No such directory: {target}")
        elif isinstance(node, Directory):
            self.dir_stack.append(node)
        else:
            self._error(f"{target} is not a directory")

    def _rm(self, args: list[str]) -> None:
        if not args:
            self._usage("Usage: rm <file>")
            return
        name = args[0]
        node = self.current_dir.get_entry(name)
        if node is None:
            self._error(f"No such file: {name}")
        elif isinstance(node, File):
            try:
                self.current_dir.remove_entry(name)
            except FsError as exc:
                self._error(f"Error removing file: {exc}")
        else:
            self.writer.print_colored(f"{name} is a directory,", Color.Red, Color.Black)
            self.writer.print("use ")
            self.writer.print_colored("rmdir ", Color.Green, Color.Black)
            self.writer.println("to remove directories")

    def _rmdir(self, args: list[str]) -> None:
        if not args:
            self._usage("Usage: rmdir <dir>")
            return
        name = args[0]
        node = self.current_dir.get_entry(name)
        if node is None:
            self._error(f"No such directory: {name}")
        elif isinstance(node, Directory):
            if not node.is_empty():
                self._error("Directory is not empty")
                return
            try:
                self.current_dir.remove_entry(name)
            except FsError as exc:
                self._error(f"Error removing directory: {exc}")
        else:
            self.writer.print_colored(f"{name} is a file,", Color.Red, Color.Black)
            self.writer.print("use ")
            self.writer.print_colored("rm ", Color.Green, Color.Black)
            self.writer.println("to remove files")

    def _write(self, args: list[str]) -> None:
        data = " ".join(args[1:])
        if not args or not data:
            self._usage("Usage: write <file> <text>")
            return
        name = args[0]
        node = self.current_dir.get_entry(name)
        if node is None:
            self._error(f"No such file: {name}")
        elif isinstance(node, File):
            node.write(data.encode("utf-8"))
        else:
            self._error("Error writing to file: Not a file")

    def _open(self, args: list[str]) -> None:
        if not args:
            self._usage("Usage: open <file>")
            return
        name = args[0]
        node = self.current_dir.get_entry(name)
        if node is None:
            self._error(f"No such file: {name}")
        elif isinstance(node, Directory):
            self._error(f"{name} is a directory")
        else:
            try:
                self.writer.println(node.read().decode("utf-8"))
            except UnicodeDecodeError:
                self.writer.println("<binary data>")

    def _greet(self, args: list[str]) -> None:
        self.writer.println_colored("hi broooooooo!", Color.Yellow, Color.Black)
        self.writer.println_colored("you nice, good luck!!!", Color.Yellow, Color.Black)

    def path(self) -> str:
        """Absolute path of the current directory."""
        parts = []
        for parent, child in zip(self.dir_stack, self.dir_stack[1:]):
            name = parent.name_of(child)
            parts.append(name if name is not None else "<unknown>")
        return "/" + "/".join(parts)

    def prompt(self) -> None:
        """Draw the prompt showing the current path."""
        self.writer.print_colored(self.path(), Color.Magenta, Color.Black)
        self.writer.print_colored(" > ", Color.Magenta, Color.Black)

    def poll(self) -> bool:
        """Run the typed line if Enter was pressed; report whether one ran."""
        if not self.input.take_enter():
            return False
        raw = self.writer.buffer_copy(_INPUT_LIMIT)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            text = "<invalid utf8>"
        self.execute_command(text)
        self.writer.print("\n")
        self.prompt()
        self.writer.buffer_clear()
        return True