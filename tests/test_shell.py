from datetime import datetime

import pytest

from textos.ramfs import Directory, File
from textos.shell import PowerOff, Restart, Shell
from textos.vga import BUFFER_HEIGHT, Color, Writer, color_code


@pytest.fixture
def shell():
    return Shell(Writer())


def screen(shell):
    return shell.writer.screen_text()


def type_line(shell, line):
    for ch in line:
        shell.input.key(ch)
    shell.input.key("\n")


def test_mkdir_creates_directory(shell):
    shell.execute_command("mkdir docs")
    node = shell.root.get_entry("docs")
    assert isinstance(node, Directory)
    assert node.is_empty() is True
    shell.execute_command("ls")
    assert "docs  [dir]" in screen(shell).splitlines()


def test_mkdir_duplicate_reports_error(shell):
    shell.execute_command("mkdir docs")
    shell.execute_command("mkdir docs")
    assert "Error creating directory: Entry already exists" in screen(shell)


def test_mkdir_without_name_prints_usage(shell):
    shell.execute_command("mkdir")
    assert "Usage: mkdir <name>" in screen(shell)


def test_touch_write_open_round_trip(shell):
    shell.execute_command("touch notes")
    shell.execute_command("write notes hello   world")
    node = shell.root.get_entry("notes")
    assert isinstance(node, File)
    assert node.read() == b"hello world"
    shell.execute_command("open notes")
    assert "hello world" in screen(shell).splitlines()


def test_write_without_text_prints_usage(shell):
    shell.execute_command("touch notes")
    shell.execute_command("write notes")
    assert "Usage: write <file> <text>" in screen(shell)
    assert shell.root.get_entry("notes").read() == b""


def test_write_to_directory_fails(shell):
    shell.execute_command("mkdir d")
    shell.execute_command("write d text")
    assert "Error writing to file: Not a file" in screen(shell)


def test_open_binary_content(shell):
    node = File()
    node.write(b"\xff\xfe")
    shell.root.add_entry("blob", node)
    shell.execute_command("open blob")
    assert "<binary data>" in screen(shell)


def test_open_directory_reports_error(shell):
    shell.execute_command("mkdir d")
    shell.execute_command("open d")
    assert "d is a directory" in screen(shell).splitlines()


def test_cd_and_path(shell):
    shell.execute_command("mkdir docs")
    shell.execute_command("cd docs")
    shell.execute_command("mkdir inner")
    shell.execute_command("cd inner")
    assert shell.path() == "/docs/inner"
    shell.execute_command("cd ..")
    assert shell.path() == "/docs"
    shell.execute_command("cd ..")
    assert shell.path() == "/"


def test_cd_up_at_root(shell):
    shell.execute_command("cd ..")
    assert "Already at root directory" in screen(shell)
    assert shell.path() == "/"


def test_cd_into_file_reports_error(shell):
    shell.execute_command("touch f")
    shell.execute_command("cd f")
    assert "f is not a directory" in screen(shell)
    assert shell.path() == "/"


def test_cd_missing_is_red(shell):
    shell.execute_command("cd nowhere")
    writer = shell.writer
    rows = [r for r in range(BUFFER_HEIGHT) if writer.row_text(r) == "No such directory: nowhere"]
    assert rows
    assert writer.char_at(rows[-1], 0).color_code == color_code(Color.Red, Color.Black)


def test_path_of_detached_directory(shell):
    shell.execute_command("mkdir a")
    shell.execute_command("cd a")
    shell.root.remove_entry("a")
    assert shell.path() == "/<unknown>"


def test_ls_lists_sorted_entries(shell):
    shell.execute_command("touch b")
    shell.execute_command("mkdir a")
    shell.execute_command("ls")
    lines = screen(shell).splitlines()
    assert lines.index("a  [dir]") < lines.index("b  [file]")


def test_rm_removes_file(shell):
    shell.execute_command("touch f")
    shell.execute_command("rm f")
    assert shell.root.get_entry("f") is None


def test_rm_refuses_directory(shell):
    shell.execute_command("mkdir d")
    shell.execute_command("rm d")
    assert "d is a directory,use rmdir to remove directories" in screen(shell)
    assert isinstance(shell.root.get_entry("d"), Directory)


def test_rmdir_non_empty_and_empty(shell):
    shell.execute_command("mkdir d")
    shell.execute_command("cd d")
    shell.execute_command("touch f")
    shell.execute_command("cd ..")
    shell.execute_command("rmdir d")
    assert "Directory is not empty" in screen(shell)
    assert shell.root.get_entry("d") is not None
    shell.execute_command("cd d")
    shell.execute_command("rm f")
    shell.execute_command("cd ..")
    shell.execute_command("rmdir d")
    assert shell.root.get_entry("d") is None


def test_rmdir_refuses_file(shell):
    shell.execute_command("touch f")
    shell.execute_command("rmdir f")
    assert "f is a file,use rm to remove files" in screen(shell)


def test_missing_file_messages(shell):
    shell.execute_command("rm ghost")
    shell.execute_command("open ghost")
    text = screen(shell)
    assert text.count("No such file: ghost") == 2


def test_help_lists_commands(shell):
    shell.execute_command("help")
    lines = screen(shell).splitlines()
    assert "  mkdir - create directory" in lines
    assert "  time - show time and date" in lines


def test_greeting(shell):
    shell.execute_command("hello!")
    assert "hi broooooooo!" in screen(shell)


def test_unknown_command(shell):
    shell.execute_command("frobnicate")
    text = screen(shell)
    assert "Unknown command: frobnicate" in text
    assert "Use help to see available commands" in text


def test_time_uses_clock():
    sh = Shell(Writer(), clock=lambda: datetime(2024, 3, 5, 14, 7))
    sh.execute_command("time")
    lines = sh.writer.screen_text().splitlines()
    assert "14:07" in lines
    assert "05.03.24" in lines


def test_off_and_restart_raise(shell):
    with pytest.raises(PowerOff):
        shell.execute_command("off")
    with pytest.raises(Restart):
        shell.execute_command("restart")


def test_clear_empties_screen(shell):
    shell.execute_command("help")
    shell.execute_command("clear")
    assert screen(shell).strip() == ""


def test_poll_runs_typed_command(shell):
    assert shell.poll() is False
    type_line(shell, "touch f")
    assert shell.poll() is True
    assert isinstance(shell.root.get_entry("f"), File)
    assert shell.writer.get_buffer() == ""
    assert shell.poll() is False


def test_prompt_shows_path(shell):
    shell.execute_command("mkdir a")
    shell.execute_command("cd a")
    shell.prompt()
    assert "/a >" in screen(shell)