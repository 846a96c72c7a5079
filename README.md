# textos

`textos` models a small text-mode machine in pure Python. It has:

- an 80×25 colour character screen with scroll-back history (`textos.vga`)
- an in-memory file system of directories and files (`textos.ramfs`)
- a `write` system call that prints to the screen (`textos.syscalls`)
- a fixed-size-block heap allocator in front of a first-fit heap (`textos.heap`)
- frame allocation from a boot memory map and a page mapper (`textos.memory`)
- keyboard and scroll-wheel input handling (`textos.interrupts`)
- a command shell (`textos.shell`) and a console that boots it (`textos.console`)

It needs nothing beyond the standard library.

## Installing

```
pip install .
```

## Running the shell

```
textos
```

The console draws a start-up banner and a `/ > ` prompt on the simulated
screen. Each time it waits for a line it prints the whole 25-row screen to
standard output; type a command and press Enter. End of input stops it.

To run a file of commands instead, one per line, give its path:

```
textos commands.txt
```

The final screen is printed when the commands run out or `off` is given.

| Command | What it does |
|---|---|
| `help` | list the commands |
| `clear` | clear the screen |
| `mkdir <name>` | create a directory |
| `touch <name>` | create an empty file |
| `ls` | list the current directory by name, marking `[dir]` and `[file]` |
| `cd <dir>` / `cd ..` | enter a directory or go up one level |
| `rm <file>` | remove a file |
| `rmdir <dir>` | remove an empty directory |
| `write <file> <text>` | replace a file's contents with the text (words joined by single spaces) |
| `open <file>` | print a file's contents, or `<binary data>` if they are not UTF-8 |
| `time` | show the host's time as `HH:MM` and date as `DD.MM.YY` |
| `hi`, `hello` | a greeting |
| `off` | switch the machine off |
| `restart` | start again with a fresh screen and an empty file system |

The prompt shows the path of the current directory, for example `/docs/notes > `.
Existing names, missing entries, non-empty directories, and removing a
directory with `rm` (or a file with `rmdir`) are reported on screen in red.

## Using the pieces from Python

The file system:

```python
from textos.ramfs import Directory, File, FsError

root = Directory()
notes = File()
root.add_entry("notes", notes)
notes.write(b"hello")
assert root.get_entry("notes").read() == b"hello"

try:
    root.add_entry("notes", File())
except FsError as err:
    print(err)          # Entry already exists
```

The screen keeps what was written and can be read back as text:

```python
from textos.vga import Color, Writer

writer = Writer()
writer.println("plain text")
writer.println_colored("warning", Color.Red, Color.Black)
print(writer.screen_text())
print(writer.char_at(2, 0))
```

The shell runs one command line at a time; `off` and `restart` raise
`PowerOff` and `Restart`:

```python
from textos.shell import Shell
from textos.vga import Writer

shell = Shell(Writer())
shell.execute_command("mkdir docs")
shell.execute_command("cd docs")
print(shell.path())     # /docs
```

The `write` system call:

```python
from textos.syscalls import SYSCALL_WRITE, syscall_dispatcher
from textos.vga import Writer

writer = Writer()
assert syscall_dispatcher(writer, SYSCALL_WRITE, 1, b"hi\n") == 3
```

The heap, mapped onto frames taken from a memory map:

```python
from textos.heap import init_heap
from textos.memory import BootInfoFrameAllocator, MemoryRegion, PageMapper, RegionType

frames = BootInfoFrameAllocator([MemoryRegion(0x100000, 0x200000, RegionType.Usable)])
allocator = init_heap(PageMapper(), frames)
address = allocator.alloc(24, 8)
allocator.dealloc(address, 24, 8)
```

`init_heap` raises `FrameAllocationFailed` when the frames run out, and the
allocators raise `AllocationError` when the heap is full.

## What it does not do

Nothing here touches real hardware: the screen is a grid in memory, the time
comes from the host clock, and `off` and `restart` only end or restart the
session. The file system lives in memory only and is lost when the program
stops or restarts. The heap and page mapper hand out and record addresses;
they do not back them with real memory.

## Tests

```
pip install ".[test]"
pytest
```