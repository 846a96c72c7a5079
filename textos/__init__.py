"""A simulated text-mode machine with a screen, RAM file system, heap and shell."""

__version__ = "0.1.0"

__all__ = ["console", "heap", "interrupts", "memory", "ramfs", "shell", "syscalls", "vga"]