"""In-memory file system of directories and files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


class FsError(Exception):
    """A file-system operation could not be carried out."""


@dataclass(eq=False)
class File:
    content: bytearray = field(default_factory=bytearray)

    def write(self, data: bytes) -> None:
        """Replace the file's contents with ``data``."""
        self.content[:] = data

    def read(self) -> bytes:
        return bytes(self.content)


@dataclass(eq=False)
class Directory:
    entries: dict[str, "Node"] = field(default_factory=dict)

    def add_entry(self, name: str, node: "Node") -> None:
        if name in self.entries:
            raise FsError("Entry already exists")
        self.entries[name] = node

    def get_entry(self, name: str) -> "Node | None":
        return self.entries.get(name)

    def remove_entry(self, name: str) -> None:
        if self.entries.pop(name, None) is None:
            raise FsError("Entry not found")

    def name_of(self, node: "Node") -> str | None:
        """The name under which this exact node is stored, if any."""
        return next(
            (name for name, entry in self.items() if entry is node), None
        )

    def is_empty(self) -> bool:
        return not self.entries

    def items(self) -> list[tuple[str, "Node"]]:
        """Entries sorted by name."""
        return sorted(self.entries.items(), key=lambda item: item[0])


Node = Union[File, Directory]