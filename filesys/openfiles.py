"""Table of open file handles and the permission checks built on it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .fsstate import MAX_NAME, FileRecord, FileSystem

MAX_OPEN = 32
FIRST_FD = 3


class OpenMode(Enum):
    """Access mode of an open handle."""

    READ = "r"
    WRITE = "w"
    READ_WRITE = "rw"

    @property
    def readable(self) -> bool:
        return self in (OpenMode.READ, OpenMode.READ_WRITE)

    @property
    def writable(self) -> bool:
        return self in (OpenMode.WRITE, OpenMode.READ_WRITE)


@dataclass(frozen=True)
class OpenFile:
    """An open handle on a file."""

    fd: int
    name: str
    mode: OpenMode


class TooManyOpenFiles(RuntimeError):
    """Raised when every slot of the open-file table is in use."""


class OpenFileTable:
    """Fixed number of slots holding open handles, with increasing descriptors."""

    def __init__(self, capacity: int = MAX_OPEN, first_fd: int = FIRST_FD) -> None:
        self.capacity = capacity
        self.next_fd = first_fd
        self._slots: list[OpenFile | None] = [None] * capacity

    def open(self, name: str, mode: OpenMode | str = OpenMode.READ) -> OpenFile:
        """Put a new handle in the first free slot and return it."""
        mode = OpenMode(mode)
        for index, slot in enumerate(self._slots):
            if slot is None:
                handle = OpenFile(fd=self.next_fd, name=name[: MAX_NAME - 1], mode=mode)
                self.next_fd += 1
                self._slots[index] = handle
                return handle
        raise TooManyOpenFiles("too many open files")

    def close(self, fd: int) -> OpenFile:
        """Release the handle with this descriptor and return it."""
        for index, slot in enumerate(self._slots):
            if slot is not None and slot.fd == fd:
                self._slots[index] = None
                return slot
        raise KeyError(fd)

    def handles(self) -> list[OpenFile]:
        """Return the open handles in slot order."""
        return [slot for slot in self._slots if slot is not None]

    def _handles_for(self, name: str) -> list[OpenFile]:
        return [h for h in self.handles() if h.name == name]

    def is_open(self, name: str) -> bool:
        """Tell whether any handle is open on this name."""
        return bool(self._handles_for(name))

    def allows_read(self, name: str) -> bool:
        """True when the file is not open, or some handle on it can read."""
        handles = self._handles_for(name)
        return not handles or any(h.mode.readable for h in handles)

    def allows_write(self, name: str) -> bool:
        """True when the file is not open, or some handle on it can write."""
        handles = self._handles_for(name)
        return not handles or any(h.mode.writable for h in handles)

    def closed_files(self, fs: FileSystem) -> list[FileRecord]:
        """Return the files of a file system that have no open handle."""
        return [
            record
            for record in fs.entries()
            if not record.is_directory and not self.is_open(record.name)
        ]