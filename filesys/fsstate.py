"""In-memory file system state: path helpers and the table of entries."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

MAX_NAME = 128
MAX_PATH = 256
MAX_CONTENT = 4096
FS_MAX_ENTRIES = 256

_WHITESPACE = frozenset(" \t\n\v\f\r")
_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class FileSystemError(ValueError):
    """Raised when a path is invalid or an entry cannot be created or changed."""


class TreeType(Enum):
    """Index bucket a name belongs to, chosen by its first character."""

    ALPHA = 0
    NUM = 1
    SYM = 2


@dataclass
class FileRecord:
    """A file or directory held by the file system."""

    name: str
    path: str
    inode: int
    is_directory: bool = False
    content: str = ""
    size: int = 0


def normalize_path(text: str) -> str:
    """Return the canonical absolute form of a path.

    Backslashes become slashes, repeated slashes collapse, a leading slash is
    added when missing and trailing slashes are removed.
    """
    if text is None:
        raise FileSystemError("no path given")

    stripped = text.lstrip("".join(_WHITESPACE))
    if not stripped:
        raise FileSystemError(f"invalid path {text!r}")

    out: list[str] = []
    if stripped[0] not in "/\\":
        out.append("/")

    previous_was_slash = False
    last = len(stripped) - 1
    for position, char in enumerate(stripped):
        if char == "\\":
            char = "/"
        if char in _WHITESPACE and position == last:
            break
        if char == "/":
            if previous_was_slash:
                continue
            previous_was_slash = True
        else:
            previous_was_slash = False
        out.append(char)

    if len(out) > MAX_PATH - 1:
        raise FileSystemError(f"path too long: {text!r}")

    result = "".join(out)
    while len(result) > 1 and result.endswith("/"):
        result = result[:-1]

    if not result.startswith("/"):
        raise FileSystemError(f"invalid path {text!r}")
    return result


def extract_file_name(path: str) -> str:
    """Return the final component of a path."""
    normalized = normalize_path(path)
    name = normalized.rsplit("/", 1)[-1]
    if not name:
        raise FileSystemError(f"path {path!r} has no file name")
    return name[: MAX_NAME - 1]


def is_directory_path(path: str | None) -> bool:
    """Tell whether a path names a directory: its last component has no extension."""
    if not path:
        return False
    last_slash = path.rfind("/")
    last_dot = path.rfind(".")
    return not (last_dot != -1 and last_dot > last_slash + 1)


def classify_name(name: str | None) -> TreeType:
    """Return the index bucket for a name."""
    first = name[0] if name else ""
    if first and first in string.ascii_letters:
        return TreeType.ALPHA
    if first and first in string.digits:
        return TreeType.NUM
    return TreeType.SYM


def _same_name(a: str, b: str) -> bool:
    return a.translate(_FOLD) == b.translate(_FOLD)


class FileSystem:
    """A flat table of files and directories keyed by normalized path."""

    def __init__(self, max_entries: int = FS_MAX_ENTRIES) -> None:
        self.max_entries = max_entries
        self._entries: list[FileRecord] = []
        self._next_inode = 1

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self._entries)

    def find_by_path(self, path: str) -> FileRecord | None:
        """Return the entry at a path, or None."""
        try:
            normalized = normalize_path(path)
        except FileSystemError:
            return None
        return next((e for e in self._entries if e.path == normalized), None)

    def find_by_name(self, name: str | None) -> FileRecord | None:
        """Return the first entry whose name matches, ignoring case, or None."""
        if not name:
            return None
        return next((e for e in self._entries if _same_name(e.name, name)), None)

    def search_central(self, name: str | None) -> tuple[FileRecord | None, TreeType]:
        """Look a name up and report the index bucket it belongs to."""
        return self.find_by_name(name), classify_name(name)

    def create_entry(self, path: str, is_directory: bool = False) -> FileRecord:
        """Create a file or directory entry and return it."""
        if len(self._entries) >= self.max_entries:
            raise FileSystemError("file system is full")
        normalized = normalize_path(path)
        if normalized == "/":
            raise FileSystemError("cannot create the root directory")
        if self.find_by_path(normalized) is not None:
            raise FileSystemError(f"'{normalized}' already exists")
        name = extract_file_name(normalized)
        record = FileRecord(
            name=name,
            path=normalized[: MAX_PATH - 1],
            inode=self._next_inode,
            is_directory=bool(is_directory),
        )
        self._next_inode += 1
        self._entries.append(record)
        return record

    def insert_file(self, name: str) -> FileRecord:
        """Create a plain file entry."""
        return self.create_entry(name, False)

    def entries(self) -> tuple[FileRecord, ...]:
        """Return all entries in creation order."""
        return tuple(self._entries)

    def path_by_name(self, name: str) -> str | None:
        """Return the path of the entry with this name, or None."""
        record = self.find_by_name(name)
        return None if record is None else record.path

    def content_by_name(self, name: str) -> str | None:
        """Return the content of the entry with this name, or None."""
        record = self.find_by_name(name)
        return None if record is None else record.content

    def set_content_by_name(self, name: str, content: str) -> int:
        """Replace a file's content and return its new size."""
        record = self.find_by_name(name)
        if record is None:
            raise FileSystemError(f"no such file: {name!r}")
        if record.is_directory:
            raise FileSystemError(f"'{record.path}' is a directory")
        if content is None:
            raise FileSystemError("no content given")
        record.content = content[: MAX_CONTENT - 1]
        record.size = len(record.content)
        return record.size