"""Line-oriented, vi-style editor for the contents of a single file."""

from __future__ import annotations

import re
import sys
from typing import TextIO

from .fsstate import FileRecord, FileSystem, FileSystemError

MAX_EDIT_BUFFER = 4096
MAX_EDIT_LINES = 256
MAX_LINE_LENGTH = 512

_HELP = """\
Editor commands:
  :p                 print current buffer with line numbers
  :i                 insert mode at end of file
  :i <line>          insert mode before line number
  :a                 append mode after end of file
  :a <line>          append mode after line number
  :d <line>          delete a line
  :r <line>          replace a line
  :w                 write buffer to file
  :wq                write and quit
  :q                 quit without saving pending changes
  :help              show this command list
  .                  in insert/append mode, finish text entry"""

_NUMBERED = {
    key: re.compile(rf":{key}\s*([+-]?\d+)") for key in ("i", "a", "d", "r")
}


def split_lines(content: str | None) -> list[str]:
    """Split file content into its non-empty lines.

    Raises ValueError when the content holds more lines than the editor can.
    """
    if not content:
        return []
    text = content[: MAX_EDIT_BUFFER - 1]
    lines = [line[: MAX_LINE_LENGTH - 1] for line in text.split("\n") if line]
    if len(lines) > MAX_EDIT_LINES:
        raise ValueError("editor buffer exceeded maximum line count")
    return lines


def join_lines(lines: list[str]) -> str:
    """Join lines into file content, each ending in a newline, within the buffer size."""
    parts: list[str] = []
    used = 0
    for line in lines:
        need = len(line) + 1
        if used + need >= MAX_EDIT_BUFFER:
            break
        parts.append(line + "\n")
        used += need
    return "".join(parts)


class Editor:
    """Interactive editing session over one file record."""

    def __init__(
        self,
        fs: FileSystem,
        record: FileRecord,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.fs = fs
        self.record = record
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout
        self.lines: list[str] = []
        self.modified = False

    def _print(self, text: str = "", end: str = "\n") -> None:
        print(text, end=end, file=self._out)

    def _prompt(self, text: str) -> str | None:
        self._print(text, end="")
        self._out.flush()
        line = self._in.readline()
        if line == "":
            return None
        return line.rstrip("\r\n")

    def _print_lines(self) -> None:
        if not self.lines:
            self._print("[empty file]")
            return
        for number, line in enumerate(self.lines, start=1):
            self._print(f"{number:4d}  {line}")

    def _insert_at(self, index: int, text: str) -> bool:
        if len(self.lines) >= MAX_EDIT_LINES:
            self._print("openF: maximum line capacity reached")
            return False
        index = max(0, min(index, len(self.lines)))
        self.lines.insert(index, text[: MAX_LINE_LENGTH - 1])
        return True

    def _collect_insert(self, index: int) -> bool:
        self._print("-- INSERT -- (enter . alone on a line to stop)")
        while True:
            line = self._prompt("| ")
            if line is None:
                self._print("\nInsert ended.")
                return True
            if line == ".":
                return True
            if not self._insert_at(index, line):
                return False
            index += 1

    def _save(self) -> None:
        try:
            self.record.size = self.fs.set_content_by_name(
                self.record.name, join_lines(self.lines)
            )
        except FileSystemError:
            pass
        self._print(f"Saved '{self.record.name}' ({self.record.size} bytes).")
        self.modified = False

    def _check_range(self, target: int, low: int, high: int) -> bool:
        if low <= target <= high:
            return True
        self._print(f"Invalid line number. Valid range: {low} to {high}")
        return False

    @staticmethod
    def _numbered(key: str, command: str) -> int | None:
        match = _NUMBERED[key].match(command)
        return int(match.group(1)) if match else None

    def run(self) -> None:
        """Load the file, process editor commands until quit or end of input."""
        try:
            self.lines = split_lines(self.fs.content_by_name(self.record.name))
        except ValueError:
            self._print("openF: editor buffer exceeded maximum line count")
            return

        self._print(f"Entering vi-style edit mode for '{self.record.name}'")
        self._print("Type :help for commands. Current buffer loaded into memory.")
        self._print_lines()

        while True:
            command = self._prompt(": ")
            if command is None:
                self._print("\nEdit cancelled.")
                return
            if not self._dispatch(command):
                return

    def _dispatch(self, command: str) -> bool:
        """Run one command; return False when the session ends."""
        if command == ":help":
            self._print(_HELP)
        elif command == ":p":
            self._print_lines()
        elif command in (":i", ":a"):
            if self._collect_insert(len(self.lines)):
                self.modified = True
        elif (target := self._numbered("i", command)) is not None:
            if self._check_range(target, 1, len(self.lines) + 1):
                if self._collect_insert(target - 1):
                    self.modified = True
        elif (target := self._numbered("a", command)) is not None:
            if self._check_range(target, 0, len(self.lines)):
                if self._collect_insert(target):
                    self.modified = True
        elif (target := self._numbered("d", command)) is not None:
            if self._check_range(target, 1, len(self.lines)):
                del self.lines[target - 1]
                self.modified = True
                self._print(f"Deleted line {target}.")
        elif (target := self._numbered("r", command)) is not None:
            if self._check_range(target, 1, len(self.lines)):
                replacement = self._prompt(f"replace line {target}> ")
                if replacement is None:
                    self._print("Replacement cancelled.")
                else:
                    self.lines[target - 1] = replacement[: MAX_LINE_LENGTH - 1]
                    self.modified = True
        elif command == ":w":
            self._save()
        elif command == ":wq":
            self._save()
            return False
        elif command == ":q":
            if self.modified:
                self._print(
                    "Unsaved changes. Use :wq to save and quit, "
                    "or enter :q again to discard."
                )
            else:
                self._print("Exited editor without saving.")
                return False
        elif command:
            self._print("Unknown editor command. Type :help for options.")
        return True