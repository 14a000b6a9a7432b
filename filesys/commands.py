"""The shell commands: createF, openF, closeF, searchF and help."""

from __future__ import annotations

import re
import sys
from typing import TextIO

from .editor import Editor
from .fsstate import (
    FileRecord,
    FileSystem,
    FileSystemError,
    is_directory_path,
    normalize_path,
)
from .openfiles import OpenFileTable, OpenMode, TooManyOpenFiles

HELP_TEXT = r"""FILESYS(1)

NAME
    createF, openF, closeF, searchF, help - simulated file management commands

SYNOPSIS
    createF <file>
    createF -mkdir <path>
    openF [-r | -w | -rw] <file>
    openF -list
    openF -edit <file>
    closeF <fd>
    closeF -list
    searchF <file>
    searchF -dirL
    help

DESCRIPTION
    createF
        Create a file if it does not already exist.

    createF -mkdir
        Create a new directory at the specified path.
        The path must begin with '\' and use '\' as the separator.
        The final path component must be a directory name, not a file.

    openF
        Open a file in read, write, or read/write mode.

    openF -list
        Display all currently closed files that may be opened.

    openF -edit
        Open a file in a simple vi-like text editing mode (only if the file has write or read/write permissions).

    openF -content
        Open a file and display its contents to shell (only if the file has read or read/write permissions).

    closeF
        Close an active file descriptor.

    closeF -list
        Display all currently open files.

    searchF
        Search the indexed file system for a file and print its full path.

    searchF -dirL
        List all files line by line, including folders and subfolders.

    help
        Display this help page.

EXAMPLES
    createF report.txt
    createF -mkdir \docs\projects
    openF -rw report.txt
    openF -edit notes.txt
    openF -list
    searchF report.txt
    searchF -dirL
    closeF 3
    closeF -list

NOTES
    This is a simulated file management environment and does not operate
    directly on the host operating system's real file system."""

_MODES = {"": OpenMode.READ, "-r": OpenMode.READ, "-w": OpenMode.WRITE, "-rw": OpenMode.READ_WRITE}
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _has_separator(text: str) -> bool:
    return "/" in text or "\\" in text


class Shell:
    """Runs the file commands against a file system and an open-file table."""

    def __init__(
        self,
        fs: FileSystem | None = None,
        table: OpenFileTable | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.fs = fs if fs is not None else FileSystem()
        self.table = table if table is not None else OpenFileTable()
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def _print(self, text: str = "", end: str = "\n") -> None:
        print(text, end=end, file=self.stdout)

    def _resolve(self, arg: str) -> FileRecord | None:
        try:
            normalized = normalize_path(arg)
        except FileSystemError:
            return None
        record = self.fs.find_by_path(normalized)
        if record is None and not _has_separator(arg):
            record = self.fs.find_by_name(arg)
        return record

    def create(self, spec: str = "", args: str = "") -> None:
        """createF: make a file, or a directory with -mkdir."""
        if not args:
            self._print("usage: createF <file>")
            self._print("       createF -mkdir <path>")
            return
        try:
            normalized = normalize_path(args)
        except FileSystemError:
            self._print(f"createF: invalid path '{args}'")
            return

        make_dir = spec in ("-mkdir", "-mkDir")
        looks_like_dir = is_directory_path(normalized)
        if make_dir and not looks_like_dir:
            self._print(
                f"createF: cannot create directory '{normalized}': "
                "final path component must not be a file"
            )
            return
        if not make_dir and looks_like_dir:
            self._print(
                f"createF: '{normalized}' looks like a directory path. "
                "Use createF -mkdir <path>"
            )
            return
        if self.fs.find_by_path(normalized) is not None:
            self._print(f"createF: cannot create '{normalized}': File exists")
            return
        try:
            self.fs.create_entry(normalized, make_dir)
        except FileSystemError:
            self._print(f"createF: failed to create '{normalized}'")
            return
        kind = "directory" if make_dir else "file"
        self._print(f"created {kind} '{normalized}'")

    def open(self, spec: str = "", args: str = "") -> None:
        """openF: open a file, list closed files, show or edit content."""
        if spec == "-list":
            self.list_closed()
            return

        if spec in ("-edit", "-content"):
            if not args:
                self._print(f"usage: openF {spec} <file>")
                return
            record = self._resolve(args)
            if record is None or record.is_directory:
                self._print(f"openF: cannot open '{args}': No such file")
                return
            if spec == "-edit":
                self.edit(record)
            else:
                self.show_content(record)
            return

        if not args:
            self._print("usage: openF [-r|-w|-rw] <file>")
            return
        mode = _MODES.get(spec or "")
        if mode is None:
            self._print(f"openF: invalid option '{spec}'")
            return
        record = self._resolve(args)
        if record is None or record.is_directory:
            self._print(f"openF: cannot open '{args}': No such file")
            return
        try:
            handle = self.table.open(record.name, mode)
        except TooManyOpenFiles:
            self._print("openF: too many open files")
            return
        self._print(f"opened '{record.path}' as fd {handle.fd} ({handle.mode.value})")

    def close(self, spec: str = "", args: str = "") -> None:
        """closeF: close a descriptor, or list open handles with -list."""
        if spec == "-list":
            self._print("Open files:")
            handles = self.table.handles()
            for handle in handles:
                self._print(f"  fd {handle.fd}  {handle.name}  ({handle.mode.value})")
            if not handles:
                self._print("  (none)")
            return

        if not args:
            self._print("usage: closeF <fd>")
            return
        fd = _leading_int(args)
        try:
            self.table.close(fd)
        except KeyError:
            self._print(f"closeF: invalid file descriptor '{args}'")
            return
        self._print(f"closed fd {fd}")

    def search(self, spec: str = "", args: str = "") -> None:
        """searchF: find a file by path or name, or list everything with -dirL."""
        if spec in ("-dirL", "-dirl"):
            entries = self.fs.entries()
            if not entries:
                self._print("(empty)")
                return
            for record in entries:
                self._print(record.path + ("/" if record.is_directory else ""))
            return

        if not args:
            self._print("usage: searchF <file>")
            return
        try:
            normalized = normalize_path(args)
        except FileSystemError:
            self._print(f"searchF: invalid path '{args}'")
            return
        record = self.fs.find_by_path(normalized)
        if record is None and not _has_separator(args):
            record, _ = self.fs.search_central(args)
        if record is None:
            self._print(f"searchF: '{args}' not found")
            return
        kind = "directory" if record.is_directory else "file"
        self._print(f"{kind}: {record.path}")

    def help(self, spec: str = "", args: str = "") -> None:
        """help: print the manual page."""
        self._print(HELP_TEXT)

    def show_content(self, record: FileRecord) -> None:
        """Print a file's content between header and footer lines."""
        if not self.table.allows_read(record.name):
            self._print(
                f"openF: cannot display '{record.name}': "
                "file is currently open without read permission"
            )
            return
        path = self.fs.path_by_name(record.name)
        content = self.fs.content_by_name(record.name)
        self._print(f"----- {path if path is not None else record.name} -----")
        if not content:
            self._print("[empty file]")
        else:
            self._print(content, end="" if content.endswith("\n") else "\n")
        self._print("----------------")

    def edit(self, record: FileRecord) -> None:
        """Start the editor on a file that may be written."""
        if not self.table.allows_write(record.name):
            self._print(
                f"openF: cannot edit '{record.name}': "
                "file is currently open without write permission"
            )
            return
        Editor(self.fs, record, self.stdin, self.stdout).run()

    def list_closed(self) -> None:
        """Print the files that have no open handle."""
        self._print("Closed files available to open:")
        closed = self.table.closed_files(self.fs)
        for record in closed:
            self._print(f"  {record.path}")
        if not closed:
            self._print("  (none)")