"""Interactive prompt with line editing and command history."""

from __future__ import annotations

import argparse
import codecs
import os
import sys
from collections import deque
from contextlib import contextmanager
from typing import Callable, Iterator

from .commands import Shell
from .fsstate import FileRecord
from .parser import parse_instruct

try:
    import termios
except ImportError:  # pragma: no cover - platforms without termios
    termios = None  # type: ignore[assignment]

MAX_INPUT = 100
HISTORY_SIZE = 10

PROMPT = "{'e' to Exit} > "
CLEAR_SCREEN = "\033[2J\033[H"

_BACKSPACES = ("\x7f", "\x08")
_ESCAPE = "\x1b"
_CTRL_L = "\x0c"

ReadChar = Callable[[], str]
Write = Callable[[str], None]


class History:
    """The most recent input lines, oldest first."""

    def __init__(self, size: int = HISTORY_SIZE) -> None:
        self.size = size
        self._entries: deque[str] = deque(maxlen=size)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, entry: str) -> None:
        """Remember a line; empty lines are ignored and the oldest is dropped when full."""
        if not entry:
            return
        self._entries.append(entry[: MAX_INPUT - 1])

    def items(self) -> list[str]:
        """Return the remembered lines, oldest first."""
        return list(self._entries)


def _redraw(write: Write, buffer: str) -> None:
    write(f"\r\033[K{PROMPT}{buffer}")


def read_line(read_char: ReadChar, history: History, write: Write) -> str:
    """Read one line key by key, handling backspace, arrows and Ctrl+L.

    read_char returns one character, or an empty string at end of input, in
    which case EOFError is raised.
    """

    def next_char() -> str:
        char = read_char()
        if char == "":
            raise EOFError
        return char

    entries = history.items()
    count = len(entries)
    index = count
    buffer = ""

    while True:
        char = next_char()

        if char in ("\n", "\r"):
            write("\n")
            return buffer

        if char in _BACKSPACES:
            if buffer:
                buffer = buffer[:-1]
                _redraw(write, buffer)
            continue

        if char == _ESCAPE:
            first, second = next_char(), next_char()
            if first != "[":
                continue
            if second == "A":
                if count > 0 and index > 0:
                    index -= 1
                    buffer = entries[index][: MAX_INPUT - 1]
                    _redraw(write, buffer)
            elif second == "B":
                if index < count - 1:
                    index += 1
                    buffer = entries[index][: MAX_INPUT - 1]
                    _redraw(write, buffer)
                elif index == count - 1:
                    index = count
                    buffer = ""
                    _redraw(write, buffer)
            continue

        if char == _CTRL_L:
            write(CLEAR_SCREEN)
            _redraw(write, buffer)
            continue

        if len(buffer) < MAX_INPUT - 1:
            buffer += char
            write(char)


def run_shell(read_char: ReadChar, write: Write, shell: Shell) -> None:
    """Prompt for and run commands until 'e' or end of input."""
    history = History()
    write(CLEAR_SCREEN)
    while True:
        write(PROMPT)
        try:
            line = read_line(read_char, history, write)
        except EOFError:
            return
        if line == "e":
            write("Exiting...\n")
            return
        history.add(line)
        if line == "clear":
            write(CLEAR_SCREEN)
            continue
        parse_instruct(shell, line)


class _Terminal:
    """Switches a terminal between character-at-a-time and its saved mode."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._saved = None
        if termios is not None and os.isatty(fd):
            self._saved = termios.tcgetattr(fd)

    def raw(self) -> None:
        if self._saved is None:
            return
        attrs = list(self._saved)
        attrs[3] = attrs[3] & ~(termios.ICANON | termios.ECHO)
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, attrs)

    def restore(self) -> None:
        if self._saved is not None:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved)

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        self.raw()
        try:
            yield
        finally:
            self.restore()


class _TerminalShell(Shell):
    """Shell that hands the terminal back to line mode while editing."""

    def __init__(self, terminal: _Terminal) -> None:
        super().__init__()
        self._terminal = terminal

    def edit(self, record: FileRecord) -> None:
        self._terminal.restore()
        try:
            super().edit(record)
        finally:
            self._terminal.raw()


def _char_reader(fd: int) -> ReadChar:
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def read_char() -> str:
        while True:
            data = os.read(fd, 1)
            if not data:
                return ""
            text = decoder.decode(data)
            if text:
                return text

    return read_char


def _write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def main(argv: list[str] | None = None) -> int:
    """Start the interactive file management shell."""
    parser = argparse.ArgumentParser(
        prog="filesys", description="Simulated file management shell."
    )
    parser.parse_args(argv)

    fd = sys.stdin.fileno()
    terminal = _Terminal(fd)
    shell = _TerminalShell(terminal)
    with terminal.raw_mode():
        run_shell(_char_reader(fd), _write, shell)
    return 0


if __name__ == "__main__":
    sys.exit(main())