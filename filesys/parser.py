"""Splitting an input line into command, option and argument, and dispatch."""

from __future__ import annotations

from typing import NamedTuple

from .commands import Shell

UNKNOWN_COMMAND = "Unknown command, please try again..."


class Instruction(NamedTuple):
    """An input line broken into its parts."""

    command: str
    specifier: str
    argument: str


def split_instruction(line: str) -> Instruction:
    """Break a line into command, option specifier and argument.

    The command runs to the first space, the specifier to the next one and the
    argument is the rest. A second word that does not start with '-' is taken
    as the argument, with no specifier.
    """
    command, _, rest = line.partition(" ")
    specifier, _, argument = rest.partition(" ")
    if not specifier.startswith("-"):
        argument, specifier = specifier, ""
    return Instruction(command, specifier, argument)


def parse_instruct(shell: Shell, line: str) -> None:
    """Run the command named by a line on a shell."""
    command, specifier, argument = split_instruction(line)
    handlers = {
        "createF": shell.create,
        "openF": shell.open,
        "closeF": shell.close,
        "searchF": shell.search,
        "help": shell.help,
    }
    handler = handlers.get(command)
    if handler is None:
        print(UNKNOWN_COMMAND, file=shell.stdout)
        return
    handler(specifier, argument)