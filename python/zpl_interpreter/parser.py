"""Turn raw command tokens into ``(name, args)`` pairs."""

from __future__ import annotations

from typing import Iterator, List, NamedTuple

from .lexer import Lexer

FONT = "A"
NAMED_FONT = "A@"


class ParsedCommand(NamedTuple):
    name: str
    args: List[str]
    prefix: str = "^"


def parse_command(token: str) -> ParsedCommand:
    """Split a token into its canonical name and its comma separated arguments."""

    prefix = token[:1]
    command = token[1:3].upper()
    arguments = token[3:]

    # ^A is the only single letter command. Its second character is either
    # "@" (font by name) or the font designation, which belongs to the args.
    if command[:1] == FONT:
        if command == NAMED_FONT:
            command = NAMED_FONT
        else:
            arguments = token[2:3] + arguments
            command = FONT

    args = arguments.split(",") if arguments else []
    return ParsedCommand(command, args, prefix)


class Parser:
    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer

    def parse(self) -> list[ParsedCommand]:
        """Parse every command picked out by the lexer."""

        return list(self.iter_commands())

    def iter_commands(self) -> Iterator[ParsedCommand]:
        self.lexer.reset()
        for token in self.lexer:
            yield parse_command(token)
