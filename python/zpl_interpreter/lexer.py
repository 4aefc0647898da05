"""Split a ZPL byte stream into raw command tokens.

ZPL is a flat sequence of commands, so a token is simply one command: a
prefix character (``^`` or ``~``) followed by everything up to the next
prefix character or the end of input. Whitespace between and inside
commands is insignificant, except inside field data where it is part of
the printed text.
"""

from __future__ import annotations

import codecs
from typing import Iterator

from .errors import EncodingError, LexicalError
from .stream import Stream

PREFIXES = (b"^", b"~")
WHITESPACE = frozenset(b" \t\n\r\x0b\x0c")

# Command whose payload is printed verbatim.
LITERAL_DATA_CODE = "FD"


def check_encoding(encoding: str) -> str:
    """Return ``encoding`` if it is a known codec that keeps ASCII bytes as-is.

    Prefixes and whitespace are matched on raw bytes, so multi-byte encodings
    such as UTF-16 or EBCDIC code pages cannot be lexed.
    """

    try:
        codecs.lookup(encoding)
        sample = "^~,\t\n\r AZaz09".encode(encoding)
    except (LookupError, UnicodeError) as exc:
        raise EncodingError(encoding, str(exc)) from None
    if sample != b"^~,\t\n\r AZaz09":
        raise EncodingError(encoding, "not ASCII compatible")
    return encoding


class Lexer:
    """Produce command tokens from a :class:`Stream`."""

    def __init__(self, stream: Stream, encoding: str = "utf-8") -> None:
        self.stream = stream
        self.encoding = check_encoding(encoding)

    def __iter__(self) -> Iterator[str]:
        while True:
            token = self.read_next()
            if not token:
                return
            yield token

    def read_all(self) -> list[str]:
        """Read every command from the start of the stream."""

        self.reset()
        return list(self)

    def read_next(self) -> str:
        """Read the next command from the stream, or ``""`` at end of input."""

        self._skip_whitespace()
        char = self.stream.peek()
        if not char:
            return ""

        if char not in PREFIXES:
            raise LexicalError(self.stream.position + 1)

        start = self.stream.position
        raw = self.stream.next() + self._read_command()
        try:
            return raw.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise LexicalError(
                start + 1,
                f"Unable to decode command at stream position {start + 1} as {self.encoding}: {exc.reason}",
            ) from exc

    def _read_command(self) -> bytes:
        command = bytearray()
        while (next_char := self.stream.peek()) != b"":
            if next_char in PREFIXES:
                break

            if next_char[0] in WHITESPACE and not self._is_literal(command):
                self.stream.seek(1)
                continue

            command += self.stream.next()

        return bytes(command)

    def _skip_whitespace(self) -> None:
        # Stricter printers reject anything before the first prefix; blank
        # lines and a trailing newline from the previous file are tolerated here.
        while (char := self.stream.peek()) != b"" and char[0] in WHITESPACE:
            self.stream.seek(1)

    @staticmethod
    def _is_literal(command: bytearray) -> bool:
        return command[:2].decode("ascii", "replace").upper() == LITERAL_DATA_CODE

    def reset(self) -> None:
        """Reset the stream to the start of the stream."""

        self.stream.reset()
