"""Error types raised while reading, parsing and interpreting ZPL."""

from __future__ import annotations

from typing import Any


class ZplError(Exception):
    """Base class for every conversion failure."""


class StreamError(ZplError, OSError):
    """The byte source cannot be measured, positioned or read."""


class LexicalError(ZplError):
    """A command was expected but the input does not start with a prefix."""

    def __init__(self, position: int, message: str | None = None) -> None:
        self.position = position
        super().__init__(message or f"Unable to parse at stream position {position}")


class StructuralError(ZplError):
    """The start-of-label / end-of-label envelope is missing or misplaced."""

    def __init__(self, end: str, message: str, command: str | None = None) -> None:
        self.end = end
        self.command = command
        super().__init__(message)


class ArgumentRangeError(ZplError, ValueError):
    """A numeric or enumerated argument is outside its protocol bound."""

    def __init__(self, command: str, field: str, value: Any, bound: str) -> None:
        self.command = command
        self.field = field
        self.value = value
        self.bound = bound
        super().__init__(f"{command}: {field} must be {bound} (got {value!r})")


class EncodingError(ZplError, LookupError):
    """The input encoding is unknown or cannot carry the ASCII command prefixes."""

    def __init__(self, encoding: str, reason: str) -> None:
        self.encoding = encoding
        super().__init__(f"Unsupported encoding {encoding!r}: {reason}")


class ArgumentFormatError(ZplError, ValueError):
    """An argument cannot be read as the type its command expects."""

    def __init__(self, command: str, field: str, value: Any, expected: str = "an integer") -> None:
        self.command = command
        self.field = field
        self.value = value
        super().__init__(f"{command}: {field} must be {expected} (got {value!r})")


__all__ = [
    "ArgumentFormatError",
    "ArgumentRangeError",
    "EncodingError",
    "LexicalError",
    "StreamError",
    "StructuralError",
    "ZplError",
]
