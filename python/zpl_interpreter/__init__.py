"""ZPL II label interpreter: stream, lexer, parser and rendering dispatcher."""

from __future__ import annotations

from .config import LabelSettings
from .errors import (
    ArgumentFormatError,
    ArgumentRangeError,
    EncodingError,
    LexicalError,
    StreamError,
    StructuralError,
    ZplError,
)
from .interpreter import FieldState, LabelInterpreter
from .lexer import Lexer
from .parser import ParsedCommand, Parser, parse_command
from .stream import Stream
from .zpl import Zpl

__all__ = [
    "ArgumentFormatError",
    "ArgumentRangeError",
    "EncodingError",
    "FieldState",
    "LabelInterpreter",
    "LabelSettings",
    "Lexer",
    "LexicalError",
    "ParsedCommand",
    "Parser",
    "Stream",
    "StreamError",
    "StructuralError",
    "Zpl",
    "ZplError",
    "parse_command",
]
