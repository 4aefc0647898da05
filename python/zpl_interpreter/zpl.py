"""Entry points for converting a ZPL document from a stream, string or file."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Optional

from label_protocol import RenderingBackend

from .config import LabelSettings
from .errors import StreamError
from .interpreter import LabelInterpreter
from .lexer import Lexer, check_encoding
from .parser import ParsedCommand, Parser
from .stream import Stream

logger = logging.getLogger(__name__)


class Zpl:
    """One ZPL input. The underlying stream is closed once it has been parsed."""

    def __init__(self, input_stream: Stream, encoding: str = "utf-8") -> None:
        self.input_stream = input_stream
        self.encoding = check_encoding(encoding)

    @classmethod
    def from_stream(cls, resource: BinaryIO, encoding: str = "utf-8") -> "Zpl":
        check_encoding(encoding)
        return cls(Stream(resource), encoding=encoding)

    @classmethod
    def from_string(cls, text: str, encoding: str = "utf-8") -> "Zpl":
        check_encoding(encoding)
        return cls.from_stream(io.BytesIO(text.encode(encoding)), encoding=encoding)

    @classmethod
    def from_file(cls, path: Path | str, encoding: str = "utf-8") -> "Zpl":
        check_encoding(encoding)
        try:
            resource = open(path, "rb")
        except OSError as exc:
            raise StreamError(f"Unable to read file '{path}': {exc.strerror}") from exc
        return cls.from_stream(resource, encoding=encoding)

    def parse(self) -> list[ParsedCommand]:
        with self.input_stream as stream:
            commands = Parser(Lexer(stream, self.encoding)).parse()
        logger.debug("Parsed %d commands", len(commands))
        return commands

    def to_pdf(
        self,
        width: float,
        height: float,
        dpmm: int = 8,
        backend: Optional[RenderingBackend] = None,
    ) -> bytes:
        """Render the label and return the serialized document."""

        commands = self.parse()
        interpreter = LabelInterpreter(width, height, dpmm, backend=backend)
        return interpreter.run(commands).finalize()

    def convert(self, settings: LabelSettings, backend: Optional[RenderingBackend] = None) -> bytes:
        return self.to_pdf(settings.width_mm, settings.height_mm, settings.dpmm, backend=backend)
