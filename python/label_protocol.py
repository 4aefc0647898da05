"""Shared rendering protocol primitives for the ZPL interpreter.

This module exposes the backend contract and two helpers built on it:
- :class:`RenderingBackend`, the drawing surface the interpreter talks to.
- :class:`JsonCommandRecorder`, a backend that records every primitive into
  a JSON payload which can be checked against :data:`COMMAND_SCHEMA`.
- :class:`JsonCommandReplayer` for dispatching a recorded payload against
  any other :class:`RenderingBackend` implementation.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, MutableMapping, Optional

from jsonschema import Draft7Validator


class Color(str, Enum):
    """Stroke colors understood by the graphic commands."""

    BLACK = "B"
    WHITE = "W"

    @property
    def rgb(self) -> tuple[float, float, float]:
        return (0.0, 0.0, 0.0) if self is Color.BLACK else (1.0, 1.0, 1.0)


@dataclass
class BarcodeFormatting:
    """Formatting captured by a barcode command, resolved to millimetres."""

    symbology: str = "code128"
    raw: List[str] = field(default_factory=list)
    orientation: str = "N"
    height_mm: float = 1.25
    module_width_mm: float = 0.25
    ratio: float = 3.0
    print_above: bool = False
    print_below: bool = True
    check_digit: bool = False
    mode: str = "N"


class RenderingBackend(ABC):
    """Abstract base class describing the drawing surface."""

    def __init__(self) -> None:
        self.width_mm: float = 0.0
        self.height_mm: float = 0.0
        self.cursor_x: float = 0.0
        self.cursor_y: float = 0.0

    @abstractmethod
    def create_document(self, width_mm: float, height_mm: float) -> None:
        """Start a single page document of the given size."""

    @abstractmethod
    def move_cursor(self, x_mm: float, y_mm: float) -> None:
        """Move the drawing cursor to an absolute position (top-left origin)."""

    @abstractmethod
    def set_font_size(self, points: float) -> None:
        """Select the point size used by subsequent text."""

    @abstractmethod
    def draw_text(self, text: str) -> None:
        """Render text at the current cursor position."""

    @abstractmethod
    def draw_rect(
        self,
        x_mm: float,
        y_mm: float,
        width_mm: float,
        height_mm: float,
        thickness_mm: float,
        stroke_color: Color,
    ) -> None:
        """Stroke a rectangle whose top-left corner is at ``(x_mm, y_mm)``."""

    @abstractmethod
    def draw_barcode(self, content: str, formatting: BarcodeFormatting) -> None:
        """Render a one-dimensional barcode at the current cursor position."""

    @abstractmethod
    def serialize(self) -> bytes:
        """Finish the document and return its serialized form."""


COMMAND_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Recorded rendering commands",
    "type": "object",
    "required": ["version", "commands"],
    "properties": {
        "version": {"type": "string"},
        "source": {"type": "string"},
        "commands": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "args"],
                "properties": {
                    "name": {
                        "enum": [
                            "CreateDocument",
                            "MoveCursor",
                            "SetFontSize",
                            "DrawText",
                            "DrawRect",
                            "DrawBarcode",
                        ]
                    },
                    "args": {"type": "object"},
                },
            },
        },
    },
}


class JsonCommandRecorder(RenderingBackend):
    """Backend that records each primitive as a protocol command entry."""

    def __init__(self, source: Optional[str] = None, version: str = "1.0") -> None:
        super().__init__()
        self.version = version
        self.source = source
        self._commands: list[Dict[str, Any]] = []

    @property
    def commands(self) -> list[Dict[str, Any]]:
        return list(self._commands)

    def names(self) -> list[str]:
        """Return the recorded command names in call order."""

        return [entry["name"] for entry in self._commands]

    def emit(self, command: str, **kwargs: Any) -> Dict[str, Any]:
        """Append a command entry to the payload."""

        entry: Dict[str, Any] = {"name": command, "args": dict(kwargs)}
        self._commands.append(entry)
        return entry

    # ---- Implement protocol ----
    def create_document(self, width_mm, height_mm):
        self.width_mm, self.height_mm = float(width_mm), float(height_mm)
        self.emit("CreateDocument", width_mm=self.width_mm, height_mm=self.height_mm)

    def move_cursor(self, x_mm, y_mm):
        self.cursor_x, self.cursor_y = float(x_mm), float(y_mm)
        self.emit("MoveCursor", x_mm=self.cursor_x, y_mm=self.cursor_y)

    def set_font_size(self, points):
        self.emit("SetFontSize", points=float(points))

    def draw_text(self, text):
        self.emit("DrawText", text=text)

    def draw_rect(self, x_mm, y_mm, width_mm, height_mm, thickness_mm, stroke_color):
        self.emit(
            "DrawRect",
            x_mm=float(x_mm),
            y_mm=float(y_mm),
            width_mm=float(width_mm),
            height_mm=float(height_mm),
            thickness_mm=float(thickness_mm),
            stroke_color=Color(stroke_color).value,
        )

    def draw_barcode(self, content, formatting):
        self.emit("DrawBarcode", content=content, formatting=asdict(formatting))

    def serialize(self) -> bytes:
        return self.to_json().encode("utf-8")

    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Return the payload as a dictionary."""

        payload: Dict[str, Any] = {"version": self.version, "commands": self.commands}
        if self.source:
            payload["source"] = self.source
        return payload

    def to_json(self, *, indent: int = 2) -> str:
        """Serialise the payload to a JSON string."""

        return json.dumps(self.to_dict(), indent=indent)

    def validate(self, schema_path: Path | str | None = None) -> None:
        """Validate the payload against the command schema."""

        schema = COMMAND_SCHEMA
        if schema_path is not None:
            schema = json.loads(Path(schema_path).read_text(encoding="utf-8"))
        Draft7Validator(schema).validate(self.to_dict())


class JsonCommandReplayer:
    """Dispatch recorded commands against a :class:`RenderingBackend`."""

    def __init__(self, backend: RenderingBackend) -> None:
        self.backend = backend
        self._dispatch = {
            "CreateDocument": backend.create_document,
            "MoveCursor": backend.move_cursor,
            "SetFontSize": backend.set_font_size,
            "DrawText": backend.draw_text,
            "DrawRect": self._draw_rect,
            "DrawBarcode": self._draw_barcode,
        }

    def run(self, payload: Mapping[str, Any] | str | Path) -> RenderingBackend:
        """Execute commands from a mapping, JSON string, or file path."""

        data = self._coerce_payload(payload)
        Draft7Validator(COMMAND_SCHEMA).validate(data)
        self._execute(data["commands"])
        return self.backend

    def _execute(self, commands: Iterable[Mapping[str, Any]]) -> None:
        for entry in commands:
            name = entry["name"]
            args = entry.get("args", {})
            if not isinstance(args, MutableMapping):
                raise TypeError("command args must be a mapping")

            handler = self._dispatch.get(name)
            if handler is None:
                raise KeyError(f"Unsupported command: {name}")
            handler(**dict(args))

    def _draw_rect(self, *, stroke_color: str, **kwargs: float) -> None:
        self.backend.draw_rect(stroke_color=Color(stroke_color), **kwargs)

    def _draw_barcode(self, *, content: str, formatting: Mapping[str, Any]) -> None:
        self.backend.draw_barcode(content, BarcodeFormatting(**formatting))

    def _coerce_payload(self, payload: Mapping[str, Any] | str | Path) -> Mapping[str, Any]:
        if isinstance(payload, Mapping):
            return payload
        if isinstance(payload, Path):
            return json.loads(payload.read_text(encoding="utf-8"))
        if isinstance(payload, str):
            try:
                return json.loads(payload)
            except json.JSONDecodeError:
                return json.loads(Path(payload).read_text(encoding="utf-8"))
        raise TypeError("Unsupported payload type")

    @staticmethod
    def run_file(path: Path | str, backend: RenderingBackend) -> RenderingBackend:
        """Convenience helper to replay a recorded command file directly."""

        return JsonCommandReplayer(backend).run(Path(path))


__all__ = [
    "BarcodeFormatting",
    "Color",
    "COMMAND_SCHEMA",
    "JsonCommandRecorder",
    "JsonCommandReplayer",
    "RenderingBackend",
]
