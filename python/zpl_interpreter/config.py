"""Conversion settings: label geometry, printer resolution and input encoding."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

from jsonschema import Draft7Validator

from .lexer import check_encoding

# Printheads ship at 152, 203, 300 and 600 dpi.
SUPPORTED_DPMM = (6, 8, 12, 24)

SETTINGS_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "ZPL conversion settings",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "width_mm": {"type": "number", "exclusiveMinimum": 0},
        "height_mm": {"type": "number", "exclusiveMinimum": 0},
        "dpmm": {"enum": list(SUPPORTED_DPMM)},
        "encoding": {"type": "string", "minLength": 1},
    },
}


@dataclass
class LabelSettings:
    # 4x6 inch shipping label
    width_mm: float = 101.6
    height_mm: float = 152.4
    dpmm: int = 8
    encoding: str = "utf-8"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LabelSettings":
        """Build settings from a mapping, validating it against the schema."""

        Draft7Validator(SETTINGS_SCHEMA).validate(dict(data))
        check_encoding(data.get("encoding", "utf-8"))
        return cls(**data)

    @classmethod
    def from_file(cls, path: Path | str) -> "LabelSettings":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.from_mapping(data)

    def merged(self, **overrides: Any) -> "LabelSettings":
        """Return a copy with every non-``None`` override applied."""

        values = asdict(self)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return LabelSettings.from_mapping(values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
