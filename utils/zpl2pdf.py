#!/usr/bin/env python3
"""
ZPL to PDF
----------
Reads a ZPL II label, interprets it, and renders the result through one of
the rendering backends (PDF, printed trace, or recorded JSON commands).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Ensure the shared modules are importable when the script is executed from
# the repository root (or utils/ directly).
PROJECT_ROOT = Path(__file__).resolve().parents[1]
PYTHON_SRC = PROJECT_ROOT / "python"
if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))

from jsonschema import ValidationError

from backends import PdfBackend, TraceBackend
from label_protocol import JsonCommandRecorder, RenderingBackend
from zpl_interpreter import LabelSettings, Zpl, ZplError


# ------------------------------------------------------
#  Backend factory
# ------------------------------------------------------
BACKEND_REGISTRY = {
    "pdf": PdfBackend,
    "trace": TraceBackend,
    "json": JsonCommandRecorder,
}

DEFAULT_SUFFIX = {"pdf": ".pdf", "trace": ".txt", "json": ".json"}


def create_backend(name: str, source: str) -> RenderingBackend:
    key = name.lower()
    if key not in BACKEND_REGISTRY:
        raise ValueError(f"Unknown backend '{name}'")

    backend_cls = BACKEND_REGISTRY[key]
    if backend_cls is JsonCommandRecorder:
        return backend_cls(source=source)
    if backend_cls is TraceBackend:
        return backend_cls(echo=False)
    return backend_cls()


# ------------------------------------------------------
#  Conversion
# ------------------------------------------------------
def convert_file(
    input_path: Path,
    output_path: Path,
    settings: LabelSettings,
    *,
    backend_name: str = "pdf",
) -> int:
    backend = create_backend(backend_name, source=input_path.name)
    zpl = Zpl.from_file(input_path, encoding=settings.encoding)
    document = zpl.convert(settings, backend=backend)
    if isinstance(backend, JsonCommandRecorder):
        backend.validate()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(document)
    print(f"[+] {input_path} → {output_path} ({len(document)} bytes, backend={backend_name})")
    return len(document)


# ------------------------------------------------------
#  CLI entrypoint
# ------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert a ZPL II label to PDF")
    parser.add_argument("input", help="Path to the ZPL file")
    parser.add_argument("-o", "--output", help="Output file (defaults to the input name with a new suffix)")
    parser.add_argument("--config", help="JSON settings file (width_mm, height_mm, dpmm, encoding)")
    parser.add_argument("--width", type=float, help="Label width in mm")
    parser.add_argument("--height", type=float, help="Label height in mm")
    parser.add_argument("--dpmm", type=int, help="Printer resolution in dots per mm")
    parser.add_argument("--encoding", help="Input text encoding")
    parser.add_argument(
        "--backend",
        choices=sorted(BACKEND_REGISTRY.keys()),
        default="pdf",
        help="Rendering backend",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log interpreter decisions")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix(DEFAULT_SUFFIX[args.backend])

    try:
        settings = LabelSettings.from_file(args.config) if args.config else LabelSettings()
        settings = settings.merged(
            width_mm=args.width,
            height_mm=args.height,
            dpmm=args.dpmm,
            encoding=args.encoding,
        )
        convert_file(input_path, output_path, settings, backend_name=args.backend)
    except ZplError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"[!] Invalid settings: {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
