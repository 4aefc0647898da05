"""Pytest configuration making the python/ modules and utils/ scripts importable."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
for _path in (_REPO_ROOT / "python", _REPO_ROOT / "utils"):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from label_protocol import JsonCommandRecorder  # noqa: E402
from zpl_interpreter import LabelInterpreter  # noqa: E402

SAMPLE_LABEL = """^XA
    ^FO50,60^A0,40^FDWorld's Best Griddle^FS
    ^FO60,120^BY3^BCN,60,,,,A^FD1234ABC^FS
    ^FO25,25^GB380,200,2^FS
    ^XZ"""


@pytest.fixture
def recorder() -> JsonCommandRecorder:
    return JsonCommandRecorder(source="test")


@pytest.fixture
def interpreter(recorder) -> LabelInterpreter:
    return LabelInterpreter(101.6, 152.4, 8, backend=recorder)


@pytest.fixture
def sample_label() -> str:
    return SAMPLE_LABEL
