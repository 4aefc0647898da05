import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
PYTHON_SRC = PROJECT_ROOT / "python"
if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))

from backends import PdfBackend, TraceBackend
from label_protocol import JsonCommandReplayer


label_path = Path(__file__).parent / "label.json"

JsonCommandReplayer.run_file(label_path, TraceBackend())

pdf = JsonCommandReplayer.run_file(label_path, PdfBackend()).serialize()
out_path = label_path.with_suffix(".pdf")
out_path.write_bytes(pdf)
print(f"PDF written to {out_path}")
