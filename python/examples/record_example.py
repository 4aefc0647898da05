import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
PYTHON_SRC = PROJECT_ROOT / "python"
if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))

from label_protocol import JsonCommandRecorder
from zpl_interpreter import Zpl


label_path = Path(__file__).parent / "sample_label.zpl"

recorder = JsonCommandRecorder(source=label_path.name)
Zpl.from_file(label_path).to_pdf(101.6, 152.4, dpmm=8, backend=recorder)
recorder.validate()

out_path = Path(__file__).parent / "label.json"
out_path.write_text(recorder.to_json(), encoding="utf-8")
print(f"Label commands written to {out_path}")
