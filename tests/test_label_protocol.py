import json

import pytest
from jsonschema import ValidationError

from backends import TraceBackend
from label_protocol import BarcodeFormatting, Color, JsonCommandRecorder, JsonCommandReplayer


def _record(recorder: JsonCommandRecorder) -> JsonCommandRecorder:
    recorder.create_document(50, 25)
    recorder.set_font_size(12)
    recorder.move_cursor(1, 2)
    recorder.draw_text("Hello")
    recorder.draw_rect(1, 2, 10, 5, 0.25, Color.WHITE)
    recorder.draw_barcode("1234", BarcodeFormatting(raw=["N", "60"], height_mm=7.5))
    return recorder


def test_recorder_payload():
    recorder = _record(JsonCommandRecorder(source="label.zpl"))
    payload = recorder.to_dict()

    assert payload["version"] == "1.0"
    assert payload["source"] == "label.zpl"
    assert recorder.names() == [
        "CreateDocument", "SetFontSize", "MoveCursor", "DrawText", "DrawRect", "DrawBarcode",
    ]
    assert payload["commands"][4]["args"]["stroke_color"] == "W"
    assert payload["commands"][5]["args"]["formatting"]["raw"] == ["N", "60"]
    assert json.loads(recorder.serialize()) == payload
    recorder.validate()


def test_replay_into_trace_backend():
    payload = _record(JsonCommandRecorder()).to_json()
    trace = TraceBackend(echo=False)
    JsonCommandReplayer(trace).run(payload)

    assert trace.sent == [
        "[PAGE] 50.00x25.00mm",
        "[FONT] 12.000pt",
        "[MOVE] 1.00,2.00",
        "[TEXT] Hello",
        "[RECT] 1.00,2.00 10.00x5.00 t=0.25 c=W",
        "[BARCODE] code128 '1234' N h=7.50",
    ]
    assert trace.serialize().decode().endswith("h=7.50\n")


def test_replay_file(tmp_path):
    path = tmp_path / "label.json"
    path.write_text(_record(JsonCommandRecorder()).to_json(), encoding="utf-8")
    replayed = JsonCommandReplayer.run_file(path, JsonCommandRecorder())
    assert replayed.names()[-1] == "DrawBarcode"


def test_replay_rejects_unknown_commands():
    payload = {"version": "1.0", "commands": [{"name": "Explode", "args": {}}]}
    with pytest.raises(ValidationError):
        JsonCommandReplayer(JsonCommandRecorder()).run(payload)


def test_color_rgb():
    assert Color("B").rgb == (0.0, 0.0, 0.0)
    assert Color.WHITE.rgb == (1.0, 1.0, 1.0)
