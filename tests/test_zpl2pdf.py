import json

import pytest

import zpl2pdf


@pytest.fixture
def label_file(tmp_path, sample_label):
    path = tmp_path / "label.zpl"
    path.write_text(sample_label, encoding="utf-8")
    return path


def test_default_pdf_output(label_file, capsys):
    assert zpl2pdf.main([str(label_file)]) == 0
    output = label_file.with_suffix(".pdf")
    assert output.read_bytes().startswith(b"%PDF")
    assert "[+]" in capsys.readouterr().out


def test_json_backend(label_file, tmp_path):
    output = tmp_path / "out" / "commands.json"
    assert zpl2pdf.main([str(label_file), "-o", str(output), "--backend", "json", "--dpmm", "12"]) == 0
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["source"] == "label.zpl"
    assert [c["name"] for c in payload["commands"]].count("DrawBarcode") == 1


def test_trace_backend_with_config(label_file, tmp_path):
    config = tmp_path / "settings.json"
    config.write_text(json.dumps({"width_mm": 50, "height_mm": 30}), encoding="utf-8")
    assert zpl2pdf.main([str(label_file), "--backend", "trace", "--config", str(config)]) == 0
    lines = label_file.with_suffix(".txt").read_text(encoding="utf-8").splitlines()
    assert lines[0] == "[PAGE] 50.00x30.00mm"
    assert "[TEXT] World's Best Griddle" in lines


def test_conversion_error_exit_code(tmp_path, capsys):
    path = tmp_path / "broken.zpl"
    path.write_text("^FO1,1^FDx^FS^XZ", encoding="utf-8")
    assert zpl2pdf.main([str(path)]) == 1
    assert "[!] Label must start with ^XA" in capsys.readouterr().err


def test_invalid_settings_exit_code(label_file, capsys):
    assert zpl2pdf.main([str(label_file), "--dpmm", "7"]) == 1
    assert "Invalid settings" in capsys.readouterr().err


def test_unknown_encoding_exit_code(label_file, capsys):
    assert zpl2pdf.main([str(label_file), "--encoding", "no-such-codec"]) == 1
    assert "[!] Unsupported encoding" in capsys.readouterr().err
