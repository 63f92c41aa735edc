"""Tests for frequency table output and export."""
import pytest

import freqtables
import utils
from pitch import CentsPitch, RatioPitch
from scl import Scale

FIFTH = Scale("fifth and octave", [RatioPitch(3, 2), CentsPitch(1200.0)])


def test_step_rows():
    rows = freqtables.step_rows(FIFTH, 200.0)
    assert rows == [
        ["0", "1/1", "0.000000", "200.000000"],
        ["1", "3/2", "701.955001", "300.000000"],
        ["2", "1200.000000", "1200.000000", "400.000000"],
    ]


def test_print_table(capsys):
    freqtables.print_step_hz_table(FIFTH, 200.0)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["Step", "Pitch", "Cents", "Hz"]
    assert len(lines) == 4
    assert lines[2].split() == ["1", "3/2", "701.955001", "300.000000"]


def test_export_text_without_openpyxl(tmp_path, monkeypatch):
    monkeypatch.setattr(utils, "lazy_import_openpyxl", lambda: (None, None))
    base = str(tmp_path / "fifth")
    written = freqtables.export_system_tables(base, FIFTH, 200.0)
    assert written == [f"{base}_system.txt"]
    text = (tmp_path / "fifth_system.txt").read_text(encoding="utf-8")
    assert text.startswith("# fifth and octave\nStep")
    assert "300.000000" in text


def test_export_excel(tmp_path):
    openpyxl = pytest.importorskip("openpyxl")
    base = str(tmp_path / "fifth")
    written = freqtables.export_system_tables(base, FIFTH, 200.0)
    assert written == [f"{base}_system.txt", f"{base}_system.xlsx"]

    ws = openpyxl.load_workbook(f"{base}_system.xlsx").active
    assert ws.title == "System"
    assert [c.value for c in ws[1]][:5] == ["Step", "Pitch", "Cents", "Hz", "Ratio"]
    assert ws["A1"].font.bold
    assert ws["G2"].value == 200.0
    assert ws["B3"].value == "3/2"
    assert ws["D3"].value == pytest.approx(300.0)
    assert ws["E3"].value == '=IFERROR(D3/$G$2,"")'
