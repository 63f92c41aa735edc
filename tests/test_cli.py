"""Tests for the sclt command line tool."""
import pytest

import consts
import scl
import sclt

SCALE = "! fifth.scl\n!\nJust fifth and octave\n 2\n 3/2\n 1200.0\n"


@pytest.fixture
def scale_file(tmp_path):
    path = tmp_path / "fifth.scl"
    path.write_text(SCALE, encoding="utf-8")
    return path


def run(*argv):
    return sclt.main(list(argv) + ["--log-file", ""])


def test_summary_and_freqs(scale_file, capsys):
    assert run(str(scale_file), "--freqs", "--diapason", "220") == consts.EXIT_OK
    out = capsys.readouterr().out
    assert "'Just fifth and octave', 2 pitches" in out
    assert "330.000000" in out
    assert "440.000000" in out


def test_malformed_file(tmp_path, capsys):
    bad = tmp_path / "bad.scl"
    bad.write_text("desc\n 1\n 0/4\n", encoding="utf-8")
    assert run(str(bad)) == consts.EXIT_FAILURE
    assert "line 3: malformed pitch ratio: '0/4'" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    assert run(str(tmp_path / "absent.scl")) == consts.EXIT_FAILURE
    assert "Error:" in capsys.readouterr().out


def test_rewrite(scale_file, tmp_path):
    out = tmp_path / "clean.scl"
    assert run(str(scale_file), "--rewrite", str(out)) == consts.EXIT_OK
    assert out.read_text(encoding="utf-8") == (
        "! clean.scl\n!\nJust fifth and octave\n 2\n 3/2\n 1200.000000\n"
    )
    assert scl.read_file(str(out)) == scl.read_file(str(scale_file))


def test_rewrite_with_name(scale_file, tmp_path):
    out = tmp_path / "clean.scl"
    assert run(str(scale_file), "--rewrite", str(out), "--name", "fifth.scl") == consts.EXIT_OK
    assert out.read_text(encoding="utf-8").startswith("! fifth.scl\n!\n")


def test_export_table(scale_file, tmp_path):
    base = tmp_path / "fifth"
    assert run(str(scale_file), "--export-table", str(base)) == consts.EXIT_OK
    assert (tmp_path / "fifth_system.txt").exists()


def test_corpus(tmp_path, capsys):
    (tmp_path / "a.scl").write_text(SCALE, encoding="utf-8")
    (tmp_path / "b.scl").write_text("desc\n 12\n 3/2\n", encoding="utf-8")
    assert run("--corpus", str(tmp_path)) == consts.EXIT_FAILURE
    out = capsys.readouterr().out
    assert "b.scl: read 1 pitches but expected 12" in out
    assert "2 files, 1 valid, 1 failed" in out


def test_corpus_all_valid(tmp_path):
    (tmp_path / "a.scl").write_text(SCALE, encoding="utf-8")
    assert run("--corpus", str(tmp_path)) == consts.EXIT_OK


def test_corpus_missing_dir(tmp_path):
    assert run("--corpus", str(tmp_path / "nope")) == consts.EXIT_FAILURE


def test_nothing_to_do():
    with pytest.raises(SystemExit) as exc:
        run()
    assert exc.value.code == 2


def test_rewrite_needs_single_file(scale_file, tmp_path):
    with pytest.raises(SystemExit):
        run(str(scale_file), str(scale_file), "--rewrite", str(tmp_path / "x.scl"))


@pytest.mark.parametrize("value", ["-5", "0", "abc", "inf"])
def test_bad_diapason(scale_file, value):
    with pytest.raises(SystemExit):
        run(str(scale_file), "--diapason", value)
