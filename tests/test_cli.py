import io
import json

from sexpfmt.__main__ import main

UNFORMATTED = "(when (a) (b) (c))\n"
FORMATTED = "(when (a)\n  (b)\n  (c))\n"


def test_rewrites_file(tmp_path):
    path = tmp_path / "init.el"
    path.write_text(UNFORMATTED)
    assert main([str(path)]) == 0
    assert path.read_text() == FORMATTED


def test_check_reports_without_writing(tmp_path, capsys):
    path = tmp_path / "init.el"
    path.write_text(UNFORMATTED)
    assert main(["--check", str(path)]) == 1
    assert path.read_text() == UNFORMATTED
    assert f"would reformat {path}" in capsys.readouterr().out


def test_check_clean_file(tmp_path):
    path = tmp_path / "init.el"
    path.write_text(FORMATTED)
    assert main(["--check", str(path)]) == 0


def test_stdout(tmp_path, capsys):
    path = tmp_path / "init.el"
    path.write_text(UNFORMATTED)
    assert main(["--stdout", "--no-indent", str(path)]) == 0
    assert capsys.readouterr().out == "(when (a)\n(b)\n(c))\n"
    assert path.read_text() == UNFORMATTED


def test_one_line(tmp_path):
    path = tmp_path / "init.el"
    path.write_text(FORMATTED)
    assert main(["--one-line", str(path)]) == 0
    assert path.read_text() == UNFORMATTED


def test_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(UNFORMATTED))
    assert main(["-"]) == 0
    assert capsys.readouterr().out == FORMATTED


def test_directory(tmp_path, capsys):
    (tmp_path / "a.el").write_text(UNFORMATTED)
    (tmp_path / "b.el").write_text(FORMATTED)
    assert main(["--check", str(tmp_path)]) == 1
    out = capsys.readouterr().out
    assert "a.el" in out
    assert "b.el" not in out


def test_config_file(tmp_path):
    config = tmp_path / "sexpfmt.json"
    config.write_text(json.dumps({"skip_table": {"when": 0}, "indent": False}))
    path = tmp_path / "init.el"
    path.write_text(UNFORMATTED)
    assert main(["--config", str(config), str(path)]) == 0
    assert path.read_text() == "(when\n(a)\n(b)\n(c))\n"


def test_bad_config(tmp_path, capsys):
    config = tmp_path / "sexpfmt.json"
    config.write_text("[")
    assert main(["--config", str(config), str(tmp_path)]) == 2
    assert "cannot load config" in capsys.readouterr().err


def test_malformed_file(tmp_path, capsys):
    path = tmp_path / "broken.el"
    path.write_text("(when (a)")
    assert main([str(path)]) == 2
    assert "unterminated" in capsys.readouterr().err
    assert path.read_text() == "(when (a)"


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.el")]) == 2
    assert "error:" in capsys.readouterr().err


def test_bad_arity_in_config(tmp_path, capsys):
    config = tmp_path / "sexpfmt.json"
    config.write_text(json.dumps({"arity": {"frob": "two"}}))
    path = tmp_path / "init.el"
    path.write_text("(frob (a) (b))\n")
    assert main(["--config", str(config), str(path)]) == 2
    assert "arity for 'frob'" in capsys.readouterr().err
    assert path.read_text() == "(frob (a) (b))\n"


def test_stdout_rejects_directory(tmp_path, capsys):
    (tmp_path / "a.el").write_text(UNFORMATTED)
    assert main(["--stdout", str(tmp_path)]) == 2
    captured = capsys.readouterr()
    assert "--stdout takes files" in captured.err
    assert captured.out == ""
