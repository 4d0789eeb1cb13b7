import json
from pathlib import Path

from error_manager.cli import main


def write_json(path: Path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_render(errors_file, capsys):
    code = main(["render", str(errors_file), "test", "--arg", "name=fraxken"])
    assert code == 0
    assert capsys.readouterr().out.strip() == "#HPX0478 - hello world fraxken"


def test_render_without_code(errors_file, capsys):
    code = main(["render", str(errors_file), "test", "--no-code"])
    assert code == 0
    assert capsys.readouterr().out.strip() == "hello world name"


def test_render_unknown_title(errors_file, capsys):
    code = main(["render", str(errors_file), "nope"])
    assert code == 1
    assert "No error(s) has been found with title nope" in capsys.readouterr().err


def test_render_bad_pair(errors_file, capsys):
    code = main(["render", str(errors_file), "test", "--arg", "novalue"])
    assert code == 2
    assert "expected KEY=VALUE" in capsys.readouterr().err


def test_validate_directory(tmp_path: Path, capsys):
    write_json(tmp_path / "good.json", [{"title": "a", "code": "#1", "message": "m"}])
    write_json(tmp_path / "bad.json", [{"title": "b", "message": "m"}])

    code = main(["validate", str(tmp_path)])
    out = capsys.readouterr().out

    assert code == 1
    assert f"OK: {tmp_path / 'good.json'} (1 errors)" in out
    assert f"INVALID: {tmp_path / 'bad.json'}" in out
    assert "'code' is a required property" in out


def test_validate_without_schema(tmp_path: Path, capsys):
    path = write_json(tmp_path / "loose.json", [{"title": "b", "message": "m"}])

    assert main(["validate", str(path), "--no-validate"]) == 0
    assert "OK:" in capsys.readouterr().out


def test_validate_missing_file(tmp_path: Path, capsys):
    assert main(["validate", str(tmp_path / "missing.json")]) == 1
    assert "INVALID:" in capsys.readouterr().out


def test_render_with_unknown_encoding(errors_file, monkeypatch, capsys):
    monkeypatch.setenv("ERROR_MANAGER_ENCODING", "no-such-codec")
    code = main(["render", str(errors_file), "test"])
    err = capsys.readouterr().err
    assert code == 1
    assert "Unknown encoding 'no-such-codec'" in err
    assert "Traceback" not in err
