# tests/test_cli.py
from __future__ import annotations

import io
from pathlib import Path

import pytest

from mdp.cli import main
from mdp.render import render
from mdp.pipeline import STDIN_NAME


class FakeTTY(io.BytesIO):
    def isatty(self) -> bool:
        return True

    def read(self, *a, **kw):  # noqa: ANN002, ANN003
        raise AssertionError("stdin must not be read when it is a terminal")


def _only_output(temp_dir: Path) -> Path:
    files = list(temp_dir.iterdir())
    assert len(files) == 1
    return files[0]


def test_file_flag_skip_preview(input_file: Path, golden: bytes, temp_dir: Path):
    out = io.StringIO()
    rc = main(["-file", str(input_file), "-s"], stdin=FakeTTY(), stdout=out, environ={})
    assert rc == 0
    path = Path(out.getvalue().strip())
    assert path == _only_output(temp_dir)
    assert path.read_bytes().strip() == golden


def test_double_dash_file_alias(input_file: Path, temp_dir: Path):
    out = io.StringIO()
    assert main(["--file", str(input_file), "-s"], stdin=FakeTTY(), stdout=out, environ={}) == 0
    assert Path(out.getvalue().strip()).exists()


def test_stdin_piped(temp_dir: Path):
    data = b"# Test Markdown File\n\nThis is a test."
    out = io.StringIO()
    rc = main(["-s"], stdin=io.BytesIO(data), stdout=out, environ={})
    assert rc == 0
    written = Path(out.getvalue().strip()).read_bytes()
    assert written == render(data, None, STDIN_NAME)
    assert f"Previewing file: {STDIN_NAME}".encode() in written


def test_missing_input_prints_usage(temp_dir: Path, capsys):
    out = io.StringIO()
    rc = main([], stdin=FakeTTY(), stdout=out, environ={})
    assert rc == 1
    assert out.getvalue() == ""
    err = capsys.readouterr().err
    assert "usage: mdp" in err
    assert "MDP_TEMPLATE" in err
    assert list(temp_dir.iterdir()) == []


def test_unknown_flag_exits_1(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["-bogus"], stdin=FakeTTY(), stdout=io.StringIO(), environ={})
    assert exc.value.code == 1
    assert "usage: mdp" in capsys.readouterr().err


def test_unreadable_input_exits_1(tmp_path: Path, temp_dir: Path, capsys):
    rc = main(["-file", str(tmp_path / "nope.md"), "-s"], stdin=FakeTTY(), stdout=io.StringIO(), environ={})
    assert rc == 1
    assert capsys.readouterr().err.startswith("mdp: cannot read")


def _template(tmp_path: Path, name: str, marker: str) -> Path:
    p = tmp_path / name
    p.write_text(marker + "{{ filename }}{{ body }}{{ title }}", encoding="utf-8")
    return p


def test_flag_template_beats_env(input_file: Path, tmp_path: Path, temp_dir: Path):
    flag_tpl = _template(tmp_path, "flag.html", "FLAG:")
    env_tpl = _template(tmp_path, "env.html", "ENV:")
    out = io.StringIO()
    rc = main(
        ["-file", str(input_file), "-s", "-t", str(flag_tpl)],
        stdin=FakeTTY(),
        stdout=out,
        environ={"MDP_TEMPLATE": str(env_tpl)},
    )
    assert rc == 0
    assert Path(out.getvalue().strip()).read_text(encoding="utf-8").startswith("FLAG:test1.md")


def test_env_template_beats_default(input_file: Path, tmp_path: Path, temp_dir: Path):
    env_tpl = _template(tmp_path, "env.html", "ENV:")
    out = io.StringIO()
    rc = main(["-file", str(input_file), "-s"], stdin=FakeTTY(), stdout=out, environ={"MDP_TEMPLATE": str(env_tpl)})
    assert rc == 0
    assert Path(out.getvalue().strip()).read_text(encoding="utf-8").startswith("ENV:test1.md")


def test_invalid_template_flag_creates_nothing(input_file: Path, tmp_path: Path, temp_dir: Path, capsys):
    out = io.StringIO()
    rc = main(
        ["-file", str(input_file), "-s", "-t", str(tmp_path / "missing.html")],
        stdin=FakeTTY(),
        stdout=out,
        environ={},
    )
    assert rc == 1
    assert out.getvalue() == ""
    assert list(temp_dir.iterdir()) == []
    assert "failed to load template file" in capsys.readouterr().err


def test_debug_goes_to_stderr(input_file: Path, temp_dir: Path, capsys):
    out = io.StringIO()
    rc = main(["-file", str(input_file), "-s", "-debug"], stdin=FakeTTY(), stdout=out, environ={})
    assert rc == 0
    err = capsys.readouterr().err
    assert "[mdp] template: <default>" in err
    assert out.getvalue().count("\n") == 1


def test_preview_is_attempted_and_file_removed(input_file: Path, temp_dir: Path, monkeypatch):
    import mdp.pipeline as pipemod

    opened = []
    monkeypatch.setattr(pipemod, "preview", lambda path: opened.append(path))
    out = io.StringIO()
    rc = main(["-file", str(input_file)], stdin=FakeTTY(), stdout=out, environ={})
    assert rc == 0
    assert opened == [out.getvalue().strip()]
    assert list(temp_dir.iterdir()) == []
