import io
import json
import sys
from typing import Any, Callable

import pytest

from klua import klua_cli
from klua.klua_errors import UnterminatedStringError
from klua.klua_version import __version__


def test_run_klua_string_tree() -> None:
    out = klua_cli.run_klua("local x;", is_string=True)
    assert out.splitlines() == [
        "root",
        "  block",
        "    varstat",
        "      term Token(IDENTIFIER, 'x')",
    ]


def test_run_klua_json() -> None:
    out = klua_cli.run_klua("f(1);", is_string=True, fmt="json")
    data = json.loads(out)
    assert data["kind"] == "root"
    stat = data["children"][0]["children"][0]
    assert stat["kind"] == "funcallstat"
    assert stat["children"][0]["kind"] == "functioncall"


def test_run_klua_tokens() -> None:
    out = klua_cli.run_klua("x = 1;", is_string=True, tokens=True)
    assert out.splitlines() == [
        "Token(IDENTIFIER, 'x')",
        "Token(ASSIGN, '=')",
        "Token(NUMBER, '1')",
        "Token(SEMICOLON, ';')",
        "Token(EOF, '')",
    ]


def test_run_klua_tokens_skips_parse() -> None:
    # The token dump works even for input that would not parse
    out = klua_cli.run_klua("end end", is_string=True, tokens=True)
    assert "Token(END, 'end')" in out


def test_run_klua_file_input(lua_file: Callable[..., str]) -> None:
    path = lua_file("local x = 1;")
    assert "varstat" in klua_cli.run_klua(path)


def test_run_klua_klua_suffix(lua_file: Callable[..., str]) -> None:
    path = lua_file("f();", name="prog.klua")
    assert "funcallstat" in klua_cli.run_klua(path)


def test_run_klua_rejects_unknown_suffix(lua_file: Callable[..., str]) -> None:
    path = lua_file("f();", name="prog.txt")
    with pytest.raises(ValueError, match="Only .lua and .klua files"):
        klua_cli.run_klua(path)


def test_run_klua_rejects_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown output format"):
        klua_cli.run_klua("f();", is_string=True, fmt="xml")


def test_run_klua_propagates_errors() -> None:
    with pytest.raises(UnterminatedStringError):
        klua_cli.run_klua('"oops', is_string=True)


def test_main_string(capsys: pytest.CaptureFixture[str]) -> None:
    assert klua_cli.main(["-s", "x = 1;"]) == 0
    assert "assignstat" in capsys.readouterr().out


def test_main_file_json(
    lua_file: Callable[..., str], capsys: pytest.CaptureFixture[str]
) -> None:
    path = lua_file("if a then b(); end;")
    assert klua_cli.main([path, "--format", "json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["children"][0]["children"][0]["kind"] == "ifstat"


def test_main_reads_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("local y;"))
    assert klua_cli.main([]) == 0
    assert "varstat" in capsys.readouterr().out


def test_main_scan_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert klua_cli.main(["-s", "x ~ 1;"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("[error] >>> Unexpected character '~'")
    assert "line 1, col 3" in err


def test_main_parse_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert klua_cli.main(["-s", "local x; end;"]) == 1
    assert "Unexpected token Token(END, 'end')" in capsys.readouterr().err


def test_main_missing_file(capsys: pytest.CaptureFixture[str], tmp_path: Any) -> None:
    assert klua_cli.main([str(tmp_path / "missing.lua")]) == 2
    assert capsys.readouterr().err.startswith("[error]")


def test_main_invalid_format() -> None:
    with pytest.raises(SystemExit) as e:
        klua_cli.main(["-f", "xml", "-s", "f();"])
    assert e.value.code == 2


def test_main_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as e:
        klua_cli.main(["--version"])
    assert e.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_main_verbose_enables_debug(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    seen: dict[str, Any] = {}
    monkeypatch.setattr(
        klua_cli.logging, "basicConfig", lambda **kwargs: seen.update(kwargs)
    )
    assert klua_cli.main(["-v", "-s", "f();"]) == 0
    assert seen["level"] == klua_cli.logging.DEBUG
