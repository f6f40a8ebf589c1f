import importlib.util
import json
import runpy
import sys
from pathlib import Path

import pytest

from alfred_json import cli


def _run(capsys, argv: list[str]) -> dict:
    rc = cli.main(argv)
    assert rc == 0
    return json.loads(capsys.readouterr().out)


def test_main_without_title_writes_empty_list(capsys) -> None:
    assert _run(capsys, []) == {"items": []}


def test_main_single_item_with_fields(capsys) -> None:
    got = _run(
        capsys,
        [
            "Item 3",
            "--subtitle", "Subtitle",
            "--icon-filetype", "public.folder",
            "--arg", "Argument",
            "--type", "file:skipcheck",
            "--invalid",
            "--copy", "copy text",
            "--largetype", "big text",
            "--quicklook-url", "https://example.com",
            "--var", "fruit=banana",
            "--global-var", "fruit=banana",
            "--global-var", "vegetable=carrot",
        ],
    )
    assert got == {
        "items": [
            {
                "title": "Item 3",
                "subtitle": "Subtitle",
                "icon": {"type": "filetype", "path": "public.folder"},
                "arg": "Argument",
                "type": "file:skipcheck",
                "valid": False,
                "text": {"copy": "copy text", "largetype": "big text"},
                "quicklookurl": "https://example.com",
                "variables": {"fruit": "banana"},
            }
        ],
        "variables": {"fruit": "banana", "vegetable": "carrot"},
    }


def test_main_modifier_options(capsys) -> None:
    got = _run(
        capsys,
        [
            "T",
            "--mod-arg", "alt=Alt Argument",
            "--mod-valid", "alt=false",
            "--mod-icon", "alt=opt.png",
            "--mod-subtitle", "ctrl=Ctrl Subtitle",
            "--mod-var", "cmd:action=a=b",
        ],
    )
    assert got["items"][0]["mods"] == {
        "ctrl": {"subtitle": "Ctrl Subtitle"},
        "alt": {"arg": "Alt Argument", "valid": False, "icon": {"path": "opt.png"}},
        "cmd": {"variables": {"action": "a=b"}},
    }


def test_main_verbose_logs_to_stderr(capsys) -> None:
    rc = cli.main(["T", "--verbose"])
    assert rc == 0
    captured = capsys.readouterr()
    assert json.loads(captured.out) == {"items": [{"title": "T"}]}
    assert "[alfred-json] Writing 1 item(s)" in captured.err


def test_main_rejects_missing_equals() -> None:
    with pytest.raises(SystemExit) as e:
        cli.main(["T", "--var", "novalue"])
    assert "expected KEY=VALUE for --var" in str(e.value)


def test_main_rejects_empty_key() -> None:
    with pytest.raises(SystemExit) as e:
        cli.main(["--global-var", "=x"])
    assert "empty KEY in --global-var" in str(e.value)


def test_main_rejects_unknown_modifier() -> None:
    with pytest.raises(SystemExit) as e:
        cli.main(["T", "--mod-arg", "meta=x"])
    assert "unknown modifier 'meta'" in str(e.value)
    assert "cmd, alt, ctrl, shift, fn" in str(e.value)


def test_main_rejects_invalid_bool() -> None:
    with pytest.raises(SystemExit) as e:
        cli.main(["T", "--mod-valid", "alt=maybe"])
    assert "invalid bool for --mod-valid" in str(e.value)


def test_main_rejects_mod_var_without_modifier() -> None:
    with pytest.raises(SystemExit) as e:
        cli.main(["T", "--mod-var", "action=x"])
    assert "expected MOD:KEY=VALUE" in str(e.value)


def test_icon_options_are_mutually_exclusive(capsys) -> None:
    with pytest.raises(SystemExit):
        cli.main(["T", "--icon", "a.png", "--icon-fileicon", "/x"])
    assert "not allowed with argument" in capsys.readouterr().err


def test_main_applies_mod_options_in_command_line_order(capsys) -> None:
    got = _run(
        capsys,
        [
            "T",
            "--mod-arg", "alt=x",
            "--mod-subtitle", "ctrl=y",
            "--mod-var", "fn:k=v",
            "--mod-valid", "alt=0",
        ],
    )
    mods = got["items"][0]["mods"]
    assert list(mods) == ["alt", "ctrl", "fn"]
    assert mods["alt"] == {"arg": "x", "valid": False}


def test_source_checkout_shim_runs_cli(capsys) -> None:
    shim_path = Path(__file__).resolve().parents[1] / "alfred_json.py"
    spec = importlib.util.spec_from_file_location("alfred_json_checkout", shim_path)
    assert spec is not None and spec.loader is not None
    shim = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(shim)

    rc = shim.main(["Item 1", "--global-var", "fruit=banana"])
    assert rc == 0
    assert json.loads(capsys.readouterr().out) == {
        "items": [{"title": "Item 1"}],
        "variables": {"fruit": "banana"},
    }


def test_python_m_entrypoint(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["alfred-json", "T", "--subtitle", "S"])
    with pytest.raises(SystemExit) as e:
        runpy.run_module("alfred_json", run_name="__main__")
    assert e.value.code == 0
    assert json.loads(capsys.readouterr().out) == {"items": [{"title": "T", "subtitle": "S"}]}
