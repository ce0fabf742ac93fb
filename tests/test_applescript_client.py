import os
import subprocess
from types import SimpleNamespace

import pytest

from omnifocus_removal import apple_script_client as client


def _patch_subprocess(monkeypatch, expected_assertion, result=None, exc=None):
    """Patch subprocess.run to intercept the command list and simulate completion."""
    calls = {}

    def _fake_run(cmd, capture_output=True, text=True, check=False, timeout=None):  # noqa: D401
        calls["cmd"] = list(cmd)
        calls["timeout"] = timeout
        calls["script_exists"] = os.path.exists(cmd[-1])
        with open(cmd[-1], encoding="utf-8") as fh:
            calls["script"] = fh.read()
        expected_assertion(cmd)
        if exc is not None:
            raise exc
        return result or SimpleNamespace(returncode=0, stdout="OK\n", stderr="")

    monkeypatch.setattr(client.subprocess, "run", _fake_run)
    return calls


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("OF_OSASCRIPT", "OF_SCRIPT_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)


def test_default_path_uses_osascript(monkeypatch):
    def _assert_cmd(cmd):
        assert cmd[0] == "osascript" and cmd[1].endswith(".applescript"), cmd

    calls = _patch_subprocess(monkeypatch, _assert_cmd)
    result = client.run_applescript('return "OK"')

    assert result == client.ScriptResult(stdout="OK", stderr="", returncode=0)
    assert calls["script"] == 'return "OK"'
    assert calls["timeout"] is None
    # Temporary script file is cleaned up afterwards.
    assert calls["script_exists"] and not os.path.exists(calls["cmd"][-1])


def test_interpreter_and_timeout_from_env(monkeypatch):
    monkeypatch.setenv("OF_OSASCRIPT", "/usr/local/bin/osascript")
    monkeypatch.setenv("OF_SCRIPT_TIMEOUT", "12.5")

    calls = _patch_subprocess(monkeypatch, lambda cmd: None)
    client.run_applescript('return "OK"')

    assert calls["cmd"][0] == "/usr/local/bin/osascript"
    assert calls["timeout"] == 12.5


def test_stderr_is_returned_on_success(monkeypatch):
    _patch_subprocess(
        monkeypatch,
        lambda cmd: None,
        result=SimpleNamespace(returncode=0, stdout='{"success":true}\n', stderr="  note  \n"),
    )
    result = client.run_applescript("return 1")
    assert result.stdout == '{"success":true}'
    assert result.stderr == "note"


def test_non_zero_exit_raises_with_output(monkeypatch):
    _patch_subprocess(
        monkeypatch,
        lambda cmd: None,
        result=SimpleNamespace(returncode=1, stdout="partial", stderr="execution error: boom (-2700)"),
    )
    with pytest.raises(client.AppleScriptExecutionError) as excinfo:
        client.run_applescript("error")

    err = excinfo.value
    assert err.returncode == 1
    assert err.stdout == "partial"
    assert "boom" in str(err)


def test_spawn_failure_is_wrapped(monkeypatch):
    calls = _patch_subprocess(monkeypatch, lambda cmd: None, exc=FileNotFoundError("osascript"))
    with pytest.raises(client.AppleScriptExecutionError, match="Could not start osascript"):
        client.run_applescript("return 1")
    assert not os.path.exists(calls["cmd"][-1])


def test_timeout_is_wrapped(monkeypatch):
    exc = subprocess.TimeoutExpired(cmd=["osascript"], timeout=2, output=b"half", stderr=None)
    _patch_subprocess(monkeypatch, lambda cmd: None, exc=exc)
    with pytest.raises(client.AppleScriptExecutionError, match="timed out after 2s") as excinfo:
        client.run_applescript("delay 10", timeout=2)
    assert excinfo.value.stdout == "half"


def test_unwritable_script_leaves_no_temp_file(monkeypatch, tmp_path):
    monkeypatch.setattr(client.tempfile, "tempdir", str(tmp_path))

    def _unexpected_run(*args, **kwargs):
        raise AssertionError("osascript must not run when the script cannot be written")

    monkeypatch.setattr(client.subprocess, "run", _unexpected_run)

    # Lone surrogate, as produced by surrogateescape for undecodable argv bytes.
    with pytest.raises(UnicodeEncodeError):
        client.run_applescript('return "bad\udc80"')

    assert list(tmp_path.glob("*.applescript")) == []
