"""AppleScript execution helper for the removal tool.

Scripts are written to a temporary ``.applescript`` file and run with the
interpreter named by ``OF_OSASCRIPT`` (``osascript`` by default).  The caller
gets a :class:`ScriptResult` with *stdout* stripped of surrounding whitespace.
Spawn failures, timeouts and non-zero exit codes raise
:class:`AppleScriptExecutionError`, which keeps whatever output was captured.
"""
from __future__ import annotations

import os
import subprocess
import tempfile
from typing import Final, NamedTuple, Optional

from utils.config import get_osascript_command, get_script_timeout

__all__: Final = [
    "AppleScriptExecutionError",
    "ScriptResult",
    "run_applescript",
]


class ScriptResult(NamedTuple):
    stdout: str
    stderr: str
    returncode: int = 0


class AppleScriptExecutionError(RuntimeError):
    """Raised when the AppleScript process fails or returns a non-zero exit code."""

    def __init__(self, message: str, returncode: Optional[int] = None, stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _write_temp_applescript(script: str) -> str:
    """Write *script* to a temporary *.applescript* file and return its path."""
    tmp_file = tempfile.NamedTemporaryFile(mode="w", delete=False, suffix=".applescript", encoding="utf-8")
    try:
        with tmp_file:
            tmp_file.write(script)
    except Exception:
        os.remove(tmp_file.name)
        raise
    return tmp_file.name


def run_applescript(script: str, timeout: Optional[float] = None) -> ScriptResult:
    """Run an AppleScript body and return its captured output.

    *timeout* defaults to ``OF_SCRIPT_TIMEOUT``; ``None`` waits indefinitely.
    """
    if timeout is None:
        timeout = get_script_timeout()

    script_path = _write_temp_applescript(script)
    cmd = [get_osascript_command(), script_path]

    try:
        try:
            process = subprocess.run(cmd, capture_output=True, text=True, check=False, timeout=timeout)
        except subprocess.TimeoutExpired as e:
            raise AppleScriptExecutionError(
                f"AppleScript execution timed out after {timeout:g}s",
                stdout=_decode(e.stdout),
                stderr=_decode(e.stderr),
            ) from e
        except OSError as e:
            raise AppleScriptExecutionError(f"Could not start {cmd[0]}: {e}") from e

        stdout = (process.stdout or "").strip()
        stderr = (process.stderr or "").strip()
        if process.returncode != 0:
            raise AppleScriptExecutionError(
                f"AppleScript execution failed (code {process.returncode}): {stderr}",
                returncode=process.returncode,
                stdout=stdout,
                stderr=stderr,
            )
        return ScriptResult(stdout=stdout, stderr=stderr, returncode=process.returncode)
    finally:
        # Ensure the temporary file is always removed.
        try:
            os.remove(script_path)
        except FileNotFoundError:
            pass


def _decode(output) -> str:
    # TimeoutExpired may hold bytes even when text=True was requested.
    if output is None:
        return ""
    if isinstance(output, bytes):
        output = output.decode("utf-8", errors="replace")
    return output.strip()
