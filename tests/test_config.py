import logging
import os

import pytest

from utils import config


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        ("", None),
        ("abc", None),
        ("0", None),
        ("-3", None),
        ("30", 30.0),
        ("2.5", 2.5),
    ],
)
def test_script_timeout(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("OF_SCRIPT_TIMEOUT", raising=False)
    else:
        monkeypatch.setenv("OF_SCRIPT_TIMEOUT", raw)
    assert config.get_script_timeout() == expected


def test_log_level(monkeypatch):
    monkeypatch.setenv("OF_LOG_LEVEL", "debug")
    assert config.get_log_level() == logging.DEBUG
    monkeypatch.setenv("OF_LOG_LEVEL", "chatty")
    assert config.get_log_level() == logging.INFO
    monkeypatch.delenv("OF_LOG_LEVEL")
    assert config.get_log_level() == logging.INFO


def test_load_env_vars_reads_local_file_without_overriding(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config.Path, "home", lambda: tmp_path / "home")
    (tmp_path / ".ofremove.env").write_text("OF_OSASCRIPT=/opt/bin/osascript\nOF_LOG_LEVEL=WARNING\n")
    monkeypatch.delenv("OF_OSASCRIPT", raising=False)
    monkeypatch.setenv("OF_LOG_LEVEL", "ERROR")

    config.load_env_vars()

    assert config.get_osascript_command() == "/opt/bin/osascript"
    assert config.get_config("OF_LOG_LEVEL") == "ERROR"
    os.environ.pop("OF_OSASCRIPT", None)


def test_configure_logging_is_idempotent():
    from rich.logging import RichHandler

    from utils.logger import configure_logging, get_logger

    root = logging.getLogger()
    saved_level = root.level
    try:
        configure_logging(logging.DEBUG)
        get_logger("ofremove.test")
        assert sum(isinstance(h, RichHandler) for h in root.handlers) == 1
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(saved_level)
