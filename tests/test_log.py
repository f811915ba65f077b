"""Log-type routing and the package log level."""

import logging

import pytest

from kdeconnect import cli
from kdeconnect.core import log


class _Collector(logging.Handler):
    def __init__(self):
        super().__init__()
        self.lines = []

    def emit(self, record):
        self.lines.append(record.getMessage())


@pytest.fixture
def debug_handler(monkeypatch):
    handler = _Collector()
    monkeypatch.setitem(log._handlers, log.LOG__DEBUG, handler)
    previous = log.get_logger().level
    yield handler
    log.get_logger().setLevel(previous)


def test_debug_lines_written_at_debug_level(debug_handler, capsys):
    log.set_level("debug")
    log.print_and_log("[*] written", log.LOG__DEBUG)

    assert debug_handler.lines == ["[*] written"]
    assert capsys.readouterr().out == ""


def test_debug_lines_dropped_above_debug_level(debug_handler):
    log.set_level("ERROR")
    log.print_and_log("[*] dropped", log.LOG__DEBUG)

    assert debug_handler.lines == []


def test_log_level_setting_reaches_file_logs(debug_handler, tmp_path, monkeypatch):
    monkeypatch.setenv("KDECONNECT_LOG_LEVEL", "warning")
    cli.main(["--config", str(tmp_path / "none.yaml")])
    log.logging__debug_log("[*] quiet")
    assert debug_handler.lines == []

    monkeypatch.setenv("KDECONNECT_LOG_LEVEL", "debug")
    cli.main(["--config", str(tmp_path / "none.yaml")])
    log.logging__debug_log("[*] loud")
    assert debug_handler.lines == ["[*] loud"]
