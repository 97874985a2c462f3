import re
import threading

import pytest

from nestkit.filelog import FileLog
from nestkit.logger import (
    LogLevel,
    Logger,
    debug,
    emit,
    error,
    format_line,
    get_logger,
    info,
    set_logger,
    warn,
)


@pytest.fixture(autouse=True)
def reset_logger():
    set_logger(None)
    yield
    set_logger(None)


def test_format_line_layout():
    text = format_line(LogLevel.INFO, "/a/b/x.py", 12, "fn", "hello")
    assert text.endswith(" INFO [x.py:12][fn]hello\n")
    assert re.match(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2} ", text)
    assert f" {threading.get_native_id()} INFO " in text


def test_format_line_without_func():
    text = format_line(LogLevel.ERROR, "x.py", 3, None, "boom")
    assert text.endswith(" ERROR [x.py:3]boom\n")


def test_logger_enabled_threshold():
    logger = Logger(level=LogLevel.INFO)
    assert not logger.enabled(LogLevel.DEBUG)
    assert logger.enabled(LogLevel.INFO)
    assert logger.enabled(LogLevel.ERROR)
    assert Logger().level == LogLevel.DEBUG


def test_set_and_get_logger():
    logger = Logger()
    set_logger(logger)
    assert get_logger() is logger


def test_low_levels_need_logger(capsys):
    assert emit(LogLevel.TRACE, "t") is None
    assert debug("d") is None
    assert info("i") is None
    assert capsys.readouterr().out == ""


def test_warn_without_logger_prints(capsys):
    line = warn("careful")
    out = capsys.readouterr().out
    assert line is not None and line.endswith("careful\n")
    assert out == line + "\n"


def test_filtered_by_level(capsys):
    set_logger(Logger(level=LogLevel.INFO))
    assert debug("hidden") is None
    line = info("shown")
    assert "[test_logger.py:" in line
    assert "[test_filtered_by_level]shown" in line
    assert capsys.readouterr().out == line


def test_logger_writes_to_file(tmp_path):
    path = tmp_path / "out.log"
    with FileLog() as file_log:
        file_log.open(str(path))
        set_logger(Logger(file_log, LogLevel.TRACE))
        first = emit(LogLevel.TRACE, "one")
        second = error("two")
    assert path.read_text() == first + second


def test_emit_records_caller():
    set_logger(Logger(level=LogLevel.TRACE))
    line = emit(LogLevel.DEBUG, "msg")
    assert " DEBUG [test_logger.py:" in line
    assert line.endswith("[test_emit_records_caller]msg\n")