import io
import threading
from datetime import datetime

import pytest

from simpleweb.logger import Level, Logger, format_line


def test_level_labels_match_source_tags():
    assert Level.ERROR.label == "[\033[31mERROR\033[0m]"
    assert Level.WARNING.label == "[\033[33mWARN\033[0m]"
    assert Level(0) is Level.INFO


def test_format_line_layout():
    when = datetime(2024, 1, 2, 3, 4, 5, 678000)
    line = format_line("hello", Level.INFO, when, 12345)
    assert line == "2024-01-02 03:04:05.678\t[\033[34mINFO\033[0m]\t[thread-2345]\thello\n"


def test_format_line_accepts_int_level():
    when = datetime(2024, 1, 2, 3, 4, 5)
    assert format_line("m", 2, when, 7) == format_line("m", Level.ERROR, when, 7)


def test_log_writes_formatted_message_after_close():
    stream = io.StringIO()
    logger = Logger(stream)
    logger.log("value=%d name=%s", Level.WARNING, 5, "abc")
    logger.close()
    out = stream.getvalue()
    lines = out.splitlines()
    assert "Logger Module is successfully initialized." in lines[0]
    assert lines[1].endswith("\tvalue=5 name=abc")
    assert Level.WARNING.label in lines[1]
    assert out.endswith("Logger Module is destroyed.\n")


def test_message_without_args_is_not_formatted():
    stream = io.StringIO()
    with Logger(stream) as logger:
        logger.log("100% done", Level.INFO)
    assert "\t100% done\n" in stream.getvalue()


def test_none_message_is_ignored():
    stream = io.StringIO()
    with Logger(stream) as logger:
        logger.log(None, Level.ERROR)
    assert Level.ERROR.label not in stream.getvalue()


def test_invalid_level_raises():
    stream = io.StringIO()
    with Logger(stream) as logger:
        with pytest.raises(ValueError):
            logger.log("x", 42)


def test_close_is_idempotent_and_drops_later_messages():
    stream = io.StringIO()
    logger = Logger(stream)
    logger.close()
    logger.close()
    logger.log("late", Level.INFO)
    out = stream.getvalue()
    assert logger.closed
    assert out.count("Logger Module is destroyed.") == 1
    assert "late" not in out


def test_messages_keep_order_and_none_are_lost():
    stream = io.StringIO()
    logger = Logger(stream)

    def worker(n):
        for i in range(50):
            logger.log("w%d-%d", Level.DEBUG, n, i)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    logger.close()
    lines = [line for line in stream.getvalue().splitlines() if Level.DEBUG.label in line]
    assert len(lines) == 200
    for n in range(4):
        own = [line.rsplit("\t", 1)[1] for line in lines if f"\tw{n}-" in line]
        assert own == [f"w{n}-{i}" for i in range(50)]
    stamps = [line.split("\t", 1)[0] for line in lines]
    assert stamps == sorted(stamps)