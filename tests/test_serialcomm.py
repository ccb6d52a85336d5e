import os
import time

import pytest

from flowguard.logger import Logger
from flowguard.serialcomm import SerialComm


@pytest.fixture
def pty_pair():
    master, slave = os.openpty()
    path = os.ttyname(slave)
    yield master, path
    os.close(slave)
    os.close(master)


@pytest.fixture
def file_logger(tmp_path):
    log = Logger()
    log.enable_console_output(False)
    path = tmp_path / "serial.log"
    log.set_log_file(path)
    yield log, path
    log.close()


def test_unsupported_baudrate(pty_pair, file_logger):
    _, path = pty_pair
    with pytest.raises(ValueError):
        SerialComm(path, 12345, file_logger[0])


def test_open_missing_port_raises_and_logs(tmp_path, file_logger):
    log, log_path = file_logger
    comm = SerialComm(str(tmp_path / "nope"), 9600, log)
    with pytest.raises(FileNotFoundError):
        comm.open()
    assert comm.is_open() is False
    assert "Failed to open port" in log_path.read_text(encoding="utf-8")


def test_read_bytes_from_pty(pty_pair, file_logger):
    master, path = pty_pair
    comm = SerialComm(path, 9600, file_logger[0])
    comm.open()
    try:
        assert comm.is_open() is True
        os.write(master, b"FLOW:1.5")
        assert comm.read_bytes(64) == b"FLOW:1.5"
    finally:
        comm.close()


def test_read_respects_limit(pty_pair, file_logger):
    master, path = pty_pair
    with SerialComm(path, 9600, file_logger[0]) as comm:
        os.write(master, b"abcdef")
        assert comm.read_bytes(3) == b"abc"
        assert comm.read_bytes(10) == b"def"


def test_non_blocking_read_returns_empty_quickly(pty_pair, file_logger):
    _, path = pty_pair
    with SerialComm(path, 9600, file_logger[0]) as comm:
        comm.make_non_blocking()
        start = time.monotonic()
        assert comm.read_bytes(8) == b""
        assert time.monotonic() - start < 0.5


def test_closed_port_reads_nothing(pty_pair, file_logger):
    _, path = pty_pair
    comm = SerialComm(path, 9600, file_logger[0])
    comm.open()
    comm.close()
    assert comm.is_open() is False
    assert comm.read_bytes(4) == b""


def test_context_manager_closes(pty_pair, file_logger):
    _, path = pty_pair
    with SerialComm(path, 9600, file_logger[0]) as comm:
        assert comm.is_open() is True
    assert comm.is_open() is False


def test_reconnect_opens_available_device(pty_pair, file_logger):
    _, path = pty_pair
    log, log_path = file_logger
    comm = SerialComm(path, 9600, log)
    comm.reconnect_if_needed()
    try:
        assert comm.is_open() is True
        text = log_path.read_text(encoding="utf-8")
        assert "Attempting to reconnect" in text
        assert "Reconnected to serial port." in text
    finally:
        comm.close()


def test_reconnect_skips_missing_device(tmp_path, file_logger):
    log, log_path = file_logger
    comm = SerialComm(str(tmp_path / "gone"), 9600, log)
    comm.reconnect_if_needed()
    assert comm.is_open() is False
    assert log_path.read_text(encoding="utf-8") == ""


def test_timeout_monitor_warns_on_silence(pty_pair, file_logger):
    _, path = pty_pair
    log, log_path = file_logger
    comm = SerialComm(path, 9600, log)
    comm.timeout = 0.05
    comm.poll_interval = 0.01
    comm.start_timeout_monitor()
    time.sleep(0.3)
    comm.stop_timeout_monitor()
    text = log_path.read_text(encoding="utf-8")
    assert "[WARNING] [FlowGuard] No data received in the last 50 ms" in text
    settled = text.count("\n")
    time.sleep(0.1)
    assert log_path.read_text(encoding="utf-8").count("\n") == settled