"""Serial port access with raw 8N1 configuration, a silence monitor and reconnection."""

import fcntl
import os
import sys
import termios
import threading
import time

from flowguard.logger import LogLevel, Logger, get_logger


def _speed_constant(baudrate: int) -> int:
    speed = getattr(termios, f"B{int(baudrate)}", None)
    if speed is None:
        raise ValueError(f"unsupported baud rate: {baudrate}")
    return speed


class SerialComm:
    """A serial device opened in raw mode, 8 data bits, no parity, one stop bit."""

    timeout = 1.0
    poll_interval = 0.2

    def __init__(self, port_name: str, baudrate: int, logger: Logger | None = None) -> None:
        self.port_name = port_name
        self.baudrate = baudrate
        self._speed = _speed_constant(baudrate)
        self._logger = logger if logger is not None else get_logger()
        self._fd: int | None = None
        self._stop = threading.Event()
        self._monitor: threading.Thread | None = None
        self._last_read = time.monotonic()

    def open(self) -> None:
        """Open and configure the port; raise OSError on failure."""
        if self._fd is not None:
            return
        try:
            fd = os.open(self.port_name, os.O_RDWR | os.O_NOCTTY)
        except OSError as exc:
            self._logger.log(
                LogLevel.ERROR,
                f"[FlowGuard] Failed to open port {self.port_name}: {exc.strerror}",
            )
            raise
        try:
            self._configure(fd)
        except termios.error as exc:
            print("[FlowGuard] Failed to configure port.", file=sys.stderr)
            os.close(fd)
            raise OSError(f"failed to configure {self.port_name}") from exc
        self._fd = fd

    def _configure(self, fd: int) -> None:
        try:
            attrs = termios.tcgetattr(fd)
        except termios.error as exc:
            print(f"[FlowGuard] Error from tcgetattr: {exc.args[-1]}", file=sys.stderr)
            raise
        iflag, oflag, cflag, lflag, _, _, cc = attrs

        cflag |= termios.CLOCAL | termios.CREAD
        cflag &= ~termios.CSIZE
        cflag |= termios.CS8
        cflag &= ~termios.PARENB
        cflag &= ~termios.CSTOPB
        cflag &= ~getattr(termios, "CRTSCTS", 0)

        lflag &= ~(termios.ICANON | termios.ECHO | termios.ECHOE | termios.ISIG)
        iflag &= ~(termios.IXON | termios.IXOFF | termios.IXANY)
        oflag &= ~termios.OPOST

        cc = list(cc)
        cc[termios.VMIN] = 0
        cc[termios.VTIME] = 10  # tenths of a second

        try:
            termios.tcsetattr(
                fd, termios.TCSANOW, [iflag, oflag, cflag, lflag, self._speed, self._speed, cc]
            )
        except termios.error as exc:
            print(f"[FlowGuard] Error from tcsetattr: {exc.args[-1]}", file=sys.stderr)
            raise

    def close(self) -> None:
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def is_open(self) -> bool:
        return self._fd is not None

    def make_non_blocking(self) -> None:
        """Switch the open port to non-blocking reads."""
        if self._fd is None:
            return
        try:
            flags = fcntl.fcntl(self._fd, fcntl.F_GETFL)
        except OSError as exc:
            print(f"[FlowGuard] Failed to get port flags: {exc.strerror}", file=sys.stderr)
            return
        fcntl.fcntl(self._fd, fcntl.F_SETFL, flags | os.O_NONBLOCK)

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read up to ``num_bytes``; return empty bytes when nothing could be read."""
        if self._fd is None:
            return b""
        try:
            data = os.read(self._fd, num_bytes)
        except OSError:
            return b""
        if data:
            self._last_read = time.monotonic()
        return data

    def start_timeout_monitor(self) -> None:
        """Start a background thread warning whenever the port stays silent too long."""
        if self._monitor is not None and self._monitor.is_alive():
            return
        self._stop.clear()
        self._monitor = threading.Thread(target=self._watch, daemon=True)
        self._monitor.start()

    def stop_timeout_monitor(self) -> None:
        self._stop.set()
        if self._monitor is not None:
            self._monitor.join()
            self._monitor = None

    def _watch(self) -> None:
        while not self._stop.wait(self.poll_interval):
            if time.monotonic() - self._last_read > self.timeout:
                self._logger.log(
                    LogLevel.WARNING,
                    f"[FlowGuard] No data received in the last {int(self.timeout * 1000)} ms",
                )

    def reconnect_if_needed(self) -> None:
        """Reopen the port if it is closed and the device path exists."""
        if self.is_open() or not os.path.exists(self.port_name):
            return
        self._logger.log(
            LogLevel.INFO, "[FlowGuard] Device is available. Attempting to reconnect..."
        )
        try:
            self.open()
        except OSError:
            self._logger.log(LogLevel.ERROR, "[FlowGuard] Reconnection attempt failed.")
        else:
            self._logger.log(LogLevel.INFO, "[FlowGuard] Reconnected to serial port.")

    def __enter__(self) -> "SerialComm":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop_timeout_monitor()
        self.close()