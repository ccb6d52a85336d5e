"""Command that reads flow readings from a serial port and classifies them."""

import argparse
import re
import subprocess
import sys
import time

from flowguard.logger import LogLevel, get_logger
from flowguard.serialcomm import SerialComm

DEFAULT_MODEL = "ml/ml_model.py"

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def run_ml_model(flow_value: float, script: str = DEFAULT_MODEL) -> str:
    """Run the model script on ``flow_value`` and return its output without newlines."""
    try:
        completed = subprocess.run(
            [sys.executable, script, f"{flow_value:g}"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return "error"
    return completed.stdout.replace("\n", "")


def parse_flow_value(text: str) -> float:
    """Return the number following ``FLOW:`` in ``text``, or 0.0 if there is none."""
    pos = text.find("FLOW:")
    if pos == -1:
        return 0.0
    match = _FLOAT_PREFIX.match(text, pos + 5)
    if match is None:
        return 0.0
    return float(match.group(1))


def format_hex(data: bytes) -> str:
    """Return ``data`` as space-separated two-digit lowercase hex."""
    return " ".join(f"{byte:02x}" for byte in data)


def _handle(data: bytes, model: str) -> None:
    logger = get_logger()
    print(f"[FlowGuard] Received: {format_hex(data)}", flush=True)
    ascii_text = data.decode("latin-1")
    logger.log(LogLevel.INFO, f"ASCII: {ascii_text}")
    flow = parse_flow_value(ascii_text)
    verdict = run_ml_model(flow, model)
    print(f"[ML] Flow {flow:g} is {verdict}", flush=True)
    logger.log(LogLevel.INFO, f"ML verdict: {verdict}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="flowguard", description="Monitor a flow sensor.")
    parser.add_argument("--port", default="/dev/ttyUSB0")
    parser.add_argument("--baudrate", type=int, default=9600)
    parser.add_argument("--log-file", default="flowguard.log")
    parser.add_argument("--model", default=DEFAULT_MODEL)
    args = parser.parse_args(argv)

    logger = get_logger()
    logger.set_log_file(args.log_file)
    logger.log(LogLevel.INFO, "Logger initialized")

    comm = SerialComm(args.port, args.baudrate)
    try:
        comm.open()
    except OSError:
        logger.log(LogLevel.ERROR, "Failed to open serial port.")
        return 1

    comm.make_non_blocking()
    comm.start_timeout_monitor()
    try:
        while True:
            data = comm.read_bytes(64)
            if data:
                _handle(data, args.model)
            else:
                comm.reconnect_if_needed()
            time.sleep(0.1)
    except KeyboardInterrupt:
        pass
    finally:
        comm.stop_timeout_monitor()
        comm.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())