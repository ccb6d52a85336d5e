# flowguard

flowguard reads a serial device and handles each chunk of data it receives.
It prints the chunk as hex and logs it as text. It takes a flow reading from
text such as `FLOW:12.5` and passes the reading to an external classifier
script. It then prints and logs the verdict. A background watchdog logs a
warning when no data has arrived for more than a second. When the port is
closed and the device node exists again, flowguard tries to reopen it.

It needs a POSIX system, because it uses `termios` and `fcntl`.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
flowguard [--port PORT] [--baudrate BAUD] [--log-file PATH] [--model SCRIPT]
```

| Option       | Default           | Meaning                                   |
|--------------|-------------------|-------------------------------------------|
| `--port`     | `/dev/ttyUSB0`    | serial device to read                     |
| `--baudrate` | `9600`            | line speed; must be one `termios` knows   |
| `--log-file` | `flowguard.log`   | file the log lines are appended to        |
| `--model`    | `ml/ml_model.py`  | classifier script, relative to the cwd    |

The port is opened in raw mode with 8 data bits, no parity and one stop bit,
and reads do not block. The command polls for up to 64 bytes every 100 ms.
For each chunk it:

1. prints `[FlowGuard] Received: ` followed by the bytes as two-digit hex,
2. logs `ASCII: <text>` at INFO level,
3. takes the flow value after `FLOW:`, or uses 0 when there is none,
4. runs the classifier script with the current Python interpreter and the
   flow value as its only argument,
5. prints `[ML] Flow <value> is <verdict>` and logs `ML verdict: <verdict>`.

The verdict is the script's standard output with newlines removed. If the
interpreter cannot be started, the verdict is `error`. If the script fails,
the verdict is whatever it wrote to standard output, which may be empty.

The command exits with status 1 if the port cannot be opened. Ctrl-C stops
it, and it then exits with status 0.

## Library use

```python
from flowguard.crc8 import crc8
from flowguard.logger import LogLevel, Logger, get_logger
from flowguard.serialcomm import SerialComm
from flowguard.cli import parse_flow_value, format_hex, run_ml_model

crc8(b"123456789")              # CRC-8, polynomial 0x07, initial value 0x00
parse_flow_value("FLOW:3.75")   # 3.75; 0.0 when no reading is found
format_hex(b"\x01\xab")         # "01 ab"

log = get_logger()              # process-wide Logger
log.set_log_file("flowguard.log")
log.enable_console_output(False)
log.log(LogLevel.INFO, "started")

with SerialComm("/dev/ttyUSB0", 9600, log) as port:   # raises OSError on failure
    port.make_non_blocking()
    port.start_timeout_monitor()
    data = port.read_bytes(64)  # b"" when nothing could be read
    print(format_hex(data))
```

Each log line has the form `[YYYY-MM-DD HH:MM:SS] [LEVEL] message`, in local
time. The line goes to the log file, if one is set, and to standard error
unless console output is disabled. The levels are `INFO`, `WARNING`, `ERROR`
and `DEBUG`. `Logger.close()` closes the log file.

`SerialComm` raises `ValueError` for a baud rate that `termios` has no speed
constant for. `reconnect_if_needed()` does nothing while the port is open.
It also does nothing when the device path does not exist. Otherwise it tries
to open the port and logs whether that worked. Leaving the `with` block stops
the watchdog and closes the port.

`flowguard.utils` provides `trim` (strips spaces, tabs, CR and LF),
`current_timestamp` and `error_string` (the system message for an errno).

## What it does not do

- No classifier script is included. The command needs one at the `--model`
  path. Without it, the verdicts are empty.
- The command does not check incoming data against a checksum. `crc8` is
  provided for callers, but the command does not use it.
- Nothing is ever written to the serial port. The package only reads.