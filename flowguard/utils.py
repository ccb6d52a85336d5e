"""Small helpers: timestamps, whitespace trimming and error text."""

import os
import time

_WHITESPACE = " \t\n\r"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def current_timestamp() -> str:
    """Return the local time formatted as ``YYYY-MM-DD HH:MM:SS``."""
    return time.strftime(TIMESTAMP_FORMAT, time.localtime())


def trim(text: str) -> str:
    """Strip leading and trailing spaces, tabs, newlines and carriage returns."""
    return text.strip(_WHITESPACE)


def error_string(code: int) -> str:
    """Return the system's message for the error number ``code``."""
    return os.strerror(code)