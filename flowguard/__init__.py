"""Serial flow monitoring: raw serial port access, silence watchdog, logging, CRC-8 and a command-line monitor."""

__version__ = "0.1.0"