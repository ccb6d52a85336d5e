"""CRC-8 checksum (polynomial 0x07, initial value 0x00, no reflection)."""

from collections.abc import Iterable

_POLYNOMIAL = 0x07


def crc8(data: bytes | bytearray | Iterable[int]) -> int:
    """Return the CRC-8 of ``data``, a bytes-like object or an iterable of byte values."""
    crc = 0x00
    for byte in bytes(data):
        crc ^= byte
        for _ in range(8):
            if crc & 0x80:
                crc = ((crc << 1) ^ _POLYNOMIAL) & 0xFF
            else:
                crc = (crc << 1) & 0xFF
    return crc