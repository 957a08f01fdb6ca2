"""CRC-16/CCITT-FALSE checksum used by the EMV payload trailer."""
from __future__ import annotations

CRC16_POLY = 0x1021
CRC16_INIT = 0xFFFF
CRC16_XOR_OUT = 0x0000


def crc16_ccitt_value(data: bytes) -> int:
    """Compute CRC-16/CCITT-FALSE over raw bytes."""

    checksum = CRC16_INIT
    for byte in data:
        checksum ^= byte << 8
        for _ in range(8):
            if checksum & 0x8000:
                checksum = (checksum << 1) ^ CRC16_POLY
            else:
                checksum <<= 1
            checksum &= 0xFFFF
    return checksum ^ CRC16_XOR_OUT


def format_crc(checksum: int) -> str:
    return f"{checksum:04X}"


def crc16_ccitt(data: str) -> str:
    """Checksum of the UTF-8 encoded payload as four uppercase hex digits."""

    return format_crc(crc16_ccitt_value(data.encode("utf-8")))
