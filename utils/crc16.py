"""
CRC-16/CCITT, table driven.

width=16 poly=0x1021 init=0xFFFF refin=false refout=false xorout=0x0000
check("123456789") = 0x29B1
"""

POLY = 0x1021
INIT = 0xFFFF


def _make_table():
    table = [0] * 256
    for i in range(256):
        crc = i << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ POLY
            else:
                crc <<= 1
        table[i] = crc & 0xFFFF
    return tuple(table)


TABLE = _make_table()


def crc16(data):
    """CRC-16/CCITT of a bytes-like object (or iterable of byte values)."""
    crc = INIT
    for byte in data:
        crc = ((crc << 8) & 0xFF00) ^ TABLE[((crc >> 8) ^ byte) & 0xFF]
    return crc
