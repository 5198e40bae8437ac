"""
SOLID ID bit layout.

128 bits, most significant first:
    48 bits  timestamp  ms since EPOCH_MS
    64 bits  entropy    secure random
    16 bits  checksum   CRC-16/CCITT over timestamp(6 bytes) + entropy(8 bytes)

Rendered as 22 base62 characters (62**21 < 2**128 < 62**22).
"""

from datetime import datetime, timezone

from utils.crc16 import crc16
from utils.packing import to_bytes

# Epoch: 1985-05-17. Must never change once IDs exist.
EPOCH = datetime(1985, 5, 17, tzinfo=timezone.utc)
EPOCH_MS = int(EPOCH.timestamp()) * 1000

TIMESTAMP_BITS = 48
ENTROPY_BITS = 64
CHECKSUM_BITS = 16
ID_BITS = TIMESTAMP_BITS + ENTROPY_BITS + CHECKSUM_BITS
ID_LENGTH = 22

TIMESTAMP_BYTES = TIMESTAMP_BITS // 8
ENTROPY_BYTES = ENTROPY_BITS // 8

MAX_TIMESTAMP = (1 << TIMESTAMP_BITS) - 1
MASK_ENTROPY = (1 << ENTROPY_BITS) - 1
MASK_CHECKSUM = (1 << CHECKSUM_BITS) - 1
MAX_ID = (1 << ID_BITS) - 1

SHIFT_ENTROPY = CHECKSUM_BITS
SHIFT_TIMESTAMP = ENTROPY_BITS + CHECKSUM_BITS


def compute_checksum(timestamp, entropy):
    """CRC-16 over the 14-byte payload. Shared by generation and validation."""
    payload = to_bytes(timestamp, TIMESTAMP_BYTES) + to_bytes(entropy, ENTROPY_BYTES)
    return crc16(payload)


def pack(timestamp, entropy, checksum):
    return (timestamp << SHIFT_TIMESTAMP) | (entropy << SHIFT_ENTROPY) | checksum


def unpack(value):
    """Split a 128-bit ID into (timestamp, entropy, checksum)."""
    return (
        value >> SHIFT_TIMESTAMP,
        (value >> SHIFT_ENTROPY) & MASK_ENTROPY,
        value & MASK_CHECKSUM,
    )
