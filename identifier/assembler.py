"""
SOLID ID generation.

Time-sortable 128-bit IDs: 48-bit ms timestamp + 64-bit entropy + CRC-16,
encoded as 22 base62 chars.
"""

from core.errors import OutOfRangeTimestamp, SourceUnavailable
from identifier.layout import (
    EPOCH_MS,
    ID_LENGTH,
    MASK_ENTROPY,
    MAX_TIMESTAMP,
    compute_checksum,
    pack,
)
from identifier.sources import system_clock, urandom64
from internal.logging import get_logger
from utils.base62 import encode

# Process-wide collaborators, can be swapped by set_random_source()/set_clock()
_random_source = urandom64
_clock = system_clock


def set_random_source(source):
    """Set the 64-bit entropy source. None leaves generation without a source."""
    global _random_source
    _random_source = source


def set_clock(clock):
    """Set the clock returning Unix milliseconds."""
    global _clock
    _clock = clock


def get_random_source():
    return _random_source


def get_clock():
    return _clock


def reset_sources():
    set_random_source(urandom64)
    set_clock(system_clock)


def _timestamp_field(now_ms):
    elapsed = int(now_ms) - EPOCH_MS
    if elapsed < 0 or elapsed > MAX_TIMESTAMP:
        get_logger().warn("Timestamp outside 48-bit window", now_ms=now_ms, elapsed_ms=elapsed)
        raise OutOfRangeTimestamp(
            "Invalid timestamp value (out of 48-bit range)",
            elapsed_ms=elapsed,
            context={"now_ms": now_ms, "max_ms": MAX_TIMESTAMP},
        )
    return elapsed & MAX_TIMESTAMP


def _entropy_field(entropy, rng64):
    if entropy is None:
        source = rng64 or _random_source
        if source is None:
            get_logger().warn("No random source configured")
            raise SourceUnavailable("No secure random source configured")
        entropy = source()
    return entropy & MASK_ENTROPY


def generate(now_ms=None, entropy=None, rng64=None):
    """Generate a 22-character SOLID ID.

    now_ms overrides the clock (Unix ms). entropy fixes the 64-bit random
    field, rng64 overrides the random source for this call.
    """
    if now_ms is None:
        now_ms = _clock()

    timestamp = _timestamp_field(now_ms)
    entropy = _entropy_field(entropy, rng64)
    checksum = compute_checksum(timestamp, entropy)

    return encode(pack(timestamp, entropy, checksum), ID_LENGTH)


def generate_many(count, now_ms=None, rng64=None):
    """Generate `count` IDs, reading the clock once per ID unless now_ms is fixed."""
    return [generate(now_ms=now_ms, rng64=rng64) for _ in range(count)]
