"""Clock and entropy collaborators used by the assembler."""

import os

from core.errors import SourceUnavailable
from utils.timestamp import now_millis


def system_clock():
    """Wall clock in Unix milliseconds."""
    return now_millis()


def urandom64():
    """64 bits from the OS secure random source."""
    try:
        raw = os.urandom(8)
    except NotImplementedError as exc:
        raise SourceUnavailable("OS randomness source not found", source="os.urandom", cause=exc) from exc
    return int.from_bytes(raw, byteorder="big")
