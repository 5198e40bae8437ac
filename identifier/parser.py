"""SOLID ID parsing and validation."""

from enum import Enum

from core.errors import BaseIdError, InvalidIdentifier, OutOfRangeTimestamp
from identifier.layout import EPOCH_MS, ID_LENGTH, MAX_TIMESTAMP, compute_checksum, unpack
from utils.base62 import decode, is_base62
from utils.timestamp import datetime_from_millis


class ParseStatus(Enum):
    OK = "OK"
    INVALID_LENGTH = "INVALID_LENGTH"
    INVALID_FORMAT = "INVALID_FORMAT"
    DECODE_ERROR = "DECODE_ERROR"
    INVALID_CHECKSUM = "INVALID_CHECKSUM"


class ParseResult:
    __slots__ = ("status", "timestamp", "entropy", "checksum", "timestamp_ms")

    def __init__(self, status, timestamp=None, entropy=None, checksum=None, timestamp_ms=None):
        self.status = status
        self.timestamp = timestamp
        self.entropy = entropy
        self.checksum = checksum
        self.timestamp_ms = timestamp_ms

    @property
    def valid(self):
        return self.status is ParseStatus.OK

    def to_dict(self):
        data = {"valid": self.valid, "status": self.status.value}
        if self.timestamp is not None:
            data.update(
                timestamp=self.timestamp,
                entropy=self.entropy,
                entropy_hex=f"{self.entropy:016x}",
                checksum=self.checksum,
            )
        if self.timestamp_ms is not None:
            data["timestamp_ms"] = self.timestamp_ms
        return data

    def __repr__(self):
        return f"ParseResult(status={self.status.name}, timestamp={self.timestamp}, checksum={self.checksum})"


def parse(text):
    """Decode and verify an ID. Always returns a ParseResult, never raises."""
    if not isinstance(text, str):
        return ParseResult(ParseStatus.INVALID_FORMAT)
    if len(text) != ID_LENGTH:
        return ParseResult(ParseStatus.INVALID_LENGTH)
    if not is_base62(text):
        return ParseResult(ParseStatus.INVALID_FORMAT)

    try:
        value = decode(text)
    except BaseIdError:
        return ParseResult(ParseStatus.DECODE_ERROR)

    timestamp, entropy, checksum = unpack(value)

    # 22 base62 digits can exceed 128 bits; no generated ID has a wider timestamp
    if timestamp > MAX_TIMESTAMP or checksum != compute_checksum(timestamp, entropy):
        return ParseResult(ParseStatus.INVALID_CHECKSUM, timestamp, entropy, checksum)

    return ParseResult(ParseStatus.OK, timestamp, entropy, checksum, timestamp + EPOCH_MS)


def validate(text):
    return parse(text).valid


def timestamp_ms_of(text):
    """Absolute Unix milliseconds of a valid ID. Raises InvalidIdentifier."""
    result = parse(text)
    if not result.valid:
        raise InvalidIdentifier("Invalid SOLID ID", status=result.status)
    return result.timestamp_ms


def timestamp_of(text):
    """UTC datetime of a valid ID. Raises InvalidIdentifier."""
    timestamp_ms = timestamp_ms_of(text)
    try:
        return datetime_from_millis(timestamp_ms)
    except OverflowError as exc:
        raise OutOfRangeTimestamp(
            "Timestamp beyond datetime range", context={"timestamp_ms": timestamp_ms}, cause=exc
        ) from exc
