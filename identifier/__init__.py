from identifier.assembler import generate, generate_many, set_clock, set_random_source, reset_sources
from identifier.layout import EPOCH_MS, ID_LENGTH, MAX_TIMESTAMP
from identifier.parser import ParseResult, ParseStatus, parse, validate, timestamp_of, timestamp_ms_of

__all__ = [
    "generate",
    "generate_many",
    "set_clock",
    "set_random_source",
    "reset_sources",
    "EPOCH_MS",
    "ID_LENGTH",
    "MAX_TIMESTAMP",
    "ParseResult",
    "ParseStatus",
    "parse",
    "validate",
    "timestamp_of",
    "timestamp_ms_of",
]
