"""Identifier errors with context for tracking."""

from utils.timestamp import format_timestamp


class BaseIdError(Exception):
    """Base error with timestamp and context for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def to_dict(self):
        return {"error": type(self).__name__, "msg": str(self), "context": self.context}


class OutOfRangeTimestamp(BaseIdError):
    """Timestamp falls outside the 48-bit window after the epoch."""

    def __init__(self, message, elapsed_ms=None, **kwargs):
        context = kwargs.pop("context", {})
        if elapsed_ms is not None:
            context["elapsed_ms"] = elapsed_ms
        super().__init__(message, context=context, **kwargs)


class SourceUnavailable(BaseIdError):
    """No secure random source configured or reachable."""

    def __init__(self, message, source=None, **kwargs):
        context = kwargs.pop("context", {})
        if source:
            context["source"] = source
        super().__init__(message, context=context, **kwargs)


class InvalidCharacter(BaseIdError):
    """Character outside the base62 alphabet."""

    def __init__(self, char, position, **kwargs):
        self.char = char
        self.position = position
        context = kwargs.pop("context", {})
        context.update(char=char, position=position)
        super().__init__(f"Invalid base62 character {char!r} at position {position}", context=context, **kwargs)


class InvalidIdentifier(BaseIdError):
    """Identifier failed parsing or checksum verification."""

    def __init__(self, message, status=None, **kwargs):
        self.status = status
        context = kwargs.pop("context", {})
        if status is not None:
            context["status"] = status.name
        super().__init__(message, context=context, **kwargs)
