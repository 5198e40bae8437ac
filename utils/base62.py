"""
Base62 codec for fixed-width identifiers.

Alphabet order is 0-9, A-Z, a-z so that equal-length strings sort the same
way as the integers they encode.
"""

from core.errors import InvalidCharacter

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)

_INDEX = {char: i for i, char in enumerate(ALPHABET)}


def encode(value, fixed_length=22):
    """Encode a non-negative integer as a zero-padded base62 string."""
    if value < 0:
        raise ValueError(f"cannot encode negative value {value}")
    if value == 0:
        return ALPHABET[0] * fixed_length

    chars = []
    while value > 0:
        value, remainder = divmod(value, BASE)
        chars.append(ALPHABET[remainder])

    if len(chars) > fixed_length:
        raise ValueError(f"value needs {len(chars)} digits, more than {fixed_length}")

    return "".join(reversed(chars)).rjust(fixed_length, ALPHABET[0])


def decode(text):
    """Decode a base62 string. Raises InvalidCharacter on the first bad char."""
    result = 0
    for position, char in enumerate(text):
        digit = _INDEX.get(char)
        if digit is None:
            raise InvalidCharacter(char, position)
        result = result * BASE + digit
    return result


def is_base62(text):
    return all(char in _INDEX for char in text)
