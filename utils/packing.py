"""Fixed-width big-endian integer packing."""


def to_bytes(value, length):
    """Pack an unsigned int into exactly `length` big-endian bytes.

    Raises ValueError if the value is negative or does not fit.
    """
    if value < 0:
        raise ValueError(f"cannot pack negative value {value}")
    if value.bit_length() > length * 8:
        raise ValueError(f"value {value} does not fit in {length} bytes")
    return value.to_bytes(length, byteorder="big")


def from_bytes(data):
    return int.from_bytes(bytes(data), byteorder="big")
