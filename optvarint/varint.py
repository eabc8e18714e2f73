# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Optimized varint encoding/decoding (Kryo compatible).

Integers are written as 7-bit groups, least-significant group first, with
the high bit (0x80) of each byte set while more bytes follow. A 32-bit int
takes 1-5 bytes and a 64-bit long takes 1-9 bytes. The last byte of a
9-byte long carries a full 8 bits and has no continuation flag.

The `optimize_positive` flag picks how a signed value becomes the unsigned
payload:

    True:  raw two's-complement bit pattern. Small positive numbers take
           1 byte, negative numbers take the maximum.
    False: zig-zag transform. Small numbers of either sign are cheap.

The flag is not stored on the wire; reader and writer must agree on it.
"""

from typing import Optional, Tuple

from .zigzag import to_signed, to_unsigned, zigzag_decode, zigzag_encode

MAX_INT_BYTES = 5
MAX_LONG_BYTES = 9

_INT_BITS = 32
_LONG_BITS = 64


class VarintError(ValueError):
    """Base exception for varint codec errors."""
    pass


class CapacityError(VarintError):
    """Destination buffer is too small for the encoded value."""
    pass


class TruncatedError(VarintError):
    """Input ends before the encoded value is complete."""
    pass


def _payload(value: int, bits: int, optimize_positive: bool) -> int:
    if optimize_positive:
        return to_unsigned(value, bits)
    return zigzag_encode(value, bits)


def _length(payload: int, max_bytes: int) -> int:
    for count in range(1, max_bytes):
        if payload >> (7 * count) == 0:
            return count
    return max_bytes


def _remaining(buffer, offset: int, available: Optional[int]) -> int:
    """Validate offset/available against the buffer, return bytes readable."""
    remaining = len(buffer) - offset
    if offset < 0 or remaining < 0:
        raise ValueError(f"Offset {offset} outside buffer of {len(buffer)} bytes")
    if available is None:
        return remaining
    if available < 0 or available > remaining:
        raise ValueError(
            f"Available count {available} invalid, {remaining} bytes follow offset {offset}"
        )
    return available


def _write(buffer, value: int, bits: int, max_bytes: int,
           optimize_positive: bool, offset: int) -> int:
    if offset < 0:
        raise ValueError(f"Negative offset: {offset}")

    payload = _payload(value, bits, optimize_positive)
    length = _length(payload, max_bytes)
    if offset + length > len(buffer):
        raise CapacityError(
            f"Varint encode: need {length} bytes at offset {offset}, "
            f"buffer holds {len(buffer)}"
        )

    position = offset
    for _ in range(length - 1):
        buffer[position] = (payload & 0x7F) | 0x80
        payload >>= 7
        position += 1
    buffer[position] = payload
    return length


def _read(buffer, bits: int, max_bytes: int,
          optimize_positive: bool, offset: int) -> Tuple[int, int]:
    end = len(buffer)
    if offset < 0 or offset > end:
        raise ValueError(f"Offset {offset} outside buffer of {end} bytes")

    result = 0
    position = offset
    for index in range(max_bytes):
        if position >= end:
            raise TruncatedError("Varint decode: unexpected end of data")

        byte = buffer[position]
        position += 1

        if index == max_bytes - 1:
            # Last possible byte: all 8 bits count, overflow is masked off below
            result |= byte << (7 * index)
            break

        result |= (byte & 0x7F) << (7 * index)
        if not (byte & 0x80):
            break

    result &= (1 << bits) - 1
    if optimize_positive:
        value = to_signed(result, bits)
    else:
        value = zigzag_decode(result, bits)
    return value, position - offset


def _can_read(buffer, offset: int, available: Optional[int], max_bytes: int) -> bool:
    available = _remaining(buffer, offset, available)
    if available >= max_bytes:
        return True

    for position in range(offset, offset + available):
        if not (buffer[position] & 0x80):
            return True
    return False


def _peek_length(buffer, offset: int, available: Optional[int], max_bytes: int) -> int:
    available = _remaining(buffer, offset, available)
    for count in range(1, min(available, max_bytes) + 1):
        if count == max_bytes or not (buffer[offset + count - 1] & 0x80):
            return count
    return 0


# int (32-bit)

def int_length(value: int, optimize_positive: bool = False) -> int:
    """
    Return the number of bytes `write_int` would produce (1-5).

    Args:
        value: 32-bit value (signed, or its unsigned bit pattern)
        optimize_positive: Encoding mode

    Raises:
        ValueError: If value does not fit in 32 bits
    """
    return _length(_payload(value, _INT_BITS, optimize_positive), MAX_INT_BYTES)


def write_int(buffer, value: int, optimize_positive: bool = False, offset: int = 0) -> int:
    """
    Write a 32-bit int into `buffer` at `offset` using 1 to 5 bytes.

    Args:
        buffer: Writable buffer (bytearray or writable memoryview)
        value: 32-bit value (signed, or its unsigned bit pattern)
        optimize_positive: If true, small positive numbers take 1 byte and
            negative numbers take 5 bytes
        offset: Where in the buffer to start writing

    Returns:
        Number of bytes written

    Raises:
        CapacityError: If the buffer cannot hold the encoding at offset.
            Nothing is written in that case.
        ValueError: If value does not fit in 32 bits or offset is negative
    """
    return _write(buffer, value, _INT_BITS, MAX_INT_BYTES, optimize_positive, offset)


def read_int(buffer, optimize_positive: bool = False, offset: int = 0) -> Tuple[int, int]:
    """
    Read a 32-bit int from `buffer` at `offset`.

    Args:
        buffer: Bytes containing the varint
        optimize_positive: Mode the value was written with
        offset: Where in the buffer to start reading

    Returns:
        Tuple of (signed value, bytes read)

    Raises:
        TruncatedError: If the buffer ends before the value does
        ValueError: If offset is outside the buffer
    """
    return _read(buffer, _INT_BITS, MAX_INT_BYTES, optimize_positive, offset)


def can_read_int(buffer, offset: int = 0, available: Optional[int] = None) -> bool:
    """
    Check whether a complete 32-bit varint starts at `offset`.

    Only the `available` bytes following `offset` are considered; by
    default that is everything up to the end of the buffer. Five or more
    available bytes are always enough.

    Raises:
        ValueError: If offset or available fall outside the buffer
    """
    return _can_read(buffer, offset, available, MAX_INT_BYTES)


def peek_int_length(buffer, offset: int = 0, available: Optional[int] = None) -> int:
    """Return the length of the complete int varint at `offset`, or 0 if incomplete."""
    return _peek_length(buffer, offset, available, MAX_INT_BYTES)


def encode_int(value: int, optimize_positive: bool = False) -> bytes:
    """Encode a 32-bit int and return the bytes."""
    buffer = bytearray(MAX_INT_BYTES)
    length = write_int(buffer, value, optimize_positive)
    return bytes(buffer[:length])


# long (64-bit)

def long_length(value: int, optimize_positive: bool = False) -> int:
    """
    Return the number of bytes `write_long` would produce (1-9).

    Raises:
        ValueError: If value does not fit in 64 bits
    """
    return _length(_payload(value, _LONG_BITS, optimize_positive), MAX_LONG_BYTES)


def write_long(buffer, value: int, optimize_positive: bool = False, offset: int = 0) -> int:
    """
    Write a 64-bit long into `buffer` at `offset` using 1 to 9 bytes.

    Same contract as `write_int`; negative numbers take 9 bytes when
    `optimize_positive` is true.
    """
    return _write(buffer, value, _LONG_BITS, MAX_LONG_BYTES, optimize_positive, offset)


def read_long(buffer, optimize_positive: bool = False, offset: int = 0) -> Tuple[int, int]:
    """
    Read a 64-bit long from `buffer` at `offset`.

    Returns:
        Tuple of (signed value, bytes read)

    Raises:
        TruncatedError: If the buffer ends before the value does
    """
    return _read(buffer, _LONG_BITS, MAX_LONG_BYTES, optimize_positive, offset)


def can_read_long(buffer, offset: int = 0, available: Optional[int] = None) -> bool:
    """Check whether a complete 64-bit varint starts at `offset`."""
    return _can_read(buffer, offset, available, MAX_LONG_BYTES)


def peek_long_length(buffer, offset: int = 0, available: Optional[int] = None) -> int:
    """Return the length of the complete long varint at `offset`, or 0 if incomplete."""
    return _peek_length(buffer, offset, available, MAX_LONG_BYTES)


def encode_long(value: int, optimize_positive: bool = False) -> bytes:
    """Encode a 64-bit long and return the bytes."""
    buffer = bytearray(MAX_LONG_BYTES)
    length = write_long(buffer, value, optimize_positive)
    return bytes(buffer[:length])
