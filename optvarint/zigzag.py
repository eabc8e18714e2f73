# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Fixed-width integer helpers and the zig-zag transform.

Python integers are unbounded, so every helper here takes the bit width
of the native type being modelled (32 or 64).
"""


def to_unsigned(value: int, bits: int) -> int:
    """
    Return the unsigned bit pattern of a fixed-width integer.

    Args:
        value: Signed value or unsigned bit pattern
        bits: Width of the integer type

    Returns:
        Value masked to `bits` bits

    Raises:
        ValueError: If value does not fit in `bits` bits
    """
    if value < -(1 << (bits - 1)) or value >= (1 << bits):
        raise ValueError(f"Value {value} out of range for {bits}-bit integer")
    return value & ((1 << bits) - 1)


def to_signed(value: int, bits: int) -> int:
    """Reinterpret a `bits`-wide bit pattern as a two's-complement value."""
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def zigzag_encode(value: int, bits: int) -> int:
    """
    Map a signed integer onto the unsigned range.

    0 -> 0, -1 -> 1, 1 -> 2, -2 -> 3, ...

    Args:
        value: Signed value or unsigned bit pattern
        bits: Width of the integer type

    Returns:
        Zig-zag encoded unsigned value
    """
    value = to_signed(to_unsigned(value, bits), bits)
    # Arithmetic shift broadcasts the sign bit
    return ((value << 1) ^ (value >> (bits - 1))) & ((1 << bits) - 1)


def zigzag_decode(value: int, bits: int) -> int:
    """Invert zig-zag encoding, returning the signed value."""
    value &= (1 << bits) - 1
    return (value >> 1) ^ -(value & 1)
