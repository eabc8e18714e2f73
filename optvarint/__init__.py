# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
optvarint - optimized variable-length integer codec.

This package encodes 32-bit and 64-bit integers in the Kryo "optimized
varint" wire format and can tell, without consuming anything, whether a
partially received buffer already holds a complete value.

Example usage:
    from optvarint import VarintPort, write_int, read_int, can_read_int

    buffer = bytearray(5)
    length = write_int(buffer, -3)           # zig-zag: 1 byte
    if can_read_int(buffer, available=length):
        value, read = read_int(buffer)

    with VarintPort("/dev/ttyACM0") as port:
        port.send_long(1 << 40)
        print(port.receive_long())
"""

from .transport import (
    VarintPort,
    TransportError,
    TimeoutError,
)
from .varint import (
    MAX_INT_BYTES,
    MAX_LONG_BYTES,
    VarintError,
    CapacityError,
    TruncatedError,
    int_length,
    write_int,
    read_int,
    can_read_int,
    peek_int_length,
    encode_int,
    long_length,
    write_long,
    read_long,
    can_read_long,
    peek_long_length,
    encode_long,
)
from .zigzag import zigzag_encode, zigzag_decode, to_signed, to_unsigned

__version__ = "0.1.0"

__all__ = [
    # Zig-zag
    "zigzag_encode",
    "zigzag_decode",
    "to_signed",
    "to_unsigned",
    # Errors
    "VarintError",
    "CapacityError",
    "TruncatedError",
    # int
    "MAX_INT_BYTES",
    "int_length",
    "write_int",
    "read_int",
    "can_read_int",
    "peek_int_length",
    "encode_int",
    # long
    "MAX_LONG_BYTES",
    "long_length",
    "write_long",
    "read_long",
    "can_read_long",
    "peek_long_length",
    "encode_long",
    # Transport
    "VarintPort",
    "TransportError",
    "TimeoutError",
]
