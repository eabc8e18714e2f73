#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Command-line tool for optimized varints.

Usage:
    python varint_tool.py encode 300 -1 0x7fffffff
    python varint_tool.py decode ac02 --optimize-positive
    python varint_tool.py length --long 1099511627776
    python varint_tool.py monitor --port /dev/ttyACM0 --count 10

Requirements:
    pip install pyserial
"""

import argparse
import logging
import sys

import serial

from optvarint import (
    VarintPort,
    can_read_int,
    can_read_long,
    encode_int,
    encode_long,
    int_length,
    long_length,
    read_int,
    read_long,
)
from optvarint.transport import TransportError


def parse_int(text: str) -> int:
    """Parse a decimal, hex (0x), octal (0o) or binary (0b) integer."""
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")


def parse_count(text: str) -> int:
    """Parse a non-negative value count."""
    count = parse_int(text)
    if count < 0:
        raise argparse.ArgumentTypeError(f"count must be >= 0: {text!r}")
    return count


def cmd_encode(values, long: bool, optimize_positive: bool) -> bool:
    """Print the encoding of each value."""
    encode = encode_long if long else encode_int
    for value in values:
        try:
            data = encode(value, optimize_positive)
        except ValueError as e:
            print(f"Error: {e}")
            return False
        print(f"{value}: {data.hex()} ({len(data)} bytes)")
    return True


def cmd_decode(hex_data: str, long: bool, optimize_positive: bool) -> bool:
    """Decode consecutive values from a hex string."""
    try:
        data = bytes.fromhex(hex_data)
    except ValueError:
        print(f"Error: Invalid hex string: {hex_data}")
        return False

    can_read = can_read_long if long else can_read_int
    read = read_long if long else read_int

    offset = 0
    while offset < len(data):
        if not can_read(data, offset):
            print(f"Incomplete value at offset {offset}: {data[offset:].hex()}")
            return False
        value, count = read(data, optimize_positive, offset)
        print(f"{offset}: {value} ({count} bytes)")
        offset += count
    return True


def cmd_length(values, long: bool, optimize_positive: bool) -> bool:
    """Print the encoded length of each value."""
    length = long_length if long else int_length
    for value in values:
        try:
            print(f"{value}: {length(value, optimize_positive)} bytes")
        except ValueError as e:
            print(f"Error: {e}")
            return False
    return True


def cmd_monitor(port: VarintPort, count: int, long: bool) -> bool:
    """Print values received on a serial port."""
    receive = port.receive_long if long else port.receive_int
    received = 0
    try:
        while count == 0 or received < count:
            print(receive(), flush=True)
            received += 1
    except KeyboardInterrupt:
        print()
    print(f"Received {received} values from {port.port}")
    return True


def main():
    parser = argparse.ArgumentParser(
        description="Encode, decode and monitor optimized varints"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default WARNING)"
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--long", "-l", action="store_true",
                        help="Use 64-bit longs instead of 32-bit ints")
    common.add_argument("--optimize-positive", "-P", action="store_true",
                        help="Raw bit pattern mode instead of zig-zag")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # encode command
    encode_parser = subparsers.add_parser("encode", parents=[common],
                                          help="Encode integers to hex")
    encode_parser.add_argument("values", nargs="+", type=parse_int, help="Integers to encode")

    # decode command
    decode_parser = subparsers.add_parser("decode", parents=[common],
                                          help="Decode a hex string of varints")
    decode_parser.add_argument("hex", help="Hex-encoded varint bytes")

    # length command
    length_parser = subparsers.add_parser("length", parents=[common],
                                          help="Show encoded lengths")
    length_parser.add_argument("values", nargs="+", type=parse_int, help="Integers to measure")

    # monitor command
    monitor_parser = subparsers.add_parser("monitor", parents=[common],
                                           help="Print varints received on a serial port")
    monitor_parser.add_argument("--port", "-p", required=True,
                                help="Serial port or pyserial URL (e.g., /dev/ttyACM0)")
    monitor_parser.add_argument("--baudrate", "-b", type=int, default=115200,
                                help="Baud rate (default 115200)")
    monitor_parser.add_argument("--timeout", "-t", type=float, default=5.0,
                                help="Read timeout in seconds (default 5.0)")
    monitor_parser.add_argument("--count", "-n", type=parse_count, default=0,
                                help="Stop after N values (default 0 = forever)")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    if args.command == "encode":
        ok = cmd_encode(args.values, args.long, args.optimize_positive)
    elif args.command == "decode":
        ok = cmd_decode(args.hex, args.long, args.optimize_positive)
    elif args.command == "length":
        ok = cmd_length(args.values, args.long, args.optimize_positive)
    else:
        try:
            port = VarintPort(args.port, args.baudrate, args.timeout, args.optimize_positive)
        except serial.SerialException as e:
            print(f"Error opening {args.port}: {e}")
            sys.exit(1)

        try:
            ok = cmd_monitor(port, args.count, args.long)
        except TransportError as e:
            print(f"Error: {e}")
            sys.exit(1)
        finally:
            port.close()

    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
