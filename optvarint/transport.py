# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Serial transport for streams of optimized varints.

Values are written back to back with no extra framing. The receiving side
reads one byte at a time and uses the varint lookahead to know when a
value is complete.
"""

import logging
from typing import Callable, Iterable, List

import serial

from .varint import (
    can_read_int,
    can_read_long,
    encode_int,
    encode_long,
    read_int,
    read_long,
)

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Base exception for transport errors."""
    pass


class TimeoutError(TransportError):
    """Timeout waiting for data."""
    pass


class VarintPort:
    """
    Serial port carrying varint-encoded integers.

    `port` may be a device path or any pyserial URL (e.g. "loop://").

    Can be used as a context manager:
        with VarintPort("/dev/ttyACM0") as p:
            p.send_int(42)
    """

    def __init__(
        self,
        port: str,
        baudrate: int = 115200,
        timeout: float = 5.0,
        optimize_positive: bool = False,
    ):
        """
        Open the serial port.

        Args:
            port: Serial port path or pyserial URL
            baudrate: Baud rate (default 115200)
            timeout: Read timeout in seconds (default 5.0)
            optimize_positive: Varint mode used for every value on this port
        """
        self._ser = serial.serial_for_url(port, baudrate=baudrate, timeout=timeout)
        self.optimize_positive = optimize_positive
        self._pending = bytearray()
        logger.debug(f"Opened {port} at {baudrate} baud (timeout={timeout})")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """Close the serial connection."""
        if self._ser and self._ser.is_open:
            self._ser.close()

    @property
    def port(self) -> str:
        """Return the serial port name."""
        return self._ser.port

    def _send(self, data: bytes) -> int:
        self._ser.write(data)
        self._ser.flush()
        logger.debug(f"Sent {data.hex()}")
        return len(data)

    def _receive(self, can_read: Callable[[bytes], bool]) -> bytes:
        """
        Receive bytes until `can_read` reports a complete value.

        Bytes read before a timeout are kept and the next call continues
        the same value.
        """
        while not can_read(self._pending):
            byte = self._ser.read(1)
            if not byte:
                raise TimeoutError(
                    f"Timeout waiting for varint ({len(self._pending)} bytes received)"
                )
            self._pending.append(byte[0])
        result = bytes(self._pending)
        self._pending.clear()
        logger.debug(f"Received {result.hex()}")
        return result

    def send_int(self, value: int) -> int:
        """
        Send a 32-bit int.

        Returns:
            Number of bytes written
        """
        return self._send(encode_int(value, self.optimize_positive))

    def send_long(self, value: int) -> int:
        """
        Send a 64-bit long.

        Returns:
            Number of bytes written
        """
        return self._send(encode_long(value, self.optimize_positive))

    def receive_int(self) -> int:
        """
        Receive one 32-bit int.

        Raises:
            TimeoutError: If the port times out. Bytes already read are kept
                for the next call.
        """
        data = self._receive(can_read_int)
        value, _ = read_int(data, self.optimize_positive)
        return value

    def receive_long(self) -> int:
        """
        Receive one 64-bit long.

        Raises:
            TimeoutError: If the port times out. Bytes already read are kept
                for the next call.
        """
        data = self._receive(can_read_long)
        value, _ = read_long(data, self.optimize_positive)
        return value

    def send_values(self, values: Iterable[int], long: bool = False) -> int:
        """
        Send several values back to back.

        Returns:
            Total number of bytes written
        """
        encode = encode_long if long else encode_int
        data = b"".join(encode(v, self.optimize_positive) for v in values)
        return self._send(data)

    def receive_values(self, count: int, long: bool = False) -> List[int]:
        """Receive `count` values."""
        receive = self.receive_long if long else self.receive_int
        return [receive() for _ in range(count)]
