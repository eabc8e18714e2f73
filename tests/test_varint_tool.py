# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Tests for the varint_tool command-line interface."""

import argparse
import sys

import pytest
from unittest.mock import Mock, patch

import varint_tool
from optvarint.transport import TimeoutError


def run_tool(monkeypatch, *args):
    """Run varint_tool.main() with the given arguments."""
    monkeypatch.setattr(sys, "argv", ["varint_tool.py", *args])
    varint_tool.main()


class TestParseInt:
    """Tests for parse_int."""

    def test_bases(self):
        assert varint_tool.parse_int("300") == 300
        assert varint_tool.parse_int("-1") == -1
        assert varint_tool.parse_int("0xff") == 255

    def test_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            varint_tool.parse_int("nope")


class TestEncode:
    """Tests for the encode command."""

    def test_zigzag(self, monkeypatch, capsys):
        run_tool(monkeypatch, "encode", "300", "-1")
        out = capsys.readouterr().out
        assert "300: d804 (2 bytes)" in out
        assert "-1: 01 (1 bytes)" in out

    def test_optimize_positive(self, monkeypatch, capsys):
        run_tool(monkeypatch, "encode", "-P", "300")
        assert "300: ac02 (2 bytes)" in capsys.readouterr().out

    def test_long(self, monkeypatch, capsys):
        run_tool(monkeypatch, "encode", "--long", "-P", "-1")
        assert f"-1: {'ff' * 9} (9 bytes)" in capsys.readouterr().out

    def test_out_of_range_exits(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            run_tool(monkeypatch, "encode", "0x100000000")
        assert exc.value.code == 1
        assert "out of range" in capsys.readouterr().out


class TestDecode:
    """Tests for the decode command."""

    def test_consecutive(self, monkeypatch, capsys):
        run_tool(monkeypatch, "decode", "-P", "00ac027f")
        out = capsys.readouterr().out.splitlines()
        assert out == ["0: 0 (1 bytes)", "1: 300 (2 bytes)", "3: 127 (1 bytes)"]

    def test_incomplete_exits(self, monkeypatch, capsys):
        with pytest.raises(SystemExit):
            run_tool(monkeypatch, "decode", "0280")
        out = capsys.readouterr().out
        assert "0: 1 (1 bytes)" in out
        assert "Incomplete value at offset 1: 80" in out

    def test_invalid_hex_exits(self, monkeypatch, capsys):
        with pytest.raises(SystemExit):
            run_tool(monkeypatch, "decode", "zz")
        assert "Invalid hex" in capsys.readouterr().out


class TestLength:
    """Tests for the length command."""

    def test_lengths(self, monkeypatch, capsys):
        run_tool(monkeypatch, "length", "-P", "127", "128", "-1")
        out = capsys.readouterr().out.splitlines()
        assert out == ["127: 1 bytes", "128: 2 bytes", "-1: 5 bytes"]


class TestMonitor:
    """Tests for the monitor command."""

    @patch("varint_tool.VarintPort")
    def test_count(self, mock_port_class, monkeypatch, capsys):
        port = Mock()
        port.port = "/dev/ttyTEST"
        port.receive_int.side_effect = [5, -7]
        mock_port_class.return_value = port

        run_tool(monkeypatch, "monitor", "--port", "/dev/ttyTEST", "--count", "2")

        mock_port_class.assert_called_once_with("/dev/ttyTEST", 115200, 5.0, False)
        out = capsys.readouterr().out.splitlines()
        assert out == ["5", "-7", "Received 2 values from /dev/ttyTEST"]
        port.close.assert_called_once()

    def test_parse_count(self):
        assert varint_tool.parse_count("0") == 0
        assert varint_tool.parse_count("10") == 10
        with pytest.raises(argparse.ArgumentTypeError, match="count must be >= 0"):
            varint_tool.parse_count("-1")

    @patch("varint_tool.VarintPort")
    def test_negative_count_rejected(self, mock_port_class, monkeypatch, capsys):
        """A negative count is a usage error; the port is never opened."""
        with pytest.raises(SystemExit) as exc:
            run_tool(monkeypatch, "monitor", "--port", "/dev/ttyTEST", "--count", "-3")

        assert exc.value.code == 2
        assert "count must be >= 0" in capsys.readouterr().err
        mock_port_class.assert_not_called()

    @patch("varint_tool.VarintPort")
    def test_timeout_exits(self, mock_port_class, monkeypatch, capsys):
        port = Mock()
        port.receive_long.side_effect = TimeoutError("Timeout waiting for varint")
        mock_port_class.return_value = port

        with pytest.raises(SystemExit) as exc:
            run_tool(monkeypatch, "monitor", "-p", "loop://", "--long", "-n", "1")

        assert exc.value.code == 1
        assert "Error: Timeout waiting for varint" in capsys.readouterr().out
        port.close.assert_called_once()
