# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Pytest configuration."""

import pytest

# pyserial's in-memory loopback port
LOOPBACK_URL = "loop://"


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--device",
        action="store",
        default=None,
        help="Serial port with TX wired to RX (e.g., /dev/ttyUSB0). "
             "Defaults to pyserial's loop:// handler.",
    )


@pytest.fixture(scope="session")
def device_port(request):
    """Port used by integration tests."""
    return request.config.getoption("--device") or LOOPBACK_URL


@pytest.fixture
def loopback(device_port):
    """An open VarintPort whose output comes straight back as input."""
    from optvarint.transport import VarintPort

    port = VarintPort(device_port, timeout=1.0)
    yield port
    port.close()
