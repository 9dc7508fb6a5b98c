"""Tests for the MCP server tools."""

from __future__ import annotations

import json
import sys
from unittest.mock import MagicMock, patch

import pytest

from pms7003_mcp.device import initialize
from pms7003_mcp.errors import TransportOpenError
from pms7003_mcp.models.mode import Mode
from pms7003_mcp.protocol.commands import ControlCommand
from pms7003_mcp.protocol.framing import build_data_frame


def _get_server_module():
    """Import server module with FastMCP mocked to avoid init issues."""
    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the @mcp.tool() decorator a no-op that returns the function unchanged
    mock_fastmcp_instance.tool.return_value = lambda fn: fn
    mock_fastmcp_instance.resource.return_value = lambda fn: fn
    mock_fastmcp_instance.prompt.return_value = lambda fn: fn
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    with patch("mcp.server.fastmcp.FastMCP", mock_fastmcp_cls):
        # Remove cached server module so it re-imports with our mock
        sys.modules.pop("pms7003_mcp.server", None)
        import pms7003_mcp.server as server_mod

    return server_mod


def _connect(server, transport, mode=Mode.PASSIVE):
    session = initialize(transport, mode)
    with patch.object(server, "open_device", return_value=session) as opener:
        result = server.connect("/dev/ttyUSB0", mode.value)
    return result, opener


def test_tools_require_connection():
    server = _get_server_module()
    with pytest.raises(RuntimeError):
        server.read_sensor()
    assert server.get_status() == {"connected": False}


def test_connect_and_read(transport):
    server = _get_server_module()
    result, opener = _connect(server, transport)

    opener.assert_called_once_with(
        "/dev/ttyUSB0", Mode.PASSIVE, timeout=server.SERVER_READ_TIMEOUT
    )
    assert result["connected"] is True
    assert result["state"] == "ready"

    transport.feed(build_data_frame([28, 5, 10, 15, 5, 10, 15, 1, 2, 3, 4, 5, 6, 0]))
    reading = server.read_sensor()
    assert reading["pm2_5_atm"] == 10
    assert reading["checksum_valid"] is True


def test_connect_twice_reuses_session(transport):
    server = _get_server_module()
    _connect(server, transport)
    result = server.connect("/dev/ttyUSB0")
    assert result["message"] == "Already connected"


def test_connect_unknown_mode():
    server = _get_server_module()
    assert "error" in server.connect("/dev/ttyUSB0", "turbo")


def test_connect_open_error_is_reported():
    server = _get_server_module()
    with patch.object(server, "open_device", side_effect=TransportOpenError("denied")):
        result = server.connect("/dev/ttyUSB0")
    assert result == {"error": "denied"}
    assert server.get_status() == {"connected": False}


def test_read_error_is_reported(transport):
    server = _get_server_module()
    _connect(server, transport)
    transport.feed(b"\x00" * 32)
    assert "error" in server.read_sensor()


def test_sleep_and_wake(transport):
    server = _get_server_module()
    _connect(server, transport)
    assert server.sleep_sensor() == {"state": "sleeping"}
    assert "error" in server.read_sensor()
    assert server.wake_sensor() == {"state": "ready"}
    assert transport.written[-2:] == [
        ControlCommand.SLEEP.frame,
        ControlCommand.WAKE.frame,
    ]


def test_disconnect_closes_session(transport):
    server = _get_server_module()
    _connect(server, transport)
    assert server.disconnect() == {"disconnected": True}
    assert transport.closes == 1
    assert server.get_status() == {"connected": False}


def test_disconnect_after_session_closed(transport):
    """Disconnecting an already-closed session does not close it twice."""
    server = _get_server_module()
    _connect(server, transport)
    server._session.close()
    assert server.disconnect() == {"disconnected": True}
    assert transport.closes == 1


def test_resources():
    server = _get_server_module()
    commands = json.loads(server.resource_commands())
    assert commands["wake"] == {
        "frame": "42 4d e4 00 01 01 74",
        "command_id": "0xE4",
        "command": "sleep_set",
        "data": 1,
    }
    assert commands["set_active"]["command"] == "change_mode"
    layout = json.loads(server.resource_frame_layout())
    assert layout["frame_size"] == 32
    assert layout["fields"][0] == {"name": "frame_length", "offset": 2, "size": 2}
    assert layout["fields"][-1]["offset"] == 30


def test_prompt_mentions_sample_count():
    server = _get_server_module()
    assert "Take 3 readings" in server.air_quality_report(3)
