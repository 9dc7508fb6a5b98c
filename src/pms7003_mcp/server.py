"""MCP server entry point for the PMS7003 particulate-matter sensor.

Exposes tools, resources, and prompts via the Model Context Protocol
using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .device import Session, open_device
from .errors import PMS7003Error
from .models.mode import Mode
from .models.reading import FIELD_NAMES
from .protocol.commands import ControlCommand
from .protocol.framing import FRAME_SIZE, START_BYTES
from .transport.serial_connection import BAUD_RATE, DEFAULT_PORT

logger = logging.getLogger(__name__)

# A server must not hang forever on a silent sensor
SERVER_READ_TIMEOUT = 5.0

mcp = FastMCP(
    "pms7003",
    instructions="MCP server for the Plantower PMS7003 particulate-matter sensor",
)

# Global session state
_session: Session | None = None
_port: str = ""


def _get_session() -> Session:
    """Get the active sensor session, raising if not connected."""
    if _session is None or _session.closed:
        raise RuntimeError(
            "Not connected to sensor. Use the 'connect' tool first."
        )
    return _session


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(
    port: str = DEFAULT_PORT,
    mode: str = Mode.PASSIVE.value,
    timeout: float = SERVER_READ_TIMEOUT,
) -> dict[str, Any]:
    """Open the sensor's serial port and start a session.

    Sends the mode command followed by a wake command.

    Args:
        port: Serial device path (default /dev/ttyAMA0).
        mode: "active" or "passive" (default passive).
        timeout: Read timeout in seconds for each frame.
    """
    global _session, _port
    if _session is not None and not _session.closed:
        return {
            "connected": True,
            "message": "Already connected",
            "port": _port,
            "mode": _session.mode.value,
        }

    try:
        selected = Mode(mode)
    except ValueError:
        return {"error": f"Unknown mode '{mode}'. Valid: {[m.value for m in Mode]}"}

    try:
        _session = open_device(port, selected, timeout=timeout)
    except PMS7003Error as e:
        return {"error": str(e)}

    _port = port
    return {
        "connected": True,
        "port": port,
        "mode": selected.value,
        "state": _session.state.value,
    }


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the sensor session and release the serial port."""
    global _session
    if _session is None:
        return {"disconnected": True}
    if not _session.closed:
        _session.close()
    _session = None
    return {"disconnected": True}


@mcp.tool()
def get_status() -> dict[str, Any]:
    """Report whether a session is open, and its mode and state."""
    if _session is None or _session.closed:
        return {"connected": False}
    return {
        "connected": True,
        "port": _port,
        "mode": _session.mode.value,
        "state": _session.state.value,
    }


# ─── MEASUREMENT TOOLS ───────────────────────────────────────────────

@mcp.tool()
def read_sensor() -> dict[str, Any]:
    """Read one frame from the sensor.

    Returns PM1.0/PM2.5/PM10 concentrations (ug/m3) under standard (CF=1)
    and atmospheric calibration, particle counts per 0.1 L above six size
    thresholds, and whether the frame checksum matched.
    """
    session = _get_session()
    try:
        reading = session.read()
    except PMS7003Error as e:
        return {"error": str(e)}
    return reading.to_dict()


@mcp.tool()
def sleep_sensor() -> dict[str, Any]:
    """Put the sensor to sleep (fan and laser off)."""
    session = _get_session()
    try:
        session.sleep()
    except PMS7003Error as e:
        return {"error": str(e)}
    return {"state": session.state.value}


@mcp.tool()
def wake_sensor() -> dict[str, Any]:
    """Wake the sensor. Allow about 30 seconds before trusting readings."""
    session = _get_session()
    try:
        session.wake()
    except PMS7003Error as e:
        return {"error": str(e)}
    return {"state": session.state.value}


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("pms7003://protocol/commands")
def resource_commands() -> str:
    """Control command frames understood by the sensor."""
    return json.dumps({
        command.name.lower(): {
            "frame": command.frame.hex(" "),
            "command_id": f"0x{command.command_id:02X}",
            "command": command.command_id.name.lower(),
            "data": command.data,
        }
        for command in ControlCommand
    })


@mcp.resource("pms7003://protocol/frame-layout")
def resource_frame_layout() -> str:
    """Layout of the 32-byte data frame."""
    fields = [
        {"name": name, "offset": len(START_BYTES) + 2 * i, "size": 2}
        for i, name in enumerate(FIELD_NAMES)
    ]
    return json.dumps({
        "frame_size": FRAME_SIZE,
        "start_bytes": START_BYTES.hex(" "),
        "byte_order": "big",
        "baud_rate": BAUD_RATE,
        "fields": fields,
    })


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def air_quality_report(samples: int = 5) -> str:
    """Guide the AI to sample the sensor and summarize air quality.

    Args:
        samples: Number of readings to take.
    """
    return f"""Take {samples} readings using the read_sensor tool.
Summarize the air quality:
- Average PM1.0, PM2.5 and PM10 using the atmospheric (_atm) fields
- Whether PM2.5 is within common guideline levels (e.g. 15 ug/m3 daily)
- The particle size distribution from the particles_* counts
- Any readings with checksum_valid false, which may be corrupt

If the sensor was just woken, discard the first readings taken in the
first 30 seconds. Use sleep_sensor when finished to save the laser."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
