"""Control command frames sent from the host to the sensor.

Every command is a fixed 7-byte frame::

    42 4D <command> 00 <data> <checksum hi> <checksum lo>

The frames are the sensor's published constants and are sent verbatim.
"""

from __future__ import annotations

from enum import Enum, IntEnum

COMMAND_SIZE = 7


class CommandId(IntEnum):
    """Command identifiers (byte 2 of a command frame)."""

    CHANGE_MODE = 0xE1
    SLEEP_SET = 0xE4


class ControlCommand(Enum):
    """The four control commands understood by the sensor."""

    SET_ACTIVE = bytes.fromhex("42 4D E1 00 01 01 72")
    SET_PASSIVE = bytes.fromhex("42 4D E1 00 01 00 71")
    WAKE = bytes.fromhex("42 4D E4 00 01 01 74")
    SLEEP = bytes.fromhex("42 4D E4 00 00 01 73")

    @property
    def frame(self) -> bytes:
        return self.value

    @property
    def command_id(self) -> CommandId:
        return CommandId(self.value[2])

    @property
    def data(self) -> int:
        return self.value[4]

    def __repr__(self) -> str:
        return f"ControlCommand.{self.name}({self.value.hex(' ')})"
