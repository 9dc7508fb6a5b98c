"""Protocol layer: data frame parsing, checksums, and control commands."""

from .framing import parse_frame, build_data_frame, FRAME_SIZE, START_BYTES
from .commands import ControlCommand, CommandId, COMMAND_SIZE
