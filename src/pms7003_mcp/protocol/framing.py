"""Data frame parser for the 32-byte PMS7003 serial frames.

Frame layout::

    +----------+-------------+--------------------------------+----------+
    | Start    | Frame length| 13 data fields                 | Checksum |
    | 42 4D    | 2 bytes     | 26 bytes (uint16 big-endian)   | 2 bytes  |
    +----------+-------------+--------------------------------+----------+

- Start: fixed sentinel bytes 0x42 0x4D, consumed and never exposed
- Frame length: big-endian length of the remainder (always 28)
- Checksum: 16-bit sum of bytes 0-29, big-endian

The parser never resynchronizes: a frame with the wrong start bytes is
discarded as a whole.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import FramingError
from ..models.reading import SensorReading, FIELD_NAMES

START_BYTES = b"\x42\x4D"
FRAME_SIZE = 32
CHECKSUM_OFFSET = 30
FRAME_LENGTH = FRAME_SIZE - len(START_BYTES) - 2  # 28


def checksum(data: bytes) -> int:
    """Return the 16-bit sum of ``data``, wrapped to 0-0xFFFF."""
    return sum(data) & 0xFFFF


class FieldReader:
    """Sequential reader of big-endian uint16 fields from a byte buffer."""

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self._data = data
        self._offset = offset

    @property
    def offset(self) -> int:
        return self._offset

    def remaining(self) -> int:
        return len(self._data) - self._offset

    def read_u16(self) -> int:
        if self.remaining() < 2:
            raise ValueError(
                f"Cannot read uint16 at offset {self._offset}: "
                f"only {self.remaining()} byte(s) left"
            )
        value = int.from_bytes(self._data[self._offset : self._offset + 2], "big")
        self._offset += 2
        return value


@dataclass
class Frame:
    """A raw 32-byte frame with its checksum evaluated."""

    data: bytes

    @property
    def transmitted_checksum(self) -> int:
        return int.from_bytes(self.data[CHECKSUM_OFFSET:FRAME_SIZE], "big")

    @property
    def computed_checksum(self) -> int:
        return checksum(self.data[:CHECKSUM_OFFSET])

    @property
    def checksum_valid(self) -> bool:
        return self.transmitted_checksum == self.computed_checksum

    def __repr__(self) -> str:
        return (
            f"Frame(checksum=0x{self.transmitted_checksum:04X}, "
            f"valid={self.checksum_valid}, data={self.data.hex(' ')})"
        )


def parse_frame(data: bytes) -> SensorReading:
    """Validate and decode a 32-byte data frame.

    Args:
        data: Exactly 32 bytes read from the sensor.

    Returns:
        The decoded ``SensorReading``. A checksum mismatch does not reject
        the frame; it is reported through ``checksum_valid``.

    Raises:
        ValueError: If ``data`` is not 32 bytes long.
        FramingError: If the start bytes are not 0x42 0x4D.
    """
    if len(data) != FRAME_SIZE:
        raise ValueError(f"Frame must be {FRAME_SIZE} bytes, got {len(data)}")

    if data[:2] != START_BYTES:
        raise FramingError(bytes(data[:2]))

    frame = Frame(bytes(data))
    reader = FieldReader(frame.data, offset=len(START_BYTES))
    values = [reader.read_u16() for _ in FIELD_NAMES]
    return SensorReading.from_fields(values, checksum_valid=frame.checksum_valid)


def build_data_frame(values: list[int], frame_checksum: int | None = None) -> bytes:
    """Build a 32-byte data frame as the sensor would transmit it.

    Not used by the driver itself; simulates the sensor side of the link
    for tests and bench tools.

    Args:
        values: The 14 fields from frame length through reserved.
        frame_checksum: Checksum to place in bytes 30-31. When omitted the
            correct checksum is computed.
    """
    if len(values) != len(FIELD_NAMES) - 1:
        raise ValueError(
            f"Expected {len(FIELD_NAMES) - 1} field values, got {len(values)}"
        )
    body = START_BYTES
    for value in values:
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"Field value must be 0-65535, got {value}")
        body += value.to_bytes(2, "big")
    if frame_checksum is None:
        frame_checksum = checksum(body)
    return body + frame_checksum.to_bytes(2, "big")
