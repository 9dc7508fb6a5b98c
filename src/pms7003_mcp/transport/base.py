"""Transport capability required by the protocol engine."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """A blocking duplex byte stream to the sensor.

    The engine owns the transport for the lifetime of a session and only
    ever calls these three methods. Line settings (9600 baud, 8-N-1) are
    the transport's responsibility.
    """

    def write(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes accepted.

        Raises ``TransportError`` (or ``OSError``) if the write fails.
        """
        ...

    def read_exact(self, size: int) -> bytes:
        """Block until exactly ``size`` bytes are read.

        Raises ``ShortReadError`` if fewer bytes arrive before a timeout,
        or ``TransportError`` (or ``OSError``) if the read fails.
        """
        ...

    def close(self) -> None:
        """Release the stream. Safe to call more than once."""
        ...
