"""Protocol engine: session lifecycle, control commands, and frame reads.

Session states::

    CREATED --initialize--> READY --sleep--> SLEEPING --wake--> READY
                              |                  |
                              +------close-------+--> CLOSED

``read`` is only allowed in ``READY``. Any operation on a ``CLOSED``
session raises ``SessionClosedError`` without touching the transport.

The engine does not log or swallow errors, does not retry, and imposes no
timeouts of its own. A session is not thread-safe; serialize access
externally if several threads share one.
"""

from __future__ import annotations

import logging
from enum import Enum

from .errors import (
    CommandWriteError,
    InvalidStateError,
    SessionClosedError,
    TransportError,
    TransportReadError,
)
from .models.mode import Mode
from .models.reading import SensorReading
from .protocol.commands import COMMAND_SIZE, ControlCommand
from .protocol.framing import FRAME_SIZE, parse_frame
from .transport.base import Transport
from .transport.serial_connection import SerialConnection

logger = logging.getLogger(__name__)

MODE_COMMANDS: dict[Mode, ControlCommand] = {
    Mode.ACTIVE: ControlCommand.SET_ACTIVE,
    Mode.PASSIVE: ControlCommand.SET_PASSIVE,
}


class SessionState(Enum):
    CREATED = "created"
    READY = "ready"
    SLEEPING = "sleeping"
    CLOSED = "closed"


class Session:
    """A PMS7003 session bound to one transport and one mode.

    Obtain a ready session through :func:`initialize` or
    :func:`open_device`. The session owns the transport exclusively and
    releases it on :meth:`close`.
    """

    def __init__(self, transport: Transport, mode: Mode) -> None:
        self._transport = transport
        self._mode = Mode(mode)
        self._state = SessionState.CREATED

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._state is SessionState.CLOSED

    def _start(self) -> None:
        """Select the mode and wake the sensor (it may be asleep from a prior run)."""
        self._require_open()
        if self._state is not SessionState.CREATED:
            raise InvalidStateError(
                f"Session already initialized (state: {self._state.value})"
            )
        self._send(MODE_COMMANDS[self._mode])
        self._send(ControlCommand.WAKE)
        self._state = SessionState.READY

    def read(self) -> SensorReading:
        """Read and decode the next 32-byte frame from the sensor.

        Blocks until a full frame arrives or the transport gives up.

        Raises:
            TransportReadError: Fewer than 32 bytes were read or the read
                failed. The session stays ready.
            FramingError: The frame did not start with 0x42 0x4D.
            InvalidStateError: The session is not ready (e.g. sleeping).
            SessionClosedError: The session was closed.
        """
        self._require_open()
        if self._state is not SessionState.READY:
            raise InvalidStateError(
                f"Cannot read while session is {self._state.value}"
            )

        try:
            data = self._transport.read_exact(FRAME_SIZE)
        except (TransportError, OSError) as e:
            raise TransportReadError(f"Failed to read a {FRAME_SIZE}-byte frame: {e}") from e

        if len(data) != FRAME_SIZE:
            raise TransportReadError(
                f"Failed to read a {FRAME_SIZE}-byte frame: got {len(data)} bytes"
            )

        return parse_frame(data)

    def sleep(self) -> None:
        """Put the sensor to sleep (fan and laser off)."""
        self._require_awake_or_asleep()
        self._send(ControlCommand.SLEEP)
        self._state = SessionState.SLEEPING

    def wake(self) -> None:
        """Wake the sensor. A duplicate wake is ignored by the sensor.

        The fan needs several seconds to spin up before readings are stable.
        """
        self._require_awake_or_asleep()
        self._send(ControlCommand.WAKE)
        self._state = SessionState.READY

    def close(self) -> None:
        """Release the transport.

        Raises:
            SessionClosedError: The session was already closed. The
                transport is not touched again.
        """
        self._require_open()
        self._state = SessionState.CLOSED
        self._transport.close()

    def _send(self, command: ControlCommand) -> None:
        try:
            written = self._transport.write(command.frame)
        except (TransportError, OSError) as e:
            raise CommandWriteError(f"Failed to send {command.name} command: {e}") from e

        if written != COMMAND_SIZE:
            raise CommandWriteError(
                f"Failed to send {command.name} command: "
                f"{written} of {COMMAND_SIZE} bytes written"
            )
        logger.debug("Sent %r", command)

    def _require_open(self) -> None:
        if self._state is SessionState.CLOSED:
            raise SessionClosedError("Session is closed")

    def _require_awake_or_asleep(self) -> None:
        self._require_open()
        if self._state is SessionState.CREATED:
            raise InvalidStateError("Session has not been initialized")

    def __enter__(self) -> Session:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.closed:
            self.close()

    def __repr__(self) -> str:
        return f"Session(mode={self._mode.value}, state={self._state.value})"


def initialize(transport: Transport, mode: Mode) -> Session:
    """Start a session: send the mode command, then the wake command.

    The transport must already be open at 9600 baud, 8 data bits, no
    parity, 1 stop bit.

    Raises:
        CommandWriteError: If either command was not fully written. No
            session is returned and the transport stays with the caller.
    """
    session = Session(transport, mode)
    session._start()
    return session


def open_device(
    port: str,
    mode: Mode = Mode.PASSIVE,
    timeout: float | None = None,
) -> Session:
    """Open the serial port at ``port`` and initialize a session on it.

    Raises:
        TransportOpenError: If the port cannot be opened.
        CommandWriteError: If initialization fails. The port is closed
            before the error propagates.
    """
    connection = SerialConnection(port, timeout=timeout)
    connection.open()
    try:
        return initialize(connection, mode)
    except CommandWriteError:
        connection.close()
        raise
