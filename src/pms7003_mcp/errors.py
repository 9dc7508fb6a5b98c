"""Exception hierarchy for the PMS7003 driver.

Every error raised by the transport or the protocol engine derives from
:class:`PMS7003Error`. When an error wraps a lower-level failure the cause
is chained (``raise ... from``) so it stays available as ``__cause__``.
"""

from __future__ import annotations


class PMS7003Error(Exception):
    """Base class for all driver errors."""


class TransportError(PMS7003Error):
    """Raised by a transport when the underlying byte stream fails."""


class TransportOpenError(TransportError):
    """The serial device could not be opened (bad path or permissions)."""


class ShortReadError(TransportError):
    """A blocking read returned fewer bytes than requested (timeout)."""

    def __init__(self, expected: int, received: bytes) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"Short read: expected {expected} bytes, got {len(received)}"
        )


class CommandWriteError(PMS7003Error):
    """A control command was not fully accepted by the transport."""


class ReadError(PMS7003Error):
    """Base class for failures while reading a data frame."""


class TransportReadError(ReadError):
    """Fewer than 32 bytes were obtained, or the transport read failed."""


class FramingError(ReadError):
    """The frame did not start with the 0x42 0x4D sentinel bytes."""

    def __init__(self, start: bytes) -> None:
        self.start = start
        super().__init__(
            f"Bad frame start bytes: {start.hex(' ') or '(empty)'} (expected 42 4d)"
        )


class SessionClosedError(PMS7003Error):
    """An operation was attempted on a closed session."""


class InvalidStateError(PMS7003Error):
    """An operation was attempted in a session state that does not allow it."""
