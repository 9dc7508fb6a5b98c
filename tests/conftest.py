"""Shared fixtures: an in-memory transport that records every call."""

from __future__ import annotations

import pytest

from pms7003_mcp.errors import ShortReadError


class RecordingTransport:
    """Transport stub fed with sensor bytes; records writes, reads, and closes."""

    def __init__(self) -> None:
        self.incoming = bytearray()
        self.written: list[bytes] = []
        self.reads = 0
        self.closes = 0
        self.accept: int | None = None  # bytes reported per write; None = all
        self.write_error: Exception | None = None
        self.read_error: Exception | None = None

    def feed(self, data: bytes) -> None:
        self.incoming += data

    def write(self, data: bytes) -> int:
        self.written.append(bytes(data))
        if self.write_error is not None:
            raise self.write_error
        return len(data) if self.accept is None else self.accept

    def read_exact(self, size: int) -> bytes:
        self.reads += 1
        if self.read_error is not None:
            raise self.read_error
        if len(self.incoming) < size:
            partial = bytes(self.incoming)
            self.incoming.clear()
            raise ShortReadError(size, partial)
        data = bytes(self.incoming[:size])
        del self.incoming[:size]
        return data

    def close(self) -> None:
        self.closes += 1

    @property
    def io_calls(self) -> int:
        return len(self.written) + self.reads + self.closes


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()
