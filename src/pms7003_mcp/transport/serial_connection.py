"""Serial connection to the PMS7003 sensor.

The sensor talks 9600 baud, 8 data bits, no parity, 1 stop bit over a
3.3 V UART (for example ``/dev/ttyAMA0`` on a Raspberry Pi or a USB-serial
adapter at ``/dev/ttyUSB0``).
"""

from __future__ import annotations

import logging

import serial

from ..errors import ShortReadError, TransportError, TransportOpenError

logger = logging.getLogger(__name__)

BAUD_RATE = 9600
BYTE_SIZE = serial.EIGHTBITS
PARITY = serial.PARITY_NONE
STOP_BITS = serial.STOPBITS_ONE
DEFAULT_PORT = "/dev/ttyAMA0"


class SerialConnection:
    """Manages the UART link to the sensor.

    Usage::

        conn = SerialConnection("/dev/ttyAMA0")
        conn.open()
        conn.write(command_bytes)
        frame = conn.read_exact(32)
        conn.close()

    With ``timeout=None`` (the default) reads block until the requested
    number of bytes has arrived.
    """

    def __init__(
        self,
        port: str = DEFAULT_PORT,
        baudrate: int = BAUD_RATE,
        timeout: float | None = None,
    ) -> None:
        self._port = port
        self._baudrate = baudrate
        self._timeout = timeout
        self._serial: serial.Serial | None = None

    @property
    def port(self) -> str:
        return self._port

    @property
    def connected(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def open(self) -> None:
        """Open the serial port with the sensor's line settings.

        Raises:
            TransportOpenError: If the port does not exist or cannot be
                opened (typically missing permissions).
        """
        if self.connected:
            return

        try:
            self._serial = serial.Serial(
                self._port,
                baudrate=self._baudrate,
                bytesize=BYTE_SIZE,
                parity=PARITY,
                stopbits=STOP_BITS,
                timeout=self._timeout,
            )
        except (serial.SerialException, ValueError) as e:
            raise TransportOpenError(
                f"Could not open serial port {self._port}. "
                f"Check the device name and that you have permission to use it. "
                f"Last error: {e}"
            ) from e

        logger.info("Opened %s at %d baud", self._port, self._baudrate)

    def close(self) -> None:
        """Close the serial port."""
        if self._serial is None:
            return

        try:
            self._serial.close()
        except (serial.SerialException, OSError) as e:
            logger.warning("Error closing %s: %s", self._port, e)
        finally:
            self._serial = None
            logger.info("Closed %s", self._port)

    def write(self, data: bytes) -> int:
        """Write raw bytes to the sensor.

        Returns:
            Number of bytes written.

        Raises:
            TransportError: If not connected or the write fails.
        """
        port = self._require_open()
        try:
            written = port.write(data)
            port.flush()
        except (serial.SerialException, OSError) as e:
            raise TransportError(f"Write to {self._port} failed: {e}") from e

        logger.debug("Wrote %s", data.hex(" "))
        return written if written is not None else 0

    def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` bytes from the sensor.

        Raises:
            ShortReadError: If the read timed out before ``size`` bytes arrived.
            TransportError: If not connected or the read fails.
        """
        port = self._require_open()
        try:
            data = port.read(size)
        except (serial.SerialException, OSError) as e:
            raise TransportError(f"Read from {self._port} failed: {e}") from e

        if len(data) < size:
            raise ShortReadError(size, bytes(data))

        logger.debug("Read %s", data.hex(" "))
        return bytes(data)

    def _require_open(self) -> serial.Serial:
        if self._serial is None or not self._serial.is_open:
            raise TransportError(f"Serial port {self._port} is not open")
        return self._serial

    def __enter__(self) -> SerialConnection:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
