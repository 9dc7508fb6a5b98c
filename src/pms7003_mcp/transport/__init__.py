"""Transport layer: the byte-stream capability and its pyserial implementation."""

from .base import Transport
from .serial_connection import SerialConnection
