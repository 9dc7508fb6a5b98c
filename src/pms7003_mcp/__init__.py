"""Driver and MCP server for the Plantower PMS7003 particulate-matter sensor."""

from .device import Session, SessionState, initialize, open_device
from .models import Mode, SensorReading

__version__ = "0.1.0"
