"""Data models for sensor modes and decoded readings."""

from .mode import Mode
from .reading import SensorReading, FIELD_NAMES
