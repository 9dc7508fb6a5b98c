"""Tests for the SensorReading model."""

import dataclasses

import pytest

from pms7003_mcp.models.reading import SensorReading, FIELD_NAMES

VALUES = [28, 5, 10, 15, 5, 10, 15, 1, 2, 3, 4, 5, 6, 0, 0xC6]


def test_field_order():
    """Wire order: length, CF=1, atmospheric, counts, reserved, checksum."""
    assert FIELD_NAMES[0] == "frame_length"
    assert FIELD_NAMES[1:4] == ("pm1_0_cf1", "pm2_5_cf1", "pm10_cf1")
    assert FIELD_NAMES[4:7] == ("pm1_0_atm", "pm2_5_atm", "pm10_atm")
    assert FIELD_NAMES[-2:] == ("reserved", "checksum")
    assert len(FIELD_NAMES) == 15


def test_from_fields_preserves_order():
    reading = SensorReading.from_fields(VALUES, checksum_valid=False)
    assert list(reading.fields()) == VALUES
    assert reading.checksum_valid is False


def test_from_fields_wrong_count():
    with pytest.raises(ValueError):
        SensorReading.from_fields(VALUES[:-1], checksum_valid=True)


def test_reading_is_immutable():
    reading = SensorReading.from_fields(VALUES, checksum_valid=True)
    with pytest.raises(dataclasses.FrozenInstanceError):
        reading.pm2_5_atm = 0


def test_to_dict():
    d = SensorReading.from_fields(VALUES, checksum_valid=True).to_dict()
    assert d["pm2_5_atm"] == 10
    assert d["checksum"] == 0xC6
    assert d["checksum_valid"] is True


def test_str_summary():
    s = str(SensorReading.from_fields(VALUES, checksum_valid=True))
    assert "PM2.5 Atm:10" in s
    assert ">10um:6" in s
