"""Decoded sensor reading.

Wire order of the 15 big-endian uint16 values following the start bytes::

    +--------------+------------------------+------------------------+--------------------------------+----------+----------+
    | Frame length | PM1.0 / PM2.5 / PM10   | PM1.0 / PM2.5 / PM10   | Particles > 0.3 0.5 1.0 2.5    | Reserved | Checksum |
    |              | CF=1 (standard)        | atmospheric            |             5.0 10 um / 0.1 L  |          |          |
    +--------------+------------------------+------------------------+--------------------------------+----------+----------+

Concentrations are in ug/m3, counts are particles per 0.1 L of air.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict

FIELD_NAMES: tuple[str, ...] = (
    "frame_length",
    "pm1_0_cf1",
    "pm2_5_cf1",
    "pm10_cf1",
    "pm1_0_atm",
    "pm2_5_atm",
    "pm10_atm",
    "particles_0_3um",
    "particles_0_5um",
    "particles_1_0um",
    "particles_2_5um",
    "particles_5_0um",
    "particles_10um",
    "reserved",
    "checksum",
)


@dataclass(frozen=True)
class SensorReading:
    """One validated PMS7003 data frame.

    ``checksum`` is the value transmitted by the sensor. ``checksum_valid``
    reports whether it matches the sum of frame bytes 0-29; frames with a
    mismatching checksum are still decoded.
    """

    frame_length: int
    pm1_0_cf1: int
    pm2_5_cf1: int
    pm10_cf1: int
    pm1_0_atm: int
    pm2_5_atm: int
    pm10_atm: int
    particles_0_3um: int
    particles_0_5um: int
    particles_1_0um: int
    particles_2_5um: int
    particles_5_0um: int
    particles_10um: int
    reserved: int
    checksum: int
    checksum_valid: bool

    @classmethod
    def from_fields(cls, values: list[int], checksum_valid: bool) -> SensorReading:
        """Build a reading from the 15 wire values in transmission order."""
        if len(values) != len(FIELD_NAMES):
            raise ValueError(
                f"Expected {len(FIELD_NAMES)} field values, got {len(values)}"
            )
        return cls(**dict(zip(FIELD_NAMES, values)), checksum_valid=checksum_valid)

    def fields(self) -> tuple[int, ...]:
        """Return the wire values in transmission order, for inspection and logging."""
        return tuple(getattr(self, name) for name in FIELD_NAMES)

    def to_dict(self) -> dict:
        return asdict(self)

    def __str__(self) -> str:
        return (
            f"[PM1.0 CF1:{self.pm1_0_cf1}, PM2.5 CF1:{self.pm2_5_cf1}, "
            f"PM10 CF1:{self.pm10_cf1}, "
            f"PM1.0 Atm:{self.pm1_0_atm}, PM2.5 Atm:{self.pm2_5_atm}, "
            f"PM10 Atm:{self.pm10_atm}, "
            f">0.3um:{self.particles_0_3um}, >0.5um:{self.particles_0_5um}, "
            f">1.0um:{self.particles_1_0um}, >2.5um:{self.particles_2_5um}, "
            f">5.0um:{self.particles_5_0um}, >10um:{self.particles_10um}]"
        )
