"""Sensor operating mode."""

from __future__ import annotations

from enum import Enum


class Mode(str, Enum):
    """Operating mode selected when a session is initialized.

    In ``ACTIVE`` mode the sensor pushes a frame roughly every second.
    ``PASSIVE`` mode is documented as answer-on-request, but the sensor
    keeps streaming in practice, so reads block on unsolicited frames in
    both modes.
    """

    ACTIVE = "active"
    PASSIVE = "passive"
