"""Command-line reader: wake the sensor, print PM2.5 readings, put it to sleep."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from .device import open_device
from .errors import PMS7003Error, ReadError
from .models.mode import Mode
from .transport.serial_connection import DEFAULT_PORT

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pms7003",
        description="Read PM2.5 (atmospheric) values from a PMS7003 sensor.",
    )
    parser.add_argument("--port", default=DEFAULT_PORT, help="serial device path")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        default=Mode.PASSIVE.value,
        help="sensor operating mode",
    )
    parser.add_argument("--count", type=int, default=5, help="number of readings")
    parser.add_argument(
        "--warmup",
        type=float,
        default=10.0,
        help="seconds to wait after waking the sensor",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="per-frame read timeout in seconds (default: block)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def run(args: argparse.Namespace) -> int:
    try:
        session = open_device(args.port, Mode(args.mode), timeout=args.timeout)
    except PMS7003Error as e:
        logger.error("%s", e)
        return 1

    with session:
        try:
            session.wake()
            time.sleep(args.warmup)
            for _ in range(args.count):
                try:
                    reading = session.read()
                except ReadError as e:
                    logger.warning("Skipping frame: %s", e)
                    continue
                if not reading.checksum_valid:
                    logger.debug("Checksum mismatch in %s", reading)
                print(reading.pm2_5_atm)
            session.sleep()
        except PMS7003Error as e:
            logger.error("%s", e)
            return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
