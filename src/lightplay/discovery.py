"""Discovery of LightPlay peripherals."""

from __future__ import annotations

import logging

from bleak import BleakScanner
from bleak.backends.device import BLEDevice

from .protocol import SERVICE_UUID

_LOGGER = logging.getLogger(__name__)


async def discover_devices(timeout: float = 10.0) -> list[BLEDevice]:
    """Scan for peripherals advertising the LightPlay service.

    Args:
        timeout: Scan duration in seconds (default: 10)

    Returns:
        Discovered devices, in the order bleak reported them
    """
    _LOGGER.debug("Scanning for LightPlay devices (%.1fs)", timeout)

    devices = await BleakScanner.discover(
        timeout=timeout,
        service_uuids=[SERVICE_UUID],
    )

    _LOGGER.debug("Found %d LightPlay device(s)", len(devices))
    return list(devices)
