"""BLE connection management."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from bleak import BleakClient, BleakScanner
from bleak_retry_connector import BleakClientWithServiceCache, establish_connection

from ..exceptions import BLEConnectionError, BLETimeoutError
from ..protocol import RX_CHARACTERISTIC_UUID, TX_CHARACTERISTIC_UUID

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)


class BLEConnection:
    """Manages the BLE link to one LightPlay peripheral.

    Features:
    - Automatic retry logic with bleak-retry-connector
    - Service caching for faster reconnections
    - Link-loss callback for the owning session
    - Forwarding of TX characteristic notifications
    """

    def __init__(
            self,
            mac_address: str,
            ble_device: BLEDevice | None = None,
            timeout: float = 10.0,
            max_attempts: int = 4,
            use_services_cache: bool = True,
            disconnected_callback: Callable[[], None] | None = None,
    ):
        """Initialize BLE connection manager.

        Args:
            mac_address: Device MAC address
            ble_device: Optional BLEDevice from a previous scan
            timeout: Connection timeout in seconds (default: 10)
            max_attempts: Maximum connection attempts for bleak-retry-connector (default: 4)
            use_services_cache: Enable GATT service caching for faster reconnections (default: True)
            disconnected_callback: Called when the link drops without disconnect() being called
        """
        self.mac_address = mac_address
        self.ble_device = ble_device
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.use_services_cache = use_services_cache
        self.disconnected_callback = disconnected_callback

        self._client: BleakClient | None = None
        self._closing = False

    async def connect(self) -> None:
        """Establish BLE connection to device.

        Raises:
            BLEConnectionError: If connection fails
            BLETimeoutError: If connection times out
        """
        if self._client and self._client.is_connected:
            return

        try:
            _LOGGER.debug(
                "Connecting to %s with bleak-retry-connector (max_attempts=%d)",
                self.mac_address,
                self.max_attempts
            )

            if self.ble_device:
                device = self.ble_device
            else:
                device = await BleakScanner.find_device_by_address(
                    self.mac_address,
                    timeout=self.timeout
                )
                if device is None:
                    raise BLEConnectionError(
                        f"Device {self.mac_address} not found during scan"
                    )

            self._closing = False
            self._client = await establish_connection(
                client_class=BleakClientWithServiceCache,
                device=device,
                name=device.name or self.mac_address,
                disconnected_callback=self._on_disconnected,
                max_attempts=self.max_attempts,
                use_services_cache=self.use_services_cache,
                timeout=self.timeout,
            )

            _LOGGER.debug("Connected to %s", self.mac_address)

        except BLEConnectionError:
            raise
        except asyncio.TimeoutError as e:
            raise BLETimeoutError(
                f"Connection timeout after {self.timeout}s"
            ) from e
        except Exception as e:
            raise BLEConnectionError(
                f"Failed to connect: {e}"
            ) from e

    async def disconnect(self) -> None:
        """Disconnect from device."""
        self._closing = True
        if self._client and self._client.is_connected:
            try:
                _LOGGER.debug("Disconnecting from %s", self.mac_address)
                await self._client.disconnect()
            except Exception as e:
                _LOGGER.warning("Error during disconnect: %s", e)
        self._client = None

    def _on_disconnected(self, client: BleakClient) -> None:
        """Handle link loss reported by bleak."""
        if self._closing:
            return
        _LOGGER.info("Lost connection to %s", self.mac_address)
        self._client = None
        if self.disconnected_callback is not None:
            self.disconnected_callback()

    async def subscribe(self, callback: Callable[[bytes], None]) -> None:
        """Start notifications on the TX characteristic.

        Args:
            callback: Called with each notification payload

        Raises:
            BLEConnectionError: If not connected or notifications cannot start
        """
        if not self._client or not self._client.is_connected:
            raise BLEConnectionError("Not connected")

        def _notification_callback(sender, data: bytearray) -> None:
            callback(bytes(data))

        try:
            await self._client.start_notify(TX_CHARACTERISTIC_UUID, _notification_callback)
        except Exception as e:
            raise BLEConnectionError(f"Failed to start notifications: {e}") from e

        _LOGGER.debug("Notifications started")

    async def write(self, data: bytes, response: bool = True) -> None:
        """Write a frame to the RX characteristic.

        Args:
            data: Frame bytes to write
            response: Wait for write confirmation (default: True)

        Raises:
            BLEConnectionError: If not connected or write fails
        """
        if not self._client or not self._client.is_connected:
            raise BLEConnectionError("Not connected")

        try:
            await self._client.write_gatt_char(
                RX_CHARACTERISTIC_UUID,
                data,
                response=response,
            )
        except Exception as e:
            raise BLEConnectionError(f"Write failed: {e}") from e

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to device."""
        return self._client is not None and self._client.is_connected
