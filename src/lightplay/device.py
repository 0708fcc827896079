"""Main LightPlay BLE device class."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable
from typing import TYPE_CHECKING, Literal

from .discovery import discover_devices
from .models.enums import LightColor, LightPort, LightStatus, SessionState
from .models.state import LightState, LightStateCache
from .protocol import (
    SEND_INTERVAL,
    SEND_RATE_MAX,
    build_fade_duration_command,
    build_fade_off_command,
    build_fade_to_color_command,
    build_off_command,
    build_reset_command,
    build_set_color_command,
    resolve_color,
)
from .transport import BLEConnection, RateLimiter

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)


class LightPlayDevice:
    """LightPlay BLE light toy with three addressable lights.

    Main API for controlling a LightPlay peripheral. Light commands are
    skipped when the last-known state already matches, writes are capped by
    a token-bucket rate limiter, and every command that does send takes
    send_interval seconds to complete.

    Usage:
        # Connect to a known address
        async with LightPlayDevice("AA:BB:CC:DD:EE:FF") as device:
            await device.set_color(LightPort.ALL, LightColor.RED)
            await device.fade_off(LightPort.LIGHT_2)

        # Scan first, then connect to the first device found
        device = LightPlayDevice()
        found = await device.scan()
        await device.connect(found[0])
    """

    def __init__(
            self,
            mac_address: str | None = None,
            ble_device: BLEDevice | None = None,
            timeout: float = 10.0,
            max_attempts: int = 4,
            send_interval: float = SEND_INTERVAL,
            send_rate_max: int = SEND_RATE_MAX,
            rng: random.Random | None = None,
    ):
        """Initialize LightPlay device.

        Args:
            mac_address: Device MAC address (optional if scanning first)
            ble_device: Optional BLEDevice from a previous scan
            timeout: BLE operation timeout in seconds (default: 10)
            max_attempts: Maximum connection attempts (default: 4)
            send_interval: Seconds each sending light command takes (default: 0.3)
            send_rate_max: Maximum writes per second (default: 20)
            rng: Random source for SURPRISE colors (default: module-level random)
        """
        if mac_address is None and ble_device is not None:
            mac_address = ble_device.address

        self.mac_address = mac_address
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.send_interval = send_interval

        self._ble_device = ble_device
        self._connection: BLEConnection | None = None
        self._state = SessionState.DISCONNECTED
        self._lights = LightStateCache()
        self._rate_limiter = RateLimiter(send_rate_max)
        self._rng = rng
        self._pending_writes: set[asyncio.Task] = set()

        self.dropped_sends_not_connected = 0
        self.dropped_sends_rate_limited = 0

    async def __aenter__(self) -> LightPlayDevice:
        """Connect to the configured device."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Disconnect from device."""
        await self.disconnect()

    @property
    def state(self) -> SessionState:
        """Current connection lifecycle state."""
        return self._state

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to device."""
        return self._connection is not None and self._connection.is_connected

    @property
    def lights(self) -> tuple[LightState, ...]:
        """Last-known state of lights 1-3."""
        return self._lights.lights

    @property
    def dropped_sends(self) -> int:
        """Frames dropped because of no connection or the rate limiter."""
        return self.dropped_sends_not_connected + self.dropped_sends_rate_limited

    # Connection lifecycle

    async def scan(self, timeout: float | None = None) -> list[BLEDevice]:
        """Scan for LightPlay peripherals.

        Any existing connection is released first.

        Args:
            timeout: Scan duration in seconds (default: device timeout)

        Returns:
            Discovered devices, pass one to connect()
        """
        if self._connection is not None:
            await self.disconnect()

        self._state = SessionState.SCANNING
        try:
            devices = await discover_devices(
                timeout if timeout is not None else self.timeout
            )
        except BaseException:
            self._state = SessionState.DISCONNECTED
            raise

        if not devices:
            _LOGGER.info("No LightPlay devices found")
            self._state = SessionState.DISCONNECTED
        return devices

    async def connect(self, device: str | BLEDevice | None = None) -> None:
        """Connect to a LightPlay peripheral and initialize it.

        On success the light state cache is reset, notifications are started
        and the device is told to switch all lights off and to use a
        two second fade duration.

        Args:
            device: MAC address or BLEDevice (default: the one given at construction)

        Raises:
            ValueError: If no device was given here or at construction
            BLEConnectionError: If connection fails
            BLETimeoutError: If connection times out
        """
        if device is None:
            address, ble_device = self.mac_address, self._ble_device
        elif isinstance(device, str):
            address, ble_device = device, None
        else:
            address, ble_device = device.address, device

        if address is None:
            raise ValueError("No device to connect to - pass an address or scan first")

        if self._connection is not None:
            await self.disconnect()

        self.mac_address = address
        self._ble_device = ble_device
        self._state = SessionState.SCANNING

        connection = BLEConnection(
            address,
            ble_device,
            timeout=self.timeout,
            max_attempts=self.max_attempts,
        )
        connection.disconnected_callback = lambda: self._on_link_lost(connection)
        self._connection = connection

        try:
            await connection.connect()
        except BaseException:
            self._connection = None
            self._state = SessionState.DISCONNECTED
            raise

        try:
            await self._on_connect()
        except BaseException:
            await self.disconnect()
            raise

    async def _on_connect(self) -> None:
        """Bring a freshly connected device and the cache into a known state."""
        self._lights.reset()
        self._state = SessionState.CONNECTED
        _LOGGER.info("Connected to LightPlay %s", self.mac_address)

        await self._connection.subscribe(self._on_message)

        # Bootstrap frames bypass the cache, not the rate limiter
        await self.send(build_reset_command())
        await self.send(build_fade_duration_command())

    def _on_message(self, data: bytes) -> None:
        """Handle TX notifications (not interpreted yet)."""
        _LOGGER.debug("Notification from %s: %s", self.mac_address, data.hex())

    def _on_link_lost(self, connection: BLEConnection) -> None:
        if connection is not self._connection:
            return
        _LOGGER.info("LightPlay %s disconnected", self.mac_address)
        self._connection = None
        self._state = SessionState.DISCONNECTED

    async def disconnect(self) -> None:
        """Disconnect from device. Safe to call when not connected."""
        connection = self._connection
        self._connection = None
        self._state = SessionState.DISCONNECTED
        if connection is not None:
            _LOGGER.info("Disconnecting from LightPlay %s", self.mac_address)
            await connection.disconnect()

    # Send path

    async def send(self, frame: bytes, rate_limited: bool = True) -> bool:
        """Write a frame to the device.

        Sends without a connection, and sends denied by the rate limiter,
        are dropped silently and counted.

        Args:
            frame: Frame bytes
            rate_limited: Apply the rate limiter (default: True)

        Returns:
            True if the frame was written, False if it was dropped

        Raises:
            BLEConnectionError: If the write fails
        """
        if not self.is_connected:
            self.dropped_sends_not_connected += 1
            _LOGGER.debug("Not connected, dropping %s", frame.hex())
            return False

        if rate_limited and not self._rate_limiter.okay_to_send():
            self.dropped_sends_rate_limited += 1
            _LOGGER.debug("Rate limited, dropping %s", frame.hex())
            return False

        _LOGGER.debug("Sending %s", frame.hex())
        await self._connection.write(frame)
        return True

    async def _dispatch(self, frame: bytes, on_written: Callable[[], None]) -> None:
        """Start writing frame, then wait send_interval seconds.

        on_written runs once the frame has actually been written, and only
        if the connection it was issued on is still current. A write
        failure that happens before the interval ends is raised here; later
        failures are only logged.
        """
        write = asyncio.create_task(
            self._write_and_record(frame, on_written, self._connection)
        )
        self._pending_writes.add(write)
        write.add_done_callback(self._write_done)

        await asyncio.sleep(self.send_interval)

        if write.done() and not write.cancelled():
            write.result()

    async def _write_and_record(
            self,
            frame: bytes,
            on_written: Callable[[], None],
            connection: BLEConnection | None,
    ) -> None:
        if await self.send(frame) and connection is self._connection:
            on_written()

    def _write_done(self, write: asyncio.Task) -> None:
        self._pending_writes.discard(write)
        if not write.cancelled() and write.exception() is not None:
            _LOGGER.warning("Light command write failed: %s", write.exception())

    # Light commands

    async def set_color(self, port: LightPort | str, color: LightColor | str) -> None:
        """Switch port on to color immediately.

        Args:
            port: Light to address, or LightPort.ALL
            color: Color to show; SURPRISE picks a random different color

        Raises:
            InvalidArgumentError: If port or color is unknown
        """
        port = LightPort.from_value(port)
        color = LightColor.from_value(color)

        if not self._lights.needs_on(port, color):
            _LOGGER.debug("%s already %s, skipping", port.value, color.value)
            return

        resolved = resolve_color(color, self._lights.color_of(port), self._rng)
        await self._dispatch(
            build_set_color_command(port, resolved),
            lambda: self._lights.apply_on(port, resolved),
        )

    async def set_off(self, port: LightPort | str) -> None:
        """Switch port off immediately."""
        port = LightPort.from_value(port)

        if not self._lights.needs_off(port):
            _LOGGER.debug("%s already off, skipping", port.value)
            return

        await self._dispatch(
            build_off_command(port),
            lambda: self._lights.apply_off(port),
        )

    async def fade_to_color(self, port: LightPort | str, color: LightColor | str) -> None:
        """Fade port to color using the configured fade duration.

        Args:
            port: Light to address, or LightPort.ALL
            color: Target color; SURPRISE picks a random different color

        Raises:
            InvalidArgumentError: If port or color is unknown
        """
        port = LightPort.from_value(port)
        color = LightColor.from_value(color)

        if not self._lights.needs_on(port, color):
            _LOGGER.debug("%s already %s, skipping fade", port.value, color.value)
            return

        resolved = resolve_color(color, self._lights.color_of(port), self._rng)
        await self._dispatch(
            build_fade_to_color_command(port, resolved),
            lambda: self._lights.apply_on(port, resolved),
        )

    async def fade_off(self, port: LightPort | str) -> None:
        """Fade port out."""
        port = LightPort.from_value(port)

        if not self._lights.needs_off(port):
            _LOGGER.debug("%s already off, skipping fade", port.value)
            return

        await self._dispatch(
            build_fade_off_command(port),
            lambda: self._lights.apply_off(port),
        )

    # Queries

    def get_light_status(self, port: LightPort | str) -> LightStatus | Literal[False]:
        """Last-known status of port, or False if port is ALL and lights differ."""
        return self._lights.status_of(LightPort.from_value(port))

    def get_light_color(self, port: LightPort | str) -> LightColor | Literal[False]:
        """Last-known color of port, or False if port is ALL and lights differ."""
        return self._lights.color_of(LightPort.from_value(port))
