"""LightPlay BLE Protocol Package.

  Pure Python package for controlling LightPlay BLE light toys.
  """

from .device import LightPlayDevice
from .discovery import discover_devices
from .exceptions import (
    BLEConnectionError,
    BLETimeoutError,
    InvalidArgumentError,
    LightPlayError,
    ProtocolError,
)
from .models.enums import CONCRETE_COLORS, LightColor, LightPort, LightStatus, SessionState
from .models.state import MIXED, LightState, LightStateCache
from .protocol import (
    RX_CHARACTERISTIC_UUID,
    SERVICE_UUID,
    TX_CHARACTERISTIC_UUID,
    color_bytes,
    port_byte,
    resolve_color,
)
from .transport import RateLimiter

__version__ = "0.1.0"

__all__ = [
    # Main API
    "LightPlayDevice",
    "discover_devices",
    # Exceptions
    "LightPlayError",
    "BLEConnectionError",
    "BLETimeoutError",
    "ProtocolError",
    "InvalidArgumentError",
    # Models
    "LightState",
    "LightStateCache",
    "MIXED",
    # Enums
    "LightColor",
    "LightPort",
    "LightStatus",
    "SessionState",
    "CONCRETE_COLORS",
    # Utilities
    "RateLimiter",
    "color_bytes",
    "port_byte",
    "resolve_color",
    # Constants
    "SERVICE_UUID",
    "RX_CHARACTERISTIC_UUID",
    "TX_CHARACTERISTIC_UUID",
]
