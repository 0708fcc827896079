"""BLE transport layer."""

from .connection import BLEConnection
from .rate_limiter import RateLimiter

__all__ = ["BLEConnection", "RateLimiter"]
