"""Exceptions raised by the LightPlay BLE package."""


class LightPlayError(Exception):
    """Base exception for all LightPlay errors."""


class BLEConnectionError(LightPlayError):
    """BLE connection, subscribe or write failed."""


class BLETimeoutError(LightPlayError):
    """BLE operation timed out."""


class ProtocolError(LightPlayError):
    """LightPlay protocol misuse."""


class InvalidArgumentError(ProtocolError, ValueError):
    """Port, color or parameter outside the protocol's enumerated values."""
