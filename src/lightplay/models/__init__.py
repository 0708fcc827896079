"""Data models for LightPlay devices."""

from .enums import CONCRETE_COLORS, LightColor, LightPort, LightStatus, SessionState
from .state import MIXED, LightState, LightStateCache

__all__ = [
    "CONCRETE_COLORS",
    "LightColor",
    "LightPort",
    "LightStatus",
    "SessionState",
    "MIXED",
    "LightState",
    "LightStateCache",
]
