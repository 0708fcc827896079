from __future__ import annotations

from enum import Enum

from ..exceptions import InvalidArgumentError


class LightPort(str, Enum):
    """Addressable lights.

    Values match the menu values used by the visual programming host, so
    commands can be issued with either the member or its string value.
    """
    LIGHT_1 = "light 1"
    LIGHT_2 = "light 2"
    LIGHT_3 = "light 3"
    ALL = "all lights"

    @classmethod
    def from_value(cls, value: LightPort | str) -> LightPort:
        """Convert a member or host menu value to LightPort."""
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidArgumentError(f"Unknown light port: {value!r}") from e


class LightColor(str, Enum):
    """Light palette plus the SURPRISE meta-color."""
    WHITE = "white"
    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    MAGENTA = "magenta"
    SURPRISE = "surprise"  # Resolved to a random concrete color at command time

    @classmethod
    def from_value(cls, value: LightColor | str) -> LightColor:
        """Convert a member or host menu value to LightColor."""
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidArgumentError(f"Unknown light color: {value!r}") from e


CONCRETE_COLORS: tuple[LightColor, ...] = tuple(
    color for color in LightColor if color is not LightColor.SURPRISE
)


class LightStatus(str, Enum):
    """Last-known status of one light.

    FADING exists for parity with the device model; fade commands record
    their target state instead.
    """
    OFF = "off"
    ON = "on"
    FADING = "fading"


class SessionState(Enum):
    """Connection lifecycle of a LightPlayDevice."""
    DISCONNECTED = "disconnected"
    SCANNING = "scanning"
    CONNECTED = "connected"
