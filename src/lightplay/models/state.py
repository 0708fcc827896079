"""Last-known light state, used to suppress redundant commands."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final, Literal

from ..exceptions import InvalidArgumentError
from .enums import LightColor, LightPort, LightStatus

# Returned by aggregate reads on LightPort.ALL when the three lights disagree
MIXED: Final = False

_PORT_INDEX: Final[dict[LightPort, int]] = {
    LightPort.LIGHT_1: 0,
    LightPort.LIGHT_2: 1,
    LightPort.LIGHT_3: 2,
}


@dataclass(slots=True)
class LightState:
    """Status and color of one physical light."""

    status: LightStatus = LightStatus.OFF
    color: LightColor = LightColor.WHITE


class LightStateCache:
    """Record of the three lights plus the LightPort.ALL aggregate view.

    The cache is optimistic: it reflects the frames the session wrote, not
    anything reported by the device. The session resets it whenever a new
    connection is established, because the device is switched off as part
    of connection setup.
    """

    def __init__(self) -> None:
        self._lights: tuple[LightState, LightState, LightState] = (
            LightState(),
            LightState(),
            LightState(),
        )

    def reset(self) -> None:
        """Restore every light to OFF / WHITE."""
        for light in self._lights:
            light.status = LightStatus.OFF
            light.color = LightColor.WHITE

    @property
    def lights(self) -> tuple[LightState, ...]:
        """Copies of the three light records, in port order."""
        return tuple(replace(light) for light in self._lights)

    def _targets(self, port: LightPort) -> tuple[LightState, ...]:
        if port == LightPort.ALL:
            return self._lights
        try:
            return (self._lights[_PORT_INDEX[port]],)
        except KeyError as e:
            raise InvalidArgumentError(f"Unknown light port: {port!r}") from e

    def status_of(self, port: LightPort) -> LightStatus | Literal[False]:
        """Status of one light, or the common status of all lights.

        Returns MIXED if port is ALL and the lights disagree.
        """
        statuses = {light.status for light in self._targets(port)}
        if len(statuses) != 1:
            return MIXED
        return statuses.pop()

    def color_of(self, port: LightPort) -> LightColor | Literal[False]:
        """Color of one light, or the common color of all lights.

        Returns MIXED if port is ALL and the lights disagree.
        """
        colors = {light.color for light in self._targets(port)}
        if len(colors) != 1:
            return MIXED
        return colors.pop()

    def apply_on(self, port: LightPort, color: LightColor) -> None:
        """Record that port was switched on (or faded) to color."""
        if color == LightColor.SURPRISE:
            raise InvalidArgumentError("SURPRISE must be resolved before it is stored")
        for light in self._targets(port):
            light.status = LightStatus.ON
            light.color = color

    def apply_off(self, port: LightPort) -> None:
        """Record that port was switched (or faded) off."""
        for light in self._targets(port):
            light.status = LightStatus.OFF

    def needs_on(self, port: LightPort, color: LightColor) -> bool:
        """Whether switching port on to color would change anything.

        A requested SURPRISE never matches a stored color.
        """
        return not (
            self.status_of(port) == LightStatus.ON
            and self.color_of(port) == color
        )

    def needs_off(self, port: LightPort) -> bool:
        """Whether switching port off would change anything."""
        return self.status_of(port) != LightStatus.OFF
