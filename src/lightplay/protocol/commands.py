"""BLE protocol commands for LightPlay devices."""

from __future__ import annotations

import random
from enum import IntEnum
from typing import Final

from ..exceptions import InvalidArgumentError
from ..models.enums import CONCRETE_COLORS, LightColor, LightPort


class CommandOffset(IntEnum):
    """Operation offsets added to a port byte to form byte 0 of a frame."""

    SET = 0        # Immediate set color / immediate off
    FADE_TO = 2    # Fade to color
    FADE_OFF = 3   # Fade out


# Protocol constants (Nordic UART style service)
SERVICE_UUID = "6e400001-b5a3-f393-e0a9-e50e24dcca9e"
RX_CHARACTERISTIC_UUID = "6e400002-b5a3-f393-e0a9-e50e24dcca9e"  # Host -> device writes
TX_CHARACTERISTIC_UUID = "6e400003-b5a3-f393-e0a9-e50e24dcca9e"  # Device -> host notifications

FRAME_LENGTH = 9
COLOR_PAYLOAD_LENGTH = 8

# Send pacing
SEND_INTERVAL = 0.3  # Seconds each light command takes to complete
SEND_RATE_MAX = 20  # Writes per second admitted by the rate limiter

# Fade duration configuration, sent once per connection
FADE_DURATION_COMMAND = 69
FADE_DURATION_SECONDS = 2

PORT_BYTES: Final[dict[LightPort, int]] = {
    LightPort.LIGHT_1: 72,
    LightPort.LIGHT_2: 80,
    LightPort.LIGHT_3: 88,
    LightPort.ALL: 64,
}

# Four big-endian uint16 channel levels (0-4095) per color
COLOR_BYTES: Final[dict[LightColor, bytes]] = {
    LightColor.WHITE: bytes([0, 0, 0, 0, 0, 0, 15, 255]),
    LightColor.RED: bytes([15, 255, 0, 0, 0, 0, 0, 0]),
    LightColor.ORANGE: bytes([10, 240, 4, 176, 0, 0, 0, 0]),
    LightColor.YELLOW: bytes([8, 52, 7, 108, 0, 0, 0, 0]),
    LightColor.GREEN: bytes([0, 0, 15, 255, 0, 0, 0, 0]),
    LightColor.BLUE: bytes([0, 0, 0, 0, 15, 255, 0, 0]),
    LightColor.MAGENTA: bytes([7, 208, 0, 0, 11, 184, 0, 0]),
}

_OFF_PAYLOAD = bytes(COLOR_PAYLOAD_LENGTH)


def port_byte(port: LightPort) -> int:
    """Get the base selector byte for a port.

    Raises:
        InvalidArgumentError: If port is not a LightPort
    """
    try:
        return PORT_BYTES[port]
    except KeyError as e:
        raise InvalidArgumentError(f"Unknown light port: {port!r}") from e


def color_bytes(color: LightColor) -> bytes:
    """Get the 8-byte payload for a concrete color.

    Raises:
        InvalidArgumentError: If color is unknown or is an unresolved SURPRISE
    """
    try:
        return COLOR_BYTES[color]
    except KeyError as e:
        raise InvalidArgumentError(f"No payload for light color: {color!r}") from e


def resolve_color(
        color: LightColor,
        current: LightColor | bool,
        rng: random.Random | None = None,
) -> LightColor:
    """Resolve SURPRISE to a random concrete color.

    Draws uniformly from the concrete colors and redraws while the result
    equals the current color. Concrete colors are returned unchanged.

    Args:
        color: Requested color
        current: Current color of the target, or MIXED for disagreeing lights
        rng: Random source (default: module-level random)

    Returns:
        A concrete LightColor
    """
    if color != LightColor.SURPRISE:
        return color

    choice = (rng or random).choice
    while True:
        resolved = choice(CONCRETE_COLORS)
        if resolved != current:
            return resolved


def _build_frame(port: LightPort, offset: CommandOffset, payload: bytes) -> bytes:
    return bytes([port_byte(port) + offset]) + payload


def build_set_color_command(port: LightPort, color: LightColor) -> bytes:
    """Build command to switch port on to color immediately.

    Format:
        [port:1][color:8]
    """
    return _build_frame(port, CommandOffset.SET, color_bytes(color))


def build_off_command(port: LightPort) -> bytes:
    """Build command to switch port off immediately.

    Format:
        [port:1][zero:8]
    """
    return _build_frame(port, CommandOffset.SET, _OFF_PAYLOAD)


def build_fade_to_color_command(port: LightPort, color: LightColor) -> bytes:
    """Build command to fade port to color.

    Format:
        [port+2:1][color:8]
    """
    return _build_frame(port, CommandOffset.FADE_TO, color_bytes(color))


def build_fade_off_command(port: LightPort) -> bytes:
    """Build command to fade port out.

    Format:
        [port+3:1][zero:8]
    """
    return _build_frame(port, CommandOffset.FADE_OFF, _OFF_PAYLOAD)


def build_reset_command() -> bytes:
    """Build command that switches all lights off, sent on connect."""
    return build_off_command(LightPort.ALL)


def build_fade_duration_command(seconds: int = FADE_DURATION_SECONDS) -> bytes:
    """Build command to configure the fade duration.

    Format:
        [69:1][seconds:1]

    Raises:
        InvalidArgumentError: If seconds does not fit in one byte
    """
    if not 0 <= seconds <= 0xFF:
        raise InvalidArgumentError(
            f"Fade duration out of range: {seconds} (must be 0-255)"
        )
    return bytes([FADE_DURATION_COMMAND, seconds])
