"""BLE protocol implementation."""

from .commands import (
    COLOR_BYTES,
    FADE_DURATION_SECONDS,
    FRAME_LENGTH,
    PORT_BYTES,
    RX_CHARACTERISTIC_UUID,
    SEND_INTERVAL,
    SEND_RATE_MAX,
    SERVICE_UUID,
    TX_CHARACTERISTIC_UUID,
    CommandOffset,
    build_fade_duration_command,
    build_fade_off_command,
    build_fade_to_color_command,
    build_off_command,
    build_reset_command,
    build_set_color_command,
    color_bytes,
    port_byte,
    resolve_color,
)

__all__ = [
    "CommandOffset",
    "SERVICE_UUID",
    "RX_CHARACTERISTIC_UUID",
    "TX_CHARACTERISTIC_UUID",
    "FRAME_LENGTH",
    "SEND_INTERVAL",
    "SEND_RATE_MAX",
    "FADE_DURATION_SECONDS",
    "PORT_BYTES",
    "COLOR_BYTES",
    "port_byte",
    "color_bytes",
    "resolve_color",
    "build_set_color_command",
    "build_off_command",
    "build_fade_to_color_command",
    "build_fade_off_command",
    "build_reset_command",
    "build_fade_duration_command",
]
