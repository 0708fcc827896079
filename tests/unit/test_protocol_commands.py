import random

import pytest

from lightplay.exceptions import InvalidArgumentError
from lightplay.models.enums import CONCRETE_COLORS, LightColor, LightPort
from lightplay.protocol.commands import (
    FRAME_LENGTH,
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


class TestPortByte:
    """Test port selector table."""

    @pytest.mark.parametrize(
        ("port", "expected"),
        [
            (LightPort.LIGHT_1, 72),
            (LightPort.LIGHT_2, 80),
            (LightPort.LIGHT_3, 88),
            (LightPort.ALL, 64),
        ],
    )
    def test_port_byte_values(self, port, expected):
        """Test every port maps to the device selector byte."""
        assert port_byte(port) == expected

    def test_port_byte_accepts_menu_value(self):
        """Test host menu strings resolve like members."""
        assert port_byte("light 2") == 80

    def test_port_byte_unknown(self):
        """Test unknown ports are rejected."""
        with pytest.raises(InvalidArgumentError, match="Unknown light port"):
            port_byte("light 4")


class TestColorBytes:
    """Test color payload table."""

    @pytest.mark.parametrize(
        ("color", "expected"),
        [
            (LightColor.WHITE, [0, 0, 0, 0, 0, 0, 15, 255]),
            (LightColor.RED, [15, 255, 0, 0, 0, 0, 0, 0]),
            (LightColor.ORANGE, [10, 240, 4, 176, 0, 0, 0, 0]),
            (LightColor.YELLOW, [8, 52, 7, 108, 0, 0, 0, 0]),
            (LightColor.GREEN, [0, 0, 15, 255, 0, 0, 0, 0]),
            (LightColor.BLUE, [0, 0, 0, 0, 15, 255, 0, 0]),
            (LightColor.MAGENTA, [7, 208, 0, 0, 11, 184, 0, 0]),
        ],
    )
    def test_color_bytes_values(self, color, expected):
        """Test every concrete color maps to its 8-byte payload."""
        assert color_bytes(color) == bytes(expected)

    def test_color_bytes_rejects_surprise(self):
        """Test SURPRISE must be resolved before encoding."""
        with pytest.raises(InvalidArgumentError, match="No payload"):
            color_bytes(LightColor.SURPRISE)

    def test_color_bytes_rejects_unknown(self):
        """Test unknown colors raise instead of producing a payload."""
        with pytest.raises(InvalidArgumentError):
            color_bytes("purple")

    def test_invalid_argument_is_value_error(self):
        """Test InvalidArgumentError can be caught as ValueError."""
        with pytest.raises(ValueError):
            color_bytes("purple")


class TestCommandBuilders:
    """Test frame builders."""

    def test_build_set_color_command(self):
        """Test immediate color frame for light 2 red."""
        cmd = build_set_color_command(LightPort.LIGHT_2, LightColor.RED)
        assert len(cmd) == FRAME_LENGTH
        assert cmd == bytes([80, 15, 255, 0, 0, 0, 0, 0, 0])

    def test_build_off_command(self):
        """Test immediate off frame has an all-zero payload."""
        cmd = build_off_command(LightPort.LIGHT_3)
        assert cmd == bytes([88, 0, 0, 0, 0, 0, 0, 0, 0])

    def test_build_fade_to_color_command(self):
        """Test fade frame adds 2 to the port byte."""
        cmd = build_fade_to_color_command(LightPort.LIGHT_1, LightColor.MAGENTA)
        assert cmd == bytes([74, 7, 208, 0, 0, 11, 184, 0, 0])

    def test_build_fade_off_command(self):
        """Test fade-off frame adds 3 to the port byte."""
        cmd = build_fade_off_command(LightPort.ALL)
        assert cmd == bytes([67, 0, 0, 0, 0, 0, 0, 0, 0])

    def test_build_reset_command(self):
        """Test reset frame switches all lights off."""
        assert build_reset_command() == bytes([64, 0, 0, 0, 0, 0, 0, 0, 0])

    def test_build_fade_duration_command(self):
        """Test default fade duration frame is two seconds."""
        assert build_fade_duration_command() == bytes([69, 2])
        assert build_fade_duration_command(5) == bytes([69, 5])

    def test_build_fade_duration_command_out_of_range(self):
        """Test fade duration must fit in one byte."""
        with pytest.raises(InvalidArgumentError, match="out of range"):
            build_fade_duration_command(256)

    def test_command_offset_values(self):
        """Test operation offsets."""
        assert CommandOffset.SET == 0
        assert CommandOffset.FADE_TO == 2
        assert CommandOffset.FADE_OFF == 3


class TestResolveColor:
    """Test SURPRISE resolution."""

    def test_concrete_color_passes_through(self):
        """Test concrete colors are returned unchanged."""
        assert resolve_color(LightColor.BLUE, LightColor.BLUE) is LightColor.BLUE

    def test_surprise_never_returns_current_color(self):
        """Test 1000 draws for a green light never yield green."""
        rng = random.Random(1234)
        draws = {resolve_color(LightColor.SURPRISE, LightColor.GREEN, rng) for _ in range(1000)}

        assert LightColor.GREEN not in draws
        assert LightColor.SURPRISE not in draws
        assert draws == set(CONCRETE_COLORS) - {LightColor.GREEN}

    def test_surprise_with_mixed_current_accepts_any_color(self):
        """Test any concrete color is allowed when lights disagree."""
        rng = random.Random(99)
        draws = {resolve_color(LightColor.SURPRISE, False, rng) for _ in range(500)}
        assert draws == set(CONCRETE_COLORS)

    def test_surprise_redraws_until_different(self):
        """Test rejection sampling redraws instead of reassigning."""

        class _ScriptedRandom:
            def __init__(self, picks):
                self.picks = list(picks)
                self.calls = 0

            def choice(self, seq):
                self.calls += 1
                return self.picks.pop(0)

        rng = _ScriptedRandom([LightColor.RED, LightColor.RED, LightColor.YELLOW])

        assert resolve_color(LightColor.SURPRISE, LightColor.RED, rng) is LightColor.YELLOW
        assert rng.calls == 3
