"""Test LightPlay enums and conversions."""

import pytest

from lightplay.exceptions import InvalidArgumentError
from lightplay.models.enums import CONCRETE_COLORS, LightColor, LightPort, LightStatus


class TestLightPort:
    """Test LightPort enum."""

    def test_light_port_values(self):
        """Test ports carry the host menu values."""
        assert LightPort.LIGHT_1.value == "light 1"
        assert LightPort.LIGHT_2.value == "light 2"
        assert LightPort.LIGHT_3.value == "light 3"
        assert LightPort.ALL.value == "all lights"

    def test_from_value(self):
        """Test conversion from member and menu string."""
        assert LightPort.from_value("all lights") is LightPort.ALL
        assert LightPort.from_value(LightPort.LIGHT_3) is LightPort.LIGHT_3

    def test_from_value_unknown(self):
        """Test unknown port strings raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="Unknown light port"):
            LightPort.from_value("light 9")


class TestLightColor:
    """Test LightColor enum."""

    def test_from_value(self):
        """Test conversion from menu string."""
        assert LightColor.from_value("magenta") is LightColor.MAGENTA
        assert LightColor.from_value("surprise") is LightColor.SURPRISE

    def test_from_value_unknown(self):
        """Test unknown colors raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="Unknown light color"):
            LightColor.from_value("purple")

    def test_concrete_colors(self):
        """Test the seven concrete colors, in palette order."""
        assert CONCRETE_COLORS == (
            LightColor.WHITE,
            LightColor.RED,
            LightColor.ORANGE,
            LightColor.YELLOW,
            LightColor.GREEN,
            LightColor.BLUE,
            LightColor.MAGENTA,
        )


class TestLightStatus:
    """Test LightStatus enum."""

    def test_light_status_values(self):
        """Test status values."""
        assert LightStatus.OFF.value == "off"
        assert LightStatus.ON.value == "on"
        assert LightStatus.FADING.value == "fading"
