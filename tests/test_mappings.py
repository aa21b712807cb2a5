"""Tests for command value mapping and hex color conversion."""

from __future__ import annotations

import pytest

from govee_node.errors import InvalidFormatError
from govee_node.mappings import (
    convert_value,
    hex_to_rgb,
    normalize_command_value,
    parse_generic_value,
    value_parameter,
)


class TestHexToRgb:
    """Hex strings convert to r/g/b channels."""

    @pytest.mark.parametrize(
        ("hex_color", "expected"),
        [
            ("#FF0000", {"r": 255, "g": 0, "b": 0}),
            ("#00FF00", {"r": 0, "g": 255, "b": 0}),
            ("#0000FF", {"r": 0, "g": 0, "b": 255}),
            ("#FFFFFF", {"r": 255, "g": 255, "b": 255}),
            ("#000000", {"r": 0, "g": 0, "b": 0}),
        ],
    )
    def test_primary_colors(self, hex_color: str, expected: dict) -> None:
        assert hex_to_rgb(hex_color) == expected

    def test_lowercase_without_hash(self) -> None:
        assert hex_to_rgb("00ff88") == {"r": 0, "g": 255, "b": 136}

    def test_mixed_case(self) -> None:
        assert hex_to_rgb("#fF8800") == {"r": 255, "g": 136, "b": 0}

    @pytest.mark.parametrize("bad", ["#ZZZZZZ", "#FFF", "#FF00000", "", "red", "##FF0000", " #FF0000 ", "#FF0000\n"])
    def test_invalid_strings(self, bad: str) -> None:
        with pytest.raises(InvalidFormatError, match="Invalid hex color"):
            hex_to_rgb(bad)

    def test_non_string(self) -> None:
        with pytest.raises(InvalidFormatError):
            hex_to_rgb(0xFF0000)  # type: ignore[arg-type]


class TestCommandValues:
    """Per-command value parameters and conversions."""

    def test_value_parameters(self) -> None:
        assert value_parameter("device", "turn") == "turnValue"
        assert value_parameter("device", "brightness") == "brightnessValue"
        assert value_parameter("device", "color") == "colorValue"
        assert value_parameter("device", "colorTem") == "colorTemValue"
        assert value_parameter("appliance", "mode") == "modeValue"
        assert value_parameter("appliance", "brightness") == "genericCommandValue"

    def test_brightness_is_int(self) -> None:
        assert convert_value("device", "brightness", 42.0) == 42

    def test_color_converts_hex(self) -> None:
        assert convert_value("device", "color", "#102030") == {"r": 16, "g": 32, "b": 48}

    def test_bad_number(self) -> None:
        with pytest.raises(InvalidFormatError, match="colorTem"):
            convert_value("device", "colorTem", "warm")

    def test_generic_json_or_raw(self) -> None:
        assert parse_generic_value('{"speed": 2}') == {"speed": 2}
        assert parse_generic_value("7") == 7
        assert parse_generic_value("not json") == "not json"
        assert convert_value("appliance", "nightMode", "true") is True

    def test_multi_command_color(self) -> None:
        assert normalize_command_value("color", "#FF0000") == {"r": 255, "g": 0, "b": 0}
        assert normalize_command_value("color", {"r": 1, "g": 2, "b": 3}) == {"r": 1, "g": 2, "b": 3}
        assert normalize_command_value("brightness", 10) == 10
