"""Unit tests for color math."""

import pytest

from token_studio.colors import (
    BLACK,
    FINE_SCALE,
    LEGACY_SCALE,
    RGBA,
    WHITE,
    ColorValue,
    blend,
    color_value,
    generate_shades,
    hex_to_rgba,
    is_valid_hex,
    rgba_to_hex,
    round_half_up,
    shade,
    shade_description,
)
from token_studio.errors import InvalidHexError


class TestHexParsing:
    """Tests for hex validation and parsing."""

    @pytest.mark.parametrize("value", ["#3B82F6", "3b82f6", "#FFF", "abc", " #000000 "])
    def test_valid_hex(self, value):
        """Test accepted hex forms."""
        assert is_valid_hex(value)

    @pytest.mark.parametrize("value", ["", "#12345", "#GGGGGG", "blue", "#3B82F6FF"])
    def test_invalid_hex(self, value):
        """Test rejected hex forms."""
        assert not is_valid_hex(value)

    def test_hex_to_rgba_channels(self):
        """Test channels are normalized to 0-1."""
        rgba = hex_to_rgba("#3B82F6")

        assert rgba.r == pytest.approx(59 / 255)
        assert rgba.g == pytest.approx(130 / 255)
        assert rgba.b == pytest.approx(246 / 255)
        assert rgba.a == 1.0

    def test_short_hex_expands(self):
        """Test 3-digit hex doubles each digit."""
        assert hex_to_rgba("#F0A") == hex_to_rgba("#FF00AA")

    def test_custom_alpha(self):
        """Test alpha is passed through."""
        assert hex_to_rgba("#000000", alpha=0.25).a == 0.25

    def test_invalid_hex_raises(self):
        """Test malformed input raises a validation error."""
        with pytest.raises(InvalidHexError) as exc_info:
            hex_to_rgba("not-a-color")

        assert "not-a-color" in exc_info.value.message


class TestHexFormatting:
    """Tests for RGBA to hex conversion."""

    @pytest.mark.parametrize(
        "value", ["#3B82F6", "#000000", "#FFFFFF", "#10B981", "#EF4444", "#7f7f7f"]
    )
    def test_round_trip(self, value):
        """Test hex -> rgba -> hex is identity up to case."""
        assert rgba_to_hex(hex_to_rgba(value)) == value.upper()

    def test_channels_are_clamped(self):
        """Test out-of-range channels clamp to 00/FF."""
        assert rgba_to_hex(RGBA(1.2, -0.1, 0.5)) == "#FF0080"

    def test_include_alpha(self):
        """Test the optional alpha byte."""
        assert rgba_to_hex(RGBA(1.0, 0.0, 0.0, 0.5), include_alpha=True) == "#FF000080"

    def test_round_half_up(self):
        """Test halves round up rather than to even."""
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(127.49) == 127

    def test_color_value_normalizes_hex(self):
        """Test color_value uppercases and expands the hex."""
        value = color_value("#abc")

        assert value.hex == "#AABBCC"
        assert value.rgba == hex_to_rgba("#AABBCC")

    def test_color_value_from_dict_rederives_hex(self):
        """Test the stored hex is recomputed from the channels."""
        value = ColorValue.from_dict(
            {"hex": "#000000", "rgba": {"r": 1.0, "g": 1.0, "b": 1.0}}
        )

        assert value.hex == "#FFFFFF"
        assert value.rgba.a == 1.0


class TestBlend:
    """Tests for linear interpolation."""

    def test_blend_endpoints(self):
        """Test amount 0 and 1 return the inputs."""
        assert blend(BLACK, WHITE, 0) == BLACK
        assert blend(BLACK, WHITE, 1) == WHITE

    def test_blend_midpoint(self):
        """Test halfway between black and white."""
        assert rgba_to_hex(blend(BLACK, WHITE, 0.5)) == "#808080"

    def test_blend_extrapolates(self):
        """Test amounts outside [0, 1] are not clamped."""
        assert blend(BLACK, WHITE, 2).r == pytest.approx(2.0)


class TestShades:
    """Tests for shade derivation."""

    def test_base_step_is_identity(self):
        """Test step 500 returns the base color exactly."""
        value = shade("#3B82F6", 500)

        assert value.hex == "#3B82F6"
        assert value.rgba == hex_to_rgba("#3B82F6")

    def test_lighter_step(self):
        """Test step 25 blends 95% toward white."""
        assert shade("#3B82F6", 25).hex == "#F5F9FF"

    def test_half_steps(self):
        """Test steps 250 and 750 are halfway to white and black."""
        assert shade("#000000", 250).hex == "#808080"
        assert shade("#FFFFFF", 750).hex == "#808080"

    @pytest.mark.parametrize("base", ["#3B82F6", "#10B981", "#6B7280", "#F59E0B"])
    def test_lightness_is_monotonic(self, base):
        """Test lightness never increases as the step increases."""
        shades = generate_shades(base, FINE_SCALE)
        lightness = [shades[step].rgba.lightness for step in FINE_SCALE]

        assert all(a >= b for a, b in zip(lightness, lightness[1:], strict=False))

    def test_scale_sizes(self):
        """Test the fine and legacy scales."""
        assert len(FINE_SCALE) == 31
        assert len(LEGACY_SCALE) == 11
        assert LEGACY_SCALE[0] == 25 and LEGACY_SCALE[-1] == 975

    def test_legacy_scenario(self):
        """Test the 11-step scale around a brand color."""
        shades = generate_shades("#3B82F6", LEGACY_SCALE)

        assert shades[500].hex == "#3B82F6"
        assert shades[25].rgba.lightness > shades[500].rgba.lightness
        assert shades[975].rgba.lightness < shades[500].rgba.lightness

    def test_shade_descriptions(self):
        """Test human-readable descriptions."""
        assert shade_description("brand", 500) == "brand base color"
        assert shade_description("brand", 25) == "brand lightened 95%"
        assert shade_description("brand", 750) == "brand darkened 50%"
