"""Unit tests for breakpoints and their device modes."""

import pytest

from token_studio.breakpoints import (
    BREAKPOINT_PRESETS,
    Breakpoint,
    BreakpointConfig,
    preset_breakpoints,
)
from token_studio.config import BreakpointSettings, ConfigLoader
from token_studio.errors import ConfigurationError, ValidationError


class TestBreakpoint:
    """Tests for single breakpoints."""

    def test_device_from_id(self):
        """Test device-named breakpoints keep their device class."""
        assert Breakpoint("tablet", "Tablet", 2000).device == "tablet"

    @pytest.mark.parametrize(
        ("value", "device"),
        [
            (1920, "desktop"),
            (1024, "desktop"),
            (834, "tablet"),
            (600, "tablet"),
            (430, "mobile"),
        ],
    )
    def test_device_from_width(self, value, device):
        """Test other breakpoints pick a device class by width."""
        assert Breakpoint("custom", "Custom", value).device == device

    def test_round_trip(self):
        """Test camelCase serialization."""
        bp = Breakpoint("desktop", "Desktop", 1440, order=0, description="Large")

        assert Breakpoint.from_dict(bp.to_dict()) == bp


class TestBreakpointConfig:
    """Tests for the breakpoint list and mode naming."""

    def test_default_modes(self):
        """Test the web preset names Desktop, Tablet and Mobile modes."""
        config = BreakpointConfig()

        assert config.mode_names() == ["Desktop (1440px)", "Tablet (768px)", "Mobile (375px)"]
        assert config.default.id == "desktop"

    def test_modes_without_values(self):
        """Test widths can be left out of mode names."""
        config = BreakpointConfig(show_value_in_mode_name=False)

        assert config.mode_names() == ["Desktop", "Tablet", "Mobile"]

    def test_breakpoint_for_mode(self):
        """Test mode names map back with or without the width."""
        config = BreakpointConfig()

        assert config.breakpoint_for_mode("Tablet (768px)").id == "tablet"
        assert config.breakpoint_for_mode("Mobile").id == "mobile"
        assert config.breakpoint_for_mode("Watch") is None

    def test_add_appends(self):
        """Test added breakpoints take the next column."""
        config = BreakpointConfig()

        bp = config.add("wide", "Wide", 1920)

        assert bp.order == 3
        assert config.mode_names()[-1] == "Wide (1920px)"

    def test_add_rejects_duplicates_and_bad_widths(self):
        """Test duplicate ids and non-positive widths are rejected."""
        config = BreakpointConfig()

        with pytest.raises(ValidationError):
            config.add("desktop", "Desktop", 1440)
        with pytest.raises(ValidationError):
            config.add("zero", "Zero", 0)
        assert len(config.breakpoints) == 3

    def test_update(self):
        """Test edits are validated and unknown ids return None."""
        config = BreakpointConfig()

        assert config.update("tablet", value=820).value == 820
        assert config.update("missing", value=1) is None
        with pytest.raises(ValidationError):
            config.update("tablet", name=" ")

    def test_remove_renumbers(self):
        """Test removing a breakpoint closes the gap in column order."""
        config = BreakpointConfig()

        assert config.remove("desktop")
        assert not config.remove("desktop")
        assert [(bp.id, bp.order) for bp in config.sorted()] == [("tablet", 0), ("mobile", 1)]

    def test_reorder(self):
        """Test reordering keeps only the listed ids."""
        config = BreakpointConfig()

        config.reorder(["mobile", "desktop", "unknown"])

        assert [bp.id for bp in config.sorted()] == ["mobile", "desktop"]

    def test_apply_preset(self):
        """Test presets replace the breakpoint list."""
        config = BreakpointConfig()

        config.apply_preset("ios")

        assert len(config.breakpoints) == len(BREAKPOINT_PRESETS["ios"])
        assert config.sorted()[0].name == 'iPad Pro 12.9"'

    def test_unknown_preset(self):
        """Test unknown presets are rejected with the known names."""
        with pytest.raises(ValidationError) as exc_info:
            preset_breakpoints("watch")

        assert "web" in exc_info.value.suggestion

    def test_presets_are_copies(self):
        """Test editing a config never changes the preset table."""
        config = BreakpointConfig()

        config.update("desktop", value=1280)

        assert BREAKPOINT_PRESETS["web"][0].value == 1440

    def test_round_trip(self):
        """Test camelCase serialization."""
        config = BreakpointConfig(show_value_in_mode_name=False)

        data = config.to_dict()

        assert data["showValueInModeName"] is False
        assert BreakpointConfig.from_dict(data) == config


class TestBreakpointSettings:
    """Tests for breakpoint configuration."""

    def test_defaults(self):
        """Test the web preset is used by default."""
        config = BreakpointSettings().to_config()

        assert [bp.id for bp in config.sorted()] == ["desktop", "tablet", "mobile"]

    def test_custom_breakpoints_override_preset(self):
        """Test listed breakpoints replace the preset in order."""
        config = ConfigLoader.from_dict(
            {
                "breakpoints": {
                    "showValueInModeName": False,
                    "defaultBreakpoint": "large",
                    "breakpoints": [
                        {"id": "large", "name": "Large", "value": 1280},
                        {"id": "small", "name": "Small", "value": 360},
                    ],
                }
            }
        ).breakpoints.to_config()

        assert config.mode_names() == ["Large", "Small"]
        assert config.default.device == "desktop"

    def test_unknown_preset_rejected(self):
        """Test config validation names the bad preset."""
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.from_dict({"breakpoints": {"preset": "watch"}})

        assert "breakpoints.preset" in exc_info.value.message
