"""Unit tests for configuration loading."""

import json
from pathlib import Path

import pytest

from token_studio.config import (
    CONFIG_FILENAME,
    ConfigLoader,
    GeneratorSettings,
    StudioConfig,
    load_config,
)
from token_studio.errors import ConfigurationError
from token_studio.models import CaseStyle, NeutralTint, Separator


class TestDefaults:
    """Tests for default configuration."""

    def test_defaults(self):
        """Test the default settings."""
        config = StudioConfig()

        assert config.settings.separator is Separator.SLASH
        assert config.settings.case_style is CaseStyle.KEBAB
        assert config.sync.include_deletes is False
        assert config.sync.timeout_seconds is None
        assert config.generators.scale == "fine"
        assert [p.name for p in config.generators.palettes][:3] == [
            "brand",
            "accent",
            "neutral",
        ]
        assert config.themes == []

    def test_missing_file_uses_defaults(self, tmp_path: Path):
        """Test a project without a config file."""
        assert load_config(tmp_path) == StudioConfig()

    def test_missing_explicit_file(self, tmp_path: Path):
        """Test an explicit path must exist."""
        with pytest.raises(ConfigurationError):
            load_config(tmp_path, tmp_path / "nope.json")


class TestLoading:
    """Tests for reading config files."""

    def test_camel_case_keys(self, tmp_path: Path):
        """Test keys written by the plugin UI are accepted."""
        (tmp_path / CONFIG_FILENAME).write_text(
            json.dumps(
                {
                    "settings": {"separator": ".", "caseStyle": "camel"},
                    "sync": {"includeDeletes": True, "timeoutSeconds": 30},
                    "generators": {"baseFontSize": 18, "spacingScale": "golden"},
                    "themes": [
                        {
                            "name": "Green",
                            "brandColor": "#10B981",
                            "neutralTint": "cool",
                            "hasDarkMode": False,
                        }
                    ],
                }
            )
        )

        config = load_config(tmp_path)

        assert config.settings.separator is Separator.DOT
        assert config.settings.case_style is CaseStyle.CAMEL
        assert config.sync.include_deletes is True
        assert config.sync.timeout_seconds == 30
        assert config.generators.base_font_size == 18
        assert config.generators.spacing_scale == "golden"
        theme = config.themes[0]
        assert theme.brand_color == "#10B981"
        assert theme.neutral_tint is NeutralTint.COOL
        assert theme.has_dark_mode is False

    def test_snake_case_keys(self):
        """Test snake_case keys are accepted as-is."""
        config = ConfigLoader.from_dict({"store": {}, "sync": {"include_deletes": True}})

        assert config.sync.include_deletes is True

    def test_invalid_json(self, tmp_path: Path):
        """Test malformed JSON raises ConfigurationError."""
        path = tmp_path / CONFIG_FILENAME
        path.write_text("{not json")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(tmp_path)

        assert exc_info.value.details == {"config_file": str(path)}

    @pytest.mark.parametrize(
        "data",
        [
            {"settings": {"separator": "|"}},
            {"generators": {"scale": "coarse"}},
            {"generators": {"spacingScale": "cubic"}},
            {"generators": {"palettes": [{"name": "brand", "hex": "blue"}]}},
            {"generators": {"shadowOpacity": 150}},
            {"sync": {"timeoutSeconds": 0}},
        ],
    )
    def test_invalid_values(self, data):
        """Test field validation errors are reported."""
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ConfigLoader.from_dict(data)

    def test_generator_settings_model(self):
        """Test generator settings validate directly."""
        settings = GeneratorSettings(base_font_size=14, type_scale_ratio=1.2)

        assert settings.radius_base == 4
        assert settings.shadow_color == "#000000"
