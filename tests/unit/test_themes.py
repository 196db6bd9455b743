"""Unit tests for the theme registry."""

import pytest

from token_studio.errors import (
    DuplicateThemeError,
    InvalidHexError,
    SystemThemeError,
    ValidationError,
)
from token_studio.models import NeutralTint, Theme
from token_studio.themes import (
    DEFAULT_THEME_ID,
    mode_variant,
    theme_id_from_name,
    theme_modes,
)


class TestSystemTheme:
    """Tests for the built-in theme."""

    def test_registry_starts_with_system_theme(self, registry):
        """Test a new registry holds only the system theme."""
        assert len(registry) == 1
        theme = registry.get(DEFAULT_THEME_ID)
        assert theme.is_system is True
        assert theme_modes(theme) == ["light", "dark"]

    def test_system_theme_cannot_be_deleted(self, registry):
        """Test deleting the system theme is rejected."""
        with pytest.raises(SystemThemeError):
            registry.delete(DEFAULT_THEME_ID)

    def test_system_theme_id_is_fixed(self, registry):
        """Test renaming the system theme id is rejected."""
        with pytest.raises(SystemThemeError):
            registry.update(DEFAULT_THEME_ID, id="base")

    def test_system_theme_colors_editable(self, registry):
        """Test other system theme fields can change."""
        theme = registry.update(DEFAULT_THEME_ID, brand_color="#10B981")

        assert theme.brand_color == "#10B981"
        assert registry.get(DEFAULT_THEME_ID).brand_color == "#10B981"


class TestCreateTheme:
    """Tests for adding user themes."""

    def test_create_derives_id_and_modes(self, registry):
        """Test ids are lowercase with whitespace collapsed."""
        theme = registry.create("Ocean  Blue", "#0EA5E9")

        assert theme.id == "ocean-blue"
        assert theme.is_system is False
        assert theme_modes(theme) == ["ocean-blue-light", "ocean-blue-dark"]
        assert registry.all_modes() == [
            "light",
            "dark",
            "ocean-blue-light",
            "ocean-blue-dark",
        ]

    def test_dark_only_theme(self, registry):
        """Test a theme with only a dark variant."""
        theme = registry.create("Night", "#1E293B", has_light_mode=False)

        assert theme_modes(theme) == ["night-dark"]

    def test_duplicate_name_is_case_insensitive(self, registry):
        """Test names must be unique ignoring case."""
        registry.create("Forest", "#10B981")

        with pytest.raises(DuplicateThemeError):
            registry.create("forest", "#059669")

    def test_empty_name(self, registry):
        """Test a blank name is rejected."""
        with pytest.raises(ValidationError):
            registry.create("   ", "#10B981")

    def test_invalid_hex(self, registry):
        """Test malformed colors are rejected."""
        with pytest.raises(InvalidHexError):
            registry.create("Broken", "blue")

    def test_needs_a_mode(self, registry):
        """Test a theme must enable light or dark."""
        with pytest.raises(ValidationError):
            registry.create("Empty", "#10B981", has_light_mode=False, has_dark_mode=False)

    def test_custom_tint_needs_color(self, registry):
        """Test a custom tint requires a tint color."""
        with pytest.raises(ValidationError):
            registry.create("Tinted", "#10B981", neutral_tint="custom")

        theme = registry.create(
            "Tinted", "#10B981", neutral_tint="custom", custom_neutral_hex="#FF00FF"
        )
        assert theme.neutral_tint is NeutralTint.CUSTOM

    def test_failed_create_leaves_registry_unchanged(self, registry):
        """Test validation happens before insertion."""
        with pytest.raises(ValidationError):
            registry.create("Broken", "#12")

        assert len(registry) == 1


class TestUpdateAndDelete:
    """Tests for editing and removing user themes."""

    def test_rename_id_keeps_order(self, registry):
        """Test changing an id keeps the theme's position."""
        registry.create("Forest", "#10B981")
        registry.create("Ocean", "#0EA5E9")

        registry.update("forest", id="woods", name="Woods")

        assert [t.id for t in registry.themes] == ["default", "woods", "ocean"]
        assert registry.get("forest") is None

    def test_update_to_existing_name(self, registry):
        """Test renaming onto another theme's name is rejected."""
        registry.create("Forest", "#10B981")
        registry.create("Ocean", "#0EA5E9")

        with pytest.raises(DuplicateThemeError):
            registry.update("ocean", name="FOREST")

    def test_update_unknown(self, registry):
        """Test unknown ids return None."""
        assert registry.update("missing", name="x") is None

    def test_delete_user_theme(self, registry):
        """Test user themes can be deleted."""
        registry.create("Forest", "#10B981")

        assert registry.delete("forest") is True
        assert registry.delete("forest") is False
        assert len(registry) == 1


class TestModeHelpers:
    """Tests for mode naming helpers."""

    def test_theme_id_from_name(self):
        """Test id derivation."""
        assert theme_id_from_name("  Dark   Forest ") == "dark-forest"

    def test_mode_variant(self):
        """Test light/dark detection from mode names."""
        assert mode_variant("dark") == "dark"
        assert mode_variant("green-dark") == "dark"
        assert mode_variant("light") == "light"
        assert mode_variant("green-light") == "light"

    def test_theme_dict_round_trip(self):
        """Test camelCase serialization of themes."""
        theme = Theme(
            id="green",
            name="Green",
            brand_color="#10B981",
            neutral_tint=NeutralTint.WARM,
            has_dark_mode=False,
        )

        data = theme.to_dict()

        assert data["brandColor"] == "#10B981"
        assert data["neutralTint"] == "warm"
        assert Theme.from_dict(data) == theme
