"""Theme registry.

Each theme is a brand variation that materializes one variable mode per
enabled light/dark variant. The system theme ``default`` always exists.
"""

import re
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from .colors import is_valid_hex
from .errors import (
    DuplicateThemeError,
    InvalidHexError,
    SystemThemeError,
    ValidationError,
)
from .models import NeutralTint, Theme
from .store import now_ms
from .token_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.STORE)

DEFAULT_THEME_ID = "default"


def theme_id_from_name(name: str) -> str:
    """Derive a theme id: lowercase with whitespace collapsed to '-'."""
    return re.sub(r"\s+", "-", name.strip().lower())


def theme_modes(theme: Theme) -> list[str]:
    """Mode names a theme materializes, light first."""
    modes = []
    if theme.has_light_mode:
        modes.append("light" if theme.id == DEFAULT_THEME_ID else f"{theme.id}-light")
    if theme.has_dark_mode:
        modes.append("dark" if theme.id == DEFAULT_THEME_ID else f"{theme.id}-dark")
    return modes


def mode_variant(mode_name: str) -> str:
    """Whether a mode name is a light or dark variant."""
    return "dark" if mode_name == "dark" or mode_name.endswith("-dark") else "light"


def system_theme(created_at: int = 0) -> Theme:
    return Theme(
        id=DEFAULT_THEME_ID,
        name="Default",
        brand_color="#3B82F6",
        accent_color="#8B5CF6",
        has_light_mode=True,
        has_dark_mode=True,
        is_system=True,
        created_at=created_at,
    )


class ThemeRegistry:
    """Ordered set of themes, seeded with the system theme."""

    def __init__(self, clock: Callable[[], int] | None = None):
        self._clock = clock or now_ms
        self._themes: dict[str, Theme] = {
            DEFAULT_THEME_ID: system_theme(self._clock())
        }

    @property
    def themes(self) -> list[Theme]:
        """Themes in registry order."""
        return list(self._themes.values())

    def get(self, theme_id: str) -> Theme | None:
        return self._themes.get(theme_id)

    def __len__(self) -> int:
        return len(self._themes)

    def all_modes(self) -> list[str]:
        """Every (theme, variant) mode name in registry order."""
        return [mode for theme in self._themes.values() for mode in theme_modes(theme)]

    def create(
        self,
        name: str,
        brand_color: str,
        accent_color: str | None = None,
        neutral_tint: NeutralTint | str = NeutralTint.NONE,
        custom_neutral_hex: str | None = None,
        has_light_mode: bool = True,
        has_dark_mode: bool = True,
    ) -> Theme:
        """Add a user theme.

        Raises:
            ValidationError: On an empty name, malformed colors, a duplicate
                name or id, or no enabled modes.
        """
        theme = Theme(
            id=theme_id_from_name(name),
            name=name.strip(),
            brand_color=brand_color,
            accent_color=accent_color,
            neutral_tint=NeutralTint(neutral_tint),
            custom_neutral_hex=custom_neutral_hex,
            has_light_mode=has_light_mode,
            has_dark_mode=has_dark_mode,
            is_system=False,
            created_at=self._clock(),
        )
        self._validate(theme)
        if theme.id in self._themes:
            raise DuplicateThemeError(theme.name)

        self._themes[theme.id] = theme
        logger.info(f"Created theme '{theme.name}' ({', '.join(theme_modes(theme))})")
        return theme

    def update(self, theme_id: str, **changes: Any) -> Theme | None:
        """Edit a theme. Returns None if the id is unknown.

        Raises:
            SystemThemeError: If the id of a system theme would change.
            ValidationError: If the edited theme is invalid.
        """
        theme = self._themes.get(theme_id)
        if theme is None:
            return None

        new_id = changes.get("id", theme.id)
        if theme.is_system and (new_id != theme.id or changes.get("is_system") is False):
            raise SystemThemeError(theme.id, "rename")
        if "neutral_tint" in changes:
            changes["neutral_tint"] = NeutralTint(changes["neutral_tint"])

        updated = replace(theme, **changes)
        self._validate(updated, ignore_id=theme_id)
        if updated.id != theme_id and updated.id in self._themes:
            raise DuplicateThemeError(updated.name)

        if updated.id != theme_id:
            self._themes = {
                (updated.id if key == theme_id else key): (
                    updated if key == theme_id else value
                )
                for key, value in self._themes.items()
            }
        else:
            self._themes[theme_id] = updated
        return updated

    def delete(self, theme_id: str) -> bool:
        """Remove a user theme. Returns False if the id is unknown.

        Raises:
            SystemThemeError: If the theme is a system theme.
        """
        theme = self._themes.get(theme_id)
        if theme is None:
            return False
        if theme.is_system:
            raise SystemThemeError(theme_id, "delete")
        del self._themes[theme_id]
        return True

    def _validate(self, theme: Theme, ignore_id: str | None = None) -> None:
        if not theme.name:
            raise ValidationError("Theme name cannot be empty")
        if not theme.id:
            raise ValidationError("Theme id cannot be empty")

        for color in (theme.brand_color, theme.accent_color, theme.custom_neutral_hex):
            if color is not None and not is_valid_hex(color):
                raise InvalidHexError(color)
        if theme.neutral_tint is NeutralTint.CUSTOM and not theme.custom_neutral_hex:
            raise ValidationError(
                "A custom neutral tint needs a tint color",
                suggestion="Set custom_neutral_hex or pick warm/cool",
            )
        if not (theme.has_light_mode or theme.has_dark_mode):
            raise ValidationError("A theme needs at least one of light or dark mode")

        lowered = theme.name.lower()
        for other in self._themes.values():
            if other.id != ignore_id and other.name.lower() == lowered:
                raise DuplicateThemeError(theme.name)
