"""Configuration models and loader.

Settings live in an optional ``token-studio.config.json`` in the project
directory. Keys may be camelCase (as written by the plugin UI) or
snake_case.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .breakpoints import (
    BREAKPOINT_PRESETS,
    DEFAULT_PRESET,
    Breakpoint,
    BreakpointConfig,
    preset_breakpoints,
)
from .colors import is_valid_hex
from .errors import ConfigurationError
from .models import DEFAULT_PALETTES, CaseStyle, NeutralTint, Separator
from .token_logging import get_logger

logger = get_logger()

CONFIG_FILENAME = "token-studio.config.json"


class StoreSettings(BaseModel):
    """Token store settings."""

    separator: Separator = Field(default=Separator.SLASH, description="Path separator")
    case_style: CaseStyle = Field(
        default=CaseStyle.KEBAB, description="Case style for path segments"
    )
    export_format: str = Field(default="json", description="Default export format")
    auto_sync: bool = Field(default=False, description="Sync after every change")
    dark_mode_enabled: bool = Field(default=True, description="Generate dark modes")


class SyncSettings(BaseModel):
    """Host synchronization settings."""

    include_deletes: bool = Field(
        default=False, description="Report host-only variables as deletions"
    )
    preserve_unmanaged: bool = Field(
        default=True, description="Never touch collections the plugin does not own"
    )
    sync_scopes: bool = Field(default=True, description="Sync variable scopes")
    timeout_seconds: float | None = Field(
        default=None, gt=0, description="Fail host requests after this many seconds"
    )


class LoggingSettings(BaseModel):
    """Logging settings."""

    level: str = Field(default="INFO", description="Console log level")
    log_format: str = Field(default="text", description="File log format: text or json")
    log_file: Path | None = Field(default=None, description="Optional log file")


class PaletteInput(BaseModel):
    """A named base color for palette generation."""

    name: str
    hex: str

    @field_validator("hex")
    @classmethod
    def _check_hex(cls, value: str) -> str:
        if not is_valid_hex(value):
            raise ValueError(f"invalid hex color: {value}")
        return value


class GeneratorSettings(BaseModel):
    """Default inputs for the derivation pipelines."""

    palettes: list[PaletteInput] = Field(
        default_factory=lambda: [
            PaletteInput(name=name, hex=hex_value) for name, hex_value in DEFAULT_PALETTES
        ]
    )
    scale: str = Field(default="fine", description="Color scale: fine or legacy")
    base_font_size: float = Field(default=16, gt=0)
    type_scale_ratio: float = Field(default=1.25, gt=1)
    font_body: str = Field(default="Inter")
    font_heading: str = Field(default="Inter")
    font_mono: str = Field(default="JetBrains Mono")
    spacing_base: float = Field(default=4, gt=0)
    spacing_scale: str = Field(default="fibonacci")
    radius_base: float = Field(default=4, ge=0)
    shadow_color: str = Field(default="#000000")
    shadow_opacity: float = Field(default=10, ge=0, le=100)

    @field_validator("scale")
    @classmethod
    def _check_scale(cls, value: str) -> str:
        if value not in ("fine", "legacy"):
            raise ValueError("scale must be 'fine' or 'legacy'")
        return value

    @field_validator("spacing_scale")
    @classmethod
    def _check_spacing_scale(cls, value: str) -> str:
        if value not in ("linear", "fibonacci", "golden"):
            raise ValueError("spacing_scale must be linear, fibonacci or golden")
        return value


class BreakpointInput(BaseModel):
    """A custom breakpoint replacing the preset list."""

    id: str
    name: str
    value: int = Field(gt=0)
    description: str | None = None


class BreakpointSettings(BaseModel):
    """Breakpoints that become the modes of responsive collections."""

    preset: str = Field(default=DEFAULT_PRESET, description="Breakpoint preset")
    breakpoints: list[BreakpointInput] = Field(
        default_factory=list, description="Custom breakpoints; overrides the preset"
    )
    default_breakpoint: str = Field(default="desktop")
    show_value_in_mode_name: bool = Field(
        default=True, description="Name modes like 'Desktop (1440px)'"
    )

    @field_validator("preset")
    @classmethod
    def _check_preset(cls, value: str) -> str:
        if value not in BREAKPOINT_PRESETS:
            raise ValueError(f"preset must be one of: {', '.join(BREAKPOINT_PRESETS)}")
        return value

    def to_config(self) -> BreakpointConfig:
        if self.breakpoints:
            breakpoints = [
                Breakpoint(b.id, b.name, b.value, order=i, description=b.description)
                for i, b in enumerate(self.breakpoints)
            ]
        else:
            breakpoints = preset_breakpoints(self.preset)
        return BreakpointConfig(
            breakpoints=breakpoints,
            default_breakpoint=self.default_breakpoint,
            show_value_in_mode_name=self.show_value_in_mode_name,
        )


class ThemeInput(BaseModel):
    """A user theme to register on top of the system theme."""

    name: str
    brand_color: str
    accent_color: str | None = None
    neutral_tint: NeutralTint = NeutralTint.NONE
    custom_neutral_hex: str | None = None
    has_light_mode: bool = True
    has_dark_mode: bool = True


class StudioConfig(BaseModel):
    """Top-level configuration."""

    settings: StoreSettings = Field(default_factory=StoreSettings)
    sync: SyncSettings = Field(default_factory=SyncSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    generators: GeneratorSettings = Field(default_factory=GeneratorSettings)
    breakpoints: BreakpointSettings = Field(default_factory=BreakpointSettings)
    themes: list[ThemeInput] = Field(default_factory=list)


_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_keys(data: Any) -> Any:
    """Recursively convert camelCase dict keys to snake_case."""
    if isinstance(data, dict):
        return {_CAMEL_RE.sub("_", key).lower(): _snake_keys(v) for key, v in data.items()}
    if isinstance(data, list):
        return [_snake_keys(item) for item in data]
    return data


class ConfigLoader:
    """Loads StudioConfig from a project directory or explicit file."""

    def __init__(self, project_path: Path | None = None):
        self.project_path = project_path or Path.cwd()

    def load(self, config_path: Path | None = None) -> StudioConfig:
        """Load configuration.

        Args:
            config_path: Explicit config file. Defaults to
                ``<project>/token-studio.config.json``.

        Returns:
            Parsed configuration, or defaults when no file exists.

        Raises:
            ConfigurationError: If the file is not valid JSON or fails
                validation.
        """
        path = config_path or self.project_path / CONFIG_FILENAME
        if not path.exists():
            if config_path is not None:
                raise ConfigurationError(
                    f"Config file not found: {path}", config_file=str(path)
                )
            logger.debug("No token-studio config found, using defaults")
            return StudioConfig()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}", config_file=str(path)
            ) from e

        return self.from_dict(data, source=str(path))

    @staticmethod
    def from_dict(data: dict[str, Any], source: str | None = None) -> StudioConfig:
        """Validate a raw config mapping."""
        try:
            config = StudioConfig.model_validate(_snake_keys(data))
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e.error_count()} error(s): "
                + "; ".join(
                    f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                ),
                config_file=source,
            ) from e
        logger.debug(f"Loaded config from {source or 'mapping'}")
        return config


def load_config(
    project_path: Path | None = None, config_path: Path | None = None
) -> StudioConfig:
    """Convenience wrapper around ConfigLoader."""
    return ConfigLoader(project_path).load(config_path)
