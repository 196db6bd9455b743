"""Design token management core.

Main components:
- colors: Hex/RGBA conversion and shade derivation
- models: Token, collection and theme data model
- store: In-memory token store with upsert-by-path semantics
- themes: Theme registry and mode naming
- breakpoints: Breakpoint presets and responsive mode naming
- generators: Primitive, semantic and component derivation pipelines
- sync: Diff engine and host message contract
- export: JSON and CSS export
"""

__version__ = "1.0.0"

from .breakpoints import Breakpoint, BreakpointConfig
from .colors import RGBA, ColorValue, color_value, hex_to_rgba, rgba_to_hex, shade
from .config import StudioConfig, load_config
from .errors import TokenStudioError, ValidationError
from .export import ExportOptions, export_css, export_json
from .generators import generate_all
from .models import Collection, CollectionMode, Theme, Token, TokenType
from .paths import build_full_path, parse_full_path
from .store import TokenStore
from .themes import ThemeRegistry

__all__ = [
    "RGBA",
    "Breakpoint",
    "BreakpointConfig",
    "Collection",
    "CollectionMode",
    "ColorValue",
    "ExportOptions",
    "StudioConfig",
    "Theme",
    "ThemeRegistry",
    "Token",
    "TokenStore",
    "TokenStudioError",
    "TokenType",
    "ValidationError",
    "__version__",
    "build_full_path",
    "color_value",
    "export_css",
    "export_json",
    "generate_all",
    "hex_to_rgba",
    "load_config",
    "parse_full_path",
    "rgba_to_hex",
    "shade",
]
