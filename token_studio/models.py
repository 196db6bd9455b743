"""Design token data model.

Tokens, collections and themes are plain dataclasses. ``to_dict`` and
``from_dict`` use the camelCase keys the host and the JSON export expect.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .colors import RGBA, ColorValue


class TokenType(Enum):
    """Variable types supported by the host."""

    COLOR = "COLOR"
    NUMBER = "NUMBER"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"


class CollectionType(Enum):
    """Named collections tokens can belong to."""

    PRIMITIVES = "Primitives"
    TOKENS = "Tokens"
    COMPONENTS = "Components"
    TYPOGRAPHY = "Typography"
    SPACING = "Spacing"
    GAP = "Gap"
    ICON_SIZE = "Icon Size"
    RADIUS = "Radius"


class Separator(Enum):
    """Path separators for full paths."""

    SLASH = "/"
    DOT = "."
    DASH = "-"


class CaseStyle(Enum):
    """Case styles applied to path segments."""

    KEBAB = "kebab"
    CAMEL = "camel"
    SNAKE = "snake"
    PASCAL = "pascal"


class NeutralTint(Enum):
    """How a theme tints its neutral palette."""

    NONE = "none"
    WARM = "warm"
    COOL = "cool"
    CUSTOM = "custom"


TokenValue = ColorValue | float | int | str | bool

# Collections the plugin owns in the host document.
MANAGED_COLLECTIONS: tuple[str, ...] = (
    "Primitives",
    "Tokens",
    "Components",
    "Spacing",
    "Gap",
    "Icon Size",
    "Radius",
    "Typography",
    "Stroke",
    "Effects",
)

DEFAULT_PALETTES: tuple[tuple[str, str], ...] = (
    ("brand", "#3B82F6"),
    ("accent", "#8B5CF6"),
    ("neutral", "#6B7280"),
    ("success", "#10B981"),
    ("warning", "#F59E0B"),
    ("error", "#EF4444"),
    ("info", "#06B6D4"),
)


def value_matches_type(token_type: TokenType, value: Any) -> bool:
    """Check that a value has the runtime shape its token type requires."""
    if token_type is TokenType.COLOR:
        return isinstance(value, ColorValue)
    if token_type is TokenType.NUMBER:
        return isinstance(value, int | float) and not isinstance(value, bool)
    if token_type is TokenType.STRING:
        return isinstance(value, str)
    return isinstance(value, bool)


def value_to_dict(value: TokenValue) -> Any:
    """Serialize a token value."""
    if isinstance(value, ColorValue):
        return value.to_dict()
    return value


def value_from_dict(token_type: TokenType, data: Any) -> TokenValue:
    """Deserialize a token value for the given type."""
    if token_type is TokenType.COLOR:
        return ColorValue.from_dict(data)
    return data


@dataclass
class TokenSemantic:
    """Semantic classification used by the Tokens and Components tiers."""

    category: str  # e.g. "bg", "text", "action"
    subcategory: str  # e.g. "primary", "brand"
    variant: str | None = None  # e.g. "subtle", "strong"
    state: str | None = None  # e.g. "hover", "disabled"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category,
            "subcategory": self.subcategory,
            "variant": self.variant,
            "state": self.state,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenSemantic":
        """Create from dictionary."""
        return cls(
            category=data["category"],
            subcategory=data["subcategory"],
            variant=data.get("variant"),
            state=data.get("state"),
        )


@dataclass
class TokenReference:
    """Full paths of the tokens a derived token takes its value from."""

    light: str
    dark: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"light": self.light, "dark": self.dark}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenReference":
        """Create from dictionary."""
        return cls(light=data["light"], dark=data.get("dark"))


@dataclass
class Token:
    """A named, typed design value addressable by its full path."""

    id: str
    name: str  # Leaf segment, e.g. "brand-500"
    path: list[str]  # Segments before the name, e.g. ["colors", "brand"]
    full_path: str  # Natural key, e.g. "colors/brand/brand-500"
    type: TokenType
    value: TokenValue
    collection: str = CollectionType.PRIMITIVES.value
    enabled: bool = True
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    semantic: TokenSemantic | None = None
    references: TokenReference | None = None
    figma_id: str | None = None  # Host variable id once synced
    mode_values: dict[str, TokenValue] | None = None  # Per-mode values
    created_at: int = 0  # Epoch milliseconds
    updated_at: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "path": list(self.path),
            "fullPath": self.full_path,
            "type": self.type.value,
            "value": value_to_dict(self.value),
            "collection": self.collection,
            "enabled": self.enabled,
            "description": self.description,
            "tags": list(self.tags),
            "semantic": self.semantic.to_dict() if self.semantic else None,
            "references": self.references.to_dict() if self.references else None,
            "figmaId": self.figma_id,
            "modeValues": (
                {mode: value_to_dict(v) for mode, v in self.mode_values.items()}
                if self.mode_values is not None
                else None
            ),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Token":
        """Create from dictionary."""
        token_type = TokenType(data["type"])
        mode_values = data.get("modeValues")
        return cls(
            id=data["id"],
            name=data["name"],
            path=list(data.get("path", [])),
            full_path=data["fullPath"],
            type=token_type,
            value=value_from_dict(token_type, data["value"]),
            collection=data.get("collection", CollectionType.PRIMITIVES.value),
            enabled=data.get("enabled", True),
            description=data.get("description"),
            tags=list(data.get("tags") or []),
            semantic=(
                TokenSemantic.from_dict(data["semantic"])
                if data.get("semantic")
                else None
            ),
            references=(
                TokenReference.from_dict(data["references"])
                if data.get("references")
                else None
            ),
            figma_id=data.get("figmaId"),
            mode_values=(
                {m: value_from_dict(token_type, v) for m, v in mode_values.items()}
                if mode_values is not None
                else None
            ),
            created_at=data.get("createdAt", 0),
            updated_at=data.get("updatedAt", 0),
        )

    @property
    def host_value(self) -> Any:
        """The value in the shape the host stores (RGBA dict for colors)."""
        return host_value(self.value)


def host_value(value: TokenValue) -> Any:
    """Convert a token value into the shape the host stores."""
    if isinstance(value, ColorValue):
        return value.rgba.to_dict()
    return value


@dataclass
class CollectionMode:
    """A variant axis within a collection, e.g. light or dark."""

    id: str
    name: str
    is_default: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"id": self.id, "name": self.name, "isDefault": self.is_default}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CollectionMode":
        """Create from dictionary."""
        return cls(
            id=data["id"], name=data["name"], is_default=data.get("isDefault", False)
        )


@dataclass
class Collection:
    """A named partition of tokens with its own ordered mode list."""

    name: str
    modes: list[CollectionMode] = field(default_factory=list)
    figma_id: str | None = None
    token_count: int = 0  # Derived; recomputed by the store

    @property
    def default_mode(self) -> CollectionMode | None:
        """The mode marked as default, else the first mode."""
        for mode in self.modes:
            if mode.is_default:
                return mode
        return self.modes[0] if self.modes else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "modes": [mode.to_dict() for mode in self.modes],
            "figmaId": self.figma_id,
            "tokenCount": self.token_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Collection":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            modes=[CollectionMode.from_dict(m) for m in data.get("modes", [])],
            figma_id=data.get("figmaId"),
            token_count=data.get("tokenCount", 0),
        )


def default_collections() -> list[Collection]:
    """Collections every store starts with."""
    return [
        Collection(
            name=CollectionType.PRIMITIVES.value,
            modes=[CollectionMode("default", "Default", is_default=True)],
        ),
        Collection(
            name=CollectionType.TOKENS.value,
            modes=[
                CollectionMode("light", "light", is_default=True),
                CollectionMode("dark", "dark"),
            ],
        ),
        Collection(
            # Components follow the Tokens modes through their references.
            name=CollectionType.COMPONENTS.value,
            modes=[CollectionMode("default", "Default", is_default=True)],
        ),
    ]


@dataclass
class Theme:
    """A brand-level variation producing light and/or dark modes."""

    id: str  # e.g. "default", "green"
    name: str
    brand_color: str  # Base brand hex
    accent_color: str | None = None
    neutral_tint: NeutralTint = NeutralTint.NONE
    custom_neutral_hex: str | None = None
    has_light_mode: bool = True
    has_dark_mode: bool = True
    is_system: bool = False  # System themes cannot be deleted
    created_at: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "brandColor": self.brand_color,
            "accentColor": self.accent_color,
            "neutralTint": self.neutral_tint.value,
            "customNeutralHex": self.custom_neutral_hex,
            "hasLightMode": self.has_light_mode,
            "hasDarkMode": self.has_dark_mode,
            "isSystem": self.is_system,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Theme":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            brand_color=data["brandColor"],
            accent_color=data.get("accentColor"),
            neutral_tint=NeutralTint(data.get("neutralTint", "none")),
            custom_neutral_hex=data.get("customNeutralHex"),
            has_light_mode=data.get("hasLightMode", True),
            has_dark_mode=data.get("hasDarkMode", True),
            is_system=data.get("isSystem", False),
            created_at=data.get("createdAt", 0),
        )


__all__ = [
    "RGBA",
    "CaseStyle",
    "Collection",
    "CollectionMode",
    "CollectionType",
    "ColorValue",
    "DEFAULT_PALETTES",
    "MANAGED_COLLECTIONS",
    "NeutralTint",
    "Separator",
    "Theme",
    "Token",
    "TokenReference",
    "TokenSemantic",
    "TokenType",
    "TokenValue",
    "default_collections",
    "host_value",
    "value_matches_type",
]
