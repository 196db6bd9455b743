"""Color palette generation.

Expands named base colors into primitive COLOR tokens, one per enabled
step of a shade scale.
"""

from dataclasses import dataclass, field

from ..colors import (
    FINE_SCALE,
    LEGACY_SCALE,
    blend,
    hex_to_rgba,
    rgba_to_hex,
    shade,
    shade_description,
)
from ..models import DEFAULT_PALETTES, CollectionType, NeutralTint, Theme, TokenType
from ..store import TokenStore
from ..themes import DEFAULT_THEME_ID
from ..token_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.GENERATOR)

SCALES: dict[str, tuple[int, ...]] = {"fine": FINE_SCALE, "legacy": LEGACY_SCALE}

# Neutral tint targets and how strongly the neutral base moves toward them.
TINT_TARGETS: dict[NeutralTint, str] = {
    NeutralTint.WARM: "#F59E0B",
    NeutralTint.COOL: "#3B82F6",
}
TINT_AMOUNT = 0.1

NEUTRAL_BASE = dict(DEFAULT_PALETTES)["neutral"]


@dataclass
class PaletteSpec:
    """A named base color and the steps to emit for it."""

    name: str
    hex: str
    enabled_shades: set[int] | None = field(default=None)  # None means all

    def is_enabled(self, step: int) -> bool:
        return self.enabled_shades is None or step in self.enabled_shades


def default_palettes() -> list[PaletteSpec]:
    return [PaletteSpec(name, hex_value) for name, hex_value in DEFAULT_PALETTES]


def palette_fields(
    spec: PaletteSpec, scale: tuple[int, ...] | list[int] = FINE_SCALE
) -> list[dict]:
    """Token fields for every enabled step of one palette."""
    rows = []
    for step in scale:
        if not spec.is_enabled(step):
            continue
        rows.append(
            {
                "name": f"{spec.name}-{step}",
                "path": ["colors", spec.name],
                "type": TokenType.COLOR,
                "value": shade(spec.hex, step),
                "collection": CollectionType.PRIMITIVES.value,
                "description": shade_description(spec.name, step),
                "tags": ["color", "primitive", spec.name],
            }
        )
    return rows


def generate_palette(
    store: TokenStore,
    palettes: list[PaletteSpec] | None = None,
    scale: tuple[int, ...] | list[int] = FINE_SCALE,
) -> int:
    """Create primitive color tokens for each palette.

    Returns:
        Number of tokens written (created or updated).
    """
    palettes = default_palettes() if palettes is None else palettes
    count = 0
    for spec in palettes:
        for fields in palette_fields(spec, scale):
            store.create(**fields)
            count += 1

    logger.info(
        f"Generated {count} color primitives from {len(palettes)} palettes",
        extra={"operation": "palette", "token_count": count},
    )
    return count


def tinted_neutral(theme: Theme) -> str:
    """Neutral base hex for a theme after applying its tint."""
    if theme.neutral_tint is NeutralTint.NONE:
        return NEUTRAL_BASE
    if theme.neutral_tint is NeutralTint.CUSTOM:
        target = theme.custom_neutral_hex or NEUTRAL_BASE
    else:
        target = TINT_TARGETS[theme.neutral_tint]
    tinted = blend(hex_to_rgba(NEUTRAL_BASE), hex_to_rgba(target), TINT_AMOUNT)
    return rgba_to_hex(tinted)


def theme_palettes(theme: Theme) -> list[PaletteSpec]:
    """Palettes a theme contributes.

    The system theme owns the plain ``brand``/``accent``/``neutral``
    names; other themes prefix them with their id (``green-brand``).
    """
    prefix = "" if theme.id == DEFAULT_THEME_ID else f"{theme.id}-"
    specs = [PaletteSpec(f"{prefix}brand", theme.brand_color)]
    if theme.accent_color:
        specs.append(PaletteSpec(f"{prefix}accent", theme.accent_color))
    specs.append(PaletteSpec(f"{prefix}neutral", tinted_neutral(theme)))
    return specs
