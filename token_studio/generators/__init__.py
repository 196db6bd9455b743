"""Derivation pipelines that populate a TokenStore.

Every pipeline writes through ``TokenStore.create`` so re-running one
updates the tokens it produced earlier instead of duplicating them.
"""

from dataclasses import dataclass, field

from ..breakpoints import BreakpointConfig
from ..config import GeneratorSettings
from ..models import Theme
from ..store import TokenStore
from ..token_logging import LogCategory, get_category_logger
from .dimensions import generate_borders, generate_radius, generate_spacing
from .palette import SCALES, PaletteSpec, generate_palette, theme_palettes
from .responsive import (
    DIMENSION_TIERS,
    DimensionTier,
    generate_tier_primitives,
    generate_tier_semantics,
)
from .semantic import (
    GenerationReport,
    generate_component_tokens,
    generate_semantic_tokens,
)
from .shadows import generate_shadows
from .typography import (
    TYPE_STYLES,
    TypeStyle,
    TypographyConfig,
    generate_semantic_typography,
    generate_typography,
)

logger = get_category_logger(LogCategory.GENERATOR)


@dataclass
class GenerateAllResult:
    """Token counts written by each pipeline of a full run."""

    primitives: dict[str, int] = field(default_factory=dict)
    semantic: GenerationReport | None = None
    components: GenerationReport | None = None
    responsive: dict[str, GenerationReport] = field(default_factory=dict)

    @property
    def total(self) -> int:
        total = sum(self.primitives.values())
        for report in (self.semantic, self.components, *self.responsive.values()):
            if report is not None:
                total += report.total
        return total


def palettes_for(settings: GeneratorSettings, themes: list[Theme]) -> list[PaletteSpec]:
    """Configured palettes plus the palettes each theme contributes.

    A theme palette replaces a configured palette of the same name.
    """
    specs = {p.name: PaletteSpec(p.name, p.hex) for p in settings.palettes}
    for theme in themes:
        for spec in theme_palettes(theme):
            specs[spec.name] = spec
    return list(specs.values())


def generate_all(
    store: TokenStore,
    themes: list[Theme],
    settings: GeneratorSettings | None = None,
    include_semantic: bool = True,
    include_components: bool = True,
    breakpoints: BreakpointConfig | None = None,
) -> GenerateAllResult:
    """Run every primitive pipeline, then the semantic and component tiers.

    The semantic phase also builds the responsive dimension tiers and the
    semantic text styles, with one mode per breakpoint.
    """
    settings = settings or GeneratorSettings()
    breakpoints = breakpoints or BreakpointConfig()
    result = GenerateAllResult()

    result.primitives["colors"] = generate_palette(
        store, palettes_for(settings, themes), SCALES[settings.scale]
    )
    result.primitives["typography"] = generate_typography(
        store,
        TypographyConfig(
            base_size=settings.base_font_size,
            scale_ratio=settings.type_scale_ratio,
            font_body=settings.font_body,
            font_heading=settings.font_heading,
            font_mono=settings.font_mono,
        ),
    )
    result.primitives["spacing"] = generate_spacing(
        store, settings.spacing_base, settings.spacing_scale
    )
    result.primitives["radius"] = generate_radius(store, settings.radius_base)
    result.primitives["shadows"] = generate_shadows(
        store, settings.shadow_color, settings.shadow_opacity
    )
    result.primitives["borders"] = generate_borders(store)
    for tier in DIMENSION_TIERS.values():
        result.primitives["-".join(tier.primitive_path)] = generate_tier_primitives(store, tier)

    if include_semantic:
        result.semantic = generate_semantic_tokens(store, themes)
        for tier in DIMENSION_TIERS.values():
            result.responsive[tier.key] = generate_tier_semantics(store, tier, breakpoints)
        result.responsive["typography"] = generate_semantic_typography(store, breakpoints)
        if include_components:
            result.components = generate_component_tokens(store, themes)

    logger.info(
        f"Generated {result.total} tokens across all pipelines",
        extra={"operation": "generate_all", "token_count": result.total},
    )
    return result


__all__ = [
    "DIMENSION_TIERS",
    "DimensionTier",
    "GenerateAllResult",
    "GenerationReport",
    "PaletteSpec",
    "SCALES",
    "TYPE_STYLES",
    "TypeStyle",
    "TypographyConfig",
    "generate_all",
    "generate_borders",
    "generate_component_tokens",
    "generate_palette",
    "generate_radius",
    "generate_semantic_tokens",
    "generate_semantic_typography",
    "generate_shadows",
    "generate_spacing",
    "generate_tier_primitives",
    "generate_tier_semantics",
    "generate_typography",
    "palettes_for",
]
