"""Shadow presets built from a base color and opacity."""

from ..colors import hex_to_rgba, round_half_up
from ..models import CollectionType, TokenType
from ..store import TokenStore
from ..token_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.GENERATOR)

# preset -> layers of (x, y, blur, opacity multiplier, inset)
SHADOW_PRESETS: dict[str, tuple[tuple[int, int, int, float, bool], ...]] = {
    "xs": ((0, 1, 2, 0.5, False),),
    "sm": ((0, 1, 3, 1.0, False), (0, 1, 2, 0.6, False)),
    "md": ((0, 4, 6, 1.0, False), (0, 2, 4, 0.6, False)),
    "lg": ((0, 10, 15, 1.0, False), (0, 4, 6, 0.5, False)),
    "xl": ((0, 20, 25, 1.5, False), (0, 8, 10, 0.4, False)),
    "2xl": ((0, 25, 50, 2.5, False),),
    "inner": ((0, 2, 4, 0.6, True),),
    "none": (),
}


def _format_alpha(alpha: float) -> str:
    return f"{round(alpha, 4):g}"


def build_shadows(color_hex: str = "#000000", base_opacity: float = 10) -> dict[str, str]:
    """CSS box-shadow strings for every preset.

    Args:
        color_hex: Shadow color.
        base_opacity: Opacity percentage (0-100) the layer multipliers scale.
    """
    rgba = hex_to_rgba(color_hex)
    r, g, b = (round_half_up(c * 255) for c in (rgba.r, rgba.g, rgba.b))
    opacity = base_opacity / 100

    shadows: dict[str, str] = {}
    for name, layers in SHADOW_PRESETS.items():
        if not layers:
            shadows[name] = "none"
            continue
        parts = []
        for x, y, blur, multiplier, inset in layers:
            prefix = "inset " if inset else ""
            alpha = _format_alpha(opacity * multiplier)
            parts.append(f"{prefix}{x} {y}px {blur}px rgba({r}, {g}, {b}, {alpha})")
        shadows[name] = ", ".join(parts)
    return shadows


def generate_shadows(
    store: TokenStore, color_hex: str = "#000000", base_opacity: float = 10
) -> int:
    shadows = build_shadows(color_hex, base_opacity)
    for key, value in shadows.items():
        store.create(
            name=key,
            path=["shadows"],
            type=TokenType.STRING,
            value=value,
            collection=CollectionType.PRIMITIVES.value,
            description=f"Shadow {key}",
        )
    logger.info(f"Generated {len(shadows)} shadow primitives")
    return len(shadows)
