"""Spacing, radius and border-width primitives."""

from collections.abc import Callable

from ..colors import round_half_up
from ..errors import ValidationError
from ..models import CollectionType, TokenType
from ..store import TokenStore
from ..token_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.GENERATOR)

SPACING_NAMES: tuple[str, ...] = (
    "none", "xs", "sm", "md", "lg", "xl", "2xl", "3xl", "4xl", "5xl", "6xl",
)  # fmt: skip

FIBONACCI: tuple[int, ...] = (1, 2, 3, 5, 8, 13, 21, 34, 55)
GOLDEN_RATIO = 1.618

# progression name -> (step count, value of step i for a base unit)
SPACING_PROGRESSIONS: dict[str, tuple[int, Callable[[float, int], float]]] = {
    "linear": (12, lambda base, i: base * (i + 1)),
    "fibonacci": (len(FIBONACCI), lambda base, i: base * FIBONACCI[i]),
    "golden": (10, lambda base, i: round_half_up(base * GOLDEN_RATIO**i)),
}

# name -> multiplier of the base radius; None marks the pill radius.
RADIUS_TABLE: tuple[tuple[str, float | None], ...] = (
    ("none", 0),
    ("sm", 0.5),
    ("md", 1),
    ("lg", 2),
    ("xl", 3),
    ("2xl", 4),
    ("full", None),
)
FULL_RADIUS = 9999

BORDER_WIDTHS: dict[str, int] = {"none": 0, "thin": 1, "medium": 2, "thick": 4}


def _clean(value: float) -> int | float:
    return int(value) if float(value).is_integer() else value


def spacing_scale(base_unit: float, progression: str = "fibonacci") -> dict[str, int | float]:
    """Named spacing ladder starting at ``none = 0``.

    Steps past the named ladder fall back to their 1-based index.
    """
    if progression not in SPACING_PROGRESSIONS:
        raise ValidationError(
            f"Unknown spacing progression: {progression}",
            suggestion=f"Use one of: {', '.join(SPACING_PROGRESSIONS)}",
        )

    count, step_value = SPACING_PROGRESSIONS[progression]
    spacing: dict[str, int | float] = {"none": 0}
    for i in range(count):
        name = SPACING_NAMES[i + 1] if i + 1 < len(SPACING_NAMES) else str(i + 1)
        spacing[name] = _clean(step_value(base_unit, i))
    return spacing


def radius_scale(base_radius: float) -> dict[str, int | float]:
    radius: dict[str, int | float] = {}
    for name, multiplier in RADIUS_TABLE:
        if multiplier is None:
            radius[name] = FULL_RADIUS
        elif multiplier == 0.5:
            radius[name] = round_half_up(base_radius * multiplier)
        else:
            radius[name] = _clean(base_radius * multiplier)
    return radius


def _emit(
    store: TokenStore, group: str, values: dict[str, int | float], describe: str
) -> int:
    for key, value in values.items():
        store.create(
            name=key,
            path=[group],
            type=TokenType.NUMBER,
            value=value,
            collection=CollectionType.PRIMITIVES.value,
            description=describe.format(key=key, value=value),
        )
    logger.info(f"Generated {len(values)} {group} primitives")
    return len(values)


def generate_spacing(
    store: TokenStore, base_unit: float = 4, progression: str = "fibonacci"
) -> int:
    return _emit(
        store,
        "spacing",
        spacing_scale(base_unit, progression),
        "Spacing {key}: {value}px",
    )


def generate_radius(store: TokenStore, base_radius: float = 4) -> int:
    return _emit(
        store, "radius", radius_scale(base_radius), "Border radius {key}: {value}px"
    )


def generate_borders(store: TokenStore) -> int:
    return _emit(store, "borders", dict(BORDER_WIDTHS), "Border width {key}: {value}px")
