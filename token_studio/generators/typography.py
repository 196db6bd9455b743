"""Typography primitives and the responsive text styles that alias them."""

from dataclasses import dataclass

from ..breakpoints import BreakpointConfig
from ..colors import round_half_up
from ..errors import MissingPrerequisiteError
from ..models import CollectionType, TokenReference, TokenType
from ..paths import build_full_path
from ..store import TokenStore
from ..token_logging import LogCategory, get_category_logger
from .responsive import device_ref, register_breakpoint_modes
from .semantic import GenerationReport

logger = get_category_logger(LogCategory.GENERATOR)

SIZE_NAMES: tuple[str, ...] = ("xs", "sm", "md", "lg", "xl", "2xl", "3xl", "4xl", "5xl")
ANCHOR_INDEX = SIZE_NAMES.index("md")

LINE_HEIGHTS: dict[str, float] = {"tight": 1.25, "normal": 1.5, "relaxed": 1.75}
FONT_WEIGHTS: dict[str, int] = {"regular": 400, "medium": 500, "semibold": 600, "bold": 700}
LETTER_SPACINGS: dict[str, str] = {"tight": "-0.025em", "normal": "0", "wide": "0.025em"}

NUMERIC_PREFIXES = ("font-size", "font-weight", "line-height")


@dataclass
class TypographyConfig:
    base_size: float = 16
    scale_ratio: float = 1.25
    font_body: str = "Inter"
    font_heading: str = "Inter"
    font_mono: str = "JetBrains Mono"


def type_scale(base_size: float, ratio: float) -> dict[str, int | float]:
    """Font sizes xs..5xl anchored at ``md``.

    Sizes below the anchor divide by ``ratio`` per step and sizes above
    multiply, rounded to whole pixels. The anchor keeps the base size.
    """
    sizes: dict[str, int | float] = {}
    for i, name in enumerate(SIZE_NAMES):
        distance = i - ANCHOR_INDEX
        if distance == 0:
            sizes[name] = base_size
        elif distance < 0:
            sizes[name] = round_half_up(base_size / ratio ** (-distance))
        else:
            sizes[name] = round_half_up(base_size * ratio**distance)
    return sizes


def typography_values(config: TypographyConfig) -> dict[str, int | float | str]:
    """Every typography primitive keyed by token name, in emission order."""
    values: dict[str, int | float | str] = {
        "font-family-body": config.font_body,
        "font-family-heading": config.font_heading,
        "font-family-mono": config.font_mono,
    }
    for name, size in type_scale(config.base_size, config.scale_ratio).items():
        values[f"font-size-{name}"] = size
    values.update({f"line-height-{k}": v for k, v in LINE_HEIGHTS.items()})
    values.update({f"font-weight-{k}": v for k, v in FONT_WEIGHTS.items()})
    values.update({f"letter-spacing-{k}": v for k, v in LETTER_SPACINGS.items()})
    return values


def generate_typography(store: TokenStore, config: TypographyConfig | None = None) -> int:
    """Create typography primitives under ``typography/``."""
    config = config or TypographyConfig()
    values = typography_values(config)
    for key, value in values.items():
        numeric = key.startswith(NUMERIC_PREFIXES)
        store.create(
            name=key,
            path=["typography"],
            type=TokenType.NUMBER if numeric else TokenType.STRING,
            value=value if numeric else str(value),
            collection=CollectionType.PRIMITIVES.value,
            description=f"Typography {key}",
        )

    logger.info(f"Generated {len(values)} typography primitives")
    return len(values)


# Property token name -> (primitive prefix, placeholder when unresolved)
TYPE_STYLE_PROPERTIES: dict[str, tuple[str, int | str]] = {
    "font-family": ("font-family", ""),
    "font-size": ("font-size", 0),
    "font-weight": ("font-weight", 0),
    "line-height": ("line-height", 0),
    "letter-spacing": ("letter-spacing", ""),
}


@dataclass(frozen=True)
class TypeStyle:
    """A named text style; ``size`` holds one ref per device or a single ref."""

    category: str
    name: str
    family: str
    size: tuple[str, ...]
    weight: str
    line_height: str
    letter_spacing: str
    description: str

    def refs(self) -> dict[str, tuple[str, ...]]:
        return {
            "font-family": (self.family,),
            "font-size": self.size,
            "font-weight": (self.weight,),
            "line-height": (self.line_height,),
            "letter-spacing": (self.letter_spacing,),
        }


TYPE_STYLES: tuple[TypeStyle, ...] = (
    TypeStyle("page", "hero", "heading", ("5xl", "4xl", "3xl"), "bold", "tight", "tight", "Hero headline"),
    TypeStyle("page", "title", "heading", ("4xl", "3xl", "2xl"), "bold", "tight", "tight", "Page title"),
    TypeStyle("page", "subtitle", "body", ("xl", "lg", "lg"), "regular", "normal", "normal", "Page subtitle"),
    TypeStyle("section", "heading", "heading", ("3xl", "2xl", "xl"), "semibold", "tight", "tight", "Section heading"),
    TypeStyle("section", "subheading", "heading", ("xl", "lg", "lg"), "semibold", "normal", "normal", "Section subheading"),
    TypeStyle("card", "title", "heading", ("lg", "lg", "md"), "semibold", "tight", "normal", "Card title"),
    TypeStyle("card", "subtitle", "body", ("sm",), "regular", "normal", "normal", "Card subtitle"),
    TypeStyle("paragraph", "lead", "body", ("lg", "lg", "md"), "regular", "relaxed", "normal", "Lead paragraph"),
    TypeStyle("paragraph", "default", "body", ("md",), "regular", "relaxed", "normal", "Body text"),
    TypeStyle("paragraph", "compact", "body", ("sm",), "regular", "normal", "normal", "Dense body text"),
    TypeStyle("helper", "hint", "body", ("sm",), "regular", "normal", "normal", "Hint text"),
    TypeStyle("helper", "caption", "body", ("xs",), "regular", "normal", "wide", "Caption"),
    TypeStyle("form", "label", "body", ("sm",), "medium", "normal", "normal", "Form label"),
    TypeStyle("form", "input", "body", ("md", "md", "md"), "regular", "normal", "normal", "Form input"),
    TypeStyle("action", "button", "body", ("md", "md", "sm"), "medium", "tight", "normal", "Button label"),
    TypeStyle("action", "button-compact", "body", ("sm",), "medium", "tight", "normal", "Compact button label"),
    TypeStyle("data", "table-header", "body", ("sm",), "semibold", "normal", "wide", "Table header"),
    TypeStyle("data", "table-cell", "body", ("sm",), "regular", "normal", "normal", "Table cell"),
    TypeStyle("data", "metric", "heading", ("3xl", "2xl", "2xl"), "bold", "tight", "tight", "Metric value"),
    TypeStyle("code", "inline", "mono", ("sm",), "regular", "normal", "normal", "Inline code"),
    TypeStyle("code", "block", "mono", ("sm", "sm", "xs"), "regular", "relaxed", "normal", "Code block"),
)  # fmt: skip


def generate_semantic_typography(
    store: TokenStore,
    breakpoints: BreakpointConfig | None = None,
    styles: tuple[TypeStyle, ...] = TYPE_STYLES,
) -> GenerationReport:
    """Create one token per style property in the Typography collection.

    Tokens live at ``typography/<category>/<style>/<property>`` with a value
    per breakpoint mode; the default breakpoint's value is the base value.
    A primitive that does not exist yet yields ``0`` or ``""`` with a warning.

    Raises:
        MissingPrerequisiteError: If no typography primitives exist.
    """
    breakpoints = breakpoints or BreakpointConfig()
    primitives = store.by_collection(CollectionType.PRIMITIVES.value)
    if not any(t.path == ["typography"] for t in primitives):
        raise MissingPrerequisiteError(
            "No typography primitives found",
            suggestion="Generate typography primitives before semantic typography",
        )

    collection = CollectionType.TYPOGRAPHY.value
    modes = register_breakpoint_modes(store, collection, breakpoints)
    ordered = breakpoints.sorted()
    default = breakpoints.default or ordered[0]
    default_mode = breakpoints.mode_name(default)
    report = GenerationReport()

    for style in styles:
        path = ["typography", style.category, style.name]
        for prop, refs in style.refs().items():
            prefix, placeholder = TYPE_STYLE_PROPERTIES[prop]
            mode_values: dict[str, int | float | str] = {}
            token_type = TokenType.STRING if isinstance(placeholder, str) else TokenType.NUMBER
            missing = []
            for bp, mode in zip(ordered, modes, strict=True):
                ref = device_ref(refs, bp.device)
                primitive = store.get_by_path(
                    build_full_path(["typography"], f"{prefix}-{ref}", store.separator)
                )
                if primitive is None:
                    missing.append(f"{mode}:{prefix}-{ref}")
                    mode_values[mode] = placeholder
                else:
                    mode_values[mode] = primitive.value
                    token_type = primitive.type

            full_path = build_full_path(path, prop, store.separator)
            if missing:
                logger.warning(
                    f"Primitive not found for {full_path} ({', '.join(missing)}), "
                    f"using placeholder"
                )
                report.placeholders.append(full_path)

            default_primitive = build_full_path(
                ["typography"], f"{prefix}-{device_ref(refs, default.device)}", store.separator
            )
            existed = store.get_by_path(full_path) is not None
            store.create(
                name=prop,
                path=path,
                type=token_type,
                value=mode_values[default_mode],
                collection=collection,
                description=f"{style.description} {prop.replace('-', ' ')}",
                tags=["typography", style.category],
                references=(
                    TokenReference(light=default_primitive)
                    if store.get_by_path(default_primitive)
                    else None
                ),
                mode_values=mode_values,
            )
            if existed:
                report.updated += 1
            else:
                report.created += 1

    logger.info(
        f"Generated {report.created} semantic typography tokens, "
        f"updated {report.updated}, {len(report.placeholders)} with placeholders",
        extra={"operation": "semantic_typography", "token_count": report.total},
    )
    return report
