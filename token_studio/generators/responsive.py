"""Responsive dimension tiers: Spacing, Gap, Icon Size and Radius.

Each tier has a primitive ladder in ``Primitives`` and semantic tokens in
its own collection with one mode per breakpoint. Semantic rows name a
primitive per device class (desktop, tablet, mobile); a row with a single
ref uses it for every device. Breakpoints map onto device classes through
``Breakpoint.device``.
"""

from dataclasses import dataclass

from ..breakpoints import DEVICES, BreakpointConfig
from ..errors import MissingPrerequisiteError
from ..models import CollectionType, TokenReference, TokenType
from ..paths import build_full_path
from ..store import TokenStore
from ..token_logging import LogCategory, get_category_logger
from .semantic import GenerationReport

logger = get_category_logger(LogCategory.GENERATOR)

PLACEHOLDER_NUMBER = 0

# (path below the tier root, primitive ref per device, or one ref for all)
TierRow = tuple[str, ...]


@dataclass(frozen=True)
class DimensionTier:
    """A primitive ladder plus the semantic rows that alias it."""

    key: str
    label: str
    collection: CollectionType
    root: str  # First path segment of the semantic tokens
    primitive_path: tuple[str, ...]
    primitives: tuple[tuple[str, int], ...]
    rows: dict[str, tuple[TierRow, ...]]  # category -> rows


def _ladder(*values: int) -> tuple[tuple[str, int], ...]:
    return tuple((str(v), v) for v in values)


SPACING_TIER = DimensionTier(
    key="spacing",
    label="Spacing",
    collection=CollectionType.SPACING,
    root="spacing",
    primitive_path=("space",),
    primitives=_ladder(
        0, 1, 2, 4, 6, 8, 10, 12, 14, 16, 18, 20, 24, 28, 32, 36, 40, 44, 48,
        56, 64, 72, 80, 96, 112, 128, 160, 192, 224, 256,
    ),  # fmt: skip
    rows={
        "inline": (
            ("inline/icon/padding-x", "4"),
            ("inline/badge/padding-x", "6", "6", "4"),
            ("inline/tag/padding-x", "8", "8", "6"),
            ("inline/chip/padding-x", "12", "10", "8"),
            ("inline/pill/padding-x", "16", "14", "12"),
        ),
        "button": (
            ("button/compact/padding-x", "8", "8", "6"),
            ("button/compact/padding-y", "4"),
            ("button/default/padding-x", "16", "14", "12"),
            ("button/default/padding-y", "8", "8", "6"),
            ("button/large/padding-x", "24", "20", "16"),
            ("button/large/padding-y", "12", "10", "8"),
            ("button/icon/padding", "8", "8", "6"),
            ("button/icon-large/padding", "12", "10", "8"),
            ("button/with-icon/gap", "8", "6", "6"),
            ("button/with-icon-compact/gap", "6", "4", "4"),
        ),
        "input": (
            ("input/default/padding-x", "12", "12", "10"),
            ("input/default/padding-y", "10", "10", "8"),
            ("input/compact/padding-x", "8", "8", "6"),
            ("input/compact/padding-y", "6", "6", "4"),
            ("input/large/padding-x", "16", "14", "12"),
            ("input/large/padding-y", "12", "12", "10"),
            ("input/textarea/padding-x", "12", "12", "10"),
            ("input/textarea/padding-y", "12", "12", "10"),
            ("input/with-icon/padding-left", "40", "36", "32"),
            ("input/with-action/padding-right", "40", "36", "32"),
            ("input/select/padding-right", "36", "32", "28"),
        ),
        "card": (
            ("card/compact/padding", "12", "12", "8"),
            ("card/default/padding", "16", "16", "12"),
            ("card/comfortable/padding", "24", "20", "16"),
            ("card/spacious/padding", "32", "28", "20"),
            ("card/header/padding-x", "16", "16", "12"),
            ("card/header/padding-y", "12", "12", "10"),
            ("card/body/padding-x", "16", "16", "12"),
            ("card/body/padding-y", "16", "14", "12"),
            ("card/footer/padding-x", "16", "16", "12"),
            ("card/footer/padding-y", "12", "12", "10"),
        ),
        "modal": (
            ("modal/compact/padding", "16", "16", "12"),
            ("modal/default/padding", "24", "20", "16"),
            ("modal/spacious/padding", "32", "28", "20"),
            ("modal/header/padding-x", "24", "20", "16"),
            ("modal/header/padding-y", "16", "14", "12"),
            ("modal/body/padding-x", "24", "20", "16"),
            ("modal/body/padding-y", "16", "14", "12"),
            ("modal/footer/padding-x", "24", "20", "16"),
            ("modal/footer/padding-y", "16", "14", "12"),
            ("modal/fullscreen/padding", "32", "24", "16"),
        ),
        "dropdown": (
            ("dropdown/padding-x", "0"),
            ("dropdown/padding-y", "4"),
            ("dropdown/item/padding-x", "12", "12", "10"),
            ("dropdown/item/padding-y", "8"),
            ("dropdown/item-compact/padding-x", "8", "8", "6"),
            ("dropdown/item-compact/padding-y", "6", "6", "4"),
            ("popover/padding", "12", "12", "10"),
            ("tooltip/padding-x", "8", "8", "6"),
            ("tooltip/padding-y", "4"),
        ),
        "list": (
            ("list/item/padding-x", "12", "12", "10"),
            ("list/item/padding-y", "8", "8", "6"),
            ("list/item-compact/padding-x", "8", "8", "6"),
            ("list/item-compact/padding-y", "4"),
            ("list/nested/padding-left", "24", "20", "16"),
            ("list/group/padding-y", "8", "8", "6"),
        ),
        "table": (
            ("table/cell/padding-x", "12", "10", "8"),
            ("table/cell/padding-y", "10", "8", "6"),
            ("table/cell-compact/padding-x", "8", "6", "4"),
            ("table/cell-compact/padding-y", "6", "4", "4"),
            ("table/header/padding-x", "12", "10", "8"),
            ("table/header/padding-y", "12", "10", "8"),
        ),
        "navigation": (
            ("navigation/item/padding-x", "12", "10", "8"),
            ("navigation/item/padding-y", "8", "8", "6"),
            ("navigation/tab/padding-x", "16", "14", "12"),
            ("navigation/tab/padding-y", "12", "10", "8"),
            ("navigation/sidebar/padding-x", "12", "10", "8"),
            ("navigation/sidebar/padding-y", "8", "8", "6"),
        ),
        "alert": (
            ("alert/compact/padding-x", "12", "12", "10"),
            ("alert/compact/padding-y", "8", "8", "6"),
            ("alert/default/padding-x", "16", "14", "12"),
            ("alert/default/padding-y", "12", "10", "8"),
            ("toast/padding-x", "16", "14", "12"),
            ("toast/padding-y", "12", "10", "8"),
            ("banner/padding-x", "24", "20", "16"),
            ("banner/padding-y", "16", "14", "12"),
        ),
        "badge": (
            ("badge/padding-x", "6", "6", "4"),
            ("badge/padding-y", "2"),
            ("tag/padding-x", "8", "8", "6"),
            ("tag/padding-y", "4"),
            ("chip/padding-x", "12", "10", "8"),
            ("chip/padding-y", "6", "6", "4"),
        ),
        "form": (
            ("form/field/margin-bottom", "16", "14", "12"),
            ("form/field-compact/margin-bottom", "12", "10", "8"),
            ("form/label/margin-bottom", "6", "6", "4"),
            ("form/help-text/margin-top", "4"),
            ("form/group/margin-bottom", "24", "20", "16"),
            ("form/section/margin-bottom", "32", "28", "24"),
            ("form/actions/margin-top", "24", "20", "16"),
        ),
        "page": (
            ("page/padding-x", "24", "20", "16"),
            ("page/padding-y", "24", "20", "16"),
            ("page/padding-x-wide", "48", "32", "16"),
            ("page/padding-y-wide", "32", "24", "16"),
            ("page/section/margin-bottom", "48", "40", "32"),
            ("page/header/padding-y", "24", "20", "16"),
            ("page/header/margin-bottom", "32", "28", "24"),
            ("page/footer/padding-y", "24", "20", "16"),
            ("page/footer/margin-top", "48", "40", "32"),
        ),
        "content": (
            ("content/paragraph/margin-bottom", "16", "14", "12"),
            ("content/heading/margin-top", "32", "28", "24"),
            ("content/heading/margin-bottom", "16", "14", "12"),
            ("content/list/margin-bottom", "16", "14", "12"),
            ("content/blockquote/padding-left", "16", "14", "12"),
            ("content/blockquote/margin-y", "24", "20", "16"),
            ("content/code-block/padding", "16", "14", "12"),
            ("content/divider/margin-y", "24", "20", "16"),
        ),
        "grid": (
            ("grid/inset/none", "0"),
            ("grid/inset/tight", "8", "6", "4"),
            ("grid/inset/default", "16", "12", "8"),
            ("grid/inset/relaxed", "24", "20", "16"),
            ("grid/inset/loose", "32", "28", "24"),
        ),
    },
)

GAP_TIER = DimensionTier(
    key="gap",
    label="Gap",
    collection=CollectionType.GAP,
    root="gap",
    primitive_path=("gap",),
    primitives=_ladder(0, 2, 4, 6, 8, 10, 12, 16, 20, 24, 28, 32, 40, 48, 56, 64, 80, 96),
    rows={
        "inline": (
            ("inline/icon", "4"),
            ("inline/text", "4"),
            ("inline/badge", "6", "6", "4"),
            ("inline/tag", "8", "8", "6"),
            ("inline/action", "8", "8", "6"),
        ),
        "action": (
            ("action/group", "8", "8", "6"),
            ("action/group-compact", "4"),
            ("action/group-spacious", "12", "12", "8"),
            ("action/toolbar", "4"),
            ("action/toolbar-section", "12", "12", "8"),
            ("action/button-content", "8", "8", "6"),
            ("action/button-content-compact", "6", "6", "4"),
        ),
        "form": (
            ("form/field", "16", "16", "12"),
            ("form/field-compact", "12", "12", "8"),
            ("form/field-spacious", "20", "20", "16"),
            ("form/group", "24", "24", "20"),
            ("form/section", "32", "32", "24"),
            ("form/inline", "12", "12", "8"),
            ("form/inline-compact", "8", "8", "6"),
            ("form/label-group", "4"),
            ("form/radio-group", "12", "12", "10"),
            ("form/checkbox-group", "12", "12", "10"),
            ("form/actions", "12", "12", "8"),
            ("form/actions-compact", "8", "8", "6"),
        ),
        "card": (
            ("card/header", "8", "8", "6"),
            ("card/body", "12", "12", "10"),
            ("card/footer", "12", "12", "8"),
            ("card/sections", "16", "16", "12"),
            ("card/meta", "8", "8", "6"),
            ("card/actions", "8", "8", "6"),
            ("card/tags", "6", "6", "4"),
        ),
        "list": (
            ("list/items", "0"),
            ("list/items-spaced", "4"),
            ("list/items-loose", "8", "8", "6"),
            ("list/item-content", "12", "12", "10"),
            ("list/item-content-compact", "8", "8", "6"),
            ("list/item-meta", "8", "8", "6"),
            ("list/item-actions", "4"),
            ("list/groups", "16", "16", "12"),
        ),
        "navigation": (
            ("navigation/items", "4"),
            ("navigation/items-compact", "2"),
            ("navigation/items-spacious", "8", "8", "6"),
            ("navigation/tabs", "0"),
            ("navigation/tabs-spaced", "4"),
            ("navigation/breadcrumb", "8", "8", "6"),
            ("navigation/breadcrumb-separator", "8", "8", "6"),
            ("navigation/pagination", "4"),
            ("navigation/menu-sections", "8", "8", "6"),
        ),
        "table": (
            ("table/header-cells", "0"),
            ("table/rows", "0"),
            ("table/rows-striped", "0"),
            ("table/cell-content", "8", "8", "6"),
            ("table/cell-actions", "4"),
            ("table/toolbar", "12", "12", "8"),
            ("table/toolbar-actions", "8", "8", "6"),
            ("table/pagination", "16", "16", "12"),
        ),
        "modal": (
            ("modal/header", "8", "8", "6"),
            ("modal/body", "16", "16", "12"),
            ("modal/footer", "12", "12", "8"),
            ("modal/sections", "24", "24", "20"),
            ("modal/actions", "12", "12", "8"),
            ("modal/actions-compact", "8", "8", "6"),
        ),
        "alert": (
            ("alert/content", "8", "8", "6"),
            ("alert/actions", "12", "12", "8"),
            ("toast/content", "8", "8", "6"),
            ("toast/actions", "8", "8", "6"),
            ("banner/content", "12", "12", "10"),
            ("banner/actions", "16", "16", "12"),
        ),
        "content": (
            ("content/sections", "48", "40", "32"),
            ("content/sections-compact", "32", "28", "24"),
            ("content/blocks", "24", "20", "16"),
            ("content/blocks-compact", "16", "16", "12"),
            ("content/paragraphs", "16", "16", "12"),
            ("content/list", "8", "8", "6"),
            ("content/list-compact", "4"),
            ("content/heading-to-content", "16", "16", "12"),
            ("content/content-to-heading", "32", "28", "24"),
        ),
        "grid": (
            ("grid/tight", "8", "8", "6"),
            ("grid/default", "16", "16", "12"),
            ("grid/relaxed", "24", "20", "16"),
            ("grid/loose", "32", "28", "24"),
            ("grid/extra-loose", "48", "40", "32"),
            ("grid/cards", "16", "16", "12"),
            ("grid/cards-compact", "12", "12", "8"),
            ("grid/cards-spacious", "24", "20", "16"),
            ("grid/tiles", "8", "8", "6"),
            ("grid/gallery", "4"),
            ("grid/masonry", "16", "16", "12"),
        ),
        "stack": (
            ("stack/none", "0"),
            ("stack/tight", "4"),
            ("stack/default", "8", "8", "6"),
            ("stack/relaxed", "12", "12", "10"),
            ("stack/loose", "16", "16", "12"),
            ("stack/extra-loose", "24", "20", "16"),
        ),
        "data": (
            ("data/metric", "4"),
            ("data/metric-group", "24", "20", "16"),
            ("data/stat", "8", "8", "6"),
            ("data/stat-group", "32", "28", "24"),
            ("data/chart-legend", "12", "12", "10"),
            ("data/chart-labels", "8", "8", "6"),
        ),
    },
)

ICON_SIZE_TIER = DimensionTier(
    key="icon-size",
    label="Icon size",
    collection=CollectionType.ICON_SIZE,
    root="icon-size",
    primitive_path=("icon-size",),
    primitives=_ladder(10, 12, 14, 16, 18, 20, 24, 28, 32, 36, 40, 48, 56, 64, 72, 96),
    rows={
        "interactive": (
            ("interactive/button-large", "20"),
            ("interactive/button", "16"),
            ("interactive/button-compact", "14"),
            ("interactive/button-icon-only", "20"),
            ("interactive/button-icon-only-compact", "16"),
            ("interactive/link", "16"),
            ("interactive/link-compact", "14"),
            ("interactive/menu-item", "16"),
            ("interactive/menu-item-compact", "14"),
            ("interactive/tab", "18"),
            ("interactive/tab-compact", "16"),
        ),
        "form": (
            ("form/input-prefix", "16"),
            ("form/input-suffix", "16"),
            ("form/input-action", "18"),
            ("form/select-arrow", "16"),
            ("form/clear-button", "14"),
            ("form/checkbox", "16"),
            ("form/radio", "16"),
            ("form/switch", "14"),
            ("form/validation", "14"),
            ("form/required", "10"),
        ),
        "navigation": (
            ("navigation/item", "20"),
            ("navigation/item-compact", "16"),
            ("navigation/breadcrumb-separator", "14"),
            ("navigation/breadcrumb-home", "16"),
            ("navigation/pagination-arrow", "16"),
            ("navigation/expand", "16"),
            ("navigation/collapse", "16"),
            ("navigation/menu-arrow", "12"),
            ("navigation/submenu-arrow", "14"),
            ("navigation/back", "20"),
            ("navigation/close", "20"),
            ("navigation/hamburger", "24"),
        ),
        "status": (
            ("status/badge", "12"),
            ("status/tag", "14"),
            ("status/chip", "16"),
            ("status/chip-remove", "14"),
            ("status/indicator", "12"),
            ("status/dot", "10"),
        ),
        "notification": (
            ("notification/alert", "20"),
            ("notification/alert-compact", "16"),
            ("notification/toast", "20"),
            ("notification/toast-close", "16"),
            ("notification/banner", "24"),
            ("notification/banner-close", "20"),
        ),
        "data": (
            ("data/table-action", "16"),
            ("data/table-sort", "14"),
            ("data/table-expand", "16"),
            ("data/metric-trend", "16"),
            ("data/metric-info", "14"),
            ("data/chart-legend", "12"),
        ),
        "media": (
            ("media/avatar-badge", "12"),
            ("media/avatar-status", "10"),
            ("media/placeholder", "48"),
            ("media/placeholder-compact", "32"),
            ("media/play-button", "48"),
            ("media/play-button-compact", "32"),
            ("media/controls", "24"),
            ("media/controls-compact", "20"),
        ),
        "empty": (
            ("empty/illustration", "96", "96", "72"),
            ("empty/illustration-compact", "64", "64", "48"),
            ("empty/icon", "48", "48", "40"),
            ("empty/icon-compact", "32", "32", "28"),
        ),
        "modal": (
            ("modal/close", "20"),
            ("modal/header-icon", "24"),
            ("modal/confirmation-icon", "48", "48", "40"),
        ),
        "card": (
            ("card/header-icon", "24"),
            ("card/action", "18"),
            ("card/meta", "14"),
            ("card/feature", "32", "32", "28"),
        ),
        "list": (
            ("list/item-icon", "20"),
            ("list/item-icon-compact", "16"),
            ("list/bullet", "10"),
            ("list/checkbox", "18"),
            ("list/drag-handle", "16"),
            ("list/expand-arrow", "16"),
        ),
        "action": (
            ("action/primary", "20"),
            ("action/secondary", "18"),
            ("action/tertiary", "16"),
            ("action/fab", "24"),
            ("action/fab-compact", "20"),
            ("action/context-menu", "16"),
            ("action/more", "20"),
        ),
        "loading": (
            ("loading/spinner", "20"),
            ("loading/spinner-compact", "16"),
            ("loading/spinner-large", "32"),
            ("loading/button", "16"),
            ("loading/page", "48", "48", "40"),
        ),
        "special": (
            ("special/logo", "32", "32", "28"),
            ("special/logo-compact", "24"),
            ("special/logo-large", "48", "48", "40"),
            ("special/social", "24"),
            ("special/social-compact", "20"),
            ("special/rating", "18"),
            ("special/rating-compact", "14"),
            ("special/step", "24"),
            ("special/step-compact", "20"),
        ),
    },
)

RADIUS_TIER = DimensionTier(
    key="radius",
    label="Radius",
    collection=CollectionType.RADIUS,
    root="radius",
    # Nested so the ladder never collides with the named radius primitives.
    primitive_path=("radius", "scale"),
    primitives=(*_ladder(0, 2, 4, 6, 8, 10, 12, 16, 20, 24, 32), ("full", 9999)),
    rows={
        "interactive": (
            ("interactive/button", "6"),
            ("interactive/button-pill", "full"),
            ("interactive/button-square", "4"),
            ("interactive/input", "6"),
            ("interactive/input-rounded", "8"),
            ("interactive/checkbox", "4"),
            ("interactive/radio", "full"),
            ("interactive/switch", "full"),
            ("interactive/switch-track", "full"),
            ("interactive/slider", "full"),
            ("interactive/slider-thumb", "full"),
            ("interactive/slider-track", "full"),
        ),
        "container": (
            ("container/card", "8"),
            ("container/card-subtle", "6"),
            ("container/card-prominent", "12"),
            ("container/modal", "12"),
            ("container/modal-sheet", "16"),
            ("container/dropdown", "8"),
            ("container/popover", "8"),
            ("container/tooltip", "4"),
            ("container/panel", "8"),
            ("container/section", "12"),
            ("container/well", "8"),
        ),
        "feedback": (
            ("feedback/alert", "8"),
            ("feedback/toast", "8"),
            ("feedback/banner", "0"),
            ("feedback/badge", "full"),
            ("feedback/badge-square", "4"),
            ("feedback/tag", "4"),
            ("feedback/tag-rounded", "full"),
            ("feedback/chip", "full"),
            ("feedback/indicator", "full"),
            ("feedback/dot", "full"),
        ),
        "media": (
            ("media/avatar", "full"),
            ("media/avatar-square", "8"),
            ("media/thumbnail", "6"),
            ("media/thumbnail-rounded", "8"),
            ("media/image", "8"),
            ("media/image-sharp", "0"),
            ("media/image-rounded", "12"),
            ("media/video", "8"),
            ("media/video-player", "12"),
            ("media/icon", "4"),
            ("media/icon-rounded", "full"),
        ),
        "form": (
            ("form/input", "6"),
            ("form/input-rounded", "8"),
            ("form/select", "6"),
            ("form/textarea", "6"),
            ("form/field-group", "8"),
            ("form/input-group", "6"),
            ("form/file-upload", "8"),
            ("form/file-upload-zone", "12"),
        ),
        "data": (
            ("data/table", "8"),
            ("data/table-cell", "0"),
            ("data/chart", "8"),
            ("data/chart-bar", "4"),
            ("data/progress", "full"),
            ("data/progress-bar", "full"),
            ("data/skeleton", "4"),
            ("data/skeleton-circle", "full"),
        ),
        "overlay": (
            ("overlay/modal", "12"),
            ("overlay/drawer", "0"),
            ("overlay/drawer-rounded", "16"),
            ("overlay/dialog", "12"),
            ("overlay/sheet", "16"),
            ("overlay/backdrop", "0"),
        ),
        "special": (
            ("special/code", "4"),
            ("special/code-block", "8"),
            ("special/kbd", "4"),
            ("special/mark", "2"),
            ("special/callout", "8"),
            ("special/quote", "0"),
            ("special/divider", "full"),
        ),
    },
)

DIMENSION_TIERS: dict[str, DimensionTier] = {
    tier.key: tier for tier in (SPACING_TIER, GAP_TIER, ICON_SIZE_TIER, RADIUS_TIER)
}


def device_ref(refs: tuple[str, ...], device: str) -> str:
    """The ref a row uses for a device class; single refs apply everywhere."""
    if len(refs) == 1:
        return refs[0]
    return refs[DEVICES.index(device)]


def register_breakpoint_modes(
    store: TokenStore, collection: str, breakpoints: BreakpointConfig
) -> list[str]:
    """Make sure a collection carries one mode per breakpoint.

    Returns:
        The mode names in column order.

    Raises:
        MissingPrerequisiteError: If there are no breakpoints.
    """
    modes = breakpoints.mode_names()
    if not modes:
        raise MissingPrerequisiteError(
            "No breakpoints configured", suggestion="Apply a breakpoint preset"
        )
    store.ensure_collection(collection, modes)
    for mode in modes:
        store.add_mode(collection, mode)
    return modes


def generate_tier_primitives(store: TokenStore, tier: DimensionTier) -> int:
    """Create the tier's primitive ladder in ``Primitives``."""
    for name, value in tier.primitives:
        store.create(
            name=name,
            path=list(tier.primitive_path),
            type=TokenType.NUMBER,
            value=value,
            collection=CollectionType.PRIMITIVES.value,
            description=f"{tier.label} {name}: {value}px",
            tags=[tier.key, "primitive"],
        )
    logger.info(f"Generated {len(tier.primitives)} {tier.key} primitives")
    return len(tier.primitives)


def generate_tier_semantics(
    store: TokenStore,
    tier: DimensionTier,
    breakpoints: BreakpointConfig | None = None,
    categories: list[str] | None = None,
) -> GenerationReport:
    """Create the tier's semantic tokens with one value per breakpoint mode.

    A primitive that does not exist yet falls back to 0 with a warning.

    Raises:
        MissingPrerequisiteError: If none of the tier's primitives exist.
    """
    breakpoints = breakpoints or BreakpointConfig()
    primitive_paths = {
        name: build_full_path(list(tier.primitive_path), name, store.separator)
        for name, _ in tier.primitives
    }
    if not any(store.get_by_path(p) for p in primitive_paths.values()):
        raise MissingPrerequisiteError(
            f"No {tier.key} primitives found",
            suggestion=f"Generate {tier.key} primitives before semantic tokens",
        )

    collection = tier.collection.value
    modes = register_breakpoint_modes(store, collection, breakpoints)
    ordered = breakpoints.sorted()
    default = breakpoints.default or ordered[0]
    report = GenerationReport()

    for category in categories or list(tier.rows):
        for row_path, *refs in tier.rows.get(category, ()):
            mode_values: dict[str, int | float] = {}
            missing: list[str] = []
            for bp, mode in zip(ordered, modes, strict=True):
                ref = device_ref(tuple(refs), bp.device)
                primitive = store.get_by_path(
                    primitive_paths.get(ref)
                    or build_full_path(list(tier.primitive_path), ref, store.separator)
                )
                if primitive is None:
                    missing.append(f"{mode}:{ref}")
                    mode_values[mode] = PLACEHOLDER_NUMBER
                else:
                    mode_values[mode] = primitive.value

            segments = [tier.root, *row_path.split("/")]
            token_path = "/".join(segments)
            if missing:
                logger.warning(
                    f"Primitive not found for {token_path} ({', '.join(missing)}), "
                    f"using {PLACEHOLDER_NUMBER}"
                )
                report.placeholders.append(token_path)

            default_ref = device_ref(tuple(refs), default.device)
            default_path = build_full_path(
                list(tier.primitive_path), default_ref, store.separator
            )
            full_path = build_full_path(segments[:-1], segments[-1], store.separator)
            existed = store.get_by_path(full_path) is not None
            store.create(
                name=segments[-1],
                path=segments[:-1],
                type=TokenType.NUMBER,
                value=mode_values[breakpoints.mode_name(default)],
                collection=collection,
                description=f"{tier.label} {row_path.replace('/', ' ')}",
                tags=[tier.key, category, default_ref],
                references=(
                    TokenReference(light=default_path)
                    if store.get_by_path(default_path)
                    else None
                ),
                mode_values=mode_values,
            )
            if existed:
                report.updated += 1
            else:
                report.created += 1

    logger.info(
        f"Generated {report.created} {tier.key} tokens, updated {report.updated}, "
        f"{len(report.placeholders)} with placeholders",
        extra={"operation": tier.key, "token_count": report.total},
    )
    return report
