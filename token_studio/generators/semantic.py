"""Semantic and component token derivation.

Semantic tokens (collection ``Tokens``) alias color primitives per theme
mode; component tokens (collection ``Components``) alias semantic tokens.
References are resolved by exact name or path match. A reference that
does not resolve yet falls back to a mid-gray placeholder and a warning,
so generation order between tiers never blocks; running the generator
again after the referenced tokens exist replaces the placeholders.
"""

from dataclasses import dataclass, field

from ..colors import ColorValue, color_value
from ..errors import MissingPrerequisiteError
from ..models import CollectionType, Theme, Token, TokenReference, TokenSemantic, TokenType
from ..paths import build_full_path
from ..store import TokenStore
from ..themes import DEFAULT_THEME_ID, mode_variant, theme_modes
from ..token_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.GENERATOR)

PLACEHOLDER_HEX = "#808080"

STATE_SUFFIXES = ("hover", "active", "focus", "disabled", "selected", "error")

# category -> (semantic path, light primitive, dark primitive, description)
SEMANTIC_MAPPINGS: dict[str, tuple[tuple[str, str, str, str], ...]] = {
    "action": (
        ("action/primary", "brand-500", "brand-400", "Primary action"),
        ("action/primary-hover", "brand-600", "brand-300", "Primary hover"),
        ("action/primary-active", "brand-700", "brand-200", "Primary active"),
        ("action/secondary", "neutral-100", "neutral-800", "Secondary action"),
        ("action/secondary-hover", "neutral-200", "neutral-700", "Secondary hover"),
        ("action/primary-focus", "brand-600", "brand-300", "Primary focus"),
        ("action/primary-disabled", "neutral-200", "neutral-700", "Primary disabled"),
        ("action/secondary-active", "neutral-300", "neutral-600", "Secondary active"),
        ("action/secondary-focus", "neutral-200", "neutral-700", "Secondary focus"),
        ("action/secondary-disabled", "neutral-100", "neutral-800", "Secondary disabled"),
        ("action/ghost", "neutral-25", "neutral-950", "Ghost action"),
        ("action/ghost-hover", "neutral-100", "neutral-800", "Ghost hover"),
        ("action/ghost-active", "neutral-200", "neutral-700", "Ghost active"),
        ("action/ghost-focus", "neutral-100", "neutral-800", "Ghost focus"),
        ("action/ghost-disabled", "neutral-25", "neutral-950", "Ghost disabled"),
        ("action/danger", "error-500", "error-400", "Destructive action"),
        ("action/danger-hover", "error-600", "error-300", "Danger hover"),
        ("action/danger-active", "error-700", "error-200", "Danger active"),
        ("action/danger-focus", "error-600", "error-300", "Danger focus"),
        ("action/danger-disabled", "error-200", "error-800", "Danger disabled"),
        ("action/disabled", "neutral-300", "neutral-600", "Disabled state"),
    ),
    "content": (
        ("content/on-primary", "neutral-25", "neutral-950", "Content on primary"),
        ("content/on-primary-disabled", "neutral-400", "neutral-500", "Disabled on primary"),
        ("content/on-secondary", "neutral-900", "neutral-50", "Content on secondary"),
        ("content/on-secondary-disabled", "neutral-400", "neutral-500", "Disabled on secondary"),
        ("content/on-ghost", "neutral-900", "neutral-50", "Content on ghost"),
        ("content/on-ghost-disabled", "neutral-400", "neutral-500", "Disabled on ghost"),
        ("content/on-danger", "neutral-25", "neutral-25", "Content on danger"),
        ("content/on-danger-disabled", "neutral-400", "neutral-500", "Disabled on danger"),
    ),
    "background": (
        ("background/primary", "neutral-25", "neutral-950", "Main background"),
        ("background/secondary", "neutral-50", "neutral-900", "Secondary bg"),
        ("background/tertiary", "neutral-100", "neutral-850", "Tertiary bg"),
        ("background/elevated", "neutral-25", "neutral-800", "Elevated surfaces"),
        ("background/overlay", "neutral-900", "neutral-25", "Overlay bg"),
        ("background/brand", "brand-50", "brand-950", "Brand background"),
    ),
    "text": (
        ("text/primary", "neutral-900", "neutral-50", "Primary text"),
        ("text/secondary", "neutral-600", "neutral-400", "Secondary text"),
        ("text/tertiary", "neutral-400", "neutral-500", "Tertiary text"),
        ("text/disabled", "neutral-300", "neutral-600", "Disabled text"),
        ("text/inverse", "neutral-25", "neutral-950", "Inverse text"),
        ("text/brand", "brand-600", "brand-400", "Brand text"),
        ("text/link", "brand-500", "brand-400", "Link text"),
    ),
    "border": (
        ("border/default", "neutral-200", "neutral-700", "Default border"),
        ("border/strong", "neutral-300", "neutral-600", "Strong border"),
        ("border/subtle", "neutral-100", "neutral-800", "Subtle border"),
        ("border/focus", "brand-500", "brand-400", "Focus ring"),
        ("border/error", "error-500", "error-400", "Error border"),
    ),
    "status": (
        ("status/success", "success-500", "success-400", "Success"),
        ("status/success-bg", "success-50", "success-950", "Success bg"),
        ("status/warning", "warning-500", "warning-400", "Warning"),
        ("status/warning-bg", "warning-50", "warning-950", "Warning bg"),
        ("status/error", "error-500", "error-400", "Error"),
        ("status/error-bg", "error-50", "error-950", "Error bg"),
        ("status/info", "info-500", "info-400", "Info"),
        ("status/info-bg", "info-50", "info-950", "Info bg"),
    ),
}

# component -> (component path, semantic path, description)
COMPONENT_MAPPINGS: dict[str, tuple[tuple[str, str, str], ...]] = {
    "button": (
        ("button/primary/background", "action/primary", "Primary btn bg"),
        ("button/primary/background-hover", "action/primary-hover", "Primary btn hover"),
        ("button/primary/background-active", "action/primary-active", "Primary btn active"),
        ("button/primary/background-focus", "action/primary-focus", "Primary btn focus"),
        ("button/primary/background-disabled", "action/primary-disabled", "Primary btn disabled"),
        ("button/primary/text", "content/on-primary", "Primary btn text"),
        ("button/primary/text-disabled", "content/on-primary-disabled", "Primary btn disabled text"),
        ("button/primary/icon", "content/on-primary", "Primary btn icon"),
        ("button/primary/icon-disabled", "content/on-primary-disabled", "Primary btn disabled icon"),
        ("button/primary/border", "action/primary", "Primary btn border"),
        ("button/primary/border-focus", "border/focus", "Primary btn focus ring"),
        ("button/secondary/background", "action/secondary", "Secondary btn bg"),
        ("button/secondary/background-hover", "action/secondary-hover", "Secondary btn hover"),
        ("button/secondary/background-active", "action/secondary-active", "Secondary btn active"),
        ("button/secondary/background-focus", "action/secondary-focus", "Secondary btn focus"),
        ("button/secondary/background-disabled", "action/secondary-disabled", "Secondary btn disabled"),
        ("button/secondary/text", "content/on-secondary", "Secondary btn text"),
        ("button/secondary/text-disabled", "content/on-secondary-disabled", "Secondary btn disabled text"),
        ("button/secondary/icon", "content/on-secondary", "Secondary btn icon"),
        ("button/secondary/icon-disabled", "content/on-secondary-disabled", "Secondary btn disabled icon"),
        ("button/secondary/border", "border/default", "Secondary btn border"),
        ("button/secondary/border-hover", "border/strong", "Secondary btn hover border"),
        ("button/secondary/border-focus", "border/focus", "Secondary btn focus ring"),
        ("button/ghost/background", "action/ghost", "Ghost btn bg"),
        ("button/ghost/background-hover", "action/ghost-hover", "Ghost btn hover"),
        ("button/ghost/background-active", "action/ghost-active", "Ghost btn active"),
        ("button/ghost/background-focus", "action/ghost-focus", "Ghost btn focus"),
        ("button/ghost/background-disabled", "action/ghost-disabled", "Ghost btn disabled"),
        ("button/ghost/text", "content/on-ghost", "Ghost btn text"),
        ("button/ghost/text-disabled", "content/on-ghost-disabled", "Ghost btn disabled text"),
        ("button/ghost/icon", "content/on-ghost", "Ghost btn icon"),
        ("button/ghost/icon-disabled", "content/on-ghost-disabled", "Ghost btn disabled icon"),
        ("button/ghost/border-focus", "border/focus", "Ghost btn focus ring"),
        ("button/danger/background", "action/danger", "Danger btn bg"),
        ("button/danger/background-hover", "action/danger-hover", "Danger btn hover"),
        ("button/danger/background-active", "action/danger-active", "Danger btn active"),
        ("button/danger/background-focus", "action/danger-focus", "Danger btn focus"),
        ("button/danger/background-disabled", "action/danger-disabled", "Danger btn disabled"),
        ("button/danger/text", "content/on-danger", "Danger btn text"),
        ("button/danger/text-disabled", "content/on-danger-disabled", "Danger btn disabled text"),
        ("button/danger/icon", "content/on-danger", "Danger btn icon"),
        ("button/danger/icon-disabled", "content/on-danger-disabled", "Danger btn disabled icon"),
        ("button/danger/border", "action/danger", "Danger btn border"),
        ("button/danger/border-focus", "border/error", "Danger btn focus ring"),
    ),
    "input": (
        ("input/background", "background/primary", "Input bg"),
        ("input/background-hover", "background/secondary", "Input hover bg"),
        ("input/background-focus", "background/elevated", "Input focus bg"),
        ("input/background-disabled", "background/tertiary", "Input disabled bg"),
        ("input/background-error", "background/primary", "Input error bg"),
        ("input/text", "text/primary", "Input text"),
        ("input/text-disabled", "text/disabled", "Input disabled text"),
        ("input/placeholder", "text/tertiary", "Placeholder"),
        ("input/placeholder-disabled", "text/disabled", "Placeholder disabled"),
        ("input/border", "border/default", "Input border"),
        ("input/border-hover", "border/strong", "Input hover border"),
        ("input/border-focus", "border/focus", "Focus border"),
        ("input/border-disabled", "border/subtle", "Disabled border"),
        ("input/border-error", "border/error", "Error border"),
        ("input/label", "text/secondary", "Label text"),
        ("input/label-disabled", "text/disabled", "Label disabled"),
        ("input/helper", "text/tertiary", "Helper text"),
        ("input/error", "status/error", "Error text"),
        ("input/icon", "text/secondary", "Input icon"),
        ("input/icon-disabled", "text/disabled", "Input icon disabled"),
    ),
    "card": (
        ("card/background", "background/elevated", "Card bg"),
        ("card/background-hover", "background/secondary", "Card hover"),
        ("card/background-active", "background/tertiary", "Card active"),
        ("card/background-selected", "background/brand", "Card selected"),
        ("card/border", "border/subtle", "Card border"),
        ("card/border-hover", "border/default", "Card hover border"),
        ("card/border-selected", "border/focus", "Card selected border"),
        ("card/title", "text/primary", "Card title"),
        ("card/description", "text/secondary", "Card desc"),
        ("card/divider", "border/default", "Card divider"),
    ),
    "badge": (
        ("badge/default/background", "background/tertiary", "Default badge bg"),
        ("badge/default/text", "text/primary", "Default badge text"),
        ("badge/default/border", "border/subtle", "Default badge border"),
        ("badge/brand/background", "background/brand", "Brand badge bg"),
        ("badge/brand/text", "text/brand", "Brand badge text"),
        ("badge/brand/border", "action/primary", "Brand badge border"),
        ("badge/success/background", "status/success-bg", "Success badge bg"),
        ("badge/success/text", "status/success", "Success badge text"),
        ("badge/success/border", "status/success", "Success badge border"),
        ("badge/warning/background", "status/warning-bg", "Warning badge bg"),
        ("badge/warning/text", "status/warning", "Warning badge text"),
        ("badge/warning/border", "status/warning", "Warning badge border"),
        ("badge/error/background", "status/error-bg", "Error badge bg"),
        ("badge/error/text", "status/error", "Error badge text"),
        ("badge/error/border", "status/error", "Error badge border"),
        ("badge/info/background", "status/info-bg", "Info badge bg"),
        ("badge/info/text", "status/info", "Info badge text"),
        ("badge/info/border", "status/info", "Info badge border"),
    ),
    "alert": tuple(
        row
        for kind in ("success", "warning", "error", "info")
        for row in (
            (f"alert/{kind}/background", f"status/{kind}-bg", f"{kind.title()} alert bg"),
            (f"alert/{kind}/border", f"status/{kind}", f"{kind.title()} alert border"),
            (f"alert/{kind}/icon", f"status/{kind}", f"{kind.title()} alert icon"),
            (f"alert/{kind}/title", "text/primary", f"{kind.title()} alert title"),
            (f"alert/{kind}/text", "text/secondary", f"{kind.title()} alert text"),
            (f"alert/{kind}/link", f"status/{kind}", f"{kind.title()} alert link"),
        )
    ),
    "nav": (
        ("nav/background", "background/primary", "Nav bg"),
        ("nav/border", "border/default", "Nav border"),
        ("nav/item/background", "background/primary", "Nav item bg"),
        ("nav/item/background-hover", "background/secondary", "Nav item hover bg"),
        ("nav/item/background-active", "background/brand", "Nav item active bg"),
        ("nav/item/background-selected", "background/tertiary", "Nav item selected bg"),
        ("nav/item/background-disabled", "background/primary", "Nav item disabled bg"),
        ("nav/item/text", "text/secondary", "Nav item text"),
        ("nav/item/text-hover", "text/primary", "Nav item hover text"),
        ("nav/item/text-active", "text/brand", "Nav item active text"),
        ("nav/item/text-selected", "text/primary", "Nav item selected text"),
        ("nav/item/text-disabled", "text/disabled", "Nav item disabled text"),
        ("nav/item/icon", "text/secondary", "Nav item icon"),
        ("nav/item/icon-hover", "text/primary", "Nav item hover icon"),
        ("nav/item/icon-active", "text/brand", "Nav item active icon"),
        ("nav/item/icon-disabled", "text/disabled", "Nav item disabled icon"),
        ("nav/item/indicator", "action/primary", "Active indicator"),
    ),
}


@dataclass
class GenerationReport:
    """What a derivation run wrote."""

    created: int = 0
    updated: int = 0
    placeholders: list[str] = field(default_factory=list)  # Unresolved full paths

    @property
    def total(self) -> int:
        return self.created + self.updated


def placeholder_value() -> ColorValue:
    return color_value(PLACEHOLDER_HEX)


def has_color_primitives(store: TokenStore) -> bool:
    return any(
        t.type is TokenType.COLOR for t in store.by_collection(CollectionType.PRIMITIVES.value)
    )


def has_semantic_tokens(store: TokenStore) -> bool:
    return any(
        t.type is TokenType.COLOR for t in store.by_collection(CollectionType.TOKENS.value)
    )


def find_primitive(store: TokenStore, color_name: str) -> Token | None:
    """Find a color primitive by exact (case-insensitive) token name."""
    wanted = color_name.lower()
    for token in store.by_collection(CollectionType.PRIMITIVES.value):
        if token.type is TokenType.COLOR and token.name.lower() == wanted:
            return token
    return None


def find_semantic(store: TokenStore, semantic_path: str) -> Token | None:
    """Find a semantic token by its slash-separated path."""
    segments = semantic_path.split("/")
    full_path = build_full_path(segments[:-1], segments[-1], store.separator)
    token = store.get_by_path(full_path)
    if token is not None and token.collection == CollectionType.TOKENS.value:
        return token
    return None


def _semantic_info(category: str, name: str) -> TokenSemantic:
    base, _, suffix = name.rpartition("-")
    if base and suffix in STATE_SUFFIXES:
        return TokenSemantic(category=category, subcategory=base, state=suffix)
    return TokenSemantic(category=category, subcategory=name, state="default")


def _resolve_primitive(store: TokenStore, theme: Theme, ref: str) -> Token | None:
    if theme.id != DEFAULT_THEME_ID:
        themed = find_primitive(store, f"{theme.id}-{ref}")
        if themed is not None:
            return themed
    return find_primitive(store, ref)


def _write(
    store: TokenStore,
    report: GenerationReport,
    token_path: str,
    collection: str,
    mode_values: dict[str, ColorValue],
    references: TokenReference | None,
    description: str,
    tags: list[str],
    semantic: TokenSemantic | None = None,
) -> Token:
    segments = token_path.split("/")
    name, path = segments[-1], segments[:-1]
    full_path = build_full_path(path, name, store.separator)
    existed = store.get_by_path(full_path) is not None

    first_value = next(iter(mode_values.values()))
    token = store.create(
        name=name,
        path=path,
        type=TokenType.COLOR,
        value=first_value,
        collection=collection,
        description=description,
        tags=tags,
        semantic=semantic,
        references=references,
        mode_values=mode_values,
    )
    if existed:
        report.updated += 1
    else:
        report.created += 1
    return token


def _register_modes(store: TokenStore, collection: str, modes: list[str]) -> None:
    for mode in modes:
        store.add_mode(collection, mode)


def generate_semantic_tokens(
    store: TokenStore,
    themes: list[Theme],
    categories: list[str] | None = None,
) -> GenerationReport:
    """Create semantic tokens for each mapping row, with one value per mode.

    Raises:
        MissingPrerequisiteError: If no color primitives exist yet.
    """
    if not has_color_primitives(store):
        raise MissingPrerequisiteError(
            "No color primitives found",
            suggestion="Generate color primitives before semantic tokens",
        )

    modes = [(theme, mode) for theme in themes for mode in theme_modes(theme)]
    if not modes:
        raise MissingPrerequisiteError(
            "No theme modes to generate", suggestion="Enable light or dark on a theme"
        )

    report = GenerationReport()
    _register_modes(store, CollectionType.TOKENS.value, [mode for _, mode in modes])

    for category in categories or list(SEMANTIC_MAPPINGS):
        for token_path, light_ref, dark_ref, description in SEMANTIC_MAPPINGS.get(
            category, ()
        ):
            mode_values: dict[str, ColorValue] = {}
            resolved_paths: dict[str, str] = {}
            missing: list[str] = []

            for theme, mode in modes:
                ref = dark_ref if mode_variant(mode) == "dark" else light_ref
                primitive = _resolve_primitive(store, theme, ref)
                if primitive is None:
                    mode_values[mode] = placeholder_value()
                    missing.append(f"{mode}:{ref}")
                    continue
                mode_values[mode] = primitive.value
                resolved_paths.setdefault(mode_variant(mode), primitive.full_path)

            if missing:
                logger.warning(
                    f"Primitive not found for {token_path} ({', '.join(missing)}), "
                    f"using placeholder {PLACEHOLDER_HEX}"
                )
                report.placeholders.append(token_path)

            # Dark-only themes still point ``light`` at the first resolved path.
            references = (
                TokenReference(
                    light=resolved_paths.get("light") or resolved_paths["dark"],
                    dark=resolved_paths.get("dark"),
                )
                if resolved_paths
                else None
            )
            _write(
                store,
                report,
                token_path,
                CollectionType.TOKENS.value,
                mode_values,
                references,
                description,
                tags=["semantic", category, light_ref],
                semantic=_semantic_info(category, token_path.split("/")[-1]),
            )

    logger.info(
        f"Generated {report.created} semantic tokens, updated {report.updated}, "
        f"{len(report.placeholders)} with placeholders",
        extra={"operation": "semantic", "token_count": report.total},
    )
    return report


def generate_component_tokens(
    store: TokenStore,
    themes: list[Theme],
    components: list[str] | None = None,
) -> GenerationReport:
    """Create component tokens that alias semantic tokens per mode.

    Raises:
        MissingPrerequisiteError: If no semantic tokens exist yet.
    """
    if not has_color_primitives(store):
        raise MissingPrerequisiteError(
            "No color primitives found",
            suggestion="Generate color primitives first",
        )
    if not has_semantic_tokens(store):
        raise MissingPrerequisiteError(
            "No semantic tokens found",
            suggestion="Generate semantic tokens before component tokens",
        )

    modes = [mode for theme in themes for mode in theme_modes(theme)]
    if not modes:
        raise MissingPrerequisiteError(
            "No theme modes to generate", suggestion="Enable light or dark on a theme"
        )

    report = GenerationReport()
    _register_modes(store, CollectionType.COMPONENTS.value, modes)

    for component in components or list(COMPONENT_MAPPINGS):
        for token_path, semantic_path, description in COMPONENT_MAPPINGS.get(
            component, ()
        ):
            semantic = find_semantic(store, semantic_path)
            if semantic is None:
                logger.warning(
                    f"Semantic token not found: {semantic_path} for {token_path}, "
                    f"using placeholder {PLACEHOLDER_HEX}"
                )
                report.placeholders.append(token_path)
                mode_values = {mode: placeholder_value() for mode in modes}
                references = None
            else:
                source = semantic.mode_values or {}
                mode_values = {mode: source.get(mode, semantic.value) for mode in modes}
                references = TokenReference(light=semantic.full_path)

            _write(
                store,
                report,
                token_path,
                CollectionType.COMPONENTS.value,
                mode_values,
                references,
                description,
                tags=["component", component, semantic_path],
            )

    logger.info(
        f"Generated {report.created} component tokens, updated {report.updated}, "
        f"{len(report.placeholders)} with placeholders",
        extra={"operation": "component", "token_count": report.total},
    )
    return report
