"""Export the store as a JSON token document or CSS custom properties."""

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from .colors import ColorValue, rgba_to_hex
from .models import CaseStyle, CollectionType, Token, TokenType, TokenValue
from .paths import style_path
from .store import TokenStore
from .token_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.EXPORT)

EXPORT_VERSION = "1.0.0"

# Collection -> top-level group; other collections go to primitives.
EXPORT_GROUPS: dict[str, str] = {
    CollectionType.PRIMITIVES.value: "primitives",
    CollectionType.TOKENS.value: "tokens",
    CollectionType.COMPONENTS.value: "components",
    CollectionType.SPACING.value: "tokens",
    CollectionType.GAP.value: "tokens",
    CollectionType.ICON_SIZE.value: "tokens",
    CollectionType.RADIUS.value: "tokens",
    CollectionType.TYPOGRAPHY.value: "tokens",
}
DEFAULT_GROUP = "primitives"

# Numeric tokens exported without a px unit.
UNITLESS_PREFIXES = ("line-height", "font-weight")


@dataclass
class ExportOptions:
    format: str = "json"  # json or css
    collections: list[str] | None = None  # None exports every collection
    include_disabled: bool = False
    separator: str = "/"
    flatten_paths: bool = False
    case_style: CaseStyle | None = None  # None keeps segments as stored


def select_tokens(store: TokenStore, options: ExportOptions) -> list[Token]:
    """Tokens an export includes, in store order."""
    tokens = store.tokens if options.include_disabled else store.enabled_tokens()
    if options.collections is not None:
        wanted = set(options.collections)
        tokens = [t for t in tokens if t.collection in wanted]
    return tokens


def export_value(value: TokenValue) -> Any:
    """Plain JSON value of a token; colors become hex."""
    if isinstance(value, ColorValue):
        return rgba_to_hex(value.rgba, include_alpha=value.rgba.a < 1)
    return value


def token_segments(token: Token, options: ExportOptions) -> list[str]:
    """Path segments plus name, re-cased when the options ask for it."""
    segments = [*token.path, token.name]
    if options.case_style is None:
        return segments
    return style_path(segments, options.case_style)


def _leaf(token: Token) -> dict[str, Any]:
    leaf: dict[str, Any] = {
        "$type": token.type.value.lower(),
        "$value": export_value(token.value),
    }
    if token.description:
        leaf["$description"] = token.description
    if token.mode_values:
        leaf["$extensions"] = {
            "modes": {mode: export_value(v) for mode, v in token.mode_values.items()}
        }
    return leaf


def export_json(
    store: TokenStore,
    options: ExportOptions | None = None,
    name: str = "Design Tokens",
    now: datetime | None = None,
) -> dict[str, Any]:
    """Build a JSON token document.

    Leaves are nested by path segments, or keyed by their full path joined
    with ``options.separator`` when ``flatten_paths`` is set.
    """
    options = options or ExportOptions()
    now = now or datetime.now(UTC)

    groups: dict[str, dict[str, Any]] = {"primitives": {}, "tokens": {}, "components": {}}
    tokens = select_tokens(store, options)
    for token in tokens:
        group = groups[EXPORT_GROUPS.get(token.collection, DEFAULT_GROUP)]
        segments = token_segments(token, options)
        if options.flatten_paths:
            group[options.separator.join(segments)] = _leaf(token)
            continue

        node = group
        for segment in segments[:-1]:
            node = node.setdefault(segment, {})
        node[segments[-1]] = _leaf(token)

    logger.info(
        f"Exported {len(tokens)} tokens as JSON",
        extra={"operation": "export", "token_count": len(tokens)},
    )
    return {
        "$version": EXPORT_VERSION,
        "$name": name,
        "$timestamp": now.isoformat(),
        **groups,
    }


def css_variable_name(token: Token) -> str:
    """``--`` plus the lowercased path segments joined with '-'."""
    raw = "-".join([*token.path, token.name]).lower()
    return "--" + re.sub(r"[^a-z0-9_-]+", "-", raw).strip("-")


def css_value(token: Token) -> str:
    if token.type is TokenType.COLOR:
        return str(export_value(token.value))
    if token.type is TokenType.NUMBER:
        number = token.value
        text = str(int(number)) if float(number).is_integer() else str(number)
        if token.name.startswith(UNITLESS_PREFIXES) or number == 0:
            return text
        return f"{text}px"
    if token.type is TokenType.BOOLEAN:
        return "1" if token.value else "0"
    text = str(token.value)
    if token.name.startswith("font-family") and " " in text:
        return f'"{text}"'
    return text


def export_css(store: TokenStore, options: ExportOptions | None = None) -> str:
    """Render tokens as CSS custom properties on ``:root``."""
    options = options or ExportOptions(format="css")
    tokens = select_tokens(store, options)

    lines = [":root {"]
    current_collection = None
    for token in tokens:
        if token.collection != current_collection:
            if current_collection is not None:
                lines.append("")
            lines.append(f"  /* {token.collection} */")
            current_collection = token.collection
        lines.append(f"  {css_variable_name(token)}: {css_value(token)};")
    lines.append("}")

    logger.info(
        f"Exported {len(tokens)} tokens as CSS",
        extra={"operation": "export", "token_count": len(tokens)},
    )
    return "\n".join(lines) + "\n"
