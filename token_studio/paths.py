"""Pure helpers for token paths."""

import re

from .models import CaseStyle

_WORD_SPLIT_RE = re.compile(r"[\s_\-]+|(?<=[a-z0-9])(?=[A-Z])")


def build_full_path(path: list[str], name: str, separator: str = "/") -> str:
    """Join path segments and the leaf name with ``separator``."""
    return separator.join([*path, name])


def parse_full_path(full_path: str, separator: str = "/") -> tuple[list[str], str]:
    """Split a full path into ``(path, name)``; the last segment is the name."""
    parts = full_path.split(separator)
    name = parts.pop()
    return parts, name


def apply_case_style(segment: str, style: CaseStyle | str) -> str:
    """Re-case a path segment.

    Args:
        segment: A single path segment, e.g. "primary-hover" or "fontSize".
        style: Target case style.

    Returns:
        The segment in the requested style. Digits-only words are kept.
    """
    style = CaseStyle(style)
    words = [w for w in _WORD_SPLIT_RE.split(segment) if w]
    if not words:
        return segment

    if style is CaseStyle.KEBAB:
        return "-".join(w.lower() for w in words)
    if style is CaseStyle.SNAKE:
        return "_".join(w.lower() for w in words)

    capitalized = [w[:1].upper() + w[1:].lower() for w in words]
    if style is CaseStyle.PASCAL:
        return "".join(capitalized)
    return words[0].lower() + "".join(capitalized[1:])


def style_path(path: list[str], style: CaseStyle | str) -> list[str]:
    """Apply a case style to every segment of a path."""
    return [apply_case_style(segment, style) for segment in path]
