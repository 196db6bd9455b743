"""Diff local variables against a host collection.

Everything here is pure: inputs are never mutated and nothing is sent to
the host. The session decides what to do with the result.
"""

import json
from typing import Any

from ..colors import round_half_up
from ..models import Token, TokenType, host_value
from ..store import TokenStore
from ..token_logging import LogCategory, get_category_logger
from .models import (
    HOST_DEFAULT_MODE,
    ChangeType,
    DiffSummary,
    HostCollection,
    HostVariable,
    ModeChange,
    PluginVariable,
    SyncChange,
    SyncDiff,
)

logger = get_category_logger(LogCategory.SYNC)

COLOR_TOLERANCE = 0.001

HOST_TYPES: dict[TokenType, str] = {
    TokenType.COLOR: "COLOR",
    TokenType.NUMBER: "FLOAT",
    TokenType.STRING: "STRING",
    TokenType.BOOLEAN: "BOOLEAN",
}


def _kind(value: Any) -> str:
    # bool is checked first since it is an int subclass.
    if value is None:
        return "none"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list | tuple):
        return "array"
    return type(value).__name__


def _is_color(value: Any) -> bool:
    return isinstance(value, dict) and all(key in value for key in ("r", "g", "b"))


def values_equal(a: Any, b: Any) -> bool:
    """Compare two host-shaped values.

    Values of different kinds are never equal. Colors match when every
    channel (alpha defaulting to 1) is within 0.001.
    """
    if _kind(a) != _kind(b):
        return False
    if _is_color(a) and _is_color(b):
        return all(
            abs(float(a.get(ch, 1.0)) - float(b.get(ch, 1.0))) < COLOR_TOLERANCE
            for ch in ("r", "g", "b", "a")
        )
    return a == b


def _unique_modes(variables: list[PluginVariable]) -> list[str]:
    modes: dict[str, None] = {}
    for variable in variables:
        for mode in variable.mode_values:
            modes.setdefault(mode, None)
    return list(modes)


def _mode_changes(local: PluginVariable, host: HostVariable) -> list[ModeChange]:
    changes = []
    for mode_name, local_value in local.mode_values.items():
        host_mode = host.mode_value(mode_name)
        if host_mode is None:
            changes.append(ModeChange(mode_name, None, local_value))
            continue

        new_value = local.alias_to if local.alias_to is not None else local_value
        if not values_equal(host_mode.comparable, new_value):
            changes.append(ModeChange(mode_name, host_mode.comparable, new_value))
    return changes


def compute_diff(
    collection_name: str,
    local_variables: list[PluginVariable],
    host_collection: HostCollection | None,
    host_variables: list[HostVariable],
    include_deletes: bool = False,
) -> SyncDiff:
    """Compute the changes that make the host collection match local state.

    Each local variable yields exactly one change, in local order. With
    ``include_deletes``, each host variable missing locally yields one
    ``delete`` after them, in host order.
    """
    host_by_name = {variable.name: variable for variable in host_variables}
    local_names = {variable.name for variable in local_variables}
    changes: list[SyncChange] = []

    for local in local_variables:
        host = host_by_name.get(local.name)
        if host is None:
            changes.append(
                SyncChange(
                    type=ChangeType.ADD,
                    variable_name=local.name,
                    new_value=dict(local.mode_values),
                    plugin_variable=local,
                )
            )
            continue

        mode_changes = _mode_changes(local, host)
        if mode_changes:
            changes.append(
                SyncChange(
                    type=ChangeType.UPDATE,
                    variable_name=local.name,
                    old_value={mc.mode_name: mc.old_value for mc in mode_changes},
                    new_value={mc.mode_name: mc.new_value for mc in mode_changes},
                    figma_id=host.id,
                    plugin_variable=local,
                    mode_changes=mode_changes,
                )
            )
        else:
            changes.append(
                SyncChange(
                    type=ChangeType.UNCHANGED,
                    variable_name=local.name,
                    figma_id=host.id,
                )
            )

    if include_deletes:
        for host in host_variables:
            if host.name not in local_names:
                changes.append(
                    SyncChange(
                        type=ChangeType.DELETE,
                        variable_name=host.name,
                        old_value={mv.mode_name: mv.comparable for mv in host.mode_values},
                        figma_id=host.id,
                    )
                )

    local_modes = _unique_modes(local_variables)
    host_modes = host_collection.mode_names if host_collection else []
    modes_to_add = [mode for mode in local_modes if mode not in host_modes]
    modes_to_remove = [
        mode
        for mode in host_modes
        if mode not in local_modes and mode != HOST_DEFAULT_MODE
    ]

    diff = SyncDiff(
        collection_name=collection_name,
        collection_id=host_collection.id if host_collection else None,
        modes_to_add=modes_to_add,
        modes_to_remove=modes_to_remove if include_deletes else [],
        changes=changes,
        summary=DiffSummary.from_changes(changes),
    )
    logger.debug(
        f"Diff for {collection_name}: {diff.summary.to_dict()}",
        extra={"operation": "diff", "collection": collection_name},
    )
    return diff


def actionable_changes(diff: SyncDiff) -> list[SyncChange]:
    """Changes worth sending to the host."""
    return [c for c in diff.changes if c.type is not ChangeType.UNCHANGED]


def host_to_plugin_variable(variable: HostVariable) -> PluginVariable:
    """Convert a host variable; aliases become ``{name}`` strings."""
    mode_values = {
        mv.mode_name: f"{{{mv.alias_name}}}" if mv.is_alias else mv.value
        for mv in variable.mode_values
    }
    return PluginVariable(
        name=variable.name,
        type=variable.resolved_type,
        mode_values=mode_values,
        description=variable.description,
    )


def token_to_plugin_variable(token: Token, default_mode: str) -> PluginVariable:
    """Convert a token; tokens without per-mode values use ``default_mode``."""
    if token.mode_values:
        mode_values = {mode: host_value(v) for mode, v in token.mode_values.items()}
    else:
        mode_values = {default_mode: token.host_value}
    return PluginVariable(
        name="/".join([*token.path, token.name]),
        type=HOST_TYPES[token.type],
        mode_values=mode_values,
        description=token.description,
    )


def plugin_variables_from_store(store: TokenStore, collection: str) -> list[PluginVariable]:
    """Enabled tokens of a collection as variables, in store order."""
    local_collection = store.get_collection(collection)
    default = local_collection.default_mode if local_collection else None
    default_mode = default.name if default else HOST_DEFAULT_MODE
    return [
        token_to_plugin_variable(token, default_mode)
        for token in store.by_collection(collection)
        if token.enabled
    ]


def change_display_name(change: SyncChange) -> str:
    """Variable name without its first path segment."""
    parts = change.variable_name.split("/")
    return "/".join(parts[1:]) if len(parts) > 1 else change.variable_name


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_value(value: Any) -> str:
    """Short human-readable rendering of a host-shaped value."""
    if value is None:
        return "—"
    if _is_color(value):
        r, g, b = (round_half_up(float(value[ch]) * 255) for ch in ("r", "g", "b"))
        return f"rgb({r}, {g}, {b})"
    if isinstance(value, dict | list):
        return json.dumps(value, separators=(",", ":"))
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return _format_number(value)
    return str(value)
