"""Synchronization of local tokens with host variables."""

from .diff import (
    actionable_changes,
    change_display_name,
    compute_diff,
    format_value,
    host_to_plugin_variable,
    plugin_variables_from_store,
    values_equal,
)
from .messages import InboundMessage, MessageType, parse_inbound
from .models import (
    ChangeType,
    DiffSummary,
    HostCollection,
    HostMode,
    HostModeValue,
    HostVariable,
    ModeChange,
    PluginVariable,
    SyncChange,
    SyncDiff,
    SyncResult,
)
from .session import SyncPhase, SyncSession

__all__ = [
    "ChangeType",
    "DiffSummary",
    "HostCollection",
    "HostMode",
    "HostModeValue",
    "HostVariable",
    "InboundMessage",
    "MessageType",
    "ModeChange",
    "PluginVariable",
    "SyncChange",
    "SyncDiff",
    "SyncPhase",
    "SyncResult",
    "SyncSession",
    "actionable_changes",
    "change_display_name",
    "compute_diff",
    "format_value",
    "host_to_plugin_variable",
    "parse_inbound",
    "plugin_variables_from_store",
    "values_equal",
]
