"""Sync data model: host-side variables and the diff computed against them.

Values use the host's shapes: colors are ``{"r", "g", "b", "a"}`` dicts
with 0-1 channels, numbers are floats, strings and booleans are plain.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Default mode every new host collection starts with; never removed by sync.
HOST_DEFAULT_MODE = "Mode 1"


class ChangeType(Enum):
    """Kind of change needed to reconcile one variable."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
    UNCHANGED = "unchanged"


@dataclass
class HostMode:
    mode_id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"modeId": self.mode_id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HostMode":
        return cls(mode_id=data["modeId"], name=data["name"])


@dataclass
class HostCollection:
    """A variable collection as the host reports it."""

    id: str
    name: str
    modes: list[HostMode] = field(default_factory=list)
    default_mode_id: str | None = None
    variable_count: int = 0

    @property
    def mode_names(self) -> list[str]:
        return [mode.name for mode in self.modes]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "modes": [mode.to_dict() for mode in self.modes],
            "defaultModeId": self.default_mode_id,
            "variableCount": self.variable_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HostCollection":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            modes=[HostMode.from_dict(m) for m in data.get("modes", [])],
            default_mode_id=data.get("defaultModeId"),
            variable_count=data.get("variableCount", 0),
        )


@dataclass
class HostModeValue:
    """Value of a host variable in one mode, or an alias to another variable."""

    mode_id: str
    mode_name: str
    value: Any = None
    alias_id: str | None = None
    alias_name: str | None = None

    @property
    def is_alias(self) -> bool:
        return self.alias_id is not None

    @property
    def comparable(self) -> Any:
        """The alias name for aliases, the raw value otherwise."""
        return self.alias_name if self.is_alias else self.value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "modeId": self.mode_id,
            "modeName": self.mode_name,
            "value": self.value,
        }
        if self.is_alias:
            data["aliasId"] = self.alias_id
            data["aliasName"] = self.alias_name
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HostModeValue":
        return cls(
            mode_id=data["modeId"],
            mode_name=data["modeName"],
            value=data.get("value"),
            alias_id=data.get("aliasId"),
            alias_name=data.get("aliasName"),
        )


@dataclass
class HostVariable:
    """A variable as the host reports it, with one entry per mode."""

    id: str
    name: str
    resolved_type: str  # COLOR, FLOAT, STRING or BOOLEAN
    collection_id: str = ""
    collection_name: str = ""
    description: str | None = None
    mode_values: list[HostModeValue] = field(default_factory=list)
    scopes: list[str] | None = None

    def mode_value(self, mode_name: str) -> HostModeValue | None:
        for mode_value in self.mode_values:
            if mode_value.mode_name == mode_name:
                return mode_value
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "resolvedType": self.resolved_type,
            "collectionId": self.collection_id,
            "collectionName": self.collection_name,
            "description": self.description,
            "modeValues": [mv.to_dict() for mv in self.mode_values],
            "scopes": self.scopes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HostVariable":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            resolved_type=data["resolvedType"],
            collection_id=data.get("collectionId", ""),
            collection_name=data.get("collectionName", ""),
            description=data.get("description"),
            mode_values=[HostModeValue.from_dict(mv) for mv in data.get("modeValues", [])],
            scopes=data.get("scopes"),
        )


@dataclass
class PluginVariable:
    """A local variable we want the host to have.

    ``mode_values`` maps mode names to host-shaped values. ``alias_to`` is
    the name of a host variable to alias instead of a raw value.
    """

    name: str
    type: str
    mode_values: dict[str, Any] = field(default_factory=dict)
    description: str | None = None
    alias_to: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "modeValues": dict(self.mode_values),
        }
        if self.alias_to is not None:
            data["aliasTo"] = self.alias_to
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PluginVariable":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            type=data["type"],
            mode_values=dict(data.get("modeValues") or {}),
            description=data.get("description"),
            alias_to=data.get("aliasTo"),
        )


@dataclass
class ModeChange:
    """One differing mode of an updated variable."""

    mode_name: str
    old_value: Any  # None when the mode is missing on the host
    new_value: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "modeName": self.mode_name,
            "oldValue": self.old_value,
            "newValue": self.new_value,
        }


@dataclass
class SyncChange:
    """The change for one variable name."""

    type: ChangeType
    variable_name: str
    old_value: Any = None
    new_value: Any = None
    figma_id: str | None = None
    plugin_variable: PluginVariable | None = None
    mode_changes: list[ModeChange] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the shape sent in ``sync-apply-changes``."""
        data: dict[str, Any] = {
            "type": self.type.value,
            "variableName": self.variable_name,
            "oldValue": self.old_value,
            "newValue": self.new_value,
        }
        if self.figma_id is not None:
            data["figmaId"] = self.figma_id
        if self.plugin_variable is not None:
            data["pluginVariable"] = self.plugin_variable.to_dict()
        if self.mode_changes:
            data["modeChanges"] = [mc.to_dict() for mc in self.mode_changes]
        return data


@dataclass
class DiffSummary:
    """Change counts per type."""

    add: int = 0
    update: int = 0
    delete: int = 0
    unchanged: int = 0

    @classmethod
    def from_changes(cls, changes: list[SyncChange]) -> "DiffSummary":
        summary = cls()
        for change in changes:
            attr = change.type.value
            setattr(summary, attr, getattr(summary, attr) + 1)
        return summary

    def to_dict(self) -> dict[str, int]:
        return {
            "add": self.add,
            "update": self.update,
            "delete": self.delete,
            "unchanged": self.unchanged,
        }


@dataclass
class SyncDiff:
    """Everything needed to bring one host collection in line with local state."""

    collection_name: str
    collection_id: str | None = None
    modes_to_add: list[str] = field(default_factory=list)
    modes_to_remove: list[str] = field(default_factory=list)
    changes: list[SyncChange] = field(default_factory=list)
    summary: DiffSummary = field(default_factory=DiffSummary)

    @property
    def has_changes(self) -> bool:
        """True when applying the diff would modify the host."""
        return bool(
            self.summary.add
            or self.summary.update
            or self.summary.delete
            or self.modes_to_add
        )

    def changes_of(self, change_type: ChangeType) -> list[SyncChange]:
        return [c for c in self.changes if c.type is change_type]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "collectionName": self.collection_name,
            "collectionId": self.collection_id,
            "modesToAdd": list(self.modes_to_add),
            "modesToRemove": list(self.modes_to_remove),
            "changes": [c.to_dict() for c in self.changes],
            "summary": self.summary.to_dict(),
        }


@dataclass
class SyncResult:
    """Outcome of an apply as reported by the host.

    Counts reflect only what succeeded. ``success`` with a non-empty
    ``errors`` list means a partial apply.
    """

    success: bool
    collection_name: str = ""
    created: int = 0
    updated: int = 0
    deleted: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        return self.success and bool(self.errors)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncResult":
        """Create from dictionary."""
        return cls(
            success=data["success"],
            collection_name=data.get("collectionName", ""),
            created=data.get("created", 0),
            updated=data.get("updated", 0),
            deleted=data.get("deleted", 0),
            errors=list(data.get("errors") or []),
            warnings=list(data.get("warnings") or []),
        )
