"""Host message contract.

Outbound messages are plain dicts ``{"type", "payload", "requestId"}``
ready for whatever transport the caller uses. Inbound messages are
validated with pydantic; anything that does not match the contract raises
``HostPayloadError``.

The host may echo ``requestId`` back. Hosts that predate it omit the
field, in which case responses are matched by type and collection id.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..errors import HostPayloadError
from ..models import Token, TokenType
from .diff import actionable_changes
from .models import HostCollection, HostVariable, SyncDiff, SyncResult


class MessageType(Enum):
    """Every message type exchanged with the host."""

    # Outbound
    SYNC_GET_COLLECTIONS = "sync-get-collections"
    SYNC_GET_VARIABLES = "sync-get-variables"
    SYNC_APPLY_CHANGES = "sync-apply-changes"
    CREATE_TYPOGRAPHY_VARIABLES = "create-typography-variables"
    CREATE_TEXT_STYLES = "create-text-styles"
    CREATE_SEMANTIC_TYPOGRAPHY_VARIABLES = "create-semantic-typography-variables"

    # Inbound
    SYNC_COLLECTIONS_LOADED = "sync-collections-loaded"
    SYNC_VARIABLES_LOADED = "sync-variables-loaded"
    SYNC_APPLIED = "sync-applied"
    SYNC_ERROR = "sync-error"


INBOUND_TYPES = frozenset(
    {
        MessageType.SYNC_COLLECTIONS_LOADED,
        MessageType.SYNC_VARIABLES_LOADED,
        MessageType.SYNC_APPLIED,
        MessageType.SYNC_ERROR,
    }
)


def new_request_id() -> str:
    return uuid.uuid4().hex


def _envelope(
    message_type: MessageType, payload: dict[str, Any] | None, request_id: str | None
) -> dict[str, Any]:
    message: dict[str, Any] = {"type": message_type.value}
    if payload is not None:
        message["payload"] = payload
    if request_id is not None:
        message["requestId"] = request_id
    return message


# ----------------------------------------------------------------------
# Outbound
# ----------------------------------------------------------------------


def get_collections_message(request_id: str | None = None) -> dict[str, Any]:
    return _envelope(MessageType.SYNC_GET_COLLECTIONS, None, request_id)


def get_variables_message(collection_id: str, request_id: str | None = None) -> dict[str, Any]:
    return _envelope(
        MessageType.SYNC_GET_VARIABLES, {"collectionId": collection_id}, request_id
    )


def apply_changes_message(diff: SyncDiff, request_id: str | None = None) -> dict[str, Any]:
    """Request that the host apply a diff; unchanged entries are left out."""
    return _envelope(
        MessageType.SYNC_APPLY_CHANGES,
        {
            "collectionName": diff.collection_name,
            "changes": [change.to_dict() for change in actionable_changes(diff)],
            "modesToAdd": list(diff.modes_to_add),
        },
        request_id,
    )


def _variable_entry(token: Token) -> dict[str, Any]:
    return {
        "name": "/".join([*token.path, token.name]),
        "value": token.host_value,
        "type": token.type.value,
        "collection": token.collection,
    }


def typography_variables_message(tokens: list[Token]) -> dict[str, Any]:
    """Bulk-create typography variables from a snapshot of tokens."""
    return _envelope(
        MessageType.CREATE_TYPOGRAPHY_VARIABLES,
        {"variables": [_variable_entry(t) for t in tokens]},
        None,
    )


def semantic_typography_variables_message(tokens: list[Token]) -> dict[str, Any]:
    """Bulk-create semantic typography variables aliasing the primitives."""
    variables = []
    for token in tokens:
        entry = _variable_entry(token)
        if token.references is not None:
            entry["aliasTo"] = token.references.light
        if token.mode_values:
            entry["modeValues"] = dict(token.mode_values)
        variables.append(entry)
    return _envelope(
        MessageType.CREATE_SEMANTIC_TYPOGRAPHY_VARIABLES, {"variables": variables}, None
    )


def text_styles_message(
    semantic_tokens: list[dict[str, Any]], primitives: dict[str, list[dict[str, Any]]]
) -> dict[str, Any]:
    """Bulk-create text styles from semantic typography definitions."""
    return _envelope(
        MessageType.CREATE_TEXT_STYLES,
        {"semanticTokens": list(semantic_tokens), "primitives": dict(primitives)},
        None,
    )


def typography_primitives(tokens: list[Token]) -> dict[str, list[dict[str, Any]]]:
    """Group typography tokens by kind for ``text_styles_message``."""
    groups: dict[str, list[dict[str, Any]]] = {
        "fontFamilies": [],
        "fontSizes": [],
        "lineHeights": [],
        "letterSpacings": [],
        "fontWeights": [],
    }
    prefixes = (
        ("font-family-", "fontFamilies"),
        ("font-size-", "fontSizes"),
        ("line-height-", "lineHeights"),
        ("letter-spacing-", "letterSpacings"),
        ("font-weight-", "fontWeights"),
    )
    for token in tokens:
        if token.type not in (TokenType.NUMBER, TokenType.STRING):
            continue
        for prefix, group in prefixes:
            if token.name.startswith(prefix):
                groups[group].append(
                    {"name": token.name.removeprefix(prefix), "value": token.value}
                )
                break
    return groups


# ----------------------------------------------------------------------
# Inbound
# ----------------------------------------------------------------------


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class _ModeModel(_Payload):
    mode_id: str = Field(alias="modeId")
    name: str


class _CollectionModel(_Payload):
    id: str
    name: str
    modes: list[_ModeModel] = Field(default_factory=list)
    default_mode_id: str | None = Field(default=None, alias="defaultModeId")
    variable_count: int = Field(default=0, alias="variableCount")


class _ModeValueModel(_Payload):
    mode_id: str = Field(alias="modeId")
    mode_name: str = Field(alias="modeName")
    value: Any = None
    alias_id: str | None = Field(default=None, alias="aliasId")
    alias_name: str | None = Field(default=None, alias="aliasName")


class _VariableModel(_Payload):
    id: str
    name: str
    resolved_type: str = Field(alias="resolvedType")
    collection_id: str = Field(default="", alias="collectionId")
    collection_name: str = Field(default="", alias="collectionName")
    description: str | None = None
    mode_values: list[_ModeValueModel] = Field(default_factory=list, alias="modeValues")
    scopes: list[str] | None = None


class CollectionsLoadedPayload(_Payload):
    collections: list[_CollectionModel]


class VariablesLoadedPayload(_Payload):
    collection_id: str = Field(alias="collectionId")
    variables: list[_VariableModel]


class AppliedPayload(_Payload):
    success: bool
    collection_name: str = Field(default="", alias="collectionName")
    created: int = 0
    updated: int = 0
    deleted: int = 0
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ErrorPayload(_Payload):
    error: str


_PAYLOADS: dict[MessageType, type[_Payload]] = {
    MessageType.SYNC_COLLECTIONS_LOADED: CollectionsLoadedPayload,
    MessageType.SYNC_VARIABLES_LOADED: VariablesLoadedPayload,
    MessageType.SYNC_APPLIED: AppliedPayload,
    MessageType.SYNC_ERROR: ErrorPayload,
}


@dataclass
class InboundMessage:
    """A validated host response."""

    type: MessageType
    request_id: str | None = None
    collections: list[HostCollection] = field(default_factory=list)
    collection_id: str | None = None
    variables: list[HostVariable] = field(default_factory=list)
    result: SyncResult | None = None
    error: str | None = None


def is_inbound(message: dict[str, Any]) -> bool:
    """Whether a raw message is a sync response this module understands."""
    return message.get("type") in {t.value for t in INBOUND_TYPES}


def parse_inbound(message: dict[str, Any]) -> InboundMessage:
    """Validate a raw host response.

    Raises:
        HostPayloadError: If the type is unknown or the payload is malformed.
    """
    raw_type = message.get("type")
    try:
        message_type = MessageType(raw_type)
    except ValueError as e:
        raise HostPayloadError(str(raw_type), "unknown message type") from e
    if message_type not in INBOUND_TYPES:
        raise HostPayloadError(message_type.value, "not a host response")

    try:
        payload = _PAYLOADS[message_type].model_validate(message.get("payload") or {})
    except PydanticValidationError as e:
        raise HostPayloadError(message_type.value, str(e)) from e

    data = payload.model_dump(by_alias=True)
    parsed = InboundMessage(type=message_type, request_id=message.get("requestId"))
    if message_type is MessageType.SYNC_COLLECTIONS_LOADED:
        parsed.collections = [HostCollection.from_dict(c) for c in data["collections"]]
    elif message_type is MessageType.SYNC_VARIABLES_LOADED:
        parsed.collection_id = data["collectionId"]
        parsed.variables = [HostVariable.from_dict(v) for v in data["variables"]]
    elif message_type is MessageType.SYNC_APPLIED:
        parsed.result = SyncResult.from_dict(data)
    else:
        parsed.error = data["error"]
    return parsed


class HostSnapshotPayload(_Payload):
    collection: _CollectionModel | None = None
    variables: list[_VariableModel] = Field(default_factory=list)


def parse_host_snapshot(
    data: dict[str, Any],
) -> tuple[HostCollection | None, list[HostVariable]]:
    """Validate a saved ``{"collection", "variables"}`` host snapshot.

    Raises:
        HostPayloadError: If the snapshot is malformed.
    """
    try:
        snapshot = HostSnapshotPayload.model_validate(data)
    except PydanticValidationError as e:
        raise HostPayloadError("host-snapshot", str(e)) from e

    dumped = snapshot.model_dump(by_alias=True)
    collection = (
        HostCollection.from_dict(dumped["collection"]) if dumped["collection"] else None
    )
    return collection, [HostVariable.from_dict(v) for v in dumped["variables"]]
