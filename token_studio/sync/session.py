"""Sync session: the request/response state machine around the diff engine.

The session owns the UI-side sync state (selected collection, current
diff, loading and apply flags). It only ever reads the token store; host
failures leave local state untouched.

At most one host request is outstanding. Every request gets a fresh id,
and a response is accepted only if it answers the outstanding request.
When the host echoes ``requestId`` it must match; the collection id of a
variables response must match the current selection either way.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..config import SyncSettings
from ..errors import HostPayloadError
from ..store import TokenStore
from ..token_logging import LogCategory, get_category_logger
from .diff import compute_diff, plugin_variables_from_store
from .messages import (
    InboundMessage,
    MessageType,
    apply_changes_message,
    get_collections_message,
    get_variables_message,
    is_inbound,
    new_request_id,
    parse_inbound,
)
from .models import HostCollection, HostVariable, SyncDiff, SyncResult

logger = get_category_logger(LogCategory.SYNC)


class SyncPhase(Enum):
    IDLE = "idle"
    LOADING_COLLECTIONS = "loading-collections"
    COLLECTION_SELECTED = "collection-selected"
    LOADING_VARIABLES = "loading-variables"
    DIFF_READY = "diff-ready"
    APPLYING = "applying"
    ERROR = "error"


# Request type -> the response type that answers it.
_RESPONSES: dict[MessageType, MessageType] = {
    MessageType.SYNC_GET_COLLECTIONS: MessageType.SYNC_COLLECTIONS_LOADED,
    MessageType.SYNC_GET_VARIABLES: MessageType.SYNC_VARIABLES_LOADED,
    MessageType.SYNC_APPLY_CHANGES: MessageType.SYNC_APPLIED,
}


@dataclass
class PendingRequest:
    """The request currently awaiting a host response."""

    kind: MessageType
    request_id: str
    sent_at: float
    collection_id: str | None = None


class SyncSession:
    """Drives one sync conversation with the host.

    Args:
        store: Token store providing the local variables. Never written.
        send: Transport callable receiving outbound message dicts.
        settings: Sync settings (deletes, timeout).
        clock: Monotonic clock in seconds, used for request timeouts.
        request_ids: Factory for request ids.
    """

    def __init__(
        self,
        store: TokenStore,
        send: Callable[[dict[str, Any]], None],
        settings: SyncSettings | None = None,
        clock: Callable[[], float] | None = None,
        request_ids: Callable[[], str] | None = None,
    ):
        self.store = store
        self.send = send
        self.settings = settings or SyncSettings()
        self._clock = clock or time.monotonic
        self._request_ids = request_ids or new_request_id

        self.phase = SyncPhase.IDLE
        self.collections: list[HostCollection] = []
        self.host_variables: dict[str, list[HostVariable]] = {}
        self.selected_collection_id: str | None = None
        self.current_diff: SyncDiff | None = None
        self.last_result: SyncResult | None = None
        self.last_error: str | None = None
        self.pending: PendingRequest | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self.phase in (SyncPhase.LOADING_COLLECTIONS, SyncPhase.LOADING_VARIABLES)

    @property
    def sync_in_progress(self) -> bool:
        return self.phase is SyncPhase.APPLYING

    @property
    def has_changes(self) -> bool:
        return self.current_diff is not None and self.current_diff.has_changes

    @property
    def selected_collection(self) -> HostCollection | None:
        return self.get_collection(self.selected_collection_id)

    def get_collection(self, collection_id: str | None) -> HostCollection | None:
        for collection in self.collections:
            if collection.id == collection_id:
                return collection
        return None

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def load_collections(self) -> str | None:
        """Ask the host for its collections.

        Returns:
            The request id, or None if another request is in flight.
        """
        if self.is_loading or self.sync_in_progress:
            logger.debug("Collections requested while busy, ignoring")
            return None

        self.selected_collection_id = None
        self.current_diff = None
        self.last_error = None
        request_id = self._request(MessageType.SYNC_GET_COLLECTIONS)
        self.phase = SyncPhase.LOADING_COLLECTIONS
        self.send(get_collections_message(request_id))
        return request_id

    def select_collection(self, collection_id: str) -> str | None:
        """Select a host collection and request its variables.

        Returns:
            The request id, or None if the session is busy or the
            collection is unknown.
        """
        if self.is_loading or self.sync_in_progress:
            logger.debug(f"Ignoring selection of {collection_id} while busy")
            return None
        if self.get_collection(collection_id) is None:
            return None

        self.selected_collection_id = collection_id
        self.current_diff = None
        self.phase = SyncPhase.COLLECTION_SELECTED
        return self._load_variables(collection_id)

    def apply(self) -> str | None:
        """Send the actionable part of the current diff to the host.

        Returns:
            The request id, or None if there is nothing to apply or the
            session is busy.
        """
        diff = self.current_diff
        if diff is None or not diff.has_changes:
            return None
        if self.is_loading or self.sync_in_progress:
            return None

        request_id = self._request(MessageType.SYNC_APPLY_CHANGES)
        self.phase = SyncPhase.APPLYING
        self.send(apply_changes_message(diff, request_id))
        logger.info(
            f"Applying {diff.summary.to_dict()} to {diff.collection_name}",
            extra={"operation": "apply", "collection": diff.collection_name},
        )
        return request_id

    def set_include_deletes(self, include_deletes: bool) -> None:
        """Toggle delete reporting and recompute the current diff."""
        self.settings = self.settings.model_copy(update={"include_deletes": include_deletes})
        if self.current_diff is not None:
            self.recalculate_diff()

    def reset(self) -> None:
        """Drop all host data and any outstanding request."""
        self.phase = SyncPhase.IDLE
        self.collections = []
        self.host_variables = {}
        self.selected_collection_id = None
        self.current_diff = None
        self.last_result = None
        self.last_error = None
        self.pending = None

    def expire_stale(self, now: float | None = None) -> bool:
        """Fail the outstanding request if it has exceeded the timeout.

        Returns:
            True if a request was expired.
        """
        timeout = self.settings.timeout_seconds
        if timeout is None or self.pending is None:
            return False

        now = self._clock() if now is None else now
        if now - self.pending.sent_at < timeout:
            return False

        self._fail(f"Timed out waiting for a response to {self.pending.kind.value}")
        return True

    # ------------------------------------------------------------------
    # Responses
    # ------------------------------------------------------------------

    def handle_message(self, raw: dict[str, Any]) -> bool:
        """Process an inbound host message.

        Returns:
            True if the message changed the session state; False if it was
            not a sync response or was discarded as stale.
        """
        if not is_inbound(raw):
            return False

        try:
            message = parse_inbound(raw)
        except HostPayloadError as e:
            self._fail(e.message)
            return True

        if self._is_stale(message):
            logger.warning(
                f"Discarding stale {message.type.value} response "
                f"(request {message.request_id or 'unknown'})"
            )
            return False

        if message.type is MessageType.SYNC_COLLECTIONS_LOADED:
            self._on_collections_loaded(message)
        elif message.type is MessageType.SYNC_VARIABLES_LOADED:
            self._on_variables_loaded(message)
        elif message.type is MessageType.SYNC_APPLIED:
            self._on_applied(message)
        else:
            self._fail(message.error or "Unknown host error")
        return True

    def recalculate_diff(self) -> SyncDiff | None:
        """Recompute the diff for the selected collection from local state."""
        collection = self.selected_collection
        if collection is None:
            self.current_diff = None
            return None

        self.current_diff = compute_diff(
            collection.name,
            plugin_variables_from_store(self.store, collection.name),
            collection,
            self.host_variables.get(collection.id, []),
            include_deletes=self.settings.include_deletes,
        )
        return self.current_diff

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _request(self, kind: MessageType, collection_id: str | None = None) -> str:
        request_id = self._request_ids()
        self.pending = PendingRequest(kind, request_id, self._clock(), collection_id)
        return request_id

    def _load_variables(self, collection_id: str) -> str:
        request_id = self._request(MessageType.SYNC_GET_VARIABLES, collection_id)
        self.phase = SyncPhase.LOADING_VARIABLES
        self.send(get_variables_message(collection_id, request_id))
        return request_id

    def _is_stale(self, message: InboundMessage) -> bool:
        pending = self.pending
        if message.request_id is not None and (
            pending is None or message.request_id != pending.request_id
        ):
            return True
        if message.type is MessageType.SYNC_ERROR:
            return False
        if pending is None or _RESPONSES[pending.kind] is not message.type:
            return True
        if message.type is MessageType.SYNC_VARIABLES_LOADED:
            return (
                message.collection_id != pending.collection_id
                or message.collection_id != self.selected_collection_id
            )
        return False

    def _on_collections_loaded(self, message: InboundMessage) -> None:
        self.pending = None
        self.collections = message.collections
        self.phase = SyncPhase.IDLE
        logger.info(f"Loaded {len(self.collections)} host collections")

    def _on_variables_loaded(self, message: InboundMessage) -> None:
        if message.collection_id is None:
            self._fail("Host variables response has no collection id")
            return
        self.pending = None
        self.host_variables[message.collection_id] = message.variables
        self.recalculate_diff()
        self.phase = SyncPhase.DIFF_READY

    def _on_applied(self, message: InboundMessage) -> None:
        result = message.result
        if result is None:
            self._fail("Host apply response has no result")
            return
        self.pending = None
        self.last_result = result

        if not result.success:
            self._fail(", ".join(result.errors) or "Host reported a failed apply")
            return

        if result.errors:
            logger.warning(
                f"Sync partially applied: +{result.created}, ~{result.updated}, "
                f"-{result.deleted}; errors: {', '.join(result.errors)}"
            )
        else:
            logger.info(
                f"Sync applied: +{result.created}, ~{result.updated}, -{result.deleted}"
            )

        if self.selected_collection_id is not None:
            self._load_variables(self.selected_collection_id)
        else:
            self.phase = SyncPhase.IDLE

    def _fail(self, error: str) -> None:
        self.pending = None
        self.last_error = error
        self.phase = SyncPhase.ERROR
        logger.error(f"Sync error: {error}")
