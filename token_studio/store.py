"""In-memory token store.

The store is an explicitly constructed object owned by the application
context. Tokens are identified by id and addressed by their full path,
which is unique within a store: creating a token whose full path already
exists updates the existing token instead (see ``merge_on_collision``).
"""

import random
import re
import string
import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, replace
from typing import Any

from .colors import RGBA, ColorValue, color_value, rgba_to_hex
from .config import StoreSettings
from .errors import TypeMismatchError, ValidationError
from .models import (
    MANAGED_COLLECTIONS,
    Collection,
    CollectionMode,
    CollectionType,
    Token,
    TokenReference,
    TokenSemantic,
    TokenType,
    TokenValue,
    default_collections,
    value_matches_type,
)
from .paths import build_full_path, parse_full_path
from .project import ProjectSyncData
from .token_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.STORE)

_ID_ALPHABET = string.digits + string.ascii_lowercase

DEFAULT_TOKEN_NAME = "new-token"


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def mode_id(mode_name: str) -> str:
    """Slug id for a mode name, e.g. "Desktop (1440px)" -> "desktop-1440px"."""
    return re.sub(r"[^a-z0-9]+", "-", mode_name.lower()).strip("-") or "mode"


def generate_id(timestamp_ms: int | None = None) -> str:
    """Token id: creation time plus nine random base-36 characters."""
    stamp = now_ms() if timestamp_ms is None else timestamp_ms
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{stamp}-{suffix}"


@dataclass
class ImportResult:
    """Outcome of importing a host snapshot."""

    imported: int = 0
    skipped: int = 0


def coerce_value(token_type: TokenType, value: Any) -> TokenValue:
    """Normalize a raw value for a token type.

    Hex strings and RGBA mappings are accepted for colors; ints and floats
    are interchangeable for numbers.

    Raises:
        TypeMismatchError: If the value cannot have the type's shape.
    """
    if token_type is TokenType.COLOR:
        if isinstance(value, str):
            return color_value(value)
        if isinstance(value, RGBA):
            return ColorValue(hex=rgba_to_hex(value), rgba=value)
        if isinstance(value, dict) and "r" in value:
            rgba = RGBA.from_dict(value)
            return ColorValue(hex=rgba_to_hex(rgba), rgba=rgba)
        if isinstance(value, dict) and "rgba" in value:
            return ColorValue.from_dict(value)

    if not value_matches_type(token_type, value):
        raise TypeMismatchError(token_type.value, value)
    return value


def merge_on_collision(
    existing: Token,
    now: int,
    value: TokenValue | None = None,
    description: str | None = None,
    tags: list[str] | None = None,
    references: TokenReference | None = None,
    mode_values: dict[str, TokenValue] | None = None,
) -> Token:
    """Fold a colliding create into the existing token, in place.

    Only the fields that were provided replace the existing ones; ``id``,
    ``created_at`` and the path stay untouched.

    Returns:
        The existing token, updated.
    """
    if value is not None:
        existing.value = value
    if description is not None:
        existing.description = description
    if tags is not None:
        existing.tags = list(tags)
    if references is not None:
        existing.references = references
    if mode_values is not None:
        existing.mode_values = dict(mode_values)
    existing.updated_at = max(now, existing.created_at)
    return existing


class TokenStore:
    """Registry of token definitions, collections and selection state."""

    def __init__(
        self,
        settings: StoreSettings | None = None,
        clock: Callable[[], int] | None = None,
        id_factory: Callable[[int], str] | None = None,
    ):
        self.settings = settings or StoreSettings()
        self._clock = clock or now_ms
        self._id_factory = id_factory or generate_id
        self._tokens: dict[str, Token] = {}
        self._ids_by_path: dict[str, str] = {}
        self._collections: list[Collection] = default_collections()
        self.selected_token_id: str | None = None
        self.has_unsaved_changes = False

    @property
    def separator(self) -> str:
        return self.settings.separator.value

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def tokens(self) -> list[Token]:
        """All tokens in insertion order."""
        return list(self._tokens.values())

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(list(self._tokens.values()))

    def __contains__(self, token_id: object) -> bool:
        return token_id in self._tokens

    def get(self, token_id: str) -> Token | None:
        return self._tokens.get(token_id)

    def get_by_path(self, full_path: str) -> Token | None:
        token_id = self._ids_by_path.get(full_path)
        return self._tokens.get(token_id) if token_id else None

    def by_collection(self, collection: str) -> list[Token]:
        return [t for t in self._tokens.values() if t.collection == collection]

    def enabled_tokens(self) -> list[Token]:
        return [t for t in self._tokens.values() if t.enabled]

    def tree(self) -> dict[str, list[Token]]:
        """Tokens grouped by their path joined with '/'."""
        tree: dict[str, list[Token]] = {}
        for token in self._tokens.values():
            tree.setdefault("/".join(token.path), []).append(token)
        return tree

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(
        self,
        name: str | None = None,
        path: list[str] | None = None,
        full_path: str | None = None,
        type: TokenType | str | None = None,
        value: Any = None,
        collection: str | None = None,
        enabled: bool | None = None,
        description: str | None = None,
        tags: list[str] | None = None,
        semantic: TokenSemantic | None = None,
        references: TokenReference | None = None,
        figma_id: str | None = None,
        mode_values: dict[str, Any] | None = None,
    ) -> Token:
        """Create a token, or update the one that already has its full path.

        Returns:
            The new token, or the existing token after merging.

        Raises:
            TypeMismatchError: If ``value`` does not fit the token type.
        """
        now = self._clock()
        name = name or DEFAULT_TOKEN_NAME
        path = list(path or [])
        full_path = full_path or build_full_path(path, name, self.separator)

        existing = self.get_by_path(full_path)
        if existing is not None:
            token_type = existing.type
        else:
            token_type = TokenType(type) if type is not None else TokenType.COLOR

        if value is not None:
            value = coerce_value(token_type, value)
        if mode_values is not None:
            mode_values = {
                mode: coerce_value(token_type, v) for mode, v in mode_values.items()
            }

        if existing is not None:
            logger.debug(f"Create collided with existing token {full_path}, merging")
            merge_on_collision(
                existing,
                now,
                value=value,
                description=description,
                tags=tags,
                references=references,
                mode_values=mode_values,
            )
            self.has_unsaved_changes = True
            return existing

        token = Token(
            id=self._new_id(now),
            name=name,
            path=path,
            full_path=full_path,
            type=token_type,
            value=value if value is not None else self._default_value(token_type),
            collection=collection or CollectionType.PRIMITIVES.value,
            enabled=True if enabled is None else enabled,
            description=description,
            tags=list(tags or []),
            semantic=semantic,
            references=references,
            figma_id=figma_id,
            mode_values=mode_values,
            created_at=now,
            updated_at=now,
        )
        self._insert(token)
        return token

    def update(self, token_id: str, **changes: Any) -> Token | None:
        """Merge field changes into a token.

        The full path is rebuilt with the current separator when ``name``
        or ``path`` changes. A ``full_path`` change is split into ``path``
        and ``name`` so the three always agree.

        Returns:
            The updated token, or None if the id is unknown.

        Raises:
            TypeMismatchError: If a new value does not fit the token type.
            ValidationError: If the rebuilt full path belongs to another
                token, a ``full_path`` disagrees with a given ``path`` or
                ``name``, or an unknown field is given.
        """
        token = self._tokens.get(token_id)
        if token is None:
            return None

        unknown = set(changes) - set(Token.__dataclass_fields__) - {"id"}
        if unknown:
            raise ValidationError(f"Unknown token fields: {', '.join(sorted(unknown))}")
        changes.pop("id", None)
        changes.pop("created_at", None)

        if "full_path" in changes:
            path, name = parse_full_path(changes.pop("full_path"), self.separator)
            if list(changes.get("path", path)) != path or changes.get("name", name) != name:
                raise ValidationError(
                    "full_path does not match the given path and name",
                    suggestion="Change either full_path or path and name",
                )
            changes["path"], changes["name"] = path, name

        if "type" in changes:
            changes["type"] = TokenType(changes["type"])
        token_type = changes.get("type", token.type)
        if changes.get("mode_values") is not None:
            changes["mode_values"] = {
                mode: coerce_value(token_type, v)
                for mode, v in changes["mode_values"].items()
            }
        if "value" in changes:
            changes["value"] = coerce_value(token_type, changes["value"])
        elif token_type is not token.type:
            raise TypeMismatchError(token_type.value, token.value)

        updated = replace(token, **changes)
        if "name" in changes or "path" in changes:
            updated.full_path = build_full_path(
                updated.path, updated.name, self.separator
            )
        if updated.full_path != token.full_path:
            holder = self._ids_by_path.get(updated.full_path)
            if holder is not None and holder != token_id:
                raise ValidationError(
                    f"Another token already uses the path {updated.full_path}",
                    details={"fullPath": updated.full_path},
                )

        # Apply onto the stored instance so references to it stay valid.
        old_path = token.full_path
        for field_name in Token.__dataclass_fields__:
            setattr(token, field_name, getattr(updated, field_name))
        token.updated_at = max(self._clock(), token.created_at)

        if old_path != token.full_path:
            del self._ids_by_path[old_path]
            self._ids_by_path[token.full_path] = token_id
        if "collection" in changes:
            self.ensure_collection(token.collection)
            self._recount()
        self.has_unsaved_changes = True
        return token

    def delete(self, token_id: str) -> bool:
        """Remove a token. Returns False if the id is unknown."""
        token = self._tokens.pop(token_id, None)
        if token is None:
            return False

        self._ids_by_path.pop(token.full_path, None)
        if self.selected_token_id == token_id:
            self.selected_token_id = None
        self.has_unsaved_changes = True
        self.ensure_collection(token.collection).token_count -= 1
        return True

    def duplicate(self, token_id: str) -> Token | None:
        """Copy a token under ``<name>-copy``, routed through ``create``."""
        original = self._tokens.get(token_id)
        if original is None:
            return None

        return self.create(
            name=f"{original.name}-copy",
            path=list(original.path),
            type=original.type,
            value=original.value,
            collection=original.collection,
            enabled=original.enabled,
            description=original.description,
            tags=list(original.tags),
            semantic=original.semantic,
            references=original.references,
            mode_values=dict(original.mode_values) if original.mode_values else None,
        )

    def toggle_enabled(self, token_id: str) -> bool:
        token = self._tokens.get(token_id)
        if token is None:
            return False
        self.update(token_id, enabled=not token.enabled)
        return True

    def bulk_set_enabled(self, token_ids: Iterable[str], enabled: bool) -> int:
        """Set the enabled flag on each id; unknown ids are skipped."""
        return sum(
            1 for token_id in token_ids if self.update(token_id, enabled=enabled)
        )

    def bulk_delete(self, token_ids: Iterable[str]) -> int:
        """Delete each id; unknown ids are skipped."""
        return sum(1 for token_id in list(token_ids) if self.delete(token_id))

    def clear_all(self) -> None:
        """Remove every token and clear the selection."""
        self._tokens.clear()
        self._ids_by_path.clear()
        self.selected_token_id = None
        self.has_unsaved_changes = True
        self._recount()

    def select(self, token_id: str | None) -> bool:
        """Select a token by id, or clear the selection with None."""
        if token_id is not None and token_id not in self._tokens:
            return False
        self.selected_token_id = token_id
        return True

    def mark_saved(self) -> None:
        self.has_unsaved_changes = False

    # ------------------------------------------------------------------
    # Search and filter
    # ------------------------------------------------------------------

    def search(self, query: str | None) -> list[Token]:
        """Case-insensitive match over name, full path, description and tags."""
        if not query or not query.strip():
            return self.tokens
        return [t for t in self._tokens.values() if _matches(t, query.lower())]

    def filter(
        self,
        collection: str | None = None,
        enabled: bool | str | None = None,
        query: str | None = None,
    ) -> list[Token]:
        """Filter by collection, then enabled state, then search query.

        Args:
            collection: Collection name, or None / "all" for every collection.
            enabled: True / "enabled", False / "disabled", or None / "all".
            query: Search query; blank matches everything.
        """
        result = self.tokens

        if collection is not None and collection != "all":
            result = [t for t in result if t.collection == collection]

        if enabled in (True, "enabled"):
            result = [t for t in result if t.enabled]
        elif enabled in (False, "disabled"):
            result = [t for t in result if not t.enabled]

        if query and query.strip():
            lowered = query.lower()
            result = [t for t in result if _matches(t, lowered)]

        return result

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    @property
    def collections(self) -> list[Collection]:
        return list(self._collections)

    def get_collection(self, name: str) -> Collection | None:
        for collection in self._collections:
            if collection.name == name:
                return collection
        return None

    def add_mode(self, collection_name: str, mode_name: str) -> CollectionMode | None:
        """Add a mode to a collection; existing modes are returned as-is."""
        collection = self.get_collection(collection_name)
        if collection is None:
            return None
        if not mode_name.strip():
            raise ValidationError("Mode name cannot be empty")

        for mode in collection.modes:
            if mode.name == mode_name:
                return mode

        mode = CollectionMode(
            id=mode_id(mode_name),
            name=mode_name,
            is_default=not collection.modes,
        )
        collection.modes.append(mode)
        self.has_unsaved_changes = True
        return mode

    def ensure_collection(self, name: str, modes: list[str] | None = None) -> Collection:
        """Get a collection, creating it when missing.

        A new collection gets ``modes`` (the first is the default), or a
        single ``Default`` mode. Modes of an existing collection are left
        alone; use ``add_mode`` to extend them.
        """
        collection = self.get_collection(name)
        if collection is None:
            mode_names = modes or ["Default"]
            collection = Collection(
                name=name,
                modes=[
                    CollectionMode(
                        mode_id(mode), mode, is_default=(i == 0)
                    )
                    for i, mode in enumerate(mode_names)
                ],
            )
            self._collections.append(collection)
        return collection

    def _recount(self) -> None:
        for collection in self._collections:
            collection.token_count = 0
        for token in self._tokens.values():
            self.ensure_collection(token.collection).token_count += 1

    # ------------------------------------------------------------------
    # Host import
    # ------------------------------------------------------------------

    def import_project_sync(self, data: ProjectSyncData | dict) -> ImportResult:
        """Import variables from the host's managed collections.

        Tokens whose full path already exists are skipped, so an import
        never overwrites local edits.
        """
        if isinstance(data, dict):
            data = ProjectSyncData.parse(data)

        result = ImportResult()
        now = self._clock()

        for host_collection in data.collections.managed:
            if host_collection.name not in MANAGED_COLLECTIONS:
                continue
            collection = _map_collection(host_collection.name)

            for variable in host_collection.variables:
                segments = variable.name.split("/")
                name = segments.pop()
                full_path = build_full_path(segments, name, self.separator)

                existing = self.get_by_path(full_path)
                if existing is not None:
                    if existing.collection != collection:
                        logger.debug(
                            f"Skipping {full_path}: path already used in "
                            f"{existing.collection}"
                        )
                    result.skipped += 1
                    continue

                token_type, value = _import_value(variable.resolved_type, variable.value)
                token = Token(
                    id=self._new_id(now),
                    name=name,
                    path=segments,
                    full_path=full_path,
                    type=token_type,
                    value=value,
                    collection=collection,
                    description=variable.description,
                    tags=[host_collection.name.lower(), token_type.value.lower()],
                    figma_id=variable.id,
                    created_at=now,
                    updated_at=now,
                )
                self._insert(token)
                result.imported += 1

        logger.info(
            f"Imported {result.imported} tokens from host, skipped {result.skipped}",
            extra={"operation": "import", "token_count": result.imported},
        )
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _insert(self, token: Token) -> None:
        self._tokens[token.id] = token
        self._ids_by_path[token.full_path] = token.id
        self.ensure_collection(token.collection).token_count += 1
        self.has_unsaved_changes = True

    def _new_id(self, now: int) -> str:
        token_id = self._id_factory(now)
        while token_id in self._tokens:
            token_id = self._id_factory(now)
        return token_id

    @staticmethod
    def _default_value(token_type: TokenType) -> TokenValue:
        if token_type is TokenType.COLOR:
            return color_value("#000000")
        if token_type is TokenType.NUMBER:
            return 0
        if token_type is TokenType.BOOLEAN:
            return False
        return ""


def _matches(token: Token, lowered_query: str) -> bool:
    return (
        lowered_query in token.name.lower()
        or lowered_query in token.full_path.lower()
        or (token.description is not None and lowered_query in token.description.lower())
        or any(lowered_query in tag.lower() for tag in token.tags)
    )


def _map_collection(host_name: str) -> str:
    if host_name in ("Primitives", "Tokens", "Components"):
        return host_name
    # Numeric collections are kept with the primitives.
    return CollectionType.PRIMITIVES.value


def _import_value(resolved_type: str, raw: Any) -> tuple[TokenType, TokenValue]:
    if resolved_type == "COLOR" and isinstance(raw, dict):
        rgba = RGBA.from_dict(raw)
        return TokenType.COLOR, ColorValue(hex=rgba_to_hex(rgba), rgba=rgba)
    if resolved_type == "FLOAT" and isinstance(raw, int | float) and not isinstance(
        raw, bool
    ):
        return TokenType.NUMBER, raw
    if resolved_type == "BOOLEAN" and isinstance(raw, bool):
        return TokenType.BOOLEAN, raw
    return TokenType.STRING, "" if raw is None else str(raw)
