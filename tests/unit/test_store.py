"""Unit tests for the token store."""

import pytest

from token_studio.colors import ColorValue, color_value
from token_studio.config import StoreSettings
from token_studio.errors import HostPayloadError, TypeMismatchError, ValidationError
from token_studio.models import Separator, TokenType
from token_studio.store import TokenStore, coerce_value, generate_id, merge_on_collision


def _brand(store, hex_value="#3B82F6", **kwargs):
    return store.create(
        name="brand-500",
        path=["colors", "brand"],
        type=TokenType.COLOR,
        value=hex_value,
        **kwargs,
    )


class TestCreate:
    """Tests for token creation."""

    def test_create_defaults(self, store):
        """Test a new token gets an id, full path and defaults."""
        token = _brand(store)

        assert token.id == "tok-1"
        assert token.full_path == "colors/brand/brand-500"
        assert token.collection == "Primitives"
        assert token.enabled is True
        assert token.created_at == token.updated_at
        assert isinstance(token.value, ColorValue)
        assert token.value.hex == "#3B82F6"
        assert store.has_unsaved_changes is True

    def test_create_counts_collection(self, store):
        """Test the owning collection's token count."""
        _brand(store)
        store.create(name="md", path=["spacing"], type=TokenType.NUMBER, value=16)

        assert store.get_collection("Primitives").token_count == 2

    def test_create_unnamed_token(self, store):
        """Test a blank create produces a default color token."""
        token = store.create()

        assert token.name == "new-token"
        assert token.type is TokenType.COLOR
        assert token.value.hex == "#000000"

    def test_create_with_explicit_full_path(self, store):
        """Test an explicit full path is kept as given."""
        token = store.create(name="x", full_path="custom.key", type="NUMBER", value=1)

        assert store.get_by_path("custom.key") is token

    def test_upsert_by_full_path(self, store):
        """Test creating the same path twice keeps one token."""
        first = _brand(store, "#3B82F6")
        second = _brand(store, "#2563EB")

        assert len(store) == 1
        assert second is first
        assert first.id == "tok-1"
        assert first.value.hex == "#2563EB"
        assert first.updated_at > first.created_at

    def test_upsert_keeps_unprovided_fields(self, store):
        """Test a colliding create only replaces the fields it passes."""
        _brand(store, description="Brand base", tags=["brand"])
        token = _brand(store, "#000000")

        assert token.description == "Brand base"
        assert token.tags == ["brand"]

    def test_type_mismatch_aborts(self, store):
        """Test a value of the wrong shape is rejected before insert."""
        with pytest.raises(TypeMismatchError):
            store.create(name="size", type=TokenType.NUMBER, value="large")

        assert len(store) == 0

    def test_bool_is_not_a_number(self, store):
        """Test booleans are rejected for NUMBER tokens."""
        with pytest.raises(TypeMismatchError):
            store.create(name="flag", type=TokenType.NUMBER, value=True)

    def test_separator_setting(self, clock, id_factory):
        """Test full paths use the configured separator."""
        store = TokenStore(
            settings=StoreSettings(separator=Separator.DOT),
            clock=clock,
            id_factory=id_factory,
        )

        assert _brand(store).full_path == "colors.brand.brand-500"

    def test_generate_id_format(self):
        """Test ids are '<ms>-<9 base36 chars>'."""
        stamp, suffix = generate_id(1234).split("-")

        assert stamp == "1234"
        assert len(suffix) == 9
        assert suffix.isalnum() and suffix.lower() == suffix


class TestCoercion:
    """Tests for value coercion."""

    def test_rgba_dict_becomes_color(self):
        """Test host-shaped RGBA dicts are accepted for colors."""
        value = coerce_value(TokenType.COLOR, {"r": 1, "g": 0, "b": 0})

        assert value.hex == "#FF0000"

    def test_color_value_passes_through(self):
        """Test ColorValue instances are kept."""
        value = color_value("#10B981")

        assert coerce_value(TokenType.COLOR, value) is value

    def test_merge_on_collision_in_place(self, store):
        """Test the collision policy mutates the existing token."""
        token = _brand(store)

        merged = merge_on_collision(token, now=token.created_at + 10, description="new")

        assert merged is token
        assert token.description == "new"
        assert token.updated_at == token.created_at + 10


class TestUpdate:
    """Tests for token updates."""

    def test_rename_rebuilds_full_path(self, store):
        """Test changing the name moves the path index."""
        token = _brand(store)

        store.update(token.id, name="brand-600")

        assert token.full_path == "colors/brand/brand-600"
        assert store.get_by_path("colors/brand/brand-600") is token
        assert store.get_by_path("colors/brand/brand-500") is None

    def test_update_path_collision(self, store):
        """Test moving onto another token's path is rejected."""
        _brand(store)
        other = store.create(name="brand-600", path=["colors", "brand"], value="#000000")

        with pytest.raises(ValidationError):
            store.update(other.id, name="brand-500")

        assert other.full_path == "colors/brand/brand-600"

    def test_update_full_path_moves_token(self, store):
        """Test a new full path is split into path and name."""
        token = _brand(store)

        store.update(token.id, full_path="totally/other")

        assert token.path == ["totally"]
        assert token.name == "other"
        assert token.full_path == "totally/other"
        assert store.get_by_path("totally/other") is token
        assert store.get_by_path("colors/brand/brand-500") is None

    def test_update_full_path_must_match_name(self, store):
        """Test a full path that disagrees with the given name is rejected."""
        token = _brand(store)

        with pytest.raises(ValidationError):
            store.update(token.id, full_path="totally/other", name="brand-600")

        assert token.full_path == "colors/brand/brand-500"

    def test_update_unknown_id(self, store):
        """Test unknown ids return None."""
        assert store.update("missing", name="x") is None

    def test_update_unknown_field(self, store):
        """Test unknown fields are rejected."""
        token = _brand(store)

        with pytest.raises(ValidationError):
            store.update(token.id, colour="#FFF")

    def test_update_value_type_checked(self, store):
        """Test updated values must fit the token type."""
        token = _brand(store)

        with pytest.raises(TypeMismatchError):
            store.update(token.id, value=12)

        assert token.value.hex == "#3B82F6"

    def test_update_keeps_identity(self, store):
        """Test id and created_at survive an update."""
        token = _brand(store)
        created_at = token.created_at

        store.update(token.id, id="other", created_at=0, description="Edited")

        assert token.id == "tok-1"
        assert token.created_at == created_at
        assert token.description == "Edited"

    def test_move_collection_recounts(self, store):
        """Test moving a token between collections updates counts."""
        token = _brand(store)

        store.update(token.id, collection="Tokens")

        assert store.get_collection("Primitives").token_count == 0
        assert store.get_collection("Tokens").token_count == 1


class TestDeleteAndSelection:
    """Tests for deletion and selection."""

    def test_delete_clears_selection(self, store):
        """Test deleting the selected token clears the selection."""
        token = _brand(store)
        store.select(token.id)

        assert store.delete(token.id) is True
        assert store.selected_token_id is None
        assert store.get_by_path(token.full_path) is None
        assert store.get_collection("Primitives").token_count == 0

    def test_delete_unknown(self, store):
        """Test deleting an unknown id returns False."""
        assert store.delete("missing") is False

    def test_select_unknown(self, store):
        """Test selecting an unknown id is refused."""
        assert store.select("missing") is False
        assert store.select(None) is True

    def test_bulk_operations_skip_unknown(self, store):
        """Test bulk operations count only known ids."""
        a = _brand(store)
        b = store.create(name="md", path=["spacing"], type=TokenType.NUMBER, value=16)

        assert store.bulk_set_enabled([a.id, b.id, "missing"], False) == 2
        assert not a.enabled and not b.enabled
        assert store.bulk_delete([a.id, "missing"]) == 1
        assert len(store) == 1

    def test_toggle_enabled(self, store):
        """Test toggling flips the enabled flag."""
        token = _brand(store)

        assert store.toggle_enabled(token.id) is True
        assert token.enabled is False
        assert store.toggle_enabled("missing") is False

    def test_duplicate(self, store):
        """Test duplicates get a -copy name and a new id."""
        token = _brand(store)

        copy = store.duplicate(token.id)

        assert copy.id != token.id
        assert copy.full_path == "colors/brand/brand-500-copy"
        assert copy.value == token.value
        assert store.duplicate("missing") is None

    def test_clear_all(self, store):
        """Test clearing removes tokens and resets counts."""
        token = _brand(store)
        store.select(token.id)

        store.clear_all()

        assert len(store) == 0
        assert store.selected_token_id is None
        assert store.get_collection("Primitives").token_count == 0

    def test_mark_saved(self, store):
        """Test the unsaved flag resets."""
        _brand(store)
        store.mark_saved()

        assert store.has_unsaved_changes is False


class TestSearchAndFilter:
    """Tests for search and filtering."""

    @pytest.fixture()
    def populated(self, store):
        _brand(store, description="Primary brand", tags=["brand"])
        store.create(
            name="md", path=["spacing"], type=TokenType.NUMBER, value=16, enabled=False
        )
        store.create(
            name="primary",
            path=["action"],
            value="#3B82F6",
            collection="Tokens",
            tags=["semantic"],
        )
        return store

    def test_search_is_case_insensitive(self, populated):
        """Test search over name, path, description and tags."""
        assert [t.name for t in populated.search("PRIMARY")] == ["brand-500", "primary"]
        assert [t.name for t in populated.search("semantic")] == ["primary"]
        assert [t.name for t in populated.search("spacing/")] == ["md"]

    def test_blank_search_returns_all(self, populated):
        """Test a blank query matches everything."""
        assert len(populated.search("  ")) == 3
        assert len(populated.search(None)) == 3

    def test_filter_by_collection(self, populated):
        """Test filtering by collection."""
        assert [t.name for t in populated.filter(collection="Tokens")] == ["primary"]
        assert len(populated.filter(collection="all")) == 3

    def test_filter_by_enabled(self, populated):
        """Test filtering by enabled state."""
        assert [t.name for t in populated.filter(enabled="disabled")] == ["md"]
        assert len(populated.filter(enabled=True)) == 2

    def test_filter_combined(self, populated):
        """Test collection, enabled and query filters compose."""
        result = populated.filter(collection="Primitives", enabled=True, query="brand")

        assert [t.name for t in result] == ["brand-500"]

    def test_tree_groups_by_path(self, populated):
        """Test tokens are grouped by their path."""
        tree = populated.tree()

        assert set(tree) == {"colors/brand", "spacing", "action"}


class TestCollections:
    """Tests for collections and modes."""

    def test_default_collections(self, store):
        """Test the built-in collections and their modes."""
        names = [c.name for c in store.collections]

        assert names == ["Primitives", "Tokens", "Components"]
        assert [m.name for m in store.get_collection("Tokens").modes] == ["light", "dark"]
        assert store.get_collection("Tokens").default_mode.name == "light"

    def test_add_mode(self, store):
        """Test adding a mode, idempotently."""
        mode = store.add_mode("Tokens", "green-light")

        assert mode.id == "green-light"
        assert mode.is_default is False
        assert store.add_mode("Tokens", "green-light") is mode
        assert len(store.get_collection("Tokens").modes) == 3

    def test_add_mode_unknown_collection(self, store):
        """Test unknown collections return None."""
        assert store.add_mode("Missing", "light") is None

    def test_add_empty_mode(self, store):
        """Test empty mode names are rejected."""
        with pytest.raises(ValidationError):
            store.add_mode("Tokens", " ")

    def test_unknown_collection_is_created(self, store):
        """Test tokens in a new collection register it."""
        store.create(name="gap-sm", type=TokenType.NUMBER, value=8, collection="Gap")

        assert store.get_collection("Gap").token_count == 1


def _snapshot(*variables, name="Primitives"):
    return {
        "collections": {
            "managed": [
                {
                    "id": "VC:1",
                    "name": name,
                    "modes": [{"modeId": "1:0", "name": "Mode 1"}],
                    "variables": list(variables),
                }
            ],
            "other": [],
        },
        "styles": {},
    }


class TestImport:
    """Tests for importing a host snapshot."""

    def test_import_classifies_types(self, store):
        """Test resolvedType maps onto token types."""
        result = store.import_project_sync(
            _snapshot(
                {
                    "id": "V:1",
                    "name": "colors/brand/brand-500",
                    "resolvedType": "COLOR",
                    "value": {"r": 1, "g": 0, "b": 0, "a": 1},
                },
                {"id": "V:2", "name": "spacing/md", "resolvedType": "FLOAT", "value": 16},
                {"id": "V:3", "name": "flags/dense", "resolvedType": "BOOLEAN", "value": True},
                {"id": "V:4", "name": "fonts/body", "resolvedType": "STRING", "value": "Inter"},
            )
        )

        assert result.imported == 4
        color = store.get_by_path("colors/brand/brand-500")
        assert color.type is TokenType.COLOR
        assert color.value.hex == "#FF0000"
        assert color.figma_id == "V:1"
        assert store.get_by_path("spacing/md").type is TokenType.NUMBER
        assert store.get_by_path("flags/dense").value is True
        assert store.get_by_path("fonts/body").type is TokenType.STRING

    def test_import_skips_existing(self, store):
        """Test existing paths are never overwritten."""
        token = _brand(store, "#000000")

        result = store.import_project_sync(
            _snapshot(
                {
                    "id": "V:1",
                    "name": "colors/brand/brand-500",
                    "resolvedType": "COLOR",
                    "value": {"r": 1, "g": 1, "b": 1},
                }
            )
        )

        assert result.imported == 0
        assert result.skipped == 1
        assert token.value.hex == "#000000"

    def test_import_unknown_type_defaults_to_string(self, store):
        """Test unrecognized resolved types become strings."""
        store.import_project_sync(
            _snapshot({"id": "V:9", "name": "misc/thing", "resolvedType": "FANCY", "value": 3})
        )

        token = store.get_by_path("misc/thing")
        assert token.type is TokenType.STRING
        assert token.value == "3"

    def test_import_maps_numeric_collections(self, store):
        """Test numeric collections are kept with the primitives."""
        store.import_project_sync(
            _snapshot(
                {"id": "V:5", "name": "gap/sm", "resolvedType": "FLOAT", "value": 8},
                name="Spacing",
            )
        )

        assert store.get_by_path("gap/sm").collection == "Primitives"

    def test_import_ignores_unmanaged_names(self, store):
        """Test collections outside the managed set are skipped."""
        result = store.import_project_sync(
            _snapshot(
                {"id": "V:6", "name": "x/y", "resolvedType": "FLOAT", "value": 1},
                name="Marketing",
            )
        )

        assert result.imported == 0
        assert len(store) == 0

    def test_import_malformed_payload(self, store):
        """Test malformed snapshots raise a host payload error."""
        with pytest.raises(HostPayloadError):
            store.import_project_sync({"collections": {"managed": [{"name": "Tokens"}]}})
