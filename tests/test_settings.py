"""
Tests for settings_yaml.settings module.

Tests the read-only Settings handle including:
- Dotted-path lookups and defaults
- has() semantics for None values
- Immutability of the stored tree
- Cache payload conversion
"""

from __future__ import annotations

import pytest

from settings_yaml.exceptions import CacheError
from settings_yaml.settings import PAYLOAD_SCHEMA_VERSION, Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        {
            "site": {"name": "Test"},
            "deep": {"nested": {"value": "found"}},
            "menu": {"items": [{"label": "Home"}, {"label": "About"}]},
            "exists": "value",
            "nothing": None,
            "zero": 0,
            "off": False,
        },
        "Body text",
    )


class TestGet:
    """Tests for Settings.get()."""

    def test_dot_notation(self, settings):
        """Test reading a nested value by dotted key."""
        assert settings.get("site.name") == "Test"

    def test_deeply_nested_value(self, settings):
        """Test reading three levels deep."""
        assert settings.get("deep.nested.value") == "found"

    def test_default_for_missing_key(self, settings):
        """Test that a missing key returns the default."""
        assert settings.get("missing", "default") == "default"

    def test_none_for_missing_key_without_default(self, settings):
        """Test that a missing key returns None by default."""
        assert settings.get("missing") is None

    def test_default_when_walking_through_scalar(self, settings):
        """Test that a path continuing past a scalar is missing."""
        assert settings.get("exists.more", "d") == "d"

    def test_none_value_returns_default(self, settings):
        """Test that a stored None is reported like an absent key."""
        assert settings.get("nothing", "fallback") == "fallback"

    def test_falsy_values_are_returned(self, settings):
        """Test that 0 and False are real values."""
        assert settings.get("zero", 5) == 0
        assert settings.get("off", True) is False

    def test_list_index_segments(self, settings):
        """Test that integer segments index into lists."""
        assert settings.get("menu.items.1.label") == "About"
        assert settings.get("menu.items.5.label", "none") == "none"

    def test_returned_containers_are_copies(self, settings):
        """Test that mutating a returned dict does not affect the settings."""
        site = settings.get("site")
        site["name"] = "Changed"

        assert settings.get("site.name") == "Test"


class TestHas:
    """Tests for Settings.has()."""

    def test_existing_key(self, settings):
        assert settings.has("exists") is True

    def test_nested_key(self, settings):
        assert settings.has("site.name") is True

    def test_missing_key(self, settings):
        assert settings.has("missing") is False

    def test_none_value_is_not_set(self, settings):
        """Test that has() is False for keys holding None."""
        assert settings.has("nothing") is False

    def test_false_value_is_set(self, settings):
        assert settings.has("off") is True


class TestAllAndContent:
    """Tests for all(), content and immutability."""

    def test_all_returns_full_tree(self):
        """Test that all() returns every key."""
        data = {"a": 1, "b": 2}

        assert Settings(data).all() == data

    def test_all_returns_copy(self, settings):
        """Test that mutating all() does not affect the settings."""
        tree = settings.all()
        tree["site"]["name"] = "Changed"
        tree["new"] = True

        assert settings.get("site.name") == "Test"
        assert settings.has("new") is False

    def test_constructor_copies_input(self):
        """Test that later changes to the source dict are not visible."""
        data = {"colors": {"primary": "#333"}}
        settings = Settings(data)

        data["colors"]["primary"] = "#fff"

        assert settings.get("colors.primary") == "#333"

    def test_content(self, settings):
        assert settings.content == "Body text"
        assert settings.get_content() == "Body text"

    def test_empty_defaults(self):
        """Test that Settings() is empty with an empty body."""
        settings = Settings()

        assert settings.all() == {}
        assert settings.content == ""

    def test_attributes_are_read_only(self, settings):
        """Test that the handle has no mutation path."""
        with pytest.raises(AttributeError):
            settings.content = "changed"  # type: ignore[misc]
        with pytest.raises(AttributeError):
            settings._data = {}  # type: ignore[misc]

    def test_equality_by_value(self):
        """Test that settings compare by data and content."""
        assert Settings({"a": 1}, "x") == Settings({"a": 1}, "x")
        assert Settings({"a": 1}, "x") != Settings({"a": 1}, "y")
        assert Settings({"a": 1}) != Settings({"a": 2})


class TestPayload:
    """Tests for to_payload() / from_payload()."""

    def test_round_trip(self, settings):
        """Test that a payload rebuilds equal settings."""
        assert Settings.from_payload(settings.to_payload()) == settings

    def test_payload_shape(self):
        payload = Settings({"a": 1}, "body").to_payload()

        assert payload == {
            "schema_version": PAYLOAD_SCHEMA_VERSION,
            "data": {"a": 1},
            "content": "body",
        }

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            "settings",
            ["data"],
            {"data": {}, "content": ""},
            {"schema_version": "0", "data": {}, "content": ""},
            {"schema_version": PAYLOAD_SCHEMA_VERSION, "content": ""},
            {"schema_version": PAYLOAD_SCHEMA_VERSION, "data": [], "content": ""},
            {"schema_version": PAYLOAD_SCHEMA_VERSION, "data": {}},
            {"schema_version": PAYLOAD_SCHEMA_VERSION, "data": {}, "content": 3},
        ],
    )
    def test_incomplete_payloads_rejected(self, payload):
        """Test that anything but a complete payload raises CacheError."""
        with pytest.raises(CacheError):
            Settings.from_payload(payload)
