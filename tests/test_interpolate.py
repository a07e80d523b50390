"""
Tests for settings_yaml.interpolate module.

Tests placeholder interpolation including:
- Single and multiple ${NAME} tokens
- Missing values
- Recursion into dicts and lists
- Non-string values
- Custom namespace prefixes
"""

from __future__ import annotations

import pytest

from settings_yaml.config import MappingConfigProvider
from settings_yaml.interpolate import EnvironmentInterpolator, interpolate


@pytest.fixture
def interpolator(credentials) -> EnvironmentInterpolator:
    return EnvironmentInterpolator(MappingConfigProvider(credentials))


class TestEnvironmentInterpolator:
    """Tests for EnvironmentInterpolator.interpolate()."""

    def test_replaces_variable_with_config_value(self, interpolator):
        """Test that ${VAR} is replaced with the configured value."""
        result = interpolator.interpolate({"api_key": "${API_KEY}"})

        assert result["api_key"] == "secret-key-123"

    def test_multiple_variables_in_one_string(self, interpolator):
        """Test that every token in a string is replaced."""
        result = interpolator.interpolate({"combined": "${API_KEY}:${API_SECRET}"})

        assert result["combined"] == "secret-key-123:secret-secret"

    def test_undefined_variable_becomes_empty_string(self, interpolator):
        """Test that unresolvable tokens resolve to ''."""
        result = interpolator.interpolate({"undefined": "${UNDEFINED_VAR}"})

        assert result["undefined"] == ""

    def test_empty_configured_value(self, interpolator):
        """Test that a configured empty string is substituted as-is."""
        result = interpolator.interpolate({"value": "x${EMPTY_VAR}y"})

        assert result["value"] == "xy"

    def test_recursively_processes_dicts(self, interpolator):
        """Test that nested dicts are interpolated."""
        data = {"level1": {"level2": {"key": "${API_KEY}"}}}

        result = interpolator.interpolate(data)

        assert result["level1"]["level2"]["key"] == "secret-key-123"

    def test_processes_list_elements(self, interpolator):
        """Test that strings inside lists are interpolated."""
        data = {"headers": ["X-Key: ${API_KEY}", {"secret": "${API_SECRET}"}, 7]}

        result = interpolator.interpolate(data)

        assert result["headers"] == [
            "X-Key: secret-key-123",
            {"secret": "secret-secret"},
            7,
        ]

    def test_leaves_non_string_values_unchanged(self, interpolator):
        """Test that numbers, booleans and None pass through."""
        data = {"number": 42, "bool": True, "null": None, "float": 3.14}

        result = interpolator.interpolate(data)

        assert result["number"] == 42
        assert result["bool"] is True
        assert result["null"] is None
        assert result["float"] == 3.14

    def test_preserves_strings_without_variables(self, interpolator):
        """Test that plain strings are unchanged."""
        result = interpolator.interpolate({"plain": "just a regular string"})

        assert result["plain"] == "just a regular string"

    def test_handles_empty_dict(self, interpolator):
        """Test that an empty tree stays empty."""
        assert interpolator.interpolate({}) == {}

    def test_mixed_content_with_variables(self, interpolator):
        """Test substitution in the middle of a URL."""
        result = interpolator.interpolate(
            {"url": "https://api.example.com?key=${API_KEY}&v=1"}
        )

        assert result["url"] == "https://api.example.com?key=secret-key-123&v=1"

    def test_custom_config_prefix(self):
        """Test that the namespace prefix is configurable."""
        provider = MappingConfigProvider({"custom": {"MY_VAR": "custom-value"}})
        interpolator = EnvironmentInterpolator(provider, "custom")

        result = interpolator.interpolate({"value": "${MY_VAR}"})

        assert result["value"] == "custom-value"

    def test_non_string_config_values_are_stringified(self):
        """Test that numeric credentials are substituted as text."""
        provider = MappingConfigProvider({"credentials": {"PORT": 5432}})
        interpolator = EnvironmentInterpolator(provider)

        result = interpolator.interpolate({"dsn": "db:${PORT}"})

        assert result["dsn"] == "db:5432"

    def test_input_not_mutated(self, interpolator):
        """Test that the input tree is left untouched."""
        data = {"nested": {"key": "${API_KEY}"}}

        interpolator.interpolate(data)

        assert data == {"nested": {"key": "${API_KEY}"}}


class TestInterpolateFunction:
    """Tests for the lookup-based interpolate() function."""

    def test_order_preserving_concatenation(self):
        """Test that tokens are replaced left to right in place."""
        values = {"A": "1", "B": "2"}

        result = interpolate({"x": "${A}-${B}"}, values.get)

        assert result == {"x": "1-2"}

    def test_missing_lookup_yields_empty_string(self):
        """Test that a None lookup result becomes ''."""
        result = interpolate({"x": "${MISSING}"}, {}.get)

        assert result == {"x": ""}

    def test_tree_without_tokens_is_unchanged(self):
        """Test interpolation idempotence on token-free trees."""
        data = {"a": "text", "b": {"c": [1, "two", None]}, "d": False}

        assert interpolate(data, {}.get) == data

    def test_substituted_values_are_not_rescanned(self):
        """Test that a value containing a token is inserted literally."""
        values = {"A": "${B}", "B": "nope"}

        result = interpolate({"x": "${A}"}, values.get)

        assert result == {"x": "${B}"}

    def test_unterminated_token_left_alone(self):
        """Test that '${' without a closing brace is not a token."""
        result = interpolate({"x": "cost: ${5"}, {}.get)

        assert result == {"x": "cost: ${5"}

    def test_lookup_receives_full_name(self):
        """Test that the token name is everything up to the next brace."""
        seen: list[str] = []

        def lookup(name: str) -> str:
            seen.append(name)
            return "v"

        interpolate({"x": "${a.b c}${d}"}, lookup)

        assert seen == ["a.b c", "d"]
