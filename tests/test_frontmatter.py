"""
Tests for settings_yaml.frontmatter module.

Tests document parsing including:
- Frontmatter and body extraction
- Documents without frontmatter
- Empty frontmatter blocks
- Error handling for malformed YAML
"""

from __future__ import annotations

import pytest

from settings_yaml.exceptions import ConfigError, FrontmatterError
from settings_yaml.frontmatter import FrontmatterParser, parse_frontmatter


class TestParseFrontmatter:
    """Tests for parse_frontmatter()."""

    def test_metadata_and_body(self):
        """Test splitting a document into metadata and body."""
        doc = parse_frontmatter("---\nsite:\n  name: Test\n---\n\nHello world\n")

        assert doc.metadata == {"site": {"name": "Test"}}
        assert doc.content == "Hello world"

    def test_no_frontmatter(self):
        """Test that plain markdown has empty metadata."""
        doc = parse_frontmatter("# Title\n\nText")

        assert doc.metadata == {}
        assert doc.content == "# Title\n\nText"

    def test_empty_frontmatter_block(self):
        """Test that '---' followed by '---' is empty metadata."""
        doc = parse_frontmatter("---\n---\nBody")

        assert doc.metadata == {}
        assert doc.content == "Body"

    def test_empty_mapping_frontmatter(self):
        """Test that a literal '{}' block is empty metadata."""
        doc = parse_frontmatter("---\n{}\n---\n\nInstance content")

        assert doc.metadata == {}
        assert doc.content == "Instance content"

    def test_frontmatter_without_body(self):
        """Test that a missing body is the empty string."""
        doc = parse_frontmatter("---\nkey: value\n---\n")

        assert doc.metadata == {"key": "value"}
        assert doc.content == ""

    def test_body_may_contain_separator_lines(self):
        """Test that only the first closing '---' ends the block."""
        doc = parse_frontmatter("---\na: 1\n---\nIntro\n---\nMore")

        assert doc.metadata == {"a": 1}
        assert doc.content == "Intro\n---\nMore"

    def test_crlf_line_endings(self):
        """Test documents saved with Windows line endings."""
        doc = parse_frontmatter("---\r\na: 1\r\n---\r\nBody")

        assert doc.metadata == {"a": 1}
        assert doc.content == "Body"

    def test_byte_order_mark_is_ignored(self):
        """Test that a UTF-8 BOM does not hide the frontmatter."""
        doc = parse_frontmatter("\ufeff---\na: 1\n---\n")

        assert doc.metadata == {"a": 1}

    def test_invalid_yaml_raises(self):
        """Test that malformed YAML raises FrontmatterError."""
        with pytest.raises(FrontmatterError) as exc_info:
            parse_frontmatter("---\ninvalid: yaml: syntax: error:\n---\n", "bad.md")

        assert "bad.md" in str(exc_info.value)
        assert exc_info.value.__cause__ is not None

    def test_non_mapping_frontmatter_raises(self):
        """Test that a list frontmatter raises FrontmatterError."""
        with pytest.raises(FrontmatterError):
            parse_frontmatter("---\n- item1\n- item2\n---\n")

    def test_frontmatter_error_is_config_error(self):
        """Test that FrontmatterError can be caught as ConfigError."""
        with pytest.raises(ConfigError):
            parse_frontmatter("---\n[unclosed\n---\n")


class TestFrontmatterParser:
    """Tests for FrontmatterParser."""

    def test_parse_file(self, tmp_path):
        """Test parsing a document from disk."""
        path = tmp_path / "main.md"
        path.write_text("---\nsite:\n  name: Main\n---\n\nWelcome", encoding="utf-8")

        doc = FrontmatterParser().parse_file(path)

        assert doc.metadata == {"site": {"name": "Main"}}
        assert doc.content == "Welcome"
