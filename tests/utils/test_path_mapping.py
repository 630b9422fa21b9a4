"""
Tests for destination key mapping.
"""

import pytest

from action_to_qiniu.utils import PathMapper, apply_path_mapping, map_destination_key, normalize_key


class TestApplyPathMapping:
    """Test apply_path_mapping."""

    def test_first_match_wins(self):
        """Test that only the first matching rule is applied."""
        rules = [("b/", "assets/"), ("assets/", "twice/")]

        assert apply_path_mapping("b/c.txt", rules) == "assets/c.txt"

    def test_declaration_order(self):
        """Test that an earlier, shorter prefix beats a later, longer one."""
        rules = {"b/": "short/", "b/c/": "long/"}

        assert apply_path_mapping("b/c/d.txt", rules) == "short/c/d.txt"

    def test_no_match_passes_through(self):
        """Test that unmatched paths are unchanged."""
        assert apply_path_mapping("a.txt", {"b/": "assets/"}) == "a.txt"
        assert apply_path_mapping("a.txt", None) == "a.txt"

    def test_literal_prefix(self):
        """Test that prefixes are literal, not glob patterns."""
        assert apply_path_mapping("bb/c.txt", {"b*/": "x/"}) == "bb/c.txt"


class TestNormalizeKey:
    """Test normalize_key."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/static/a.txt", "static/a.txt"),
            ("static//assets///a.txt", "static/assets/a.txt"),
            ("static\\b\\c.txt", "static/b/c.txt"),
            ("//a.txt", "a.txt"),
        ],
    )
    def test_normalize(self, path, expected):
        """Test separator normalization and leading slash removal."""
        assert normalize_key(path) == expected


class TestMapDestinationKey:
    """Test map_destination_key."""

    def test_example_keys(self):
        """Test the static site example."""
        rules = {"b/": "assets/"}

        assert map_destination_key("a.txt", rules, "/static") == "static/a.txt"
        assert map_destination_key("b/c.txt", rules, "/static") == "static/assets/c.txt"

    def test_root_base_path(self):
        """Test that keys are relative even under the root base path."""
        assert map_destination_key("a.txt", {}, "/") == "a.txt"
        assert map_destination_key("a.txt", {}, "") == "a.txt"

    def test_base_path_trailing_slash(self):
        """Test that trailing slashes on the base path do not double up."""
        assert map_destination_key("a.txt", {}, "/cdn/v1/") == "cdn/v1/a.txt"

    def test_replacement_with_leading_slash_stays_under_base(self):
        """Test that an absolute-looking replacement is still joined under the base."""
        assert map_destination_key("b/c.txt", {"b/": "/assets/"}, "/static") == "static/assets/c.txt"

    def test_backslash_relative_path(self):
        """Test that Windows-style relative paths map like POSIX ones."""
        assert map_destination_key("b\\c.txt", {"b/": "assets/"}, "/static") == "static/assets/c.txt"

    def test_pure(self):
        """Test that mapping twice gives the same key."""
        rules = {"b/": "assets/"}

        assert map_destination_key("b/c.txt", rules, "/s") == map_destination_key("b/c.txt", rules, "/s")


class TestPathMapper:
    """Test PathMapper."""

    def test_map(self):
        """Test the bound mapper."""
        mapper = PathMapper({"b/": "assets/"}, "/static")

        assert mapper.map("b/c.txt") == "static/assets/c.txt"
        assert mapper.map("a.txt") == "static/a.txt"

    def test_repr(self):
        """Test the mapper representation."""
        assert repr(PathMapper({"b/": "x/"})) == "PathMapper(rules=[('b/', 'x/')], base_path='/')"
