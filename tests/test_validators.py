"""Tests for target parsing and URL validation."""

import pytest

from osshunter.utils.validators import is_valid_url, load_targets, parse_targets


class TestURLValidation:
    def test_valid_urls(self):
        assert is_valid_url("http://example.com")
        assert is_valid_url("https://example.com/path?q=1")
        assert is_valid_url("http://192.168.1.1:8080")
        assert is_valid_url("http://localhost")

    def test_invalid_urls(self):
        assert not is_valid_url("example.com")
        assert not is_valid_url("ftp://example.com")
        assert not is_valid_url("")


class TestParseTargets:
    def test_trims_and_skips_blank_lines(self):
        lines = ["  http://a.com  ", "", "   ", "http://b.com\r"]
        assert parse_targets(lines) == ["http://a.com", "http://b.com"]

    def test_skips_comments(self):
        assert parse_targets(["# targets", "http://a.com"]) == ["http://a.com"]

    def test_drops_duplicates_keeping_order(self):
        assert parse_targets(["http://b.com", "http://a.com", "http://b.com"]) == [
            "http://b.com",
            "http://a.com",
        ]


class TestLoadTargets:
    def test_url_and_file_combined(self, tmp_path):
        path = tmp_path / "urls.txt"
        path.write_text("http://two.com\n\nhttp://one.com\n")
        assert load_targets("http://one.com", path) == ["http://one.com", "http://two.com"]

    def test_nothing(self):
        assert load_targets() == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_targets(list_file=tmp_path / "missing.txt")
