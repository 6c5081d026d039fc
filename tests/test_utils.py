"""Tests for handlertest.utils module."""

import pytest

from handlertest.errors import InvalidURLError
from handlertest.utils import host_header, parse_url, resolve_url


class TestParseUrl:
    """Tests for parse_url function."""

    def test_parse_https_url(self):
        """Test parsing HTTPS URL."""
        parsed, host, port, path = parse_url("https://example.com/path")
        assert host == "example.com"
        assert port == 443
        assert path == "/path"
        assert parsed.scheme == "https"

    def test_parse_http_url(self):
        """Test parsing HTTP URL."""
        parsed, host, port, path = parse_url("http://localhost:3000")
        assert host == "localhost"
        assert port == 3000
        assert path == "/"

    def test_parse_url_with_query_string(self):
        """Test query string stays on the path."""
        _, _, _, path = parse_url("http://example.com/search?q=test&page=1")
        assert path == "/search?q=test&page=1"

    def test_parse_ipv6(self):
        """Test bracketed IPv6 hosts."""
        _, host, port, _ = parse_url("http://[::1]:8080/")
        assert host == "::1"
        assert port == 8080

    @pytest.mark.parametrize(
        "url",
        ["ftp://example.com/", "example.com/path", "http:///path", "http://h:99999999/", "http://[::1"],
    )
    def test_invalid_urls(self, url):
        """Test unusable URLs raise InvalidURLError."""
        with pytest.raises(InvalidURLError):
            parse_url(url)

    def test_invalid_url_is_value_error(self):
        """Test callers can catch ValueError."""
        with pytest.raises(ValueError):
            parse_url("nope")


class TestResolveUrl:
    """Tests for resolve_url function."""

    def test_relative_path(self):
        """Test a path is joined onto the base."""
        assert resolve_url("http://localhost:3000", "/users/1") == "http://localhost:3000/users/1"

    def test_base_with_path(self):
        """Test the base path is kept."""
        assert resolve_url("http://h/api/", "/items?x=1") == "http://h/api/items?x=1"

    def test_absolute_url(self):
        """Test absolute URLs are returned unchanged."""
        assert resolve_url("http://h", "https://other/x") == "https://other/x"


class TestHostHeader:
    """Tests for host_header function."""

    def test_default_ports_omitted(self):
        """Test default ports are not written."""
        assert host_header("example.com", 80, "http") == "example.com"
        assert host_header("example.com", 443, "https") == "example.com"

    def test_custom_port(self):
        """Test non-default ports are written."""
        assert host_header("localhost", 3000, "http") == "localhost:3000"
        assert host_header("example.com", 80, "https") == "example.com:80"

    def test_ipv6(self):
        """Test IPv6 hosts are bracketed."""
        assert host_header("::1", 8080, "http") == "[::1]:8080"
