import pytest

from html_md_server.core.errors import ApiError, ErrorKind
from html_md_server.core.validation import ValidatedUrl, validate_url_param


class TestMissingParameter:
    @pytest.mark.parametrize("value", [None, ""])
    def test_absent_or_empty(self, value):
        result = validate_url_param(value)

        assert isinstance(result, ApiError)
        assert result.kind == ErrorKind.MISSING_PARAMETER
        assert result.status == 400
        assert result.message == "URL parameter is required"


class TestInvalidUrl:
    @pytest.mark.parametrize(
        "value",
        [
            "not-a-url",
            "ftp://example.com",
            "file:///etc/passwd",
            "javascript:alert(1)",
            "mailto:someone@example.com",
            "example.com/page",
            "http://",
            "http://[::1",
            "http://example.com:99999/",
            "http://exa mple.com/",
            "   ",
        ],
    )
    def test_rejected(self, value):
        result = validate_url_param(value)

        assert isinstance(result, ApiError)
        assert result.kind == ErrorKind.INVALID_URL
        assert result.status == 400
        assert result.message == "Invalid URL format. Must be a valid HTTP or HTTPS URL"


class TestValidUrl:
    @pytest.mark.parametrize(
        "value,scheme,hostname",
        [
            ("http://example.com", "http", "example.com"),
            ("https://example.com/notfound", "https", "example.com"),
            ("HTTPS://Example.COM/Path?q=1", "https", "example.com"),
            ("https://sub.example.com:8443/a/b#frag", "https", "sub.example.com"),
            ("http://127.0.0.1:8080/", "http", "127.0.0.1"),
        ],
    )
    def test_accepted(self, value, scheme, hostname):
        result = validate_url_param(value)

        assert isinstance(result, ValidatedUrl)
        assert result.url == value
        assert result.scheme == scheme
        assert result.hostname == hostname

    def test_surrounding_whitespace_is_stripped(self):
        result = validate_url_param("  https://example.com/  ")

        assert isinstance(result, ValidatedUrl)
        assert result.url == "https://example.com/"

    def test_document_name_uses_hostname(self):
        result = validate_url_param("https://docs.example.org/guide/intro.html?x=1")

        assert result.document_name == "docs.example.org.html"


class TestSpecialSchemeNormalization:
    @pytest.mark.parametrize(
        "value,normalized,hostname",
        [
            ("http:example.com", "http://example.com", "example.com"),
            ("https:/example.com/page", "https://example.com/page", "example.com"),
            ("https:///example.com/a", "https://example.com/a", "example.com"),
            ("HTTP:Example.com", "HTTP://Example.com", "example.com"),
        ],
    )
    def test_missing_or_extra_slashes(self, value, normalized, hostname):
        result = validate_url_param(value)

        assert isinstance(result, ValidatedUrl)
        assert result.url == normalized
        assert result.hostname == hostname
        assert result.requested == value

    @pytest.mark.parametrize("value", ["http:", "https:/", "http:///"])
    def test_still_needs_a_host(self, value):
        assert validate_url_param(value).kind == ErrorKind.INVALID_URL
