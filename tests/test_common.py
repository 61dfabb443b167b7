"""Tests for common utilities."""

import json
import logging

from shortlink.common.validators import is_valid_url, canonicalize_url
from shortlink.common.headers import first_forwarded_value, build_base_url
from shortlink.common.url_builder import build_short_url
from shortlink.common.logging_config import setup_logging


class TestValidators:
    """Test validation utilities."""

    def test_valid_urls(self):
        """Test valid URL validation."""
        valid, _ = is_valid_url("https://example.com")
        assert valid

        valid, _ = is_valid_url("http://example.com/path")
        assert valid

        valid, _ = is_valid_url("https://sub.example.com:8080/path?query=value")
        assert valid

        valid, _ = is_valid_url("ftp://files.example.com/pub")
        assert valid

        valid, _ = is_valid_url("http://[::1]:8000/")
        assert valid

    def test_invalid_urls(self):
        """Test invalid URL validation."""
        valid, error = is_valid_url("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_url("not-a-url")
        assert not valid
        assert "absolute" in error.lower()

        valid, error = is_valid_url("/relative/path")
        assert not valid

        valid, error = is_valid_url("mailto:someone@example.com")
        assert not valid
        assert "host" in error.lower()

        valid, error = is_valid_url("http://example.com:notaport/")
        assert not valid

        valid, error = is_valid_url("http://exa mple.com/")
        assert not valid
        assert "whitespace" in error.lower()

        valid, error = is_valid_url("https://example.com/" + "a" * 2048)
        assert not valid
        assert "too long" in error.lower()

        valid, error = is_valid_url(None)
        assert not valid

    def test_canonicalize(self):
        """Scheme and host are lowercased, default ports dropped."""
        assert canonicalize_url("HTTP://Example.COM:80/A?b=C#D") == "http://example.com/A?b=C#D"
        assert canonicalize_url("https://example.com:443") == "https://example.com"
        assert canonicalize_url("https://example.com:8443/x") == "https://example.com:8443/x"
        assert canonicalize_url("http://example.com:443/") == "http://example.com:443/"
        assert canonicalize_url("https://User:Pw@Example.com/") == "https://User:Pw@example.com/"
        assert canonicalize_url("http://[::1]:80/") == "http://[::1]/"

    def test_canonicalize_keeps_already_canonical(self):
        """Canonical URLs pass through unchanged."""
        for url in (
            "https://example.com",
            "https://example.com/",
            "https://example.com/path/to?x=1&y=2",
            "ftp://files.example.com/pub",
        ):
            assert canonicalize_url(url) == url
            assert canonicalize_url(canonicalize_url(url)) == url


class TestHeaders:
    """Test header utilities."""

    def test_first_forwarded_value(self):
        """Lookup is case-insensitive and keeps the first list entry."""
        headers = {"X-Forwarded-Host": " sho.rt , internal:9200"}

        assert first_forwarded_value(headers, "x-forwarded-host") == "sho.rt"
        assert first_forwarded_value(headers, "x-forwarded-proto") is None
        assert first_forwarded_value({"x-forwarded-host": " , x"}, "X-Forwarded-Host") is None

    def test_build_base_url_needs_both_forwarded_headers(self):
        """A lone forwarded host falls back to the request origin."""
        base_url = build_base_url(
            headers={"x-forwarded-host": "sho.rt"},
            fallback_base_url="http://localhost:9200",
            request_scheme="http",
            request_host="testserver",
        )

        assert base_url == "http://testserver"

    def test_build_base_url_from_headers(self):
        """Test base URL building from headers."""
        headers = {
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "example.com",
        }

        base_url = build_base_url(
            headers=headers,
            fallback_base_url="http://localhost:9200"
        )

        assert base_url == "https://example.com"

    def test_build_base_url_first_forwarded_entry(self):
        """Only the first entry of a forwarded list is used."""
        headers = {
            "x-forwarded-proto": "https, http",
            "x-forwarded-host": "sho.rt, internal:9200",
        }

        assert build_base_url(headers, "http://localhost:9200") == "https://sho.rt"

    def test_build_base_url_from_request(self):
        """Request scheme and host beat the configured fallback."""
        base_url = build_base_url(
            headers={},
            fallback_base_url="http://localhost:9200",
            request_scheme="http",
            request_host="testserver",
        )

        assert base_url == "http://testserver"

    def test_build_base_url_fallback(self):
        """Test base URL fallback."""
        base_url = build_base_url(
            headers={},
            fallback_base_url="http://localhost:9200/"
        )

        assert base_url == "http://localhost:9200"


class TestURLBuilder:
    """Test URL building utilities."""

    def test_build_short_url_no_prefix(self):
        """Test short URL building without prefix."""
        url = build_short_url(
            chunk="AQAAAA",
            base_url="https://example.com",
            path_prefix=""
        )

        assert url == "https://example.com/AQAAAA"

    def test_build_short_url_with_prefix(self):
        """Test short URL building with prefix."""
        url = build_short_url(
            chunk="AQAAAA",
            base_url="https://example.com/",
            path_prefix="/s/"
        )

        assert url == "https://example.com/s/AQAAAA"


class TestLogging:
    """Test logging setup."""

    def test_setup_logging_level(self):
        """Level string maps to the logging constant."""
        logger = setup_logging(level="warning")
        assert logger.name == "shortlink"
        assert logger.level == logging.WARNING

    def test_setup_logging_is_repeatable(self):
        """Repeated setup keeps a single console handler."""
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_setup_logging_file(self, tmp_path):
        """File handler writes JSON lines when asked."""
        log_file = tmp_path / "shortlink.log"
        logger = setup_logging(level="INFO", log_file=str(log_file), json_format=True)

        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()

        line = log_file.read_text().strip().splitlines()[-1]
        record = json.loads(line)
        assert record["message"] == "hello"
        assert record["level"] == "INFO"

        setup_logging()

    def test_json_lines_escape_message(self, tmp_path):
        """Quotes and backslashes in messages still produce valid JSON."""
        log_file = tmp_path / "shortlink.log"
        logger = setup_logging(level="INFO", log_file=str(log_file), json_format=True)

        message = 'Created link -> https://example.com/?q="a\\b"'
        logger.info(message)
        for handler in logger.handlers:
            handler.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["message"] == message
        assert record["logger"] == "shortlink"

        setup_logging()
