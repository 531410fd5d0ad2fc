# File: tests/test_classifier.py
import pytest

from link_harvester.crawler.classifier import BLOCKED_SUFFIXES, is_in_domain, is_same_host, is_valid_link


@pytest.mark.parametrize("suffix", BLOCKED_SUFFIXES)
def test_asset_extensions_rejected(suffix):
    assert not is_valid_link(f"http://example.com/files/report{suffix}", "example")


@pytest.mark.parametrize(
    "url",
    [
        "http://example.com/page#section",
        "http://example.com/#",
        "mailto:info@example.com?subject=http",
        "http://example.com/contact?to=mailto:me",
        "tel:+123456;http://example.com",
        "javascript:void(http://example.com)",
    ],
)
def test_non_navigational_links_rejected(url):
    assert not is_valid_link(url, "example")


@pytest.mark.parametrize(
    "url",
    [
        "http://example.com/a",
        "https://www.example.com/news?page=2",
        "http://example.com/report.PDF",
        "http://example.com/image.png/view",
    ],
)
def test_in_scope_links_accepted(url):
    assert is_valid_link(url, "example")


def test_requires_http_and_site_name():
    assert not is_valid_link("ftp://example.com/file", "example")
    assert not is_valid_link("http://other.org/a", "example")


def test_substring_scope_is_loose():
    # shares the short name, so it passes
    assert is_valid_link("http://notexample.org/a", "example")
    # subdomain of a different short name is missed
    assert not is_valid_link("http://blog.sample.com/a", "example")


@pytest.mark.parametrize("url", [None, 42, b"http://example.com", ""])
def test_malformed_input_never_raises(url):
    assert is_valid_link(url, "example") is False


def test_is_in_domain():
    assert is_in_domain("http://example.com/a", "example.com")
    assert is_in_domain("https://blog.example.com/a", "www.example.com")
    assert is_in_domain("http://EXAMPLE.com:8080/a", "example.com:8080")
    assert not is_in_domain("http://notexample.org/a", "example.com")
    assert not is_in_domain("http://example.com.evil.net/", "example.com")
    assert not is_in_domain("not a url", "example.com")
    assert not is_in_domain("http://[broken/", "example.com")
    assert not is_in_domain(None, "example.com")


def test_is_same_host():
    assert is_same_host("http://example.com/a?x=1", "example.com")
    assert is_same_host("https://EXAMPLE.com/", "example.com")
    assert is_same_host("http://localhost:8080/a", "localhost:8080")
    assert not is_same_host("http://localhost:9090/a", "localhost:8080")
    assert not is_same_host("http://www.example.com/x", "example.com")
    assert not is_same_host("http://search.org/q?example", "example.com")
    assert not is_same_host("http://[broken/", "example.com")
    assert not is_same_host("/relative", "example.com")
    assert not is_same_host(None, "example.com")
