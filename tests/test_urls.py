import pytest

from config import SAFE_NEWS_URL
from utils.urls import sanitize_url


@pytest.mark.parametrize("url", ["", "#", "javascript:alert(1)", "https://x.com/?q=javascript:void"])
def test_unsafe_links_use_default(url) -> None:
    assert sanitize_url(url) == SAFE_NEWS_URL


def test_scheme_relative_link() -> None:
    assert sanitize_url("//x.com/a") == "https://x.com/a"


def test_bare_host_link() -> None:
    assert sanitize_url("x.com/a") == "https://x.com/a"


def test_absolute_links_kept() -> None:
    assert sanitize_url("https://x.com/a") == "https://x.com/a"
    assert sanitize_url("http://x.com/a") == "http://x.com/a"


def test_percent_escapes_decoded() -> None:
    assert sanitize_url("https://x.com/a%20b%C3%A9") == "https://x.com/a bé"


def test_undecodable_escapes_left_alone() -> None:
    assert sanitize_url("https://x.com/%FF") == "https://x.com/%FF"
